"""
Text reports over a ranking.

Line formats are fixed so downstream scripts can parse them:

    display   <+|-> <rank> <score> | <text A> | <text B>
    dump      <score>\\t<text A>\\t<text B>
    graph     <recall>\\t<interpolated precision>
    summarize maxF1:\\t<value> and avgPrec:\\t<value>

Absent slots are skipped; absent records print as ``***``.
"""

import math
import sys
from typing import Callable, Dict, Iterable, Sequence, TextIO

from ..core.types import Present, RankSlot
from ..exceptions import ConfigError


def format_value(value: float) -> str:
    """Format a metric value; undefined values print as NaN."""
    if math.isnan(value):
        return "NaN"
    return str(float(value))


def display_results(
    slots: Sequence[RankSlot],
    show_mismatches: bool = True,
    out: TextIO = None,
):
    """
    Write one line per pair; only correct pairs unless show_mismatches.

    Args:
        slots: Sorted ranking.
        show_mismatches: Include incorrect pairs.
        out: Output stream (stdout by default).
    """
    out = out or sys.stdout
    for i, slot in enumerate(slots):
        if not isinstance(slot, Present):
            continue
        pair = slot.pair
        label = "+" if pair.is_correct else "-"
        if show_mismatches or pair.is_correct:
            out.write(f"{label} {i + 1:3d} {pair.score:7.2f} | "
                      f"{pair.a_text:>30} | {pair.b_text:>30}\n")


def dump_results(slots: Sequence[RankSlot], out: TextIO = None):
    """Write every present pair as score, text A and text B separated by tabs."""
    out = out or sys.stdout
    for slot in slots:
        if isinstance(slot, Present):
            pair = slot.pair
            out.write(f"{pair.score:7.2f}\t{pair.a_text}\t{pair.b_text}\n")


def graph_precision_recall(experiment, out: TextIO = None):
    """Write one (recall, interpolated precision) line per correct pair."""
    out = out or sys.stdout
    for recall, precision in experiment.precision_recall_curve():
        out.write(f"{recall}\t{precision}\n")


def summarize(experiment, out: TextIO = None):
    out = out or sys.stdout
    out.write(f"maxF1:\t{format_value(experiment.max_f1())}\n")
    out.write(f"avgPrec:\t{format_value(experiment.average_precision())}\n")


COMMANDS: Dict[str, Callable] = {
    "display": lambda expt, out: display_results(expt.ranking, True, out),
    "shortDisplay": lambda expt, out: display_results(expt.ranking, False, out),
    "dump": lambda expt, out: dump_results(expt.ranking, out),
    "graph": graph_precision_recall,
    "summarize": summarize,
}


def run_commands(experiment, commands: Iterable[str], out: TextIO = None):
    """
    Run report commands in order.

    Raises:
        ConfigError: On an unknown command; nothing is written in that case.
    """
    commands = list(commands)
    unknown = [c for c in commands if c not in COMMANDS]
    if unknown:
        raise ConfigError(
            f"illegal command {unknown[0]}; expected one of {sorted(COMMANDS)}",
            errors=[f"illegal command {c}" for c in unknown],
        )
    for command in commands:
        COMMANDS[command](experiment, out)
