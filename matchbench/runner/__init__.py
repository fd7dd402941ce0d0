"""Experiment runners and reports."""

from .experiment import MatchExperiment
from .report import (
    display_results,
    dump_results,
    graph_precision_recall,
    summarize,
    run_commands,
)
from .run_one import build_experiment, run_experiment
from .run_grid import run_grid
