"""Run a single experiment."""

import os
import json
from datetime import datetime
from typing import Dict, Any

from ..core.types import ExperimentResult
from ..core.registry import get_registry
from ..config.schema import parse_config
from .experiment import MatchExperiment
from .report import format_value, run_commands


def build_experiment(config: Dict[str, Any], verbose: bool = True) -> MatchExperiment:
    """
    Resolve the components named in a config into an unrun experiment.

    Raises:
        ConfigError: If the config is invalid.
        KeyError: If a component name is not registered.
    """
    cfg = parse_config(config)

    load = get_registry("datasets").get(cfg.dataset.name)
    data = load(cfg.dataset.path)

    blocker = get_registry("blockers").create(cfg.blocking.name, **cfg.blocking.params)
    learner = get_registry("distances").create(cfg.distance.name, **cfg.distance.params)

    return MatchExperiment(
        data,
        learner,
        blocker,
        descending=cfg.descending,
        n_jobs=cfg.n_jobs,
        verbose=verbose,
    )


def run_experiment(
    config: Dict[str, Any],
    output_dir: str = None,
    verbose: bool = True
) -> ExperimentResult:
    """
    Run a single experiment from configuration.

    Args:
        config: Experiment configuration dict.
        output_dir: Directory to save results and reports.
        verbose: Print progress.

    Returns:
        ExperimentResult with all metrics.
    """
    cfg = parse_config(config)

    if verbose:
        print(f"Running experiment: {cfg.name}")

    experiment = build_experiment(config, verbose=verbose).run()
    result = experiment.to_result(k_values=cfg.k_values)
    result.metadata.update({
        "config": config,
        "timestamp": datetime.now().isoformat(),
    })

    if verbose:
        metrics = result.metrics
        print(f"\nResults:")
        print(f"  Max F1: {format_value(metrics['max_f1'])}")
        print(f"  Average precision: {format_value(metrics['average_precision'])}")
        print(f"  Blocker recall: {format_value(metrics['blocker_recall'])}")
        print(f"  Time: {metrics['time']:.3f}s "
              f"({format_value(metrics['pairs_per_second'])} pairs/s)")

    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        with open(os.path.join(output_dir, "results.json"), "w") as f:
            json.dump(result.to_dict(), f, indent=2, default=str)
        for command in cfg.reports:
            with open(os.path.join(output_dir, f"{command}.txt"), "w") as f:
                run_commands(experiment, [command], out=f)
    elif cfg.reports:
        run_commands(experiment, cfg.reports)

    return result
