"""Run grid of experiments."""

import copy
import os
import itertools
from typing import Dict, Any
import pandas as pd

from ..exceptions import ConfigError
from .run_one import run_experiment


def run_grid(
    grid_config: Dict[str, Any],
    output_dir: str = "results",
    verbose: bool = True
) -> pd.DataFrame:
    """
    Run a grid of experiments.

    Args:
        grid_config: Configuration with ``base`` and ``grid`` sections. Grid
            keys are dotted paths into the base config, e.g. ``distance.name``.
        output_dir: Base output directory.
        verbose: Print progress.

    Returns:
        DataFrame with one row of metrics per experiment.

    Raises:
        ConfigError: If ``base`` or ``grid`` is not a mapping.
    """
    if not isinstance(grid_config, dict):
        raise ConfigError("Grid configuration must be a mapping")
    base_config = grid_config.get("base") or {}
    grid_params = grid_config.get("grid") or {}
    if not isinstance(base_config, dict) or not isinstance(grid_params, dict):
        raise ConfigError("Grid 'base' and 'grid' sections must be mappings")

    param_names = list(grid_params.keys())
    param_values = [grid_params[k] if isinstance(grid_params[k], list) else [grid_params[k]]
                    for k in param_names]
    combinations = list(itertools.product(*param_values))

    all_results = []

    for i, values in enumerate(combinations):
        config = copy.deepcopy(base_config)

        for name, value in zip(param_names, values):
            _set_nested(config, name, value)

        config["name"] = f"exp_{i:04d}"

        if verbose:
            print(f"\n{'='*60}")
            print(f"Experiment {i+1}/{len(combinations)}")
            params_str = ", ".join(f"{n}={v}" for n, v in zip(param_names, values))
            print(f"  {params_str}")

        exp_output = os.path.join(output_dir, config["name"])

        try:
            result = run_experiment(config, exp_output, verbose=verbose)

            row = {"name": config["name"], **result.metrics}
            for name, value in zip(param_names, values):
                row[f"param_{name}"] = value

            all_results.append(row)
        except Exception as e:
            if verbose:
                print(f"  ERROR: {e}")
            all_results.append({
                "name": config["name"],
                "error": str(e),
                **{f"param_{name}": value for name, value in zip(param_names, values)}
            })

    results_df = pd.DataFrame(all_results)

    os.makedirs(output_dir, exist_ok=True)
    results_df.to_csv(os.path.join(output_dir, "grid_results.csv"), index=False)

    return results_df


def _set_nested(d: Dict, key: str, value: Any):
    """Set a nested key in a dict (e.g., 'blocking.params.max_block_size')."""
    keys = key.split(".")
    current = d
    for k in keys[:-1]:
        if k not in current:
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value
