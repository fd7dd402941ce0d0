"""Experiment configuration."""

from .schema import (
    ExperimentConfig,
    DatasetConfig,
    BlockingConfig,
    DistanceConfig,
    REPORT_COMMANDS,
    load_config,
    validate_config,
    parse_config,
)
