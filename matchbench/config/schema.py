"""Configuration schema and validation."""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
import yaml

from ..exceptions import ConfigError

REPORT_COMMANDS = ("display", "shortDisplay", "dump", "graph", "summarize")


@dataclass
class DatasetConfig:
    path: str
    name: str = "tsv"


@dataclass
class BlockingConfig:
    name: str = "null"
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DistanceConfig:
    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExperimentConfig:
    name: str
    dataset: DatasetConfig
    distance: DistanceConfig
    blocking: BlockingConfig = field(default_factory=BlockingConfig)
    descending: Optional[bool] = None
    n_jobs: int = 1
    k_values: List[int] = field(default_factory=lambda: [10, 50, 100])
    reports: List[str] = field(default_factory=list)


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate configuration, return list of errors."""
    errors = []

    if not isinstance(config, dict):
        return ["Configuration must be a mapping"]

    if "dataset" not in config:
        errors.append("Missing 'dataset' section")
    elif "path" not in config["dataset"]:
        errors.append("Missing 'dataset.path'")

    if "distance" not in config:
        errors.append("Missing 'distance' section")
    elif "name" not in config["distance"]:
        errors.append("Missing 'distance.name'")

    n_jobs = config.get("n_jobs", 1)
    if not isinstance(n_jobs, int) or n_jobs == 0:
        errors.append("'n_jobs' must be a non-zero integer")

    descending = config.get("descending")
    if descending is not None and not isinstance(descending, bool):
        errors.append("'descending' must be true, false or omitted")

    reports = config.get("reports", [])
    if not isinstance(reports, list):
        errors.append("'reports' must be a list of report commands")
    else:
        for command in reports:
            if command not in REPORT_COMMANDS:
                errors.append(f"illegal command {command}; expected one of {list(REPORT_COMMANDS)}")

    return errors


def parse_config(config: Dict[str, Any]) -> ExperimentConfig:
    """
    Build an ExperimentConfig from a raw config dict.

    Raises:
        ConfigError: If validation fails.
    """
    errors = validate_config(config)
    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors), errors=errors)

    blocking = config.get("blocking") or {}
    distance = config["distance"]
    return ExperimentConfig(
        name=config.get("name", "unnamed"),
        dataset=DatasetConfig(
            path=config["dataset"]["path"], name=config["dataset"].get("name", "tsv")
        ),
        distance=DistanceConfig(
            name=distance["name"], params=dict(distance.get("params") or {})
        ),
        blocking=BlockingConfig(
            name=blocking.get("name", "null"), params=dict(blocking.get("params") or {})
        ),
        descending=config.get("descending"),
        n_jobs=config.get("n_jobs", 1),
        k_values=list(config.get("k_values", [10, 50, 100])),
        reports=list(config.get("reports", [])),
    )
