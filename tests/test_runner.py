"""Tests for config-driven runs and grids."""

import json

import pytest

from matchbench.config import parse_config, validate_config
from matchbench.exceptions import ConfigError
from matchbench.runner import run_experiment, run_grid


def _config(sample_file, **overrides):
    config = {
        "name": "sample",
        "dataset": {"path": str(sample_file)},
        "distance": {"name": "jaccard"},
        "blocking": {"name": "null"},
        "k_values": [1, 2],
    }
    config.update(overrides)
    return config


def test_validate_config():
    errors = validate_config({"distance": {}, "n_jobs": 0, "descending": "yes"})

    assert "Missing 'dataset' section" in errors
    assert "Missing 'distance.name'" in errors
    assert len(errors) == 4


def test_parse_config_defaults(sample_file):
    cfg = parse_config({"dataset": {"path": str(sample_file)}, "distance": {"name": "tfidf"}})

    assert cfg.name == "unnamed"
    assert cfg.dataset.name == "tsv"
    assert cfg.blocking.name == "null"
    assert cfg.descending is None
    assert cfg.reports == []


def test_parse_config_rejects_invalid():
    with pytest.raises(ConfigError) as info:
        parse_config({"name": "x"})

    assert len(info.value.errors) == 2


def test_run_experiment_writes_results(sample_file, tmp_path):
    output = tmp_path / "run"

    result = run_experiment(
        _config(sample_file, reports=["summarize", "dump"]), str(output), verbose=False
    )

    assert result.metrics["p_at_1"] == 1.0
    assert result.metrics["max_f1"] == pytest.approx(0.8)

    saved = json.loads((output / "results.json").read_text())
    assert saved["metrics"]["average_precision"] == pytest.approx(0.75)
    assert saved["metadata"]["config"]["name"] == "sample"
    assert (output / "summarize.txt").read_text().startswith("maxF1:\t")
    assert len((output / "dump.txt").read_text().splitlines()) == 12


def test_run_experiment_verbose_output(sample_file, capsys):
    run_experiment(_config(sample_file), verbose=True)

    out = capsys.readouterr().out
    assert "Running experiment: sample" in out
    assert "Max F1:" in out


def test_run_experiment_unknown_distance(sample_file):
    with pytest.raises(KeyError):
        run_experiment(_config(sample_file, distance={"name": "cosine"}), verbose=False)


def test_run_grid(sample_file, tmp_path):
    grid = {
        "base": _config(sample_file),
        "grid": {
            "blocking.name": ["null", "token"],
            "distance.name": ["jaccard", "tfidf"],
        },
    }

    df = run_grid(grid, str(tmp_path), verbose=False)

    assert len(df) == 4
    assert "error" not in df.columns
    assert (tmp_path / "grid_results.csv").exists()
    token_rows = df[df["param_blocking.name"] == "token"]
    assert token_rows["blocker_recall"].tolist() == pytest.approx([2 / 3, 2 / 3])


def test_run_grid_records_failures(sample_file, tmp_path):
    grid = {"base": _config(sample_file), "grid": {"distance.name": ["jaccard", "cosine"]}}

    df = run_grid(grid, str(tmp_path), verbose=False)

    assert df["error"].isna().tolist() == [True, False]


def test_validate_config_rejects_unknown_reports():
    errors = validate_config({
        "dataset": {"path": "x.tsv"},
        "distance": {"name": "jaccard"},
        "reports": ["graph", "plot"],
    })

    assert len(errors) == 1
    assert errors[0].startswith("illegal command plot")


def test_run_experiment_unknown_report_writes_nothing(sample_file, tmp_path):
    output = tmp_path / "run"

    with pytest.raises(ConfigError, match="illegal command plot"):
        run_experiment(_config(sample_file, reports=["summarize", "plot"]), str(output),
                       verbose=False)

    assert not output.exists()
