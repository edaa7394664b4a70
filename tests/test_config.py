"""
Unit tests for securebox/config.py
"""

import pytest

from securebox.config import SolverConfig, load_config


def test_defaults():
    cfg = SolverConfig()
    assert cfg.fallback == "current"
    assert cfg.retry_limit(12) == 12
    assert SolverConfig(max_retries=3).retry_limit(12) == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fallback": "forever"},
        {"max_retries": -1},
        {"max_retries": "3"},
        {"max_retries": True},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        SolverConfig(**kwargs)


def test_override_skips_none():
    cfg = SolverConfig(max_retries=4, fallback="original")
    assert cfg.override(max_retries=None, fallback=None) == cfg
    assert cfg.override(max_retries=9).max_retries == 9


def test_load_config(tmp_path):
    path = tmp_path / "solver.yaml"
    path.write_text("solver:\n  max_retries: 7\n  fallback: original\n")
    assert load_config(path) == SolverConfig(max_retries=7, fallback="original")


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == SolverConfig()


def test_load_config_unknown_key(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("solver:\n  retries: 7\n")
    with pytest.raises(ValueError, match="unknown solver options"):
        load_config(path)


def test_load_config_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(path)
