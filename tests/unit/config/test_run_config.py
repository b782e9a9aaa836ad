"""
Tests for run configuration loading and validation.
"""
from __future__ import annotations

import pytest

from affinity_chain.config import RunConfig, load_run_config, read_yaml
from affinity_chain.config.run_config import default_config_path


@pytest.fixture
def write_yaml(tmp_path):
    """Writes `text` to a YAML file in the test's temp dir and returns its path."""
    def _write(text: str, name: str = "run.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


def test_packaged_defaults_load():
    assert default_config_path().is_file()
    assert load_run_config() == RunConfig()


def test_user_file_overrides_defaults(write_yaml):
    path = write_yaml("backend: numba\nverbose: 2\noutput_format: json\n")

    config = load_run_config(path)

    assert config.backend == "numba"
    assert config.verbose == 2
    assert config.output_format == "json"
    assert config.log_file is None


def test_empty_user_file_keeps_defaults(write_yaml):
    assert load_run_config(write_yaml("")) == RunConfig()


@pytest.mark.parametrize("text, message", [
    ("colour: blue\n", "Unknown configuration keys: colour"),
    ("backend: gpu\n", "backend must be one of"),
    ("verbose: -1\n", "verbose must be a non-negative integer"),
    ("verbose: true\n", "verbose must be a non-negative integer"),
    ("output_format: xml\n", "output_format must be one of"),
    ("log_file: 12\n", "log_file must be a string"),
])
def test_invalid_values_raise(write_yaml, text, message):
    with pytest.raises(ValueError, match=message):
        load_run_config(write_yaml(text))


def test_non_yaml_suffix_rejected(write_yaml):
    with pytest.raises(ValueError, match="Only YAML files"):
        read_yaml(write_yaml("backend: python\n", name="run.json"))


def test_non_mapping_top_level_rejected(write_yaml):
    with pytest.raises(ValueError, match="must be a mapping"):
        read_yaml(write_yaml("- a\n- b\n"))


def test_with_overrides_skips_none_and_validates():
    base = RunConfig()

    assert base.with_overrides(backend=None, verbose=None) == base
    assert base.with_overrides(verbose=0, backend="numba") == RunConfig(backend="numba")
    with pytest.raises(ValueError):
        base.with_overrides(output_format="yaml")
