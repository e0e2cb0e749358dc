"""Shared fixtures for the configuration tests."""

import textwrap

import pytest


@pytest.fixture
def config_dir(tmp_path):
    """Empty configuration directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def write_config(config_dir):
    """Write ``<name>.yaml`` into the configuration directory."""
    def _write(text, name="test"):
        path = config_dir / f"{name}.yaml"
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def config_env(config_dir):
    """Environment selecting ``<config_dir>/test.yaml``."""
    return {"MJOLNIR_CONFIG_DIR": str(config_dir), "MJOLNIR_ENV": "test"}
