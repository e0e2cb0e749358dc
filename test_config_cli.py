"""
Configuration CLI Tests
=======================
"""

import yaml
import pytest

from mjolnir.config import default_config
from mjolnir.config.cli import main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("MJOLNIR_CONFIG_DIR", "MJOLNIR_ENV", "NODE_CONFIG_DIR", "NODE_ENV", "MJOLNIR_CONFIG_VALIDATION"):
        # setenv first so the variable is removed again after the test even
        # when load_dotenv sets it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_show_path(config_dir, capsys):
    assert main(["--config-dir", str(config_dir), "--env", "production", "--show-path"]) == 0
    assert capsys.readouterr().out.strip() == str(config_dir / "production.yaml")


def test_dump_prints_effective_configuration(write_config, config_dir, capsys):
    write_config("accessToken: abc\nweb: {port: 1234}\n")

    assert main(["--config-dir", str(config_dir), "--env", "test", "--dump"]) == 0

    dumped = yaml.safe_load(capsys.readouterr().out)
    expected = default_config()
    expected.update(accessToken="abc", web={"port": 1234})
    assert dumped == expected


def test_missing_file_reports_path(config_dir, capsys):
    assert main(["--config-dir", str(config_dir), "--env", "absent"]) == 1

    err = capsys.readouterr().err
    assert "Configuration file not found" in err
    assert str(config_dir / "absent.yaml") in err


def test_status_lists_warnings(write_config, config_dir, capsys):
    write_config("web: {port: 9999}\n")

    assert main(["--config-dir", str(config_dir), "--env", "test"]) == 0

    out = capsys.readouterr().out
    assert "Overridden keys: web" in out
    assert "Section 'web' does not set enabled" in out


def test_status_fails_on_type_errors(write_config, config_dir, capsys):
    write_config("web: {port: eighty}\n")

    assert main(["--config-dir", str(config_dir), "--env", "test"]) == 1
    assert "'web.port' must be a number" in capsys.readouterr().out


def test_strict_validation_stops_loading(write_config, config_dir, capsys):
    write_config("noop: 'no'\n")

    assert main(["--config-dir", str(config_dir), "--env", "test", "--validation", "strict"]) == 1
    assert "validation failed" in capsys.readouterr().err


def test_env_file_selects_configuration(write_config, config_dir, tmp_path, capsys):
    write_config("accessToken: from-dotenv\n", name="staging")
    env_file = tmp_path / ".env"
    env_file.write_text(f"MJOLNIR_CONFIG_DIR={config_dir}\nMJOLNIR_ENV=staging\n", encoding="utf-8")

    assert main(["--env-file", str(env_file), "--dump"]) == 0
    assert yaml.safe_load(capsys.readouterr().out)["accessToken"] == "from-dotenv"


def test_unknown_validation_level_exits_cleanly(write_config, config_dir, monkeypatch, capsys):
    write_config("")
    monkeypatch.setenv("MJOLNIR_CONFIG_VALIDATION", "bogus")

    assert main(["--config-dir", str(config_dir), "--env", "test", "--dump"]) == 1
    assert "Invalid validation level: bogus" in capsys.readouterr().err
