"""
Schema and Defaults Tests
=========================

Checks the factory defaults and their file-keyed rendition.
"""

import dataclasses
from pathlib import Path

import pytest
import yaml

from mjolnir.config.schema import DEFAULTS, MjolnirConfig, default_config, to_camel_case

SAMPLE_CONFIG = Path(__file__).resolve().parent / "config" / "default.yaml"


def test_default_values():
    defaults = default_config()

    assert defaults["homeserverUrl"] == "http://localhost:8008"
    assert defaults["rawHomeserverUrl"] == "http://localhost:8008"
    assert defaults["accessToken"] == "NONE_PROVIDED"
    assert defaults["pantalaimon"] == {"use": False, "username": "", "password": ""}
    assert defaults["dataPath"] == "/data/storage"
    assert defaults["logLevel"] == "INFO"
    assert defaults["syncOnStartup"] is True
    assert defaults["protectedRooms"] == []
    assert defaults["automaticallyRedactForReasons"] == ["spam", "advertising"]
    assert defaults["backgroundDelayMS"] == 500
    assert defaults["displayReports"] is True
    assert defaults["commands"] == {
        "allowNoPrefix": False,
        "additionalPrefixes": [],
        "confirmWildcardBan": True,
    }
    assert defaults["protections"] == {
        "wordlist": {"words": [], "minutesBeforeTrusting": 20},
        "mentionflood": {"minutesBeforeTrusting": 20},
    }
    assert defaults["health"] == {
        "healthz": {
            "enabled": False,
            "port": 8080,
            "address": "0.0.0.0",
            "endpoint": "/healthz",
            "healthyStatus": 200,
            "unhealthyStatus": 418,
        }
    }
    assert defaults["web"] == {
        "enabled": False,
        "port": 8080,
        "address": "localhost",
        "abuseReporting": {"enabled": False},
        "ruleServer": {"enabled": False},
    }


def test_every_field_has_a_default():
    # Constructing without arguments must succeed and populate every key
    defaults = default_config()
    assert len(defaults) == len(dataclasses.fields(MjolnirConfig))
    assert None not in defaults.values()
    assert "RUNTIME" not in defaults


def test_default_config_returns_fresh_copies():
    first = default_config()
    first["protectedRooms"].append("!room:example.org")
    first["web"]["port"] = 1

    second = default_config()
    assert second["protectedRooms"] == []
    assert second["web"]["port"] == 8080
    assert DEFAULTS.protected_rooms == ()


def test_defaults_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULTS.access_token = "changed"
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULTS.web.port = 1
    with pytest.raises(AttributeError):
        DEFAULTS.protected_rooms.append("!leak:example.org")
    with pytest.raises(AttributeError):
        DEFAULTS.protections.wordlist.words.append("spam")
    assert default_config()["protectedRooms"] == []
    assert default_config()["automaticallyRedactForReasons"] == ["spam", "advertising"]


@pytest.mark.parametrize("name, expected", [
    ("homeserver_url", "homeserverUrl"),
    ("enable_make_room_admin_command", "enableMakeRoomAdminCommand"),
    ("noop", "noop"),
])
def test_to_camel_case(name, expected):
    assert to_camel_case(name) == expected


def test_sample_file_matches_defaults():
    with SAMPLE_CONFIG.open("r", encoding="utf-8") as f:
        sample = yaml.safe_load(f)
    assert sample == default_config()
