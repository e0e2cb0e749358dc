"""
Configuration Schema
====================

Declarative description of every option the moderation service recognises,
together with its baseline value.

The dataclasses below use snake_case field names; the YAML file uses the
camelCase key of each field (``homeserver_url`` is read from
``homeserverUrl``). Irregular keys are declared with ``metadata={"key": ...}``.

See ``config/default.yaml`` for the documentation on individual options.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, Iterator, Tuple

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass(frozen=True)
class PantalaimonConfig:
    """Alternate authentication through a Pantalaimon proxy."""
    use: bool = False
    username: str = ""
    password: str = ""


@dataclass(frozen=True)
class AdminConfig:
    enable_make_room_admin_command: bool = False


@dataclass(frozen=True)
class CommandsConfig:
    """Command prefix rules."""
    allow_no_prefix: bool = False
    additional_prefixes: Tuple[str, ...] = ()
    confirm_wildcard_ban: bool = True


@dataclass(frozen=True)
class WordlistProtectionConfig:
    words: Tuple[str, ...] = ()
    minutes_before_trusting: int = 20


@dataclass(frozen=True)
class MentionFloodProtectionConfig:
    minutes_before_trusting: int = 20


@dataclass(frozen=True)
class ProtectionsConfig:
    """Per-protection tunables."""
    wordlist: WordlistProtectionConfig = field(default_factory=WordlistProtectionConfig)
    mentionflood: MentionFloodProtectionConfig = field(default_factory=MentionFloodProtectionConfig)


@dataclass(frozen=True)
class HealthzConfig:
    """Health check endpoint."""
    enabled: bool = False
    port: int = 8080
    address: str = "0.0.0.0"
    endpoint: str = "/healthz"
    healthy_status: int = 200
    unhealthy_status: int = 418


@dataclass(frozen=True)
class HealthConfig:
    healthz: HealthzConfig = field(default_factory=HealthzConfig)


@dataclass(frozen=True)
class AbuseReportingConfig:
    enabled: bool = False


@dataclass(frozen=True)
class RuleServerConfig:
    enabled: bool = False


@dataclass(frozen=True)
class WebConfig:
    """Embedded web server and the features it hosts."""
    enabled: bool = False
    port: int = 8080
    address: str = "localhost"
    abuse_reporting: AbuseReportingConfig = field(default_factory=AbuseReportingConfig)
    rule_server: RuleServerConfig = field(default_factory=RuleServerConfig)


@dataclass(frozen=True)
class MjolnirConfig:
    """Complete configuration as read from ``<env>.yaml``."""

    # Connection
    homeserver_url: str = "http://localhost:8008"
    raw_homeserver_url: str = "http://localhost:8008"
    access_token: str = "NONE_PROVIDED"
    pantalaimon: PantalaimonConfig = field(default_factory=PantalaimonConfig)

    # Storage
    data_path: str = "/data/storage"

    # Moderation behaviour
    accept_invites_from_space: str = "!noop:example.org"
    autojoin_only_if_manager: bool = False
    record_ignored_invites: bool = False
    management_room: str = "!noop:example.org"
    verbose_logging: bool = False
    log_level: str = "INFO"
    sync_on_startup: bool = True
    verify_permissions_on_startup: bool = True
    noop: bool = False
    protected_rooms: Tuple[str, ...] = ()  # matrix.to urls
    faster_membership_checks: bool = False
    automatically_redact_for_reasons: Tuple[str, ...] = ("spam", "advertising")  # case-insensitive globs
    protect_all_joined_rooms: bool = False

    # Milliseconds between the completion of one background task and the
    # start of the next one.
    background_delay_ms: int = field(default=500, metadata={"key": "backgroundDelayMS"})

    # Abuse reports
    poll_reports: bool = False
    display_reports: bool = True

    admin: AdminConfig = field(default_factory=AdminConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    protections: ProtectionsConfig = field(default_factory=ProtectionsConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    web: WebConfig = field(default_factory=WebConfig)


DEFAULTS = MjolnirConfig()


def to_camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def file_key(f) -> str:
    """Return the YAML key used for a dataclass field."""
    return f.metadata.get("key", to_camel_case(f.name))


def schema_fields(cls) -> Iterator[Tuple[str, Any]]:
    """Yield ``(file_key, dataclass_field)`` pairs for a schema class."""
    for f in fields(cls):
        yield file_key(f), f


def to_file_dict(instance: Any) -> Dict[str, Any]:
    """
    Convert a schema instance into a plain dict keyed by file keys.

    Args:
        instance: Any schema dataclass instance

    Returns:
        Fresh nested dict; tuples become lists
    """
    result: Dict[str, Any] = {}
    for key, f in schema_fields(type(instance)):
        value = getattr(instance, f.name)
        if is_dataclass(value):
            result[key] = to_file_dict(value)
        elif isinstance(value, tuple):
            result[key] = list(value)
        else:
            result[key] = value
    return result


def default_config() -> Dict[str, Any]:
    """Return the factory defaults as a new file-keyed dict."""
    return to_file_dict(DEFAULTS)
