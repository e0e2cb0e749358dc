from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator


class FrozenMapping(Mapping):
    """Read-only view over a nested configuration section."""

    def __init__(self, data: Mapping[str, Any]):
        object.__setattr__(self, "_data", {key: _freeze(value) for key, value in data.items()})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        # Accepts the file key (``abuseReporting``) or its snake_case
        # spelling (``abuse_reporting``).
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        wanted = name.replace("_", "").lower()
        for key, value in self._data.items():
            if str(key).lower() == wanted:
                return value
        raise AttributeError(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}({self._data!r})"

    def get(self, key: str, default: Any = None) -> Any:
        """Look up ``key``, which may be a dotted path such as ``web.port``."""
        if key in self._data:
            return self._data[key]
        if not isinstance(key, str):
            return default
        value: Any = self._data
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {key: _unfreeze(value) for key, value in self._data.items()}


class LoadedConfig(FrozenMapping):
    """Immutable configuration derived from the defaults and the loaded file."""


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenMapping):
        return value
    if isinstance(value, Mapping):
        return FrozenMapping(value)
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _unfreeze(value: Any) -> Any:
    if isinstance(value, FrozenMapping):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_unfreeze(item) for item in value]
    return value


def freeze(data: Mapping[str, Any]) -> LoadedConfig:
    return LoadedConfig(data)
