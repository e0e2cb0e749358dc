"""
Runtime State
=============

Objects created after startup, kept apart from the loaded configuration.

The configuration file never populates these. The service builds one
``ServiceContext`` at startup and passes it to every subsystem that needs
the configuration or the live client.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Union

from .config.frozen import LoadedConfig
from .config.loader import load
from .config.validator import ValidationLevel

logger = logging.getLogger(__name__)


@dataclass
class RuntimeState:
    """Mutable state set by the service once it is running."""

    # Authenticated Matrix client handle
    client: Optional[Any] = None

    def attach_client(self, client: Any) -> None:
        """Record the authenticated client; allowed once per process."""
        if self.client is not None:
            raise RuntimeError("A client is already attached to the runtime state")
        self.client = client
        logger.info(f"Attached client {type(client).__name__} to runtime state")

    def as_dict(self) -> Dict[str, Any]:
        """Populated fields only; a fresh state gives ``{}``."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class ServiceContext:
    """Loaded configuration plus the runtime state, passed by injection."""

    config: LoadedConfig
    runtime: RuntimeState = field(default_factory=RuntimeState)

    @classmethod
    def initialise(
        cls,
        env: Optional[Mapping[str, str]] = None,
        validation: Optional[Union[str, ValidationLevel]] = None,
    ) -> "ServiceContext":
        """
        Load the configuration and pair it with an empty runtime state.

        Args:
            env: Environment mapping (defaults to ``os.environ``)
            validation: Validation level for the loaded file

        Returns:
            New ServiceContext
        """
        return cls(config=load(env=env, validation=validation))
