"""Container settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

ENV_PREFIX = "SERVICEBOX_"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().strip('"').strip("'").lower() in ("1", "true", "yes")


@dataclass
class ContainerSettings:
    """Runtime settings for a Container."""

    # Reject classes that do not implement the registered contract
    strict_types: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ContainerSettings:
        """Load settings from ``SERVICEBOX_*`` environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            ContainerSettings instance
        """
        env = os.environ if environ is None else environ
        return cls(
            strict_types=_env_bool(env.get(f"{ENV_PREFIX}STRICT_TYPES"), True),
            log_level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            log_json=_env_bool(env.get(f"{ENV_PREFIX}LOG_JSON"), False),
        )
