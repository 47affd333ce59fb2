"""Configuration for the emitter.

Options can be passed explicitly or loaded from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = ("1", "true", "True")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw in _TRUTHY


@dataclass(frozen=True)
class EmitterOptions:
    """Emitter options.

    Attributes:
        debug: Record diagnostic entries for subscribe/unsubscribe/emit/call-listener
        log_level: Level used when configuring structured logging
        json_logs: Render structured logs as JSON
    """

    debug: bool = True
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> EmitterOptions:
        """Load options from environment variables.

        Reads EMITTER_DEBUG, EMITTER_LOG_LEVEL and EMITTER_JSON_LOGS.

        Returns:
            EmitterOptions instance
        """
        return cls(
            debug=_env_flag("EMITTER_DEBUG", True),
            log_level=os.environ.get("EMITTER_LOG_LEVEL", "INFO"),
            json_logs=_env_flag("EMITTER_JSON_LOGS", False),
        )
