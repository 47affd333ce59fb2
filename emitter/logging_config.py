"""Structured logging for the emitter.

The emitter logs through structlog on top of stdlib logging. Output is
either a console rendering or JSON lines, picked from ``EmitterOptions``:

    init_logging(EmitterOptions(log_level="DEBUG", json_logs=True))
    get_logger(__name__).debug("listener_failed", event_name="user.created")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from emitter.config import EmitterOptions

_configured = False


def _open_stream(log_file: Path | None) -> TextIO:
    if log_file is None:
        return sys.stderr
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return open(log_file, "a")  # noqa: SIM115


def _build_processors(json_output: bool, colors: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
) -> None:
    """Route structlog through stdlib logging.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_output: Render JSON lines instead of console output
        log_file: Append to this file instead of stderr
        colors: Colorize console output
    """
    global _configured

    logging.basicConfig(
        format="%(message)s",
        stream=_open_stream(log_file),
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    structlog.configure(
        processors=_build_processors(json_output, colors),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def init_logging(options: EmitterOptions, log_file: Path | None = None) -> None:
    """Configure logging from emitter options once per process.

    Later calls are ignored until ``reset_logging`` runs.
    """
    if _configured:
        return
    configure_logging(
        level=options.log_level,
        json_output=options.json_logs,
        log_file=log_file,
        colors=not options.json_logs,
    )


def reset_logging() -> None:
    """Forget that logging was configured."""
    global _configured
    _configured = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, typically for ``__name__``."""
    return structlog.get_logger(name)
