"""
Diagnostic sinks for emitter traffic.

Every subscribe, unsubscribe, emit and listener call can be recorded
through a sink. The emitter only talks to the ``DiagnosticSink``
protocol; the sinks here decide how an entry is shown.

Entries render as a header line followed by an indented payload:

    [14:03:27][eventType: emit][eventName: user.created]
      payload: {'id': 1}
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from rich.console import Console
from rich.padding import Padding
from rich.pretty import pretty_repr
from rich.text import Text

from emitter.events.keys import EventKey, format_key
from emitter.logging_config import get_logger


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives diagnostic entries from an emitter."""

    def record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        ...


def parse_payload(data: Any) -> Any:
    """
    Decode textual payloads as JSON.

    Strings and bytes that parse are returned decoded; anything else,
    including text that is not valid JSON or nests too deeply to decode,
    is returned unchanged.
    """
    if isinstance(data, (str, bytes, bytearray)):
        try:
            return json.loads(data)
        except (ValueError, RecursionError):
            return data
    return data


def format_header(event_type: str, key: EventKey, when: datetime | None = None) -> str:
    """Build the ``[HH:MM:SS][eventType: ...][eventName: ...]`` header."""
    when = when or datetime.now()
    return f"[{when:%H:%M:%S}][eventType: {event_type}][eventName: {format_key(key)}]"


class ConsoleSink:
    """Prints grouped entries to a rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        data = parse_payload(payload)
        body = "" if data is None else pretty_repr(data)
        self.console.print(Text(format_header(event_type, key)))
        self.console.print(Padding(Text(f"payload: {body}"), (0, 0, 0, 2), expand=False))


class StructlogSink:
    """Forwards entries to a structlog logger at debug level."""

    def __init__(self, logger: Any = None):
        self._logger = logger if logger is not None else get_logger("emitter.diagnostics")

    def record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        self._logger.debug(
            "emitter_" + event_type.replace("-", "_"),
            event_name=format_key(key),
            payload=parse_payload(payload),
        )


class NullSink:
    """Discards entries."""

    def record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        return None


class RecordingSink:
    """Keeps entries in memory as ``(event_type, key, payload)`` tuples."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, EventKey, Any]] = []

    def record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        self.entries.append((event_type, key, payload))

    def event_types(self) -> list[str]:
        return [entry[0] for entry in self.entries]

    def clear(self) -> None:
        self.entries.clear()
