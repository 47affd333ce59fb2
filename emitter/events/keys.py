"""
Event keys and argument checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from emitter.events.errors import InvalidKeyType, InvalidListenerType


class Symbol:
    """
    Opaque, unique event key.

    Two symbols are never equal unless they are the same object, even
    when they share a description.

    Example:
        READY = Symbol("ready")
        emitter.subscribe(READY, on_ready)
    """

    __slots__ = ("description", "__weakref__")

    def __init__(self, description: str | None = None):
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description or ''})"

    __str__ = __repr__


EventKey = str | int | Symbol | Enum
Listener = Callable[[Any], Any]


def is_event_key(key: Any) -> bool:
    # bool is an int subclass but never a meaningful key
    if isinstance(key, bool):
        return False
    return isinstance(key, (str, int, Symbol, Enum))


def assert_event_key(key: Any) -> None:
    """Raise InvalidKeyType unless ``key`` is a str, int, Symbol or Enum member."""
    if not is_event_key(key):
        raise InvalidKeyType(key)


def assert_listener(listener: Any) -> None:
    """Raise InvalidListenerType unless ``listener`` is callable."""
    if not callable(listener):
        raise InvalidListenerType(listener)


def format_key(key: EventKey) -> str:
    """Render a key for diagnostics."""
    return str(key)
