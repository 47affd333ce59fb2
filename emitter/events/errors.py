"""
Errors raised by the emitter.

All of them are raised synchronously at the call that violates a
precondition. They subclass the matching builtin as well, so callers
can catch ``TypeError`` / ``LookupError`` without importing this module.
"""

from __future__ import annotations

from typing import Any


class EmitterError(Exception):
    """Base class for emitter errors."""


class InvalidKeyType(EmitterError, TypeError):
    """
    Raised when an event key is not a string, int, Symbol or Enum member.

    Enum members are accepted on top of str, int and Symbol; bool is not.
    """

    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        self.message = message or "`eventName` must be a string, int, Symbol or Enum member"
        super().__init__(self.message)


class InvalidListenerType(EmitterError, TypeError):
    """Raised when a listener is not callable."""

    def __init__(self, listener: Any, message: str | None = None):
        self.listener = listener
        self.message = message or "listener must be callable"
        super().__init__(self.message)


class UnknownKey(EmitterError, LookupError):
    """Raised when unsubscribing from a key that has no registrations."""

    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        self.message = message or "this event has not been subscribed"
        super().__init__(self.message)


class UnknownListener(EmitterError, LookupError):
    """Raised when unsubscribing a listener that has no recorded registration."""

    def __init__(self, listener: Any, message: str | None = None):
        self.listener = listener
        self.message = message or "this listener has not been listened"
        super().__init__(self.message)
