"""
Emitter: in-process publish/subscribe event emitter.

This package contains:
- Events (registration, dispatch and removal of listeners)
- Diagnostics (console and structured logging sinks)
- Configuration and logging setup
"""

from emitter.config import EmitterOptions
from emitter.events import (
    Emitter,
    Subscription,
    Symbol,
    get_emitter,
    publish,
    subscribe,
    unsubscribe,
)

__version__ = "0.1.0"

__all__ = [
    "Emitter",
    "EmitterOptions",
    "Subscription",
    "Symbol",
    "get_emitter",
    "publish",
    "subscribe",
    "unsubscribe",
]
