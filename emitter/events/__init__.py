"""
Event emitter module.

Provides keyed pub/sub with removal by token or by listener reference.
"""

from emitter.events.bus import (
    Emitter,
    Subscription,
    WrappedListener,
    get_emitter,
    publish,
    reset_emitter,
    subscribe,
    unsubscribe,
)
from emitter.events.diagnostics import (
    ConsoleSink,
    DiagnosticSink,
    NullSink,
    RecordingSink,
    StructlogSink,
)
from emitter.events.errors import (
    EmitterError,
    InvalidKeyType,
    InvalidListenerType,
    UnknownKey,
    UnknownListener,
)
from emitter.events.keys import EventKey, Listener, Symbol

__all__ = [
    "ConsoleSink",
    "DiagnosticSink",
    "Emitter",
    "EmitterError",
    "EventKey",
    "InvalidKeyType",
    "InvalidListenerType",
    "Listener",
    "NullSink",
    "RecordingSink",
    "StructlogSink",
    "Subscription",
    "Symbol",
    "UnknownKey",
    "UnknownListener",
    "WrappedListener",
    "get_emitter",
    "publish",
    "reset_emitter",
    "subscribe",
    "unsubscribe",
]
