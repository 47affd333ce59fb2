"""
Event emitter for in-process pub/sub.

Provides:
- Keyed listener registration with removal by token or by reference
- Synchronous dispatch over a snapshot of the registered listeners
- Diagnostic entries for subscribe, unsubscribe, emit and listener calls
- A lazily created process-wide emitter with convenience functions
"""

from __future__ import annotations

from typing import Any

from emitter.config import EmitterOptions
from emitter.events.diagnostics import ConsoleSink, DiagnosticSink, StructlogSink
from emitter.events.errors import UnknownKey, UnknownListener
from emitter.events.keys import (
    EventKey,
    Listener,
    assert_event_key,
    assert_listener,
    format_key,
)
from emitter.events.refs import WeakListenerMap
from emitter.logging_config import get_logger, init_logging

logger = get_logger(__name__)


# =============================================================================
# Registrations
# =============================================================================


class WrappedListener:
    """
    Callable wrapping a subscribed listener.

    Calls the listener, then records a ``call-listener`` entry carrying
    the listener's return value.
    """

    def __init__(self, emitter: Emitter, key: EventKey, listener: Listener):
        self._emitter = emitter
        self.key = key
        self.listener = listener

    @property
    def name(self) -> str:
        return getattr(self.listener, "__qualname__", None) or repr(self.listener)

    def __call__(self, payload: Any) -> Any:
        result = self.listener(payload)
        self._emitter._record("call-listener", self.key, result)
        return result

    def __repr__(self) -> str:
        return f"<WrappedListener {self.name} on {format_key(self.key)}>"


class Subscription:
    """
    Token returned by ``Emitter.subscribe``.

    Lets the caller remove exactly this registration later without
    keeping the key/listener pair around.
    """

    def __init__(self, emitter: Emitter, wrapped: WrappedListener):
        self._emitter = emitter
        self._wrapped = wrapped

    @property
    def key(self) -> EventKey:
        return self._wrapped.key

    @property
    def listener(self) -> Listener:
        return self._wrapped.listener

    @property
    def active(self) -> bool:
        """Whether this registration is still present."""
        return self._emitter._is_registered(self._wrapped)

    async def ready(self) -> None:
        """Completes immediately. Exists for symmetry with async emitters."""
        return None

    def unsubscribe(self) -> bool:
        """
        Remove this registration.

        Returns:
            True if it was removed, False if it was already gone
        """
        return self._emitter._remove_wrapped(self._wrapped)

    def __repr__(self) -> str:
        state = "active" if self.active else "removed"
        return f"<Subscription {self._wrapped.name} on {format_key(self.key)} ({state})>"


# =============================================================================
# Emitter
# =============================================================================


class Emitter:
    """
    Keyed publish/subscribe emitter.

    Listeners are grouped per key in registration order. A second map
    associates each listener with its most recent wrapper so it can be
    removed by reference; that map holds neither side strongly.
    """

    def __init__(
        self,
        options: EmitterOptions | None = None,
        *,
        debug: bool | None = None,
        sink: DiagnosticSink | None = None,
    ):
        """
        Initialize emitter.

        Args:
            options: Emitter options (debug defaults to True)
            debug: Overrides ``options.debug`` when given
            sink: Diagnostic sink (defaults to a structlog sink when
                ``options.json_logs`` is set, a console sink otherwise)
        """
        options = options or EmitterOptions()
        self.debug = options.debug if debug is None else debug
        if sink is None:
            sink = StructlogSink() if options.json_logs else ConsoleSink()
        self.sink: DiagnosticSink = sink
        # dicts used as insertion-ordered sets
        self._events: dict[EventKey, dict[WrappedListener, None]] = {}
        self._listeners: WeakListenerMap[WrappedListener] = WeakListenerMap()

    def _record(self, event_type: str, key: EventKey, payload: Any = None) -> None:
        if self.debug:
            self.sink.record(event_type, key, payload)

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def subscribe(self, key: EventKey, listener: Listener) -> Subscription:
        """
        Register a listener under a key.

        Args:
            key: Event key (str, int, Symbol or Enum member)
            listener: Callable taking the payload

        Returns:
            Subscription token

        Examples:
            token = emitter.subscribe("user.created", on_created)
            token.unsubscribe()
        """
        assert_listener(listener)
        assert_event_key(key)

        wrapped = WrappedListener(self, key, listener)
        self._events.setdefault(key, {})[wrapped] = None
        self._listeners.set(listener, wrapped)
        self._record("subscribe", key)

        return Subscription(self, wrapped)

    def unsubscribe(self, key: EventKey, listener: Listener) -> bool:
        """
        Remove a listener by reference.

        Args:
            key: Event key the listener was subscribed under
            listener: The listener passed to ``subscribe``

        Returns:
            True

        Raises:
            UnknownKey: The key has no registrations
            UnknownListener: The listener has no recorded registration
        """
        assert_listener(listener)
        assert_event_key(key)

        if key not in self._events:
            raise UnknownKey(key)

        wrapped = self._listeners.get(listener)
        if wrapped is None:
            raise UnknownListener(listener)

        self._listeners.discard(listener)
        self._discard(key, wrapped)
        self._record("unsubscribe", key)
        return True

    def has_listener(self, key: EventKey, listener: Listener) -> bool:
        """
        Check whether a listener has a recorded registration.

        Only the listener's association is consulted, not the key.
        """
        assert_listener(listener)
        assert_event_key(key)
        return listener in self._listeners

    def _discard(self, key: EventKey, wrapped: WrappedListener) -> None:
        listeners = self._events.get(key)
        if listeners is None:
            return
        listeners.pop(wrapped, None)
        if not listeners:
            del self._events[key]

    def _is_registered(self, wrapped: WrappedListener) -> bool:
        return wrapped in self._events.get(wrapped.key, {})

    def _remove_wrapped(self, wrapped: WrappedListener) -> bool:
        if not self.has_listener(wrapped.key, wrapped.listener):
            return False
        if not self._is_registered(wrapped):
            return False

        self._discard(wrapped.key, wrapped)
        if self._listeners.get(wrapped.listener) is wrapped:
            self._listeners.discard(wrapped.listener)
        self._record("unsubscribe", wrapped.key)
        return True

    # -------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------

    def publish(self, key: EventKey, payload: Any = None) -> None:
        """
        Call every listener registered under a key.

        The listener set is copied before the first call, so listeners
        that subscribe or unsubscribe during dispatch only affect later
        publishes. Exceptions raised by a listener propagate.

        Args:
            key: Event key
            payload: Value passed to each listener
        """
        assert_event_key(key)

        self._record("emit", key, payload)
        snapshot = list(self._events.get(key, ()))

        for wrapped in snapshot:
            try:
                wrapped(payload)
            except Exception:
                logger.debug(
                    "listener_failed",
                    event_name=format_key(key),
                    listener=wrapped.name,
                    exc_info=True,
                )
                raise

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    def listener_count(self, key: EventKey) -> int:
        """Number of registrations under a key."""
        assert_event_key(key)
        return len(self._events.get(key, ()))

    def event_keys(self) -> list[EventKey]:
        """Keys that currently have registrations, in insertion order."""
        return list(self._events)

    def get_stats(self) -> dict[str, Any]:
        """Get emitter statistics."""
        return {
            "keys": len(self._events),
            "total_registrations": sum(len(subs) for subs in self._events.values()),
            "tracked_listeners": len(self._listeners),
            "debug": self.debug,
        }


# =============================================================================
# Global Instance
# =============================================================================

_emitter: Emitter | None = None


def get_emitter() -> Emitter:
    """Get or create the global emitter instance.

    Options come from the environment and also configure logging.
    """
    global _emitter
    if _emitter is None:
        options = EmitterOptions.from_env()
        init_logging(options)
        _emitter = Emitter(options)
    return _emitter


def reset_emitter() -> None:
    """Drop the global emitter; the next ``get_emitter`` builds a new one."""
    global _emitter
    _emitter = None


# =============================================================================
# Convenience Functions
# =============================================================================


def subscribe(key: EventKey, listener: Listener | None = None):
    """
    Subscribe on the global emitter (can be used as decorator).

    Usage:
        @subscribe("user.created")
        def on_created(payload):
            ...

        # Or:
        token = subscribe("user.created", handler)
    """
    emitter = get_emitter()

    if listener is not None:
        return emitter.subscribe(key, listener)

    def decorator(fn: Listener) -> Listener:
        emitter.subscribe(key, fn)
        return fn

    return decorator


def publish(key: EventKey, payload: Any = None) -> None:
    """Publish on the global emitter."""
    get_emitter().publish(key, payload)


def unsubscribe(key: EventKey, listener: Listener) -> bool:
    """Remove a listener from the global emitter."""
    return get_emitter().unsubscribe(key, listener)
