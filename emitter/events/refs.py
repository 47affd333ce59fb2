"""
Weak listener -> wrapper association.

The map is keyed by listener identity and holds no strong reference to
either the listener or the stored value. Bound methods, builtin ones
included, are keyed by their (instance, function) pair, since every
attribute access creates a new bound-method object.
"""

from __future__ import annotations

import weakref
from collections.abc import Hashable
from types import BuiltinMethodType, MethodType, ModuleType
from typing import Any, Generic, TypeVar

V = TypeVar("V")


def listener_identity(listener: Any) -> Hashable:
    """Identity key for a listener."""
    if isinstance(listener, MethodType):
        return ("method", id(listener.__self__), id(listener.__func__))
    # builtin bound methods such as list.append; module-level builtins keep plain identity
    if isinstance(listener, BuiltinMethodType) and not isinstance(listener.__self__, (ModuleType, type(None))):
        return ("builtin", id(listener.__self__), listener.__name__)
    return id(listener)


class WeakListenerMap(Generic[V]):
    """
    Identity-keyed map from listeners to weakly held values.

    Values must strongly reference their listener (a wrapper does), so
    the listener's id stays valid for as long as the entry can be read.
    An entry disappears on its own once its value is collected.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, weakref.ref[V]] = {}

    def _expire(self, ident: Hashable, ref: weakref.ref[V]) -> None:
        # Only drop the entry if it was not overwritten in the meantime
        if self._entries.get(ident) is ref:
            del self._entries[ident]

    def set(self, listener: Any, value: V) -> None:
        ident = listener_identity(listener)
        ref = weakref.ref(value, lambda r, ident=ident: self._expire(ident, r))
        self._entries[ident] = ref

    def get(self, listener: Any) -> V | None:
        ref = self._entries.get(listener_identity(listener))
        if ref is None:
            return None
        return ref()

    def discard(self, listener: Any) -> None:
        self._entries.pop(listener_identity(listener), None)

    def __contains__(self, listener: Any) -> bool:
        return self.get(listener) is not None

    def __len__(self) -> int:
        return sum(1 for ref in self._entries.values() if ref() is not None)
