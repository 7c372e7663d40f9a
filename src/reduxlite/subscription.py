"""Subscription — disposable handle for one registered listener.

The handle holds only a weak reference back to its Store, so a forgotten
handle never keeps a Store alive. Removal happens at most once: through
unsubscribe(), by calling the handle, on leaving a ``with`` block, or when
the last reference to the handle is dropped.
"""

from __future__ import annotations

import weakref
from typing import Protocol


class ListenerRegistry(Protocol):
    """The one capability a handle needs from its Store: removal by id."""

    def _remove_listener(self, listener_id: int) -> None: ...

    def _discard_listener(self, listener_id: int) -> None: ...


class Subscription:
    """Handle returned by Store.subscribe()."""

    __slots__ = ("_registry", "_id", "_active", "__weakref__")

    def __init__(self, registry: ListenerRegistry, listener_id: int) -> None:
        self._registry: weakref.ref[ListenerRegistry] = weakref.ref(registry)
        self._id = listener_id
        self._active = True

    @property
    def id(self) -> int:
        return self._id

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Remove the listener. Idempotent; a no-op once the Store is gone.

        Raises ReentrancyError if called from inside a reducer; the handle
        then stays active and may be unsubscribed later.
        """
        if not self._active:
            return
        registry = self._registry()
        if registry is not None:
            registry._remove_listener(self._id)
        self._active = False

    def __call__(self) -> None:
        self.unsubscribe()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()

    def __del__(self) -> None:
        if not getattr(self, "_active", False):
            return
        self._active = False
        registry = self._registry()
        if registry is not None:
            registry._discard_listener(self._id)

    def __repr__(self) -> str:
        if not self._active:
            state = "inactive"
        elif self._registry() is None:
            state = "orphaned"
        else:
            state = "active"
        return f"Subscription({self._id}, {state})"
