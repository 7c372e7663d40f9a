"""Store — single-threaded state container with unidirectional data flow.

State changes only through dispatch(): the reducer computes the next state
from the previous one and the action, then every listener registered at that
moment is called with (state, action). Three rules hold:

- No reentrancy: while the reducer runs, every Store entry point raises
  ReentrancyError. Reducers are pure; they never dispatch or subscribe.
- Snapshot before notify: listeners added or removed during a notification
  round take effect from the next dispatch.
- Handles are weak: a Subscription never keeps its Store alive, and dropping
  it unregisters the listener exactly once.

The constructor dispatches an INIT action, so state is always defined once
__init__ returns.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Generic, TypeVar

from reduxlite._guard import DispatchGuard
from reduxlite.action import Action, ActionTypes, action_type
from reduxlite.errors import UninitializedStateError
from reduxlite.subscription import Subscription

S = TypeVar("S")
A = TypeVar("A")

Reducer = Callable[[S | None, A], S]
Listener = Callable[[S, A], None]

logger = logging.getLogger("reduxlite.store")

_UNSET = object()


class Store(Generic[S, A]):
    """Observable state container driven by a replaceable reducer.

    Usage:
        def counter(state, action):
            if state is None:
                return 0
            if action.type == "inc":
                return state + 1
            return state

        store = Store(counter)
        seen = []
        sub = store.subscribe(lambda state, action: seen.append(state))
        store.dispatch(Action("inc"))
        # store.get_state() == 1, seen == [1]
        sub.unsubscribe()
    """

    def __init__(
        self,
        reducer: Reducer,
        preloaded_state: S | None = None,
        init_action: A | None = None,
    ) -> None:
        if not callable(reducer):
            raise TypeError(f"Expected the reducer to be callable, got {reducer!r}.")
        self._reducer = reducer
        self._state: object = _UNSET if preloaded_state is None else preloaded_state
        self._listeners: dict[int, Listener] = {}
        self._ids = itertools.count()
        self._guard = DispatchGuard()
        self.dispatch(init_action if init_action is not None else Action(ActionTypes.INIT))

    @property
    def is_dispatching(self) -> bool:
        """True only while the reducer is executing."""
        return self._guard.active

    @property
    def listener_count(self) -> int:
        """Number of registered listeners. Useful for testing."""
        return len(self._listeners)

    def get_state(self) -> S:
        """Current state.

        Returns the stored object itself, not a copy. The store replaces state
        on every dispatch and never mutates it in place; callers must not
        mutate it either.
        """
        self._guard.check("store.get_state()")
        if self._state is _UNSET:
            raise UninitializedStateError("State is not initialized.")
        return self._state  # type: ignore[return-value]

    def dispatch(self, action: A) -> A:
        """Reduce action into the next state, then notify listeners.

        Returns the action so callers can chain on it.
        """
        state = self._reduce(action)
        self._notify(state, action)
        return action

    def subscribe(self, listener: Listener) -> Subscription:
        """Register listener(state, action), called after every dispatch.

        Never fires at registration. Keep the returned Subscription: dropping
        it unregisters the listener.
        """
        self._guard.check("store.subscribe()")
        if not callable(listener):
            raise TypeError(f"Expected the listener to be callable, got {listener!r}.")
        listener_id = next(self._ids)
        self._listeners[listener_id] = listener
        logger.debug("Subscribed listener %d", listener_id)
        return Subscription(self, listener_id)

    def subscribe_state(self, observer: Callable[[S], None]) -> Subscription:
        """Call observer(state) now, then again after every dispatch."""
        observer(self.get_state())
        return self.subscribe(lambda state, action: observer(state))

    def replace_reducer(self, next_reducer: Reducer, replace_action: A | None = None) -> None:
        """Swap the reducer and dispatch a REPLACE action through it."""
        action = self._check_replace(next_reducer, replace_action)
        self._set_reducer(next_reducer)
        self.dispatch(action)

    def _check_replace(self, next_reducer: Reducer, replace_action: A | None) -> A:
        """Validate a reducer swap and return the action to dispatch after it."""
        self._guard.check("store.replace_reducer()")
        if not callable(next_reducer):
            raise TypeError(f"Expected the reducer to be callable, got {next_reducer!r}.")
        return replace_action if replace_action is not None else Action(ActionTypes.REPLACE)

    def _set_reducer(self, next_reducer: Reducer) -> Reducer:
        """Install next_reducer and return the one it replaced."""
        previous, self._reducer = self._reducer, next_reducer
        logger.debug("Replaced reducer %r with %r", previous, next_reducer)
        return previous

    def _reduce(self, action: A) -> S:
        """Validate, run the reducer under the guard, and store the result."""
        action_type(action)
        if self._guard.active:
            self._guard.reject("Reducers may not dispatch actions.")
        previous = None if self._state is _UNSET else self._state
        with self._guard.reducing():
            next_state = self._reducer(previous, action)
        self._state = next_state
        return next_state

    def _notify(self, state: S, action: A) -> None:
        for listener in list(self._listeners.values()):
            listener(state, action)

    def _remove_listener(self, listener_id: int) -> None:
        self._guard.check("unsubscribe()")
        self._discard_listener(listener_id)

    def _discard_listener(self, listener_id: int) -> None:
        if self._listeners.pop(listener_id, None) is not None:
            logger.debug("Unsubscribed listener %d", listener_id)

    def __repr__(self) -> str:
        state = "<unset>" if self._state is _UNSET else repr(self._state)
        return f"Store({state}, listeners={len(self._listeners)})"
