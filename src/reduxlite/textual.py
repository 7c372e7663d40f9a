"""Textual integration for reduxlite. Opt-in — requires textual.

Store listeners that touch widgets must not run while the widget tree is
being rebuilt or before the app is running. The guard and the NoMatches
handling live here, not at every call site, so the core Store stays
UI-agnostic.
"""

from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend this app's guarded store listeners, e.g. while swapping screens.

    Dispatches made while paused still update the store; the listeners just
    miss them and see the next dispatch after the pause ends.
    """
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Can store listeners safely query this app's widget tree?"""
    return app.is_running and id(app) not in _paused_apps


def subscribe(app, store, listener):
    """store.subscribe() that safely bridges to Textual widgets.

    Skips notifications while the app is paused or not running, and
    ignores NoMatches from widget queries.
    """

    def _guarded(state, action):
        if not is_safe(app):
            return
        try:
            listener(state, action)
        except NoMatches:
            pass

    return store.subscribe(_guarded)


def subscribe_state(app, store, observer):
    """store.subscribe_state() with the same guard, initial call included."""

    def _guarded(state):
        if not is_safe(app):
            return
        try:
            observer(state)
        except NoMatches:
            pass

    return store.subscribe_state(_guarded)
