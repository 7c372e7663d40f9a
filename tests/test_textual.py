"""Tests for reduxlite.textual — Textual integration layer."""

import pytest
from textual.css.query import NoMatches

from reduxlite import Action, Store
from reduxlite import textual as rtx

INC = Action("counter/inc")


def counter(state, action):
    count = 0 if state is None else state
    return count + 1 if action.type == "counter/inc" else count


class _MockApp:
    """Minimal mock matching the Textual App interface rtx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running


class TestSubscribe:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        s = Store(counter)
        log = []
        sub = rtx.subscribe(app, s, lambda state, action: log.append(state))
        s.dispatch(INC)
        assert log == []
        sub.unsubscribe()

    def test_skips_during_pause(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        sub = rtx.subscribe(app, s, lambda state, action: log.append(state))
        with rtx.pause(app):
            s.dispatch(INC)
        assert log == []
        s.dispatch(INC)
        assert log == [2]
        sub.unsubscribe()

    def test_fires_when_safe(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        sub = rtx.subscribe(app, s, lambda state, action: log.append((state, action)))
        s.dispatch(INC)
        assert log == [(1, INC)]
        sub.unsubscribe()

    def test_catches_nomatch(self):
        """NoMatches from widget queries are silently swallowed."""
        app = _MockApp()
        s = Store(counter)

        def _raise_nomatch(state, action):
            raise NoMatches("StatusFooter")

        # Should not raise
        sub = rtx.subscribe(app, s, _raise_nomatch)
        s.dispatch(INC)
        sub.unsubscribe()

    def test_propagates_real_errors(self):
        """Non-NoMatches exceptions propagate normally."""
        app = _MockApp()
        s = Store(counter)

        def _raise_value_error(state, action):
            raise ValueError("boom")

        sub = rtx.subscribe(app, s, _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            s.dispatch(INC)
        sub.unsubscribe()

    def test_unsubscribe_stops_listener(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        sub = rtx.subscribe(app, s, lambda state, action: log.append(state))
        s.dispatch(INC)
        sub.unsubscribe()
        s.dispatch(INC)
        assert log == [1]


class TestSubscribeState:
    def test_initial_call_is_guarded(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        with rtx.pause(app):
            sub = rtx.subscribe_state(app, s, log.append)
        assert log == []
        s.dispatch(INC)
        assert log == [1]
        sub.unsubscribe()

    def test_fires_immediately_when_safe(self):
        app = _MockApp()
        s = Store(counter, preloaded_state=3)
        log = []
        sub = rtx.subscribe_state(app, s, log.append)
        s.dispatch(INC)
        assert log == [3, 4]
        sub.unsubscribe()

    def test_catches_nomatch(self):
        app = _MockApp()
        s = Store(counter)
        calls = [0]

        def _observer(state):
            calls[0] += 1
            raise NoMatches("Widget")

        sub = rtx.subscribe_state(app, s, _observer)
        s.dispatch(INC)
        assert calls[0] == 2
        sub.unsubscribe()


class TestPause:
    def test_dispatch_while_paused_updates_store_only(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        sub = rtx.subscribe_state(app, s, log.append)
        with rtx.pause(app):
            s.dispatch(INC)
            s.dispatch(INC)
        assert s.get_state() == 2
        assert log == [0]
        s.dispatch(INC)
        assert log == [0, 3]
        sub.unsubscribe()

    def test_pause_restores_on_exception(self):
        app = _MockApp()
        s = Store(counter)
        log = []
        sub = rtx.subscribe(app, s, lambda state, action: log.append(state))

        with pytest.raises(RuntimeError):
            with rtx.pause(app):
                s.dispatch(INC)
                raise RuntimeError("oops")

        # Restored despite exception
        assert rtx.is_safe(app)
        s.dispatch(INC)
        assert log == [2]
        sub.unsubscribe()

    def test_pause_does_not_mutate_app(self):
        """Pause state lives in the module, not on the app."""
        app = _MockApp()
        attrs_before = set(vars(app))
        with rtx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during, (
            f"pause() added attributes to app: {attrs_during - attrs_before}"
        )
        assert attrs_before == set(vars(app))

    def test_apps_sharing_a_store_pause_independently(self):
        app_a = _MockApp()
        app_b = _MockApp()
        s = Store(counter)
        seen_a, seen_b = [], []
        sub_a = rtx.subscribe(app_a, s, lambda state, action: seen_a.append(state))
        sub_b = rtx.subscribe(app_b, s, lambda state, action: seen_b.append(state))
        with rtx.pause(app_a):
            assert rtx.is_safe(app_b)
            s.dispatch(INC)
        assert seen_a == []
        assert seen_b == [1]
        sub_a.unsubscribe()
        sub_b.unsubscribe()
