"""Hot-reload-aware store. Opt-in — import only if you need hot-reload support."""

import importlib
import logging

from reduxlite.errors import StoreError
from reduxlite.store import Store

logger = logging.getLogger("reduxlite.hot_reload")


class HotReloadStore(Store):
    """Store whose reducer can be swapped from reloaded code without crashing.

    Same API as Store. Adds:
    - Exception safety: a new reducer that fails on the REPLACE action is
      rolled back and the failure logged; state and listeners are untouched
    - Logging: reducer swaps are clearly logged
    - reload(): re-import a module and swap in the reducer it defines
    """

    def replace_reducer(self, next_reducer, replace_action=None):
        """Safe replacement — rolls back to the previous reducer on failure."""
        self._try_replace(next_reducer, replace_action)

    def reload(self, module, attr="reducer"):
        """Reload module and swap in its ``attr`` reducer.

        Returns True if the new reducer is active. On any failure the store
        keeps running with its previous reducer and state.
        """
        name = getattr(module, "__name__", module)
        try:
            module = importlib.reload(module)
            next_reducer = getattr(module, attr)
            if not callable(next_reducer):
                raise TypeError(f"{name}.{attr} is not callable")
        except Exception:
            logger.exception("Failed to reload reducer %s.%s", name, attr)
            return False
        return self._try_replace(next_reducer)

    def _try_replace(self, next_reducer, replace_action=None) -> bool:
        action = self._check_replace(next_reducer, replace_action)
        previous = self._set_reducer(next_reducer)
        try:
            state = self._reduce(action)
        except StoreError:
            self._set_reducer(previous)
            raise
        except Exception:
            self._set_reducer(previous)
            logger.exception("Reducer %r failed on replace; keeping previous reducer", next_reducer)
            return False

        logger.info("Replaced reducer: %r -> %r", previous, next_reducer)
        self._notify(state, action)
        return True
