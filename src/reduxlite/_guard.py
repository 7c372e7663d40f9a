"""Reentrancy guard — the in-flight flag of a single Store.

A reducer must never call back into its own Store. The guard is checked at
every public entry point and held only for the duration of one reducer call.
Single-threaded by contract: check-then-set has no suspension point between.

A rejected call is remembered until the reducer returns, so a reducer that
catches the ReentrancyError still fails the dispatch it is running in.
"""

from __future__ import annotations

from contextlib import contextmanager

from reduxlite.errors import ReentrancyError


class DispatchGuard:
    """In-flight flag with a check-and-raise entry point."""

    __slots__ = ("_active", "_violation")

    def __init__(self) -> None:
        self._active = False
        self._violation: ReentrancyError | None = None

    @property
    def active(self) -> bool:
        return self._active

    def check(self, what: str) -> None:
        """Raise ReentrancyError if a reducer is currently executing."""
        if self._active:
            self.reject(f"You may not call {what} while the reducer is executing.")

    def reject(self, message: str) -> None:
        """Record a reentrant call and raise it."""
        self._violation = ReentrancyError(message)
        raise self._violation

    @contextmanager
    def reducing(self):
        """Hold the flag for one reducer call. Cleared on every exit path.

        Re-raises any rejected call on the way out, even if the reducer
        swallowed it.
        """
        self._active = True
        self._violation = None
        try:
            yield
            violation = self._violation
        finally:
            self._active = False
            self._violation = None
        if violation is not None:
            raise violation
