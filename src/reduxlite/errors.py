"""Store error hierarchy.

Every error raised by a Store inherits from StoreError. The store raises
these at the call site that broke the precondition and never catches them.
"""


class StoreError(Exception):
    """Base error for all store operations."""


class ReentrancyError(StoreError):
    """Store API called while a reducer is executing."""


class InvalidActionError(StoreError):
    """Action without a non-empty string ``type``."""


class UninitializedStateError(StoreError):
    """State read before any state was set."""
