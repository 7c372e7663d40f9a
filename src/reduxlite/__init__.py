"""reduxlite: Redux-style unidirectional state container for Python."""

from importlib.metadata import version as _version

__version__ = _version("reduxlite")

from reduxlite.errors import (
    StoreError,
    ReentrancyError,
    InvalidActionError,
    UninitializedStateError,
)
from reduxlite.action import Action, ActionTypes, action_creator, action_type
from reduxlite.subscription import Subscription
from reduxlite.store import Store
# hot_reload and textual NOT auto-imported — opt-in only

__all__ = [
    "Store",
    "Subscription",
    "Action",
    "ActionTypes",
    "action_creator",
    "action_type",
    "StoreError",
    "ReentrancyError",
    "InvalidActionError",
    "UninitializedStateError",
]
