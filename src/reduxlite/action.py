"""Actions — immutable messages describing a state transition.

An action is anything carrying a non-empty string tag: a mapping with a
"type" key, or any object with a ``type`` attribute. Action is the default
record; action_creator builds Actions from plain payload functions.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, ParamSpec

from reduxlite.errors import InvalidActionError

P = ParamSpec("P")


class ActionTypes:
    """Tags of the actions the Store dispatches on its own."""

    INIT = "@@reduxlite/INIT"
    REPLACE = "@@reduxlite/REPLACE"


@dataclass(frozen=True, slots=True)
class Action:
    """Tagged message with an optional payload."""

    type: str
    payload: Any = None


def action_type(action: object) -> str:
    """Return the action's tag. Raises InvalidActionError if it has none."""
    if isinstance(action, Mapping):
        tag = action.get("type")
    else:
        tag = getattr(action, "type", None)
    if not isinstance(tag, str):
        raise InvalidActionError(
            f'Actions must have a string "type"; got {type(action).__name__}.'
        )
    if not tag:
        raise InvalidActionError('Actions may not have an empty "type".')
    return tag


def action_creator(type_: str) -> Callable[[Callable[P, Any]], Callable[P, Action]]:
    """Decorator: wrap a payload function so calling it returns an Action.

    Usage:
        @action_creator("todos/add")
        def add_todo(text):
            return {"text": text, "done": False}

        add_todo("milk")
        # Action(type="todos/add", payload={"text": "milk", "done": False})
    """
    action_type(Action(type_))

    def decorate(fn: Callable[P, Any]) -> Callable[P, Action]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Action:
            return Action(type_, fn(*args, **kwargs))

        wrapper.type = type_  # type: ignore[attr-defined]
        return wrapper

    return decorate
