"""Abstract actions and the two stage action router."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger("gsv.actions")

V = TypeVar("V")


class ActionType(Enum):
    NEXT_LINE = "next-line"
    PREV_LINE = "prev-line"
    NEXT_PAGE = "next-page"
    PREV_PAGE = "prev-page"
    FIRST_LINE = "first-line"
    LAST_LINE = "last-line"
    SCROLL_LEFT = "scroll-left"
    SCROLL_RIGHT = "scroll-right"
    SEARCH = "search"
    SEARCH_FIND_NEXT = "search-find-next"
    SEARCH_FIND_PREV = "search-find-prev"
    CLEAR_SEARCH = "clear-search"
    REFRESH = "refresh"


@dataclass(frozen=True)
class Action:
    action_type: ActionType
    args: tuple[str, ...] = ()


Handler = Callable[[V, Action], None]


class ActionRouter(Generic[V]):
    """Looks up a view handler first, then falls back to a generic handler.

    The fallback returns whether it handled the action. Errors raised by
    either stage propagate to the caller.
    """

    def __init__(
        self,
        handlers: Mapping[ActionType, Handler[V]],
        fallback: Callable[[Action], bool],
        name: str,
    ) -> None:
        self._handlers = dict(handlers)
        self._fallback = fallback
        self._log = log.bind(component=name)

    def dispatch(self, view: V, action: Action) -> bool:
        handler = self._handlers.get(action.action_type)
        if handler is not None:
            self._log.debug("Action handled by view", action=action.action_type.value)
            handler(view, action)
            return True

        if self._fallback(action):
            self._log.debug("Action handled by selectable row view", action=action.action_type.value)
            return True

        self._log.debug("Action not handled", action=action.action_type.value)
        return False
