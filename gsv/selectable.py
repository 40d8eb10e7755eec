"""Cursor movement and search over a list of rows.

``SelectableRowView`` handles the generic navigation actions for a child view.
It runs under the child's lock and never takes it itself.
"""

import re
from typing import Protocol

from gsv.actions import Action, ActionType
from gsv.render import CHROME_ROWS
from gsv.variables import LINE_COUNT, LINE_NUMBER, LINE_TEXT, Variables
from gsv.viewpos import ViewPos


class SearchError(Exception):
    """The search pattern is not a valid regular expression."""


class RowView(Protocol):
    def rows(self) -> int: ...

    def line(self, index: int) -> str: ...

    def is_selectable_row(self, index: int) -> bool: ...

    def view_dimension(self) -> tuple[int, int]: ...

    def view_pos(self) -> ViewPos: ...

    def on_row_selected(self, index: int) -> None: ...


class ViewSearch:
    def __init__(self) -> None:
        self.pattern: re.Pattern[str] | None = None
        self.last_found_match = False

    def search_active(self) -> tuple[bool, re.Pattern[str] | None, bool]:
        return self.pattern is not None, self.pattern, self.last_found_match

    def set_pattern(self, raw: str) -> None:
        try:
            self.pattern = re.compile(raw)
        except re.error as exc:
            raise SearchError(f"Invalid search pattern '{raw}': {exc}") from exc
        self.last_found_match = False

    def clear(self) -> None:
        self.pattern = None
        self.last_found_match = False


class SelectableRowView:
    def __init__(self, child: RowView, variables: Variables) -> None:
        self.child = child
        self.variables = variables
        self.view_search = ViewSearch()
        self.active = True

    def _page_rows(self) -> int:
        rows, _ = self.child.view_dimension()
        return max(1, rows - CHROME_ROWS)

    def _find_selectable(self, start: int, step: int) -> int | None:
        row_count = self.child.rows()
        index = start
        while 0 <= index < row_count:
            if self.child.is_selectable_row(index):
                return index
            index += step
        return None

    def _select(self, index: int | None) -> bool:
        if index is None:
            return False
        if self.child.view_pos().move_to_row(index):
            self.child.on_row_selected(index)
        return True

    def select_nearest_selectable_row(self) -> None:
        """Move the cursor to the closest selectable row at or after it, else before it."""
        view_pos = self.child.view_pos()
        row_count = self.child.rows()
        if row_count == 0:
            view_pos.selected_row = 0
            return
        start = min(view_pos.selected_row, row_count - 1)
        index = self._find_selectable(start, 1)
        if index is None:
            index = self._find_selectable(start, -1)
        if index is None:
            view_pos.selected_row = start
            return
        view_pos.selected_row = index
        self.child.on_row_selected(index)

    def set_variables(self) -> None:
        """Publish the selected line for other views."""
        selected = self.child.view_pos().selected_row
        self.variables.set(LINE_TEXT, self.child.line(selected))
        self.variables.set(LINE_NUMBER, str(selected + 1))
        self.variables.set(LINE_COUNT, str(self.child.rows()))

    def _move_lines(self, delta: int) -> None:
        selected = self.child.view_pos().selected_row
        step = 1 if delta > 0 else -1
        target = max(0, min(selected + delta, self.child.rows() - 1))
        index = self._find_selectable(target, step)
        if index is None:
            index = self._find_selectable(target, -step)
        if index is not None and (index - selected) * step > 0:
            self._select(index)

    def _search(self, forwards: bool) -> None:
        active, pattern, _ = self.view_search.search_active()
        if not active or pattern is None:
            return
        row_count = self.child.rows()
        selected = self.child.view_pos().selected_row
        step = 1 if forwards else -1
        for offset in range(1, row_count + 1):
            index = (selected + offset * step) % row_count
            if pattern.search(self.child.line(index)):
                self.view_search.last_found_match = True
                self._select(index)
                return
        self.view_search.last_found_match = False

    def handle_action(self, action: Action) -> bool:
        """Handle a generic navigation action. Returns False if not handled."""
        action_type = action.action_type
        if action_type is ActionType.NEXT_LINE:
            self._move_lines(1)
        elif action_type is ActionType.PREV_LINE:
            self._move_lines(-1)
        elif action_type is ActionType.NEXT_PAGE:
            self._move_lines(self._page_rows())
        elif action_type is ActionType.PREV_PAGE:
            self._move_lines(-self._page_rows())
        elif action_type is ActionType.FIRST_LINE:
            self._select(self._find_selectable(0, 1))
        elif action_type is ActionType.LAST_LINE:
            self._select(self._find_selectable(self.child.rows() - 1, -1))
        elif action_type is ActionType.SCROLL_RIGHT:
            _, cols = self.child.view_dimension()
            self.child.view_pos().scroll_right(max(1, cols // 2))
        elif action_type is ActionType.SCROLL_LEFT:
            _, cols = self.child.view_dimension()
            self.child.view_pos().scroll_left(max(1, cols // 2))
        elif action_type is ActionType.SEARCH:
            if not action.args:
                return False
            self.view_search.set_pattern(action.args[0])
            self._search(forwards=True)
        elif action_type is ActionType.SEARCH_FIND_NEXT:
            self._search(forwards=True)
        elif action_type is ActionType.SEARCH_FIND_PREV:
            self._search(forwards=False)
        elif action_type is ActionType.CLEAR_SEARCH:
            self.view_search.clear()
        else:
            return False
        return True
