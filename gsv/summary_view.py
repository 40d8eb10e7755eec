"""Summary view: current branch and modified files.

The line list and the view position are guarded together by one lock. Every
public entry point takes it for its whole duration; the repository
notifications regenerate the lines from the provider's current snapshot, so
a burst of notifications settles on the same result.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Mapping
from typing import Protocol

import structlog

from gsv import git_ops
from gsv.actions import Action, ActionRouter, ActionType, Handler
from gsv.lines import Line
from gsv.models import LocalBranch, RefHandle, StatusSnapshot, UpdatedRef
from gsv.render import CHROME_ROWS, LineBuilder
from gsv.repo_data import RefStateListener, StatusListener
from gsv.rows import generate_rows
from gsv.selectable import SelectableRowView
from gsv.theme import ThemeComponent
from gsv.variables import Variables
from gsv.viewpos import ViewPos

log = structlog.get_logger("gsv.summary_view")

INDENTATION = "     "
TITLE = "Summary"


class RepoQuery(Protocol):
    def head(self) -> RefHandle: ...

    def status(self) -> StatusSnapshot | None: ...

    def refresh(self) -> bool: ...

    def register_ref_state_listener(self, listener: RefStateListener) -> None: ...

    def register_status_listener(self, listener: StatusListener) -> None: ...


class DisplayChannel(Protocol):
    def update_display(self) -> None: ...


class RenderWindow(Protocol):
    def rows(self) -> int: ...

    def view_dimensions(self) -> tuple[int, int]: ...

    def line_builder(self, row: int, start_column: int = 0) -> LineBuilder: ...

    def set_selected_row(self, row: int, active: bool) -> None: ...

    def highlight(self, pattern: re.Pattern[str], component: ThemeComponent) -> None: ...


def _refresh_repository(view: SummaryView, action: Action) -> None:
    view.schedule_refresh()


DEFAULT_HANDLERS: dict[ActionType, Handler[SummaryView]] = {
    ActionType.REFRESH: _refresh_repository,
}


class SummaryView:
    """Displays a summary of the repository state."""

    def __init__(
        self,
        repo_data: RepoQuery,
        channel: DisplayChannel,
        variables: Variables | None = None,
        handlers: Mapping[ActionType, Handler[SummaryView]] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._repo_data = repo_data
        self._channel = channel
        self._lines: tuple[Line, ...] = ()
        self._view_pos = ViewPos()
        self._last_view_dimension = (0, 0)
        self.variables = variables if variables is not None else Variables()
        self.selectable = SelectableRowView(self, self.variables)
        self._router: ActionRouter[SummaryView] = ActionRouter(
            DEFAULT_HANDLERS if handlers is None else handlers,
            self.selectable.handle_action,
            "SummaryView",
        )
        self._log = log.bind(component="SummaryView")

    def initialise(self) -> None:
        with self._lock:
            self._repo_data.register_ref_state_listener(self)
            self._repo_data.register_status_listener(self)
            self._generate_rows()

    def render(self, win: RenderWindow) -> int:
        """Draw the visible lines into ``win`` and return how many were drawn.

        A failure from the window aborts the pass and propagates.
        """
        with self._lock:
            self._last_view_dimension = win.view_dimensions()
            line_count = len(self._lines)

            rows = max(0, win.rows() - CHROME_ROWS)
            view_pos = self._view_pos
            view_pos.determine_view_start_row(rows, line_count)
            if rows == 0 or line_count == 0:
                return 0

            line_index = view_pos.view_start_row
            drawn = 0
            while drawn < rows and line_index < line_count:
                builder = win.line_builder(drawn + 1, view_pos.view_start_column)
                builder.append(INDENTATION)
                self._lines[line_index].render(builder)
                line_index += 1
                drawn += 1

            win.set_selected_row(
                view_pos.selected_row - view_pos.view_start_row + 1, self.selectable.active
            )

            search_active, pattern, last_found_match = self.selectable.view_search.search_active()
            if search_active and last_found_match and pattern is not None:
                win.highlight(pattern, ThemeComponent.SEARCH_MATCH)

            return drawn

    def handle_action(self, action: Action) -> bool:
        """Run the action. Returns False if neither this view nor row navigation handles it."""
        with self._lock:
            return self._router.dispatch(self, action)

    def schedule_refresh(self) -> None:
        """Ask the provider to re-read git state on a separate thread."""

        def runner() -> None:
            try:
                self._repo_data.refresh()
            except (git_ops.GitError, OSError):
                self._log.exception("Refresh failed")

        threading.Thread(target=runner, name="gsv-refresh", daemon=True).start()

    def plain_lines(self) -> list[str]:
        with self._lock:
            return [line.render_string() for line in self._lines]

    def selected_row(self) -> int:
        with self._lock:
            return self._view_pos.selected_row

    def lines(self) -> tuple[Line, ...]:
        with self._lock:
            return self._lines

    # Row access for SelectableRowView; callers already hold the lock.

    def rows(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            return ""
        return self._lines[index].render_string()

    def is_selectable_row(self, index: int) -> bool:
        if index < 0 or index >= len(self._lines):
            return False
        return self._lines[index].is_selectable()

    def view_dimension(self) -> tuple[int, int]:
        return self._last_view_dimension

    def view_pos(self) -> ViewPos:
        return self._view_pos

    def on_row_selected(self, index: int) -> None:
        self.selectable.set_variables()

    def _generate_rows(self) -> None:
        self._lines = generate_rows(self._repo_data.head(), self._repo_data.status())
        self.selectable.select_nearest_selectable_row()
        self._log.debug("Generated rows", lines=len(self._lines))
        self._channel.update_display()

    def _regenerate(self) -> None:
        with self._lock:
            self._generate_rows()

    def on_refs_changed(
        self, added: list[str], removed: list[str], updated: list[UpdatedRef]
    ) -> None:
        self._regenerate()

    def on_head_changed(self, old_head: RefHandle, new_head: RefHandle) -> None:
        self._regenerate()

    def on_tracking_branches_updated(self, branches: list[LocalBranch]) -> None:
        self._regenerate()

    def on_status_changed(self, status: StatusSnapshot | None) -> None:
        self._regenerate()
