"""Scroll and selection position of a row based view."""

from dataclasses import dataclass


@dataclass
class ViewPos:
    """Viewport state: first visible row, horizontal offset and cursor."""

    view_start_row: int = 0
    view_start_column: int = 0
    selected_row: int = 0

    def determine_view_start_row(self, view_rows: int, total_rows: int) -> None:
        """Shift the window minimally so the selected row is visible, then clamp."""
        if self.selected_row < self.view_start_row:
            self.view_start_row = self.selected_row
        elif view_rows > 0 and self.selected_row >= self.view_start_row + view_rows:
            self.view_start_row = self.selected_row - view_rows + 1

        self.view_start_row = max(0, min(self.view_start_row, max(0, total_rows - view_rows)))

    def move_to_row(self, row: int) -> bool:
        """Select ``row``. Returns whether the selection changed."""
        if row == self.selected_row:
            return False
        self.selected_row = row
        return True

    def scroll_right(self, columns: int) -> None:
        self.view_start_column += columns

    def scroll_left(self, columns: int) -> None:
        self.view_start_column = max(0, self.view_start_column - columns)
