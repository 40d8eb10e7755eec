"""Display sink: styled line building on top of rich text."""

import re
from enum import Enum

from rich.console import Group
from rich.text import Text

from gsv.theme import Theme, ThemeComponent

CHROME_ROWS = 2


class RenderError(Exception):
    """Drawing into the window failed."""


class Glyph(Enum):
    UP_ARROW = "↑"
    DOWN_ARROW = "↓"


class LineBuilder:
    """Accumulates styled spans for one window row."""

    def __init__(self, theme: Theme) -> None:
        self._theme = theme
        self.text = Text(no_wrap=True, overflow="crop")

    def append(self, value: str) -> "LineBuilder":
        self.text.append(value)
        return self

    def append_styled(self, component: ThemeComponent, value: str) -> "LineBuilder":
        self.text.append(value, style=self._theme.style(component))
        return self

    def append_glyph(self, glyph: Glyph, component: ThemeComponent) -> "LineBuilder":
        self.text.append(glyph.value, style=self._theme.style(component))
        return self


class TextWindow:
    """A fixed size window of rich text rows.

    Row 0 is the title and the last row a bottom rule; everything between is
    drawable by views.
    """

    def __init__(self, rows: int, cols: int, theme: Theme, title: str = "") -> None:
        self._rows = max(0, rows)
        self._cols = max(0, cols)
        self._theme = theme
        self.title = title
        self._builders: dict[int, tuple[LineBuilder, int]] = {}
        self._selected: tuple[int, bool] | None = None
        self._highlights: list[tuple[re.Pattern[str], ThemeComponent]] = []

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def view_dimensions(self) -> tuple[int, int]:
        return self._rows, self._cols

    def _check_drawable(self, row: int) -> None:
        if row < 1 or row > self._rows - CHROME_ROWS:
            raise RenderError(f"Invalid row index: {row} >= {self._rows} rows")

    def line_builder(self, row: int, start_column: int = 0) -> LineBuilder:
        self._check_drawable(row)
        builder = LineBuilder(self._theme)
        self._builders[row] = (builder, max(0, start_column))
        return builder

    def set_selected_row(self, row: int, active: bool) -> None:
        self._check_drawable(row)
        self._selected = (row, active)

    def highlight(self, pattern: re.Pattern[str], component: ThemeComponent) -> None:
        if not self._builders:
            raise RenderError("Nothing drawn to highlight")
        self._highlights.append((pattern, component))

    def line(self, row: int) -> Text:
        """The final text of a row, after scrolling, selection and highlights."""
        entry = self._builders.get(row)
        if entry is None:
            return Text()
        builder, start_column = entry
        if start_column >= len(builder.text):
            return Text()
        text = builder.text[start_column:] if start_column else builder.text.copy()
        for pattern, component in self._highlights:
            style = self._theme.style(component)
            for match in pattern.finditer(text.plain):
                if match.end() > match.start():
                    text.stylize(style, match.start(), match.end())
        if self._selected is not None and self._selected[0] == row:
            text.stylize("reverse" if self._selected[1] else "underline")
        text.truncate(self._cols)
        return text

    def plain_lines(self) -> list[str]:
        """Drawable rows as plain strings, for logging and tests."""
        return [self.line(row).plain for row in range(1, self._rows - CHROME_ROWS + 1)]

    def renderable(self) -> Group:
        if self._rows == 0:
            return Group()
        title = Text(self.title, style=self._theme.style(ThemeComponent.TITLE), no_wrap=True)
        title.truncate(self._cols)
        lines = [title]
        lines.extend(self.line(row) for row in range(1, self._rows - 1))
        if self._rows > 1:
            lines.append(Text("─" * self._cols, style="dim"))
        return Group(*lines)
