"""Summary view line variants.

Each line renders itself into a :class:`~gsv.render.LineBuilder`, renders a
plain string equivalent for search and export, and knows whether the cursor
may rest on it. Lines are immutable and compare by value.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from gsv.models import AheadBehind, ChangeKind, LocalBranch, RefHandle, StatusEntry, StatusSection
from gsv.render import Glyph, LineBuilder
from gsv.theme import ThemeComponent


class Line(Protocol):
    def render(self, builder: LineBuilder) -> None: ...

    def render_string(self) -> str: ...

    def is_selectable(self) -> bool: ...


@dataclass(frozen=True)
class TextLine:
    """A single styled value: blank lines, headers and placeholders."""

    value: str
    component: ThemeComponent = ThemeComponent.NORMAL
    selectable: bool = False

    def render(self, builder: LineBuilder) -> None:
        builder.append_styled(self.component, self.value)

    def render_string(self) -> str:
        return self.value

    def is_selectable(self) -> bool:
        return self.selectable


EMPTY_LINE = TextLine("")
NO_MODIFIED_FILES_LINE = TextLine("None", ThemeComponent.NO_MODIFIED_FILES)


@lru_cache(maxsize=None)
def header_line(header: str) -> TextLine:
    """Shared header line for ``header``."""
    return TextLine(header, ThemeComponent.HEADER)


@dataclass(frozen=True)
class BranchLine:
    head: RefHandle

    def _tracking(self) -> AheadBehind | None:
        if isinstance(self.head, LocalBranch):
            return self.head.tracking
        return None

    def render(self, builder: LineBuilder) -> None:
        builder.append_styled(ThemeComponent.NORMAL, self.head.display_name)

        tracking = self._tracking()
        if tracking is not None:
            (
                builder.append_styled(ThemeComponent.NORMAL, " (")
                .append_glyph(Glyph.UP_ARROW, ThemeComponent.NORMAL)
                .append_styled(ThemeComponent.BRANCH_AHEAD, f"{tracking.ahead} ")
                .append_glyph(Glyph.DOWN_ARROW, ThemeComponent.NORMAL)
                .append_styled(ThemeComponent.BRANCH_BEHIND, f"{tracking.behind}")
                .append_styled(ThemeComponent.NORMAL, ")")
            )

    def render_string(self) -> str:
        tracking = self._tracking()
        if tracking is not None:
            return f"{self.head.display_name} (^{tracking.ahead} v{tracking.behind})"
        return self.head.display_name

    def is_selectable(self) -> bool:
        return True


_UNSTAGED_PREFIXES = {
    ChangeKind.NEW: "?",
    ChangeKind.MODIFIED: "M",
    ChangeKind.DELETED: "D",
    ChangeKind.RENAMED: "R",
    ChangeKind.TYPE_CHANGED: "T",
    ChangeKind.CONFLICTED: "U",
}
_STAGED_PREFIXES = {**_UNSTAGED_PREFIXES, ChangeKind.NEW: "A"}


@dataclass(frozen=True)
class StatusFileLine:
    section: StatusSection
    entry: StatusEntry

    def line_parts(self) -> tuple[str, str]:
        """The one character prefix and the path text."""
        prefixes = _STAGED_PREFIXES if self.section is StatusSection.STAGED else _UNSTAGED_PREFIXES
        prefix = prefixes[self.entry.kind]
        if self.entry.kind is ChangeKind.RENAMED:
            return prefix, f"{self.entry.old_path} -> {self.entry.new_path}"
        return prefix, self.entry.new_path

    def render(self, builder: LineBuilder) -> None:
        if self.section is StatusSection.STAGED:
            component = ThemeComponent.STAGED_FILE
        else:
            component = ThemeComponent.UNSTAGED_FILE

        prefix, files = self.line_parts()
        builder.append_styled(component, prefix).append_styled(ThemeComponent.NORMAL, f" {files}")

    def render_string(self) -> str:
        prefix, files = self.line_parts()
        return f"{prefix} {files}"

    def is_selectable(self) -> bool:
        return True
