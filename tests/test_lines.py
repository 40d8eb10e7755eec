from __future__ import annotations

import pytest

from gsv.lines import EMPTY_LINE, NO_MODIFIED_FILES_LINE, BranchLine, StatusFileLine, header_line
from gsv.models import (
    AheadBehind,
    ChangeKind,
    DetachedHead,
    LocalBranch,
    StatusEntry,
    StatusSection,
)
from gsv.render import LineBuilder
from gsv.theme import Theme, ThemeComponent


def _rendered(line: object, theme: Theme | None = None) -> LineBuilder:
    builder = LineBuilder(theme or Theme())
    line.render(builder)  # type: ignore[attr-defined]
    return builder


def test_text_lines_are_not_selectable() -> None:
    assert not EMPTY_LINE.is_selectable()
    assert not header_line("Branch").is_selectable()
    assert not NO_MODIFIED_FILES_LINE.is_selectable()
    assert NO_MODIFIED_FILES_LINE.render_string() == "None"


def test_header_lines_are_shared() -> None:
    assert header_line("Branch") is header_line("Branch")
    assert header_line("Branch") is not header_line("Modified Files")


def test_header_uses_header_style() -> None:
    theme = Theme()
    text = _rendered(header_line("Branch"), theme).text
    assert text.plain == "Branch"
    assert [span.style for span in text.spans] == [theme.style(ThemeComponent.HEADER)]


def test_tracking_branch_line() -> None:
    theme = Theme()
    line = BranchLine(LocalBranch("main", AheadBehind(ahead=2, behind=1)))
    assert line.render_string() == "main (^2 v1)"
    assert line.is_selectable()

    text = _rendered(line, theme).text
    assert text.plain == "main (↑2 ↓1)"
    ahead = [text.plain[s.start : s.end] for s in text.spans if s.style == theme.style(ThemeComponent.BRANCH_AHEAD)]
    behind = [text.plain[s.start : s.end] for s in text.spans if s.style == theme.style(ThemeComponent.BRANCH_BEHIND)]
    assert ahead == ["2 "]
    assert behind == ["1"]


def test_untracked_branch_line() -> None:
    line = BranchLine(LocalBranch("feature/x"))
    assert line.render_string() == "feature/x"
    assert _rendered(line).text.plain == "feature/x"


def test_detached_branch_line() -> None:
    line = BranchLine(DetachedHead("abcd1234567890"))
    assert line.render_string() == "<detached@abcd123>"
    assert _rendered(line).text.plain == "<detached@abcd123>"
    assert line.is_selectable()


@pytest.mark.parametrize(
    ("kind", "unstaged", "staged"),
    [
        (ChangeKind.NEW, "?", "A"),
        (ChangeKind.MODIFIED, "M", "M"),
        (ChangeKind.DELETED, "D", "D"),
        (ChangeKind.TYPE_CHANGED, "T", "T"),
        (ChangeKind.CONFLICTED, "U", "U"),
    ],
)
def test_status_file_prefixes(kind: ChangeKind, unstaged: str, staged: str) -> None:
    entry = StatusEntry(kind, "dir/file.txt")
    assert StatusFileLine(StatusSection.UNSTAGED, entry).render_string() == f"{unstaged} dir/file.txt"
    assert StatusFileLine(StatusSection.STAGED, entry).render_string() == f"{staged} dir/file.txt"


def test_renamed_entry_shows_both_paths() -> None:
    entry = StatusEntry(ChangeKind.RENAMED, "new.txt", old_path="old.txt")
    line = StatusFileLine(StatusSection.STAGED, entry)
    assert line.render_string() == "R old.txt -> new.txt"
    assert _rendered(line).text.plain == line.render_string()


def test_status_prefix_styled_by_section() -> None:
    theme = Theme()
    entry = StatusEntry(ChangeKind.MODIFIED, "a.py")

    staged = _rendered(StatusFileLine(StatusSection.STAGED, entry), theme).text
    unstaged = _rendered(StatusFileLine(StatusSection.UNSTAGED, entry), theme).text

    assert staged.spans[0].style == theme.style(ThemeComponent.STAGED_FILE)
    assert unstaged.spans[0].style == theme.style(ThemeComponent.UNSTAGED_FILE)
    assert staged.plain[staged.spans[0].start : staged.spans[0].end] == "M"


def test_lines_compare_by_value() -> None:
    entry = StatusEntry(ChangeKind.DELETED, "gone.txt")
    assert StatusFileLine(StatusSection.UNSTAGED, entry) == StatusFileLine(StatusSection.UNSTAGED, entry)
    assert BranchLine(LocalBranch("main")) == BranchLine(LocalBranch("main"))


def test_unstaged_renamed_entry() -> None:
    entry = StatusEntry(ChangeKind.RENAMED, "new.txt", old_path="old.txt")
    line = StatusFileLine(StatusSection.UNSTAGED, entry)
    assert line.render_string() == "R old.txt -> new.txt"
    assert line.line_parts() == ("R", "old.txt -> new.txt")
    assert _rendered(line).text.plain == "R old.txt -> new.txt"
