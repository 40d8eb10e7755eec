"""Theme components and their rich styles."""

from collections.abc import Mapping
from enum import Enum

from rich.style import Style
from rich.errors import StyleSyntaxError


class ThemeComponent(Enum):
    NORMAL = "summary.normal"
    HEADER = "summary.header"
    BRANCH_AHEAD = "summary.branch-ahead"
    BRANCH_BEHIND = "summary.branch-behind"
    STAGED_FILE = "summary.staged-file"
    UNSTAGED_FILE = "summary.unstaged-file"
    NO_MODIFIED_FILES = "summary.no-modified-files"
    TITLE = "view.title"
    SEARCH_MATCH = "view.search-match"


DEFAULT_STYLES: dict[ThemeComponent, str] = {
    ThemeComponent.NORMAL: "",
    ThemeComponent.HEADER: "bold cyan",
    ThemeComponent.BRANCH_AHEAD: "green",
    ThemeComponent.BRANCH_BEHIND: "red",
    ThemeComponent.STAGED_FILE: "green",
    ThemeComponent.UNSTAGED_FILE: "red",
    ThemeComponent.NO_MODIFIED_FILES: "dim italic",
    ThemeComponent.TITLE: "bold",
    ThemeComponent.SEARCH_MATCH: "black on yellow",
}


class ThemeError(ValueError):
    """A theme override could not be applied."""


class Theme:
    """Resolves theme components to rich styles."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._styles = {component: Style.parse(definition) for component, definition in DEFAULT_STYLES.items()}
        by_name = {component.value: component for component in ThemeComponent}
        for name, definition in (overrides or {}).items():
            component = by_name.get(name)
            if component is None:
                raise ThemeError(f"Unknown theme component '{name}'")
            try:
                self._styles[component] = Style.parse(definition)
            except StyleSyntaxError as exc:
                raise ThemeError(f"Invalid style for '{name}': {exc}") from exc

    def style(self, component: ThemeComponent) -> Style:
        return self._styles[component]
