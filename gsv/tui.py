"""Textual TUI for gsv."""

import structlog
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Resize
from textual.message import Message
from textual.message_pump import MessagePump
from textual.screen import ModalScreen
from textual.widgets import Footer, Input, Static

from gsv.actions import Action, ActionType
from gsv.config import Config
from gsv.render import RenderError, TextWindow
from gsv.repo_data import RepoData
from gsv.selectable import SearchError
from gsv.summary_view import TITLE, SummaryView
from gsv.variables import LINE_COUNT, LINE_NUMBER, LINE_TEXT, Variables

log = structlog.get_logger("gsv.tui")

COMMAND_BAR = "j/k: move  |  PgUp/PgDn: page  |  /: search  |  n/N: next/prev match  |  r: refresh  |  q: quit"


CSS = """
Screen {
    layout: vertical;
}

#command_bar {
    padding: 0 1;
    height: 1;
    color: $text-muted;
}

#status_line {
    padding: 0 1;
    height: 1;
}

#summary {
    height: 1fr;
}

.modal {
    align: center middle;
}

.modal-body {
    width: 72;
    max-width: 90;
    height: auto;
    border: thick $primary;
    background: $surface;
    padding: 1 2;
}

.modal-title {
    margin-bottom: 1;
    text-style: bold;
}

.modal-hint {
    margin-top: 1;
    color: $text-muted;
}

.modal-input {
    margin-top: 1;
}
"""


class DisplayUpdate(Message):
    """The summary view has new content to draw."""


class MessageChannel:
    """Delivers display refresh requests to the app from any thread."""

    def __init__(self) -> None:
        self._target: MessagePump | None = None

    def attach(self, target: MessagePump) -> None:
        self._target = target

    def update_display(self) -> None:
        if self._target is not None:
            self._target.post_message(DisplayUpdate())


class TextInputScreen(ModalScreen[str | None]):
    """Text input modal."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(classes="modal"):
            with Vertical(classes="modal-body"):
                yield Static(self.prompt, classes="modal-title")
                yield Input(
                    placeholder="Type and press Enter", classes="modal-input", id="value_input"
                )
                yield Static("Esc to cancel.", classes="modal-hint")

    def on_mount(self) -> None:
        self.query_one("#value_input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class SummaryPanel(Static):
    def on_resize(self, event: Resize) -> None:
        self.app.post_message(DisplayUpdate())


class SummaryApp(App[None]):
    """Main textual application."""

    CSS = CSS
    BINDINGS = [
        Binding("q", "quit_view", "Quit"),
        Binding("j", "navigate('next-line')", "Down", show=False),
        Binding("down", "navigate('next-line')", "Down", show=False),
        Binding("k", "navigate('prev-line')", "Up", show=False),
        Binding("up", "navigate('prev-line')", "Up", show=False),
        Binding("pagedown", "navigate('next-page')", "Page down", show=False),
        Binding("pageup", "navigate('prev-page')", "Page up", show=False),
        Binding("g", "navigate('first-line')", "First", show=False),
        Binding("home", "navigate('first-line')", "First", show=False),
        Binding("G", "navigate('last-line')", "Last", show=False),
        Binding("shift+g", "navigate('last-line')", "Last", show=False),
        Binding("end", "navigate('last-line')", "Last", show=False),
        Binding("h", "navigate('scroll-left')", "Left", show=False),
        Binding("left", "navigate('scroll-left')", "Left", show=False),
        Binding("l", "navigate('scroll-right')", "Right", show=False),
        Binding("right", "navigate('scroll-right')", "Right", show=False),
        Binding("slash", "search", "Search"),
        Binding("n", "navigate('search-find-next')", "Next match"),
        Binding("N", "navigate('search-find-prev')", "Prev match", show=False),
        Binding("shift+n", "navigate('search-find-prev')", "Prev match", show=False),
        Binding("escape", "navigate('clear-search')", "Clear search", show=False),
        Binding("r", "navigate('refresh')", "Refresh"),
    ]

    def __init__(self, repo_data: RepoData, config: Config) -> None:
        super().__init__()
        self.repo_data = repo_data
        self.settings = config
        self.summary_theme = config.theme()
        self.variables = Variables()
        self.channel = MessageChannel()
        self.view = SummaryView(repo_data, self.channel, self.variables)
        self.status_line = Static("", id="status_line")
        self.panel = SummaryPanel("", id="summary")

    def compose(self) -> ComposeResult:
        yield Static(COMMAND_BAR, id="command_bar")
        yield self.status_line
        yield self.panel
        yield Footer()

    def on_mount(self) -> None:
        self.channel.attach(self)
        self.view.initialise()
        self.repo_data.start_polling(self.settings.refresh_interval)

    def on_display_update(self, message: DisplayUpdate) -> None:
        self._redraw()

    def _set_status(self, message: str | None) -> None:
        self.status_line.update(message or "")

    def _selection_status(self) -> Text:
        number = self.variables.get(LINE_NUMBER) or "0"
        count = self.variables.get(LINE_COUNT) or "0"
        return Text.assemble((f"{number}/{count} ", "dim"), self.variables.get(LINE_TEXT) or "")

    def _redraw(self) -> None:
        window = TextWindow(self.panel.size.height, self.panel.size.width, self.summary_theme, title=TITLE)
        try:
            self.view.render(window)
        except RenderError as exc:
            log.warning("Render failed", error=str(exc))
            self._set_status(f"Render failed: {exc}")
        else:
            self.status_line.update(self._selection_status())
        self.panel.update(window.renderable())

    def _dispatch(self, action: Action) -> None:
        try:
            handled = self.view.handle_action(action)
        except SearchError as exc:
            log.warning("Action failed", action=action.action_type.value, error=str(exc))
            self._set_status(str(exc))
            return
        if not handled:
            log.debug("Unhandled action", action=action.action_type.value)
        self._redraw()

    def action_navigate(self, action_name: str) -> None:
        self._dispatch(Action(ActionType(action_name)))

    def action_search(self) -> None:
        def on_pattern(pattern: str | None) -> None:
            if pattern:
                self._dispatch(Action(ActionType.SEARCH, (pattern,)))

        self.push_screen(TextInputScreen("Search:"), on_pattern)

    def action_quit_view(self) -> None:
        self.exit(None)


def run_tui(repo_data: RepoData, config: Config) -> None:
    """Run the textual TUI application."""
    try:
        SummaryApp(repo_data, config).run()
    finally:
        repo_data.stop()
