"""Terminal menu: type to filter, Enter to pick, Escape to abort."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, OptionList, Static

from tmenu.entry import Entry
from tmenu.filtering import FilterSession


class LauncherApp(App[Optional[Entry]]):
    """Menu over a filter session; exits with the chosen entry or None."""

    CSS = """
    #query {
        dock: top;
        border: tall $primary;
    }

    #entries {
        height: 1fr;
        border: none;
    }

    #status {
        height: 1;
        dock: bottom;
        background: $primary;
        color: $text;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "abort", "Quit", priority=True),
        Binding("ctrl+c", "abort", "Quit", priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
    ]

    def __init__(self, session: FilterSession, show_paths: bool = False):
        super().__init__()
        self.filter_session = session
        self.show_paths = show_paths
        self._shown: list[Entry] = []

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Input(placeholder="Filter executables...", id="query")
            yield OptionList(id="entries")
            yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#query", Input).value = self.filter_session.query
        self.refresh_entries()
        self.query_one("#query", Input).focus()

    def _prompt(self, entry: Entry) -> Text:
        if self.show_paths:
            return Text.assemble((entry.name, "bold"), "  ", (entry.path, "dim"))
        return Text(entry.name)

    def refresh_entries(self) -> None:
        """Redraw the option list from the visible entries."""
        self._shown = list(self.filter_session.visible)
        options = self.query_one("#entries", OptionList)
        options.clear_options()
        options.add_options([self._prompt(entry) for entry in self._shown])
        if self._shown:
            options.highlighted = 0
        session = self.filter_session
        self.query_one("#status", Static).update(f"{len(session.visible)}/{session.total}")

    def selected_entry(self) -> Entry | None:
        highlighted = self.query_one("#entries", OptionList).highlighted
        if highlighted is not None and highlighted < len(self._shown):
            return self._shown[highlighted]
        return self.filter_session.first()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.filter_session.set_query(event.value)
        self.refresh_entries()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self.exit(entry)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(self._shown[event.option_index])

    def action_cursor_up(self) -> None:
        self.query_one("#entries", OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#entries", OptionList).action_cursor_down()

    def action_abort(self) -> None:
        self.exit(None)


def run_menu(session: FilterSession, show_paths: bool = False) -> Entry | None:
    """Run the menu until the user picks an entry or aborts."""
    return LauncherApp(session, show_paths=show_paths).run()
