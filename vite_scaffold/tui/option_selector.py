"""Interactive Textual-based picker for scaffold options."""

from __future__ import annotations

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, SelectionList, Static
from textual.widgets.selection_list import Selection

from vite_scaffold.options import OPTION_DESCRIPTIONS, RECOGNIZED_OPTIONS


class OptionSelectorApp(App[Optional[list[str]]]):
    """Checkbox list of recognized options.

    Confirming exits with the chosen identifiers, quitting exits with None.
    """

    TITLE = "Vite Scaffold"
    CSS = """
    Screen {
        layout: vertical;
    }
    #info {
        height: 3;
        content-align: center middle;
        background: $primary-darken-2;
        color: $text;
        padding: 0 1;
    }
    SelectionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("a", "select_all", "Select All"),
        Binding("n", "select_none", "Select None"),
        Binding("enter", "confirm", "Confirm"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self, preselected: list[str] | None = None) -> None:
        super().__init__()
        self._preselected = set(preselected or [])

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            "Which features would you like to add? "
            "[a] select all, [n] select none, [enter] confirm",
            id="info",
        )
        selections = [
            Selection(f"{name}: {OPTION_DESCRIPTIONS[name]}", name, name in self._preselected)
            for name in RECOGNIZED_OPTIONS
        ]
        yield SelectionList[str](*selections)
        yield Footer()

    def action_select_all(self) -> None:
        self.query_one(SelectionList).select_all()

    def action_select_none(self) -> None:
        self.query_one(SelectionList).deselect_all()

    def action_confirm(self) -> None:
        selected = set(self.query_one(SelectionList).selected)
        self.exit([name for name in RECOGNIZED_OPTIONS if name in selected])

    def action_quit_app(self) -> None:
        self.exit(None)


def select_options(preselected: list[str] | None = None) -> Optional[list[str]]:
    return OptionSelectorApp(preselected).run()
