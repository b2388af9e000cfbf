from typing import Any

from rich.text import Text
from textual.binding import Binding
from textual.widgets import Static

from ..theme_manager import ThemeStyles


def render_help(bindings: list[Binding], styles: ThemeStyles) -> Text:
    text = Text()
    for index, binding in enumerate(bindings):
        if index:
            text.append(" • ", style=styles.help_text)
        text.append(binding.key_display or binding.key, style=styles.help_key)
        text.append(f" {binding.description}", style=styles.help_text)
    return text


class HelpBar(Static):
    """Key hints for the current view."""

    def __init__(self) -> None:
        super().__init__(id="help-bar")

    def on_mount(self) -> None:
        self.watch(self.app, "revision", self.on_revision_change)

    def on_revision_change(self, _revision: Any) -> None:
        app: Any = self.app
        self.update(render_help(app.machine.help(), app.theme_styles))
