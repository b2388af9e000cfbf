from typing import Any

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from sshpick.components.core.state_machine import InteractionStateMachine

from ..theme_manager import ThemeStyles
from .help_bar import render_help


def render_confirm_delete(machine: InteractionStateMachine, styles: ThemeStyles) -> Text:
    text = Text("Are you sure you want to delete this connection?\n\n", style=styles.base)
    target = machine.pending_delete()
    if target is not None:
        text.append(target.label(), style=styles.subtitle)
    return text


class ConfirmDeleteModal(ModalScreen):
    """Modal dialog asking whether to delete the selected target.

    Keys are handed to the app's state machine like on the main screen; the
    app dismisses this screen once the machine leaves the confirm state.
    """

    def compose(self) -> ComposeResult:
        yield Container(
            Static(id="confirm-message"),
            Static(id="confirm-help"),
            id="confirm-dialog",
        )

    def on_mount(self) -> None:
        app: Any = self.app
        dialog = self.query_one("#confirm-dialog")
        dialog.styles.border = ("round", app.theme_styles.dialog_border)
        self.watch(self.app, "revision", self.on_revision_change)

    def on_revision_change(self, _revision: Any) -> None:
        app: Any = self.app
        self.query_one("#confirm-message", Static).update(
            render_confirm_delete(app.machine, app.theme_styles)
        )
        self.query_one("#confirm-help", Static).update(
            render_help(app.machine.help(), app.theme_styles)
        )

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        app: Any = self.app
        app.forward_key(event.key, event.character)
