from typing import Any

from rich.text import Text
from textual.widgets import Static

from sshpick.components.core.status import StatusChannel

from ..theme_manager import ThemeStyles


def render_status(status: StatusChannel, styles: ThemeStyles) -> Text:
    if status.current is None:
        return Text("")
    return Text(status.text, style=styles.for_severity(status.severity))


class StatusBar(Static):
    """One-line notification area."""

    def __init__(self) -> None:
        super().__init__(id="status-bar")

    def on_mount(self) -> None:
        self.watch(self.app, "revision", self.on_revision_change)

    def on_revision_change(self, _revision: Any) -> None:
        app: Any = self.app
        self.update(render_status(app.machine.status, app.theme_styles))
