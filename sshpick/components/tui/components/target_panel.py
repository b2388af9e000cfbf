from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.widgets import Static

from sshpick.components.core.state_machine import InteractionStateMachine

from ..theme_manager import ThemeStyles


def render_target_list(
    machine: InteractionStateMachine, styles: ThemeStyles, config_path: str | None = None
) -> Text:
    """Render the target list, the empty-list hint or the load error."""
    if machine.load_error is not None:
        return Text(
            f"\nError: Failed to load configuration - {machine.load_error}\n\n"
            "Press Q or Ctrl+C to exit.\n",
            style=styles.error,
        )

    text = Text()
    if not len(machine.targets):
        text.append("No SSH connections configured yet.\n", style=styles.base)
        if config_path:
            text.append(f"Config file location: {config_path}\n", style=styles.base)
        text.append("\n")
        text.append(
            "Press 'c' to create a new connection, or 'q' / Ctrl+C to quit.",
            style=styles.help_text,
        )
        return text

    for index, target in enumerate(machine.targets):
        if index == machine.targets.cursor:
            text.append("→ ", style=styles.cursor)
            text.append(target.label(), style=styles.selected_item)
        else:
            text.append("  ")
            text.append(target.label(), style=styles.list_item)
        text.append("\n")
    return text


class TargetPanel(Static):
    """Main panel listing the configured targets."""

    def __init__(self) -> None:
        super().__init__(id="target-panel")

    def on_mount(self) -> None:
        """Re-render whenever the app reports a state change."""
        self.watch(self.app, "revision", self.on_revision_change)

    def on_revision_change(self, _revision: Any) -> None:
        app: Any = self.app
        machine = app.machine
        self.display = not machine.state.is_form
        self.update(render_target_list(machine, app.theme_styles, app.config_path))
