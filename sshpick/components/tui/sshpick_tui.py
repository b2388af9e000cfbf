#!/usr/bin/env python3
"""
sshpick TUI - pick an SSH target from a list and connect to it.
"""
from __future__ import annotations

import logging
import os
from functools import partial
from typing import Any

import typer
from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import Screen
from textual.widgets import Header

from sshpick.common.config import (
    ConfigStore,
    YamlConfigStore,
    configure_logging,
    get_config_path,
)
from sshpick.common.models import ThemeColors
from sshpick.components.core.state_machine import (
    Effect,
    InteractionStateMachine,
    LaunchConnection,
    Quit,
    ScheduleStatusClear,
)
from sshpick.components.core.states import ViewState
from sshpick.components.core.status import DEFAULT_STATUS_TIMEOUT
from sshpick.components.launcher.process_launcher import (
    DEFAULT_SSH_COMMAND,
    ProcessLauncher,
    SshLauncher,
)
from sshpick.components.tui.components.confirm_modal import ConfirmDeleteModal
from sshpick.components.tui.components.field_input import InputField
from sshpick.components.tui.components.form_panel import FormPanel
from sshpick.components.tui.components.help_bar import HelpBar
from sshpick.components.tui.components.status_bar import StatusBar
from sshpick.components.tui.components.target_panel import TargetPanel
from sshpick.components.tui.theme_manager import (
    apply_theme_styling,
    build_styles,
    resolve_theme,
)

logger = logging.getLogger(__name__)


class TargetScreen(Screen):
    """Main screen: target list or form, status line and key hints."""

    AUTO_FOCUS = None

    def compose(self) -> ComposeResult:
        app: Any = self.app
        yield Header()
        yield Container(TargetPanel(), FormPanel(app.machine.form), id="main-container")
        yield StatusBar()
        yield HelpBar()

    def on_key(self, event: events.Key) -> None:
        app: Any = self.app
        if not app.machine.claims_key(event.key):
            # Editing key for the focused Input; let its bindings handle it.
            return
        event.stop()
        event.prevent_default()
        app.forward_key(event.key, event.character)


class SshPickTUI(App):
    """Main TUI application."""

    CSS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "styles.tcss")

    TITLE = "SSH Connection Manager"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+c", "force_quit", "Force quit", show=False, priority=True),
    ]

    revision = reactive(0)

    def __init__(
        self,
        store: ConfigStore,
        launcher: ProcessLauncher | None = None,
        config_path: str | None = None,
        status_timeout: float = DEFAULT_STATUS_TIMEOUT,
        theme_colors: ThemeColors | None = None,
    ):
        super().__init__()
        self.config_path = config_path
        self.machine = InteractionStateMachine(
            store, launcher, status_timeout=status_timeout, input_factory=InputField
        )

        custom_theme = theme_colors if theme_colors is not None else getattr(store, "theme", None)
        self.theme_colors, self.is_dark = resolve_theme(custom_theme)
        self.theme_styles = build_styles(self.theme_colors)

    def on_mount(self) -> None:
        """Show the main screen once the app is running."""
        if self.config_path:
            self.sub_title = self.config_path
        self.push_screen(TargetScreen())
        apply_theme_styling(self)
        if self.machine.load_failed:
            logger.error(f"Starting in load-failed mode: {self.machine.load_error}")
        self._sync_view()

    def forward_key(self, key: str, character: str | None = None) -> None:
        """Hand a key press to the state machine and carry out what it asks for."""
        self._apply_effects(self.machine.handle_key(key, character))

    def action_force_quit(self) -> None:
        self.forward_key("ctrl+c")

    def _apply_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, Quit):
                self.exit(return_code=effect.return_code)
                return
            if isinstance(effect, ScheduleStatusClear):
                self.set_timer(effect.delay, partial(self._expire_status, effect.token))
            elif isinstance(effect, LaunchConnection):
                self._sync_view()
                self._launch(effect)
                return
        self._sync_view()

    def _launch(self, effect: LaunchConnection) -> None:
        """Suspend the UI, run the connection command, resume with its outcome."""
        try:
            with self.suspend():
                follow_up = self.machine.run_launch(effect)
        except SuspendNotSupported:
            follow_up = self.machine.launch_unavailable("this terminal cannot be suspended")
        self.refresh(layout=True)
        self._apply_effects(follow_up)

    def _expire_status(self, token: int) -> None:
        self.machine.status_timeout(token)
        self._sync_view()

    def _sync_view(self) -> None:
        confirming = self.machine.state is ViewState.CONFIRM_DELETE
        if confirming and not isinstance(self.screen, ConfirmDeleteModal):
            self.push_screen(ConfirmDeleteModal())
            apply_theme_styling(self)
        elif not confirming and isinstance(self.screen, ConfirmDeleteModal):
            self.pop_screen()
        self.revision += 1


cli_app = typer.Typer()


@cli_app.command()
def run(
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to the targets config file."
    ),
    log: str | None = typer.Option(None, "--log", "-l", help="Path to write the log file."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging."),
    ssh_command: str = typer.Option(
        DEFAULT_SSH_COMMAND, "--ssh-command", help="Command used to open connections."
    ),
    status_timeout: float = typer.Option(
        DEFAULT_STATUS_TIMEOUT,
        "--status-timeout",
        min=0.1,
        help="Seconds a status message stays visible.",
    ),
) -> None:
    """Pick an SSH target and connect to it."""
    configure_logging(log, debug)
    config_path = get_config_path(config)
    logger.info(f"Using config file {config_path}")

    app = SshPickTUI(
        store=YamlConfigStore(config_path),
        launcher=SshLauncher(ssh_command),
        config_path=config_path,
        status_timeout=status_timeout,
    )
    app.run()

    if app.machine.load_error is not None:
        typer.echo(f"❌ Failed to load configuration: {app.machine.load_error}", err=True)
    if app.return_code:
        raise typer.Exit(app.return_code)


def main() -> None:
    cli_app()


if __name__ == "__main__":
    main()
