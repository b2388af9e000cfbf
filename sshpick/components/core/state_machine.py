"""
The modal interaction core.

InteractionStateMachine receives one key at a time, mutates the target list
and the form, persists through the injected ConfigStore and answers with a
list of effects for the front-end to carry out (quit, schedule a status
expiry, hand the terminal to the connection command).
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from sshpick.common.errors import FormValidationError, LoadError, ProcessError, SaveError
from sshpick.common.models import TargetRecord

from .form_editor import BACKWARD, FORWARD, FormEditor
from .keymap import DEFAULT_KEYMAP, KeyMap, help_bindings, matches
from .states import ViewState
from .status import DEFAULT_STATUS_TIMEOUT, StatusChannel, StatusSeverity
from .target_list import TargetList
from .text_input import FieldInput, MemoryField

if TYPE_CHECKING:
    from textual.binding import Binding

    from sshpick.common.config import ConfigStore
    from sshpick.components.launcher.process_launcher import ProcessLauncher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quit:
    return_code: int = 0


@dataclass(frozen=True)
class ScheduleStatusClear:
    token: int
    delay: float


@dataclass(frozen=True)
class LaunchConnection:
    """Suspend the UI, then call ``run_launch`` with this effect."""

    target: TargetRecord


Effect = Union[Quit, ScheduleStatusClear, LaunchConnection]


class InteractionStateMachine:
    """Owns the target list, the form and the status channel."""

    def __init__(
        self,
        store: ConfigStore,
        launcher: ProcessLauncher | None = None,
        keymap: KeyMap = DEFAULT_KEYMAP,
        status_timeout: float = DEFAULT_STATUS_TIMEOUT,
        input_factory: Callable[[str], FieldInput] = MemoryField,
    ) -> None:
        self.store = store
        self.launcher = launcher
        self.keymap = keymap
        self.state = ViewState.LIST_TARGETS
        self.form = FormEditor(input_factory)
        self.status = StatusChannel(timeout=status_timeout)
        self.load_error: LoadError | None = None
        self.terminated = False

        try:
            records = store.load()
        except LoadError as e:
            logger.error(f"Failed to load configuration: {e}")
            self.load_error = e
            records = []
        self.targets = TargetList(records)

    # ------------------------------------------------------------------
    # Queries used by the renderer

    @property
    def load_failed(self) -> bool:
        return self.load_error is not None

    def help(self) -> list[Binding]:
        return help_bindings(self.state, self.keymap, load_failed=self.load_failed)

    def pending_delete(self) -> TargetRecord | None:
        if self.state is not ViewState.CONFIRM_DELETE:
            return None
        return self.targets.selected()

    def editing_target(self) -> TargetRecord | None:
        index = self.form.edit_index
        if self.state is not ViewState.EDIT_TARGET or index is None or index >= len(self.targets):
            return None
        return self.targets[index]

    def claims_key(self, key: str) -> bool:
        """
        Whether ``key`` is a command for the machine.

        Inside a form only navigation, submit, cancel and force-quit keys are
        commands; every other key belongs to the focused text field.
        """
        if self.terminated or self.load_failed or not self.state.is_form:
            return True
        keys = self.keymap
        commands = (
            keys.force_quit,
            keys.escape,
            keys.tab,
            keys.shift_tab,
            keys.field_up,
            keys.field_down,
            keys.enter,
        )
        return any(matches(key, binding) for binding in commands)

    # ------------------------------------------------------------------
    # Events

    def handle_key(self, key: str, character: str | None = None) -> list[Effect]:
        """Process a single key press and return the resulting effects."""
        if self.terminated:
            return []

        if self.load_failed:
            if matches(key, self.keymap.force_quit) or matches(key, self.keymap.quit):
                return self._quit(return_code=1)
            return []

        if matches(key, self.keymap.force_quit):
            return self._quit()

        previous = self.state
        if self.state is ViewState.LIST_TARGETS:
            effects = self._handle_list_key(key)
        elif self.state.is_form:
            effects = self._handle_form_key(key, character)
        else:
            effects = self._handle_confirm_key(key)

        if self.state is not previous:
            logger.debug(f"View state {previous.value} -> {self.state.value} on {key!r}")
        return effects

    def status_timeout(self, token: int) -> list[Effect]:
        self.status.expire(token)
        return []

    def run_launch(self, effect: LaunchConnection) -> list[Effect]:
        """Run the connection command. Call while the UI is suspended."""
        target = effect.target
        if self.launcher is None:
            return self._set_status("No connection command configured", StatusSeverity.ERROR)
        try:
            self.launcher.connect(target.user, target.host, target.port)
        except ProcessError as e:
            logger.warning(f"Connection to {target.label()} failed: {e}")
            return self._set_status(f"SSH command failed: {e}", StatusSeverity.ERROR)
        return self._set_status(f"Connection to {target.label()} closed", StatusSeverity.INFO)

    def launch_unavailable(self, reason: str) -> list[Effect]:
        """Report that the front-end could not hand over the terminal."""
        logger.error(f"Cannot launch connection: {reason}")
        return self._set_status(f"Cannot connect: {reason}", StatusSeverity.ERROR)

    # ------------------------------------------------------------------
    # ListTargets

    def _handle_list_key(self, key: str) -> list[Effect]:
        keys = self.keymap
        if matches(key, keys.quit):
            return self._quit()
        if matches(key, keys.up):
            self.targets.move_cursor(-1)
        elif matches(key, keys.down):
            self.targets.move_cursor(1)
        elif matches(key, keys.create):
            self.form.reset()
            self.state = ViewState.CREATE_TARGET
        elif matches(key, keys.edit):
            selected = self.targets.selected()
            if selected is not None:
                self.form.reset()
                self.form.set_from_record(selected)
                self.form.edit_index = self.targets.cursor
                self.state = ViewState.EDIT_TARGET
        elif matches(key, keys.delete):
            if self.targets.selected() is not None:
                self.state = ViewState.CONFIRM_DELETE
        elif matches(key, keys.enter):
            selected = self.targets.selected()
            if selected is not None:
                effects = self._set_status(f"Connecting to {selected.label()}...", StatusSeverity.INFO)
                return [*effects, LaunchConnection(selected)]
        return []

    # ------------------------------------------------------------------
    # CreateTarget / EditTarget

    def _handle_form_key(self, key: str, character: str | None) -> list[Effect]:
        keys = self.keymap
        if matches(key, keys.escape):
            self.form.reset()
            self.state = ViewState.LIST_TARGETS
            return []
        if matches(key, keys.tab) or matches(key, keys.field_down):
            self.form.advance(FORWARD)
            return []
        if matches(key, keys.shift_tab) or matches(key, keys.field_up):
            self.form.advance(BACKWARD)
            return []
        if matches(key, keys.enter):
            if self.form.on_last_field:
                return self._finalize()
            self.form.advance(FORWARD)
            return []

        self.form.handle_key(key, character)
        return []

    def _finalize(self) -> list[Effect]:
        try:
            record = self.form.parse()
        except FormValidationError as e:
            return self._set_status(str(e), StatusSeverity.ERROR)

        if self.state is ViewState.EDIT_TARGET:
            index = self.form.edit_index
            try:
                if index is None:
                    raise IndexError("edit form is not bound to a target")
                self.targets.replace_at(index, record)
            except IndexError as e:
                logger.error(f"Edit finalize skipped: {e}")
                self.form.reset()
                self.state = ViewState.LIST_TARGETS
                return []
            self.targets.set_cursor(index)
            success = "Connection updated successfully"
        else:
            self.targets.append(record)
            self.targets.set_cursor(len(self.targets) - 1)
            success = "New connection created successfully"

        self.form.reset()
        self.state = ViewState.LIST_TARGETS
        return self._persist(success)

    # ------------------------------------------------------------------
    # ConfirmDelete

    def _handle_confirm_key(self, key: str) -> list[Effect]:
        if matches(key, self.keymap.confirm):
            self.state = ViewState.LIST_TARGETS
            if self.targets.selected() is None:
                return []
            removed = self.targets.remove_at(self.targets.cursor)
            logger.info(f"Deleted target {removed.label()}")
            return self._persist("Connection deleted successfully")
        if matches(key, self.keymap.deny):
            self.state = ViewState.LIST_TARGETS
        return []

    # ------------------------------------------------------------------
    # Helpers

    def _persist(self, success_message: str) -> list[Effect]:
        # The in-memory change stands even when the write fails; the next
        # successful save writes out whatever the list holds by then.
        try:
            self.store.save(self.targets.records)
        except SaveError as e:
            logger.error(f"Failed to save configuration: {e}")
            return self._set_status(f"Error saving configuration: {e}", StatusSeverity.ERROR)
        return self._set_status(success_message, StatusSeverity.SUCCESS)

    def _set_status(self, text: str, severity: StatusSeverity) -> list[Effect]:
        message = self.status.set(text, severity)
        return [ScheduleStatusClear(token=message.token, delay=self.status.timeout)]

    def _quit(self, return_code: int = 0) -> list[Effect]:
        self.terminated = True
        return [Quit(return_code=return_code)]
