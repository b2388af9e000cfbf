from __future__ import annotations

from typing import Any, cast

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Label, Static

from sshpick.components.core.form_editor import FormEditor
from sshpick.components.core.state_machine import InteractionStateMachine
from sshpick.components.core.states import ViewState

from ..theme_manager import ThemeStyles
from .field_input import InputField


def render_form_title(machine: InteractionStateMachine, styles: ThemeStyles) -> Text:
    """Heading above the fields; the edit form also names the target being edited."""
    if machine.state is not ViewState.EDIT_TARGET:
        return Text("Add SSH Connection", style=styles.title)
    text = Text("Edit SSH Connection", style=styles.title)
    target = machine.editing_target()
    if target is not None:
        text.append(f"\n{target.label()}", style=styles.subtitle)
    return text


class FormPanel(Vertical):
    """The create/edit form: one labelled Input per field."""

    def __init__(self, form: FormEditor) -> None:
        super().__init__(id="form-panel")
        self.form = form
        self.inputs = [cast(InputField, field.input) for field in form.fields]
        self.display = False

    def compose(self) -> ComposeResult:
        yield Static(id="form-title")
        for field, field_input in zip(self.form.fields, self.inputs):
            with Horizontal(classes="field-row"):
                yield Label(f"{field.label}:", classes="field-label")
                yield field_input.widget

    def on_mount(self) -> None:
        self.watch(self.app, "revision", self.on_revision_change)

    def on_revision_change(self, _revision: Any) -> None:
        app: Any = self.app
        machine = app.machine
        self.display = machine.state.is_form and not machine.load_failed
        if not self.display:
            if self.screen.focused in [field_input.widget for field_input in self.inputs]:
                self.screen.set_focus(None)
            return

        self.query_one("#form-title", Static).update(render_form_title(machine, app.theme_styles))
        for index, row in enumerate(self.query(".field-row")):
            row.set_class(index == self.form.focus_index, "-active")
        target = self.inputs[self.form.focus_index].widget
        if not target.has_focus:
            target.focus()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        """Follow focus moved by the mouse."""
        for index, field_input in enumerate(self.inputs):
            if field_input.widget is event.widget and index != self.form.focus_index:
                self.form.focus(index)
                app: Any = self.app
                app.revision += 1
