"""
Keybindings and the help entries shown for each view.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from textual.binding import Binding

from .states import ViewState


def binding_keys(binding: Binding) -> tuple[str, ...]:
    return tuple(key.strip() for key in binding.key.split(",") if key.strip())


def matches(key: str, binding: Binding) -> bool:
    """True if ``key`` (a Textual key name) triggers ``binding``."""
    return key in binding_keys(binding)


@dataclass(frozen=True)
class KeyMap:
    """Keys understood by the interaction state machine."""

    up: Binding = Binding("up,k", "cursor_up", "Move up", key_display="↑/k")
    down: Binding = Binding("down,j", "cursor_down", "Move down", key_display="↓/j")
    enter: Binding = Binding("enter", "select", "Connect", key_display="enter")
    create: Binding = Binding("c", "create", "New connection")
    edit: Binding = Binding("e", "edit", "Edit connection")
    delete: Binding = Binding("d", "delete", "Delete connection")
    quit: Binding = Binding("q", "quit", "Quit")
    force_quit: Binding = Binding("ctrl+c", "force_quit", "Force quit", key_display="ctrl+c")
    confirm: Binding = Binding("y", "confirm", "Confirm")
    deny: Binding = Binding("n,escape", "deny", "Cancel", key_display="n/esc")
    tab: Binding = Binding("tab", "next_field", "Next field")
    shift_tab: Binding = Binding("shift+tab", "previous_field", "Previous field")
    field_up: Binding = Binding("up", "previous_field", "Previous field", show=False)
    field_down: Binding = Binding("down", "next_field", "Next field", show=False)
    escape: Binding = Binding("escape", "back", "Back", key_display="esc")


DEFAULT_KEYMAP = KeyMap()


def help_bindings(
    view_state: ViewState, keymap: KeyMap = DEFAULT_KEYMAP, load_failed: bool = False
) -> list[Binding]:
    """Return the bindings worth showing as help for ``view_state``."""
    if load_failed:
        return [keymap.quit, keymap.force_quit]
    if view_state.is_form:
        return [
            keymap.tab,
            keymap.shift_tab,
            replace(keymap.enter, description="Next field / Save on last"),
            keymap.escape,
        ]
    if view_state is ViewState.CONFIRM_DELETE:
        return [keymap.confirm, keymap.deny]
    return [
        keymap.up,
        keymap.down,
        keymap.enter,
        keymap.create,
        keymap.edit,
        keymap.delete,
        keymap.quit,
    ]

