from __future__ import annotations

from textual.widgets import Input

DEFAULT_CHAR_LIMIT = 156


class InputField:
    """FieldInput backed by a Textual Input widget.

    The widget does its own editing, cursor handling and paste; this adapter
    only exposes its value and tracks which field the form considers focused.
    FormPanel moves real keyboard focus to match after each event.
    """

    def __init__(self, placeholder: str = "", char_limit: int = DEFAULT_CHAR_LIMIT) -> None:
        self.placeholder = placeholder
        self.widget = Input(
            placeholder=placeholder,
            max_length=char_limit,
            select_on_focus=False,
            classes="field-input",
        )
        self._focused = False

    def value(self) -> str:
        return self.widget.value

    def set_value(self, value: str) -> None:
        self.widget.value = value
        self.widget.cursor_position = len(value)

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    @property
    def focused(self) -> bool:
        return self._focused

    def handle_key(self, key: str, character: str | None = None) -> bool:
        # Keys reach the widget through Textual's own dispatch.
        return False
