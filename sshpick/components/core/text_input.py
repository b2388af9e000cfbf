"""
The capability a form field needs from a text-input widget.

FormEditor only talks to FieldInput. The terminal front-end backs it with
Textual's Input widget; MemoryField keeps the value in memory so the core
runs without a UI.
"""
from __future__ import annotations

from typing import Protocol


class FieldInput(Protocol):
    """What a form field needs from a text-input widget."""

    placeholder: str

    def value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def focus(self) -> None: ...

    def blur(self) -> None: ...

    @property
    def focused(self) -> bool: ...

    def handle_key(self, key: str, character: str | None = None) -> bool: ...


class MemoryField:
    """FieldInput holding its value in memory; appends typed characters only."""

    def __init__(self, placeholder: str = "") -> None:
        self.placeholder = placeholder
        self._value = ""
        self._focused = False

    def __repr__(self) -> str:
        return f"MemoryField({self._value!r}, focused={self._focused})"

    def value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    @property
    def focused(self) -> bool:
        return self._focused

    def handle_key(self, key: str, character: str | None = None) -> bool:
        if not self._focused:
            return False
        if key == "backspace":
            self._value = self._value[:-1]
            return True
        if character and len(character) == 1 and character.isprintable():
            self._value += character
            return True
        return False
