"""
The create/edit form: four labelled text fields, a focus cursor and the
parse/populate rules that turn field text into a TargetRecord.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from sshpick.common.errors import FormValidationError
from sshpick.common.models import DEFAULT_PORT, TargetRecord

from .text_input import FieldInput, MemoryField

logger = logging.getLogger(__name__)

FIELD_USER = 0
FIELD_HOST = 1
FIELD_PORT = 2
FIELD_NICKNAME = 3
NUM_FIELDS = 4

FORWARD = 1
BACKWARD = -1

EMPTY_USER_OR_HOST = "Username and host cannot be empty"
INVALID_PORT = "Port must be a valid number between 1-65535"
LEADING_DASH = "Username and host cannot start with '-'"

_PORT_PATTERN = re.compile(r"[0-9]+")


@dataclass
class FormField:
    label: str
    input: FieldInput


FIELD_SPECS = (
    ("Username", "Username"),
    ("Host", "Host"),
    ("Port", "Port (default 22)"),
    ("Nickname", "Nickname (optional)"),
)


class FormEditor:
    """Manages the form fields and which one has focus."""

    def __init__(self, input_factory: Callable[[str], FieldInput] = MemoryField) -> None:
        self.fields = [FormField(label, input_factory(placeholder)) for label, placeholder in FIELD_SPECS]
        self.focus_index = FIELD_USER
        self.edit_index: int | None = None
        self.fields[self.focus_index].input.focus()

    @property
    def focused_field(self) -> FormField:
        return self.fields[self.focus_index]

    @property
    def on_last_field(self) -> bool:
        return self.focus_index == NUM_FIELDS - 1

    def focus(self, index: int) -> None:
        """Move focus to ``index``; out-of-range indexes are ignored."""
        if not 0 <= index < NUM_FIELDS:
            return
        self.fields[self.focus_index].input.blur()
        self.focus_index = index
        self.fields[index].input.focus()

    def advance(self, direction: int = FORWARD) -> None:
        """Move focus one field forward or backward, wrapping around."""
        step = BACKWARD if direction < 0 else FORWARD
        self.focus((self.focus_index + step) % NUM_FIELDS)

    def handle_key(self, key: str, character: str | None = None) -> bool:
        return self.focused_field.input.handle_key(key, character)

    def set_from_record(self, record: TargetRecord) -> None:
        """Fill the fields from an existing target and focus the first field."""
        self.fields[FIELD_USER].input.set_value(record.user)
        self.fields[FIELD_HOST].input.set_value(record.host)
        port_text = "" if record.port == DEFAULT_PORT else str(record.port)
        self.fields[FIELD_PORT].input.set_value(port_text)
        self.fields[FIELD_NICKNAME].input.set_value(record.nickname or "")
        self.focus(FIELD_USER)

    def reset(self) -> None:
        """Clear all values (placeholders stay), focus the first field, drop the edit binding."""
        for field in self.fields:
            field.input.set_value("")
            field.input.blur()
        self.focus_index = FIELD_USER
        self.fields[FIELD_USER].input.focus()
        self.edit_index = None

    def values(self) -> list[str]:
        return [field.input.value() for field in self.fields]

    def parse(self) -> TargetRecord:
        """
        Validate the field contents.

        Returns:
            The TargetRecord described by the form.

        Raises:
            FormValidationError: user or host empty or starting with "-", or port
                not an integer in [1, 65535].
        """
        user, host, port_text, nickname = (value.strip() for value in self.values())

        if not user or not host:
            raise FormValidationError(EMPTY_USER_OR_HOST)
        if user.startswith("-") or host.startswith("-"):
            raise FormValidationError(LEADING_DASH)

        port = DEFAULT_PORT
        if port_text:
            if not _PORT_PATTERN.fullmatch(port_text):
                raise FormValidationError(INVALID_PORT)
            port = int(port_text)
            if not 1 <= port <= 65535:
                raise FormValidationError(INVALID_PORT)

        try:
            return TargetRecord(user=user, host=host, port=port, nickname=nickname or None)
        except ValidationError as e:
            logger.warning(f"Form produced an invalid target: {e}")
            raise FormValidationError(str(e)) from e
