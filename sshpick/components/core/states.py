from enum import Enum


class ViewState(Enum):
    """The screen the user is currently interacting with."""

    LIST_TARGETS = "list_targets"
    CREATE_TARGET = "create_target"
    EDIT_TARGET = "edit_target"
    CONFIRM_DELETE = "confirm_delete"

    @property
    def is_form(self) -> bool:
        return self in (ViewState.CREATE_TARGET, ViewState.EDIT_TARGET)
