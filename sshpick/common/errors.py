"""
Error kinds raised across sshpick.

Validation and save errors are recovered into status messages by the
interaction state machine; only load errors end normal interaction.
"""


class SshPickError(Exception):
    """Base class for all sshpick errors."""


class LoadError(SshPickError):
    """The config file exists but could not be read or parsed."""


class SaveError(SshPickError):
    """Writing the config file failed. The in-memory list is kept as is."""


class FormValidationError(SshPickError):
    """The form contents do not describe a valid target."""


class ProcessError(SshPickError):
    """The connection command failed to start or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode
