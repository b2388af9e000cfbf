from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_STATUS_TIMEOUT = 3.0


class StatusSeverity(Enum):
    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    severity: StatusSeverity
    token: int


class StatusChannel:
    """Holds at most one notification; a newer message replaces the old one.

    Each message gets a token so that an expiry timer scheduled for an older
    message cannot clear a newer one.
    """

    def __init__(self, timeout: float = DEFAULT_STATUS_TIMEOUT) -> None:
        self.timeout = timeout
        self.current: StatusMessage | None = None
        self._next_token = 0

    @property
    def text(self) -> str:
        return self.current.text if self.current else ""

    @property
    def severity(self) -> StatusSeverity | None:
        return self.current.severity if self.current else None

    def set(self, text: str, severity: StatusSeverity = StatusSeverity.INFO) -> StatusMessage:
        self._next_token += 1
        self.current = StatusMessage(text=text, severity=severity, token=self._next_token)
        return self.current

    def expire(self, token: int) -> bool:
        """Clear the message if ``token`` is still the live one."""
        if self.current is None or self.current.token != token:
            return False
        self.current = None
        return True
