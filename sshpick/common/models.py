# models.py
"""
Data models for sshpick targets and configuration.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PORT = 22


class TargetRecord(BaseModel):
    """A single SSH connection target."""

    model_config = ConfigDict(frozen=True)

    nickname: Optional[str] = Field(
        default=None, description="Optional display name for the target."
    )
    user: str = Field(..., min_length=1, description="The SSH username.")
    host: str = Field(..., min_length=1, description="The SSH server hostname or IP address.")
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        description="The SSH server port. Defaults to 22 if omitted.",
    )

    @field_validator("port", mode="before")
    @classmethod
    def _default_port(cls, value: Any) -> Any:
        # 0 and a missing value both mean "default" in stored configs
        if value is None or value == 0:
            return DEFAULT_PORT
        return value

    @field_validator("user", "host")
    @classmethod
    def _no_leading_dash(cls, value: str) -> str:
        # would be read as an option by the ssh client
        if value.startswith("-"):
            raise ValueError("must not start with '-'")
        return value

    @field_validator("nickname", mode="before")
    @classmethod
    def _empty_nickname(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_default_port(self) -> bool:
        return self.port == DEFAULT_PORT

    def label(self) -> str:
        """Return the display form, e.g. ``[web] deploy@example.com:2222``."""
        base = f"{self.user}@{self.host}"
        if not self.has_default_port:
            base = f"{base}:{self.port}"
        if self.nickname:
            return f"[{self.nickname}] {base}"
        return base

    def ssh_args(self) -> List[str]:
        """Return the arguments passed to the ssh command for this target."""
        args = [f"{self.user}@{self.host}"]
        if not self.has_default_port:
            args.extend(["-p", str(self.port)])
        return args

    def to_storage(self) -> dict:
        """Serialize for the config file, eliding the default port and empty nickname."""
        data: dict = {}
        if self.nickname:
            data["nickname"] = self.nickname
        data["user"] = self.user
        data["host"] = self.host
        if not self.has_default_port:
            data["port"] = self.port
        return data


class ThemeColors(BaseModel):
    """Colors used by the terminal renderer."""

    primary_color: str = Field(default="#7D56F4", description="Titles and key hints.")
    secondary_color: str = Field(default="#6C7086", description="Labels and help text.")
    highlight_color: str = Field(default="#F5C2E7", description="Selection and focused field.")
    text_color: str = Field(default="#CDD6F4", description="Regular text.")
    error_color: str = Field(default="#F38BA8", description="Error messages.")
    success_color: str = Field(default="#A6E3A1", description="Success messages.")
    warning_color: str = Field(default="#FAB387", description="Warnings and the delete dialog.")
    info_color: str = Field(default="#89B4FA", description="Informational messages.")


class AppConfig(BaseModel):
    """Contents of the sshpick config file."""

    targets: List[TargetRecord] = Field(
        default_factory=list, description="Configured SSH targets, in display order."
    )
    theme: Optional[ThemeColors] = Field(
        default=None,
        description="Custom colors. When omitted the renderer follows the system appearance.",
    )

    @field_validator("targets", mode="before")
    @classmethod
    def _null_targets(cls, value: Any) -> Any:
        # "targets:" with no entries parses as None
        return [] if value is None else value

    def to_storage(self) -> dict:
        data: dict = {"targets": [target.to_storage() for target in self.targets]}
        if self.theme is not None:
            data["theme"] = self.theme.model_dump()
        return data
