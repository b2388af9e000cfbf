"""sshpick: a terminal picker for SSH connection targets."""

from .common.models import AppConfig, TargetRecord, ThemeColors
from .components.core.state_machine import InteractionStateMachine
from .components.core.states import ViewState

__all__ = [
    "AppConfig",
    "InteractionStateMachine",
    "TargetRecord",
    "ThemeColors",
    "ViewState",
]

__version__ = "0.3.0"
