from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import darkdetect
from rich.style import Style
from textual.screen import ModalScreen

from sshpick.common.models import ThemeColors
from sshpick.components.core.status import StatusSeverity

if TYPE_CHECKING:
    from .sshpick_tui import SshPickTUI

logger = logging.getLogger(__name__)

DARK_THEME = ThemeColors()

LIGHT_THEME = ThemeColors(
    primary_color="#5B3FD1",
    secondary_color="#57606A",
    highlight_color="#BF3989",
    text_color="#24292F",
    error_color="#CF222E",
    success_color="#1A7F37",
    warning_color="#BC4C00",
    info_color="#0969DA",
)

SCREEN_BACKGROUND = {"dark": "#0D1117", "light": "#F6F8FA"}


def detect_system_theme() -> str | None:
    """Detect the current system theme (dark/light)."""
    try:
        # darkdetect.isDark() returns True for dark mode, False for light mode, None if unknown
        is_dark = darkdetect.isDark()
    except Exception as e:
        logger.debug(f"Failed to detect system theme: {e}")
        return None
    if is_dark is None:
        return None
    return "dark" if is_dark else "light"


def resolve_theme(custom: ThemeColors | None) -> tuple[ThemeColors, bool]:
    """Pick the palette to render with and whether it is a dark one.

    A theme from the config file always wins; otherwise follow the system,
    defaulting to dark when it cannot be detected.
    """
    system_theme = detect_system_theme()
    is_dark = system_theme != "light"
    if custom is not None:
        return custom, is_dark
    return (DARK_THEME if is_dark else LIGHT_THEME), is_dark


@dataclass(frozen=True)
class ThemeStyles:
    """Rich styles derived from a ThemeColors palette."""

    base: Style
    title: Style
    subtitle: Style
    list_item: Style
    selected_item: Style
    cursor: Style
    help_key: Style
    help_text: Style
    error: Style
    success: Style
    warning: Style
    info: Style
    dialog_border: str

    def for_severity(self, severity: StatusSeverity | None) -> Style:
        if severity is StatusSeverity.ERROR:
            return self.error
        if severity is StatusSeverity.SUCCESS:
            return self.success
        if severity is StatusSeverity.WARNING:
            return self.warning
        return self.info


def build_styles(theme: ThemeColors) -> ThemeStyles:
    return ThemeStyles(
        base=Style(color=theme.text_color),
        title=Style(color=theme.primary_color, bold=True),
        subtitle=Style(color=theme.secondary_color, bold=True),
        list_item=Style(color=theme.text_color),
        selected_item=Style(color=theme.highlight_color, bold=True),
        cursor=Style(color=theme.highlight_color, bold=True),
        help_key=Style(color=theme.primary_color, bold=True),
        help_text=Style(color=theme.secondary_color, italic=True),
        error=Style(color=theme.error_color, bold=True),
        success=Style(color=theme.success_color),
        warning=Style(color=theme.warning_color),
        info=Style(color=theme.info_color),
        dialog_border=theme.warning_color,
    )


def apply_theme_styling(app: SshPickTUI) -> None:
    """Apply the palette's background and text colors to the active screen."""

    def _apply_theme_styles() -> None:
        theme_class = "dark-theme" if app.is_dark else "light-theme"
        opposite_class = "light-theme" if app.is_dark else "dark-theme"
        try:
            screen = app.screen
            screen.add_class(theme_class)
            screen.remove_class(opposite_class)
            screen.styles.color = app.theme_colors.text_color
            if not isinstance(screen, ModalScreen):
                screen.styles.background = SCREEN_BACKGROUND["dark" if app.is_dark else "light"]
        except Exception as e:
            logger.debug(f"Theme styling failed: {e}")

    app.call_after_refresh(_apply_theme_styles)
