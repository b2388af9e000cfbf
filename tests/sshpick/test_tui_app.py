import asyncio
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from sshpick.common.config import InMemoryConfigStore
from sshpick.common.errors import LoadError
from sshpick.common.models import TargetRecord
from sshpick.components.core.keymap import help_bindings
from sshpick.components.core.state_machine import InteractionStateMachine
from sshpick.components.core.states import ViewState
from sshpick.components.tui import sshpick_tui
from sshpick.components.tui.components.confirm_modal import (
    ConfirmDeleteModal,
    render_confirm_delete,
)
from sshpick.components.tui.components.field_input import InputField
from sshpick.components.tui.components.form_panel import render_form_title
from sshpick.components.tui.components.help_bar import render_help
from sshpick.components.tui.components.status_bar import render_status
from sshpick.components.tui.components.target_panel import render_target_list
from sshpick.components.tui.sshpick_tui import SshPickTUI
from sshpick.components.tui.theme_manager import (
    DARK_THEME,
    LIGHT_THEME,
    build_styles,
    resolve_theme,
)

ALICE = TargetRecord(user="alice", host="a.example.com")
BOB = TargetRecord(user="bob", host="b.example.com", port=2222, nickname="build")
STYLES = build_styles(DARK_THEME)


@pytest.fixture(autouse=True)
def _fixed_system_theme():
    with patch("sshpick.components.tui.theme_manager.detect_system_theme", return_value="dark"):
        yield


# ---------------------------------------------------------------------------
# Rendering


def test_render_list_marks_cursor_row():
    machine = InteractionStateMachine(InMemoryConfigStore([ALICE, BOB]))
    machine.handle_key("down")
    lines = render_target_list(machine, STYLES).plain.splitlines()
    assert lines == ["  alice@a.example.com", "→ [build] bob@b.example.com:2222"]


def test_render_empty_list_shows_hint_and_path():
    machine = InteractionStateMachine(InMemoryConfigStore())
    text = render_target_list(machine, STYLES, "/tmp/cfg.yaml").plain
    assert "No SSH connections configured yet." in text
    assert "/tmp/cfg.yaml" in text
    assert "'c'" in text


def test_render_load_error():
    machine = InteractionStateMachine(InMemoryConfigStore(load_error=LoadError("bad yaml")))
    text = render_target_list(machine, STYLES).plain
    assert "Failed to load configuration - bad yaml" in text
    assert "Ctrl+C" in text


def test_render_edit_form_title_names_target():
    machine = InteractionStateMachine(InMemoryConfigStore([ALICE]))
    machine.handle_key("e")
    assert render_form_title(machine, STYLES).plain == "Edit SSH Connection\nalice@a.example.com"


def test_render_create_form_title():
    machine = InteractionStateMachine(InMemoryConfigStore())
    machine.handle_key("c")
    assert render_form_title(machine, STYLES).plain == "Add SSH Connection"


def test_input_field_adapter_wraps_textual_input():
    field = InputField("Host")
    assert field.widget.placeholder == "Host"
    assert field.handle_key("a", "a") is False
    field.focus()
    assert field.focused
    field.blur()
    assert not field.focused


def test_render_status_and_help():
    machine = InteractionStateMachine(InMemoryConfigStore([ALICE]))
    assert render_status(machine.status, STYLES).plain == ""
    machine.handle_key("d")
    machine.handle_key("y")
    assert render_status(machine.status, STYLES).plain == "Connection deleted successfully"

    help_text = render_help(help_bindings(ViewState.CONFIRM_DELETE), STYLES).plain
    assert help_text == "y Confirm • n/esc Cancel"


def test_render_confirm_delete_names_target():
    machine = InteractionStateMachine(InMemoryConfigStore([BOB]))
    machine.handle_key("d")
    text = render_confirm_delete(machine, STYLES).plain
    assert "Are you sure you want to delete this connection?" in text
    assert BOB.label() in text


def test_resolve_theme_prefers_config_colors():
    custom = DARK_THEME.model_copy(update={"primary_color": "#000000"})
    assert resolve_theme(custom)[0] is custom
    with patch("sshpick.components.tui.theme_manager.detect_system_theme", return_value="light"):
        assert resolve_theme(None) == (LIGHT_THEME, False)
    with patch("sshpick.components.tui.theme_manager.detect_system_theme", return_value=None):
        assert resolve_theme(None) == (DARK_THEME, True)


# ---------------------------------------------------------------------------
# App


def test_app_create_and_quit():
    store = InMemoryConfigStore()
    app = SshPickTUI(store=store, config_path="/tmp/test.yaml")

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("c")
            await pilot.pause()
            assert app.machine.state is ViewState.CREATE_TARGET
            await pilot.press("a", "tab", "h", "tab", "tab", "enter")
            await pilot.pause()
            assert app.machine.state is ViewState.LIST_TARGETS
            assert app.focused is None
            await pilot.press("q")

    asyncio.run(run())
    assert store.targets == [TargetRecord(user="a", host="h")]
    assert app.return_code == 0


def test_app_form_editing_keys_reach_the_focused_input():
    app = SshPickTUI(store=InMemoryConfigStore())

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("c")
            await pilot.pause()
            user_input = app.machine.form.fields[0].input.widget
            assert app.focused is user_input
            await pilot.press("q", "k", "c", "backspace", "left", "x")
            await pilot.pause()
            assert user_input.value == "qxk"
            assert app.machine.state is ViewState.CREATE_TARGET
            await pilot.press("down")
            await pilot.pause()
            assert app.focused is app.machine.form.fields[1].input.widget
            await pilot.press("escape")
            await pilot.pause()
            assert app.machine.state is ViewState.LIST_TARGETS
            assert user_input.value == ""

    asyncio.run(run())
    assert not app.machine.terminated


def test_app_edit_prefills_inputs():
    app = SshPickTUI(store=InMemoryConfigStore([BOB]))

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("e")
            await pilot.pause()
            values = [field.input.widget.value for field in app.machine.form.fields]
            assert values == ["bob", "b.example.com", "2222", "build"]
            await pilot.press("escape")

    asyncio.run(run())


def test_app_confirm_modal_follows_state():
    store = InMemoryConfigStore([ALICE, BOB])
    app = SshPickTUI(store=store)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("d")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmDeleteModal)
            await pilot.press("n")
            await pilot.pause()
            assert not isinstance(app.screen, ConfirmDeleteModal)
            await pilot.press("d", "y")
            await pilot.pause()
            assert not isinstance(app.screen, ConfirmDeleteModal)

    asyncio.run(run())
    assert store.targets == [BOB]


def test_app_launch_without_suspend_support_reports_error():
    launcher = MagicMock()
    app = SshPickTUI(store=InMemoryConfigStore([ALICE]), launcher=launcher)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            assert app.machine.status.text.startswith("Cannot connect:")
            await pilot.press("q")

    asyncio.run(run())
    launcher.connect.assert_not_called()


def test_app_load_failure_exits_with_error_code():
    app = SshPickTUI(store=InMemoryConfigStore(load_error=LoadError("bad yaml")))

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("c")
            assert app.machine.state is ViewState.LIST_TARGETS
            await pilot.press("q")

    asyncio.run(run())
    assert app.return_code == 1


# ---------------------------------------------------------------------------
# CLI


def test_cli_passes_options_and_exit_code(tmp_path):
    fake_app = MagicMock()
    fake_app.return_code = 1
    fake_app.machine.load_error = LoadError("bad yaml")
    config_file = tmp_path / "targets.yaml"

    with patch.object(sshpick_tui, "SshPickTUI", return_value=fake_app) as mock_cls, patch.object(
        sshpick_tui, "configure_logging"
    ) as mock_logging:
        result = CliRunner().invoke(
            sshpick_tui.cli_app,
            ["--config", str(config_file), "--debug", "--status-timeout", "1.5"],
        )

    assert result.exit_code == 1
    mock_logging.assert_called_once_with(None, True)
    kwargs = mock_cls.call_args.kwargs
    assert kwargs["config_path"] == str(config_file)
    assert kwargs["status_timeout"] == 1.5
    assert kwargs["store"].path == str(config_file)
    fake_app.run.assert_called_once()
