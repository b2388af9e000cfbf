"""
Global pytest configuration for this repo.

Keeps tests away from the developer's real sshpick config file: SSHPICK_CONFIG
is unset and XDG_CONFIG_HOME points into a per-test tmp dir.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_location(monkeypatch, tmp_path):
    monkeypatch.delenv("SSHPICK_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
