"""Pytest fixtures for tunepick tests."""

import io

import pytest
from rich.console import Console


class FakeTerminal:
    """Scripted terminal: replays keys and records cursor changes."""

    def __init__(self, keys=(), visible=True, hide_fails=False, restore_fails=False):
        self.keys = list(keys)
        self.cursor_visible = visible
        self.hide_fails = hide_fails
        self.restore_fails = restore_fails
        self.reads = 0
        self.restored_to: list[bool] = []

    def hide_cursor(self) -> None:
        from tunepick.exceptions import CursorControlError

        if self.hide_fails:
            raise CursorControlError("output is not a terminal")
        self.cursor_visible = False

    def restore_cursor(self, visible: bool) -> None:
        from tunepick.exceptions import CursorControlError

        self.restored_to.append(visible)
        if self.restore_fails:
            raise CursorControlError("restore failed")
        self.cursor_visible = visible

    def read_key(self) -> str:
        self.reads += 1
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


@pytest.fixture(autouse=True)
def clear_caches(tmp_path, monkeypatch):
    """Isolate config from the user's home and clear the config cache."""
    from tunepick.config import clear_config_cache

    monkeypatch.setenv("TUNEPICK_CONFIG_DIR", str(tmp_path / "config"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def fake_terminal():
    """Factory for scripted terminals."""
    return FakeTerminal


@pytest.fixture
def console():
    """Rich console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=80, color_system=None)
