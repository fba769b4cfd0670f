"""Tests for the MenuProvider implementation."""

from readchar import key

from tunepick.ui.rich_menu import RichTerminalMenu


def test_select_returns_index(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.DOWN, key.ENTER]))
    assert menu.select(["a", "b", "c"], title="Pick") == 1


def test_select_cancel(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.ESC]))
    assert menu.select(["a"]) is None


def test_select_empty_does_not_show_menu(console, fake_terminal):
    term = fake_terminal([])
    assert RichTerminalMenu(console=console, terminal=term).select([]) is None
    assert term.reads == 0


def test_confirm_default_yes(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.ENTER]))
    assert menu.confirm("Sure?", default=True) is True


def test_confirm_default_no(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.ENTER]))
    assert menu.confirm("Sure?") is False


def test_confirm_pick_yes(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.DOWN, key.ENTER]))
    assert menu.confirm("Sure?") is True


def test_confirm_cancel_is_no(console, fake_terminal):
    menu = RichTerminalMenu(console=console, terminal=fake_terminal([key.ESC]))
    assert menu.confirm("Sure?", default=True) is False
