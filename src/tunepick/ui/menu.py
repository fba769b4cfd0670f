"""Interactive arrow-key menu.

Renders a list of options, moves a selection cursor with Up/Down (wrapping at
both ends), confirms with Enter and cancels with Escape. The terminal cursor
is hidden while the menu runs and restored to its previous visibility on
every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from tunepick.exceptions import CursorControlError
from tunepick.models import MenuKey, MenuResult, MenuState
from tunepick.ui.terminal import Terminal, classify_key

logger = logging.getLogger("tunepick.menu")

DEFAULT_TITLE = "Select an option"
HINT_LINE = "↑↓ navigate • Enter select • Esc cancel"
CANCEL_NOTICE = "Selection cancelled."


class TerminalLike(Protocol):
    """What the menu needs from the terminal."""

    @property
    def cursor_visible(self) -> bool: ...

    def hide_cursor(self) -> None: ...

    def restore_cursor(self, visible: bool) -> None: ...

    def read_key(self) -> str: ...


def print_usage(console: Console) -> None:
    """Print usage help for the menu (shown when called without options)."""
    console.print("[bold]NAME[/bold]")
    console.print("    show_menu - pick one entry from a list with the arrow keys\n")
    console.print("[bold]SYNOPSIS[/bold]")
    console.print("    show_menu(options, title=\"Select an option\", return_index=False)")
    console.print("    tunepick menu OPTION... [--title TEXT] [--index]\n")
    console.print("[bold]PARAMETERS[/bold]")
    console.print("    [cyan]options[/cyan]        Entries to choose from (at least one)")
    console.print(f"    [cyan]title[/cyan]          Heading above the list (default: {DEFAULT_TITLE!r})")
    console.print("    [cyan]return_index[/cyan]   Return the zero-based index instead of the text\n")
    console.print("[bold]KEYS[/bold]")
    console.print(f"    {HINT_LINE}\n")
    console.print("[bold]EXAMPLES[/bold]")
    console.print('    show_menu(["Play", "Download", "Quit"])')
    console.print('    show_menu(titles, title="Search results", return_index=True)')
    console.print('    tunepick menu red green blue --title "Pick a colour"')


class InteractiveMenu:
    """One menu invocation: render, read a key, dispatch, repeat."""

    def __init__(
        self,
        options: Sequence[str],
        title: str = DEFAULT_TITLE,
        return_index: bool = False,
        console: Console | None = None,
        terminal: TerminalLike | None = None,
    ):
        self.state = MenuState(tuple(options), title, return_index)
        self.console = console or Console()
        self.terminal = terminal or Terminal(self.console.file)

    def render(self) -> None:
        """Clear the screen and draw the whole menu."""
        self.console.clear()
        self.console.print(f"[bold]{escape(self.state.title)}[/bold]")
        self.console.print()
        for i, option in enumerate(self.state.options):
            if i == self.state.selected_index:
                self.console.print(f"[bold cyan]> {escape(option)}[/bold cyan]")
            else:
                self.console.print(f"  {escape(option)}")
        self.console.print()
        self.console.print(f"[dim]{HINT_LINE}[/dim]")

    def handle_key(self, key: MenuKey) -> MenuResult | None:
        """Apply one key. Returns a result once the menu is finished."""
        if key is MenuKey.UP:
            self.state.move_up()
        elif key is MenuKey.DOWN:
            self.state.move_down()
        elif key is MenuKey.ENTER:
            return self.state.result()
        elif key is MenuKey.ESCAPE:
            self.console.print(f"[yellow]{CANCEL_NOTICE}[/yellow]")
            return MenuResult.cancelled()
        return None

    def run(self) -> MenuResult:
        """Run the input loop until Enter or Escape.

        Raises:
            KeyReadError: if no key could be read; the cursor is still restored.
        """
        was_visible = self.terminal.cursor_visible
        try:
            self.terminal.hide_cursor()
        except (CursorControlError, OSError) as e:
            logger.warning("Cannot hide terminal cursor, continuing: %s", e)

        try:
            while True:
                self.render()
                raw = self.terminal.read_key()
                result = self.handle_key(classify_key(raw))
                if result is not None:
                    return result
        finally:
            try:
                self.terminal.restore_cursor(was_visible)
            except (CursorControlError, OSError) as e:
                logger.debug("Cursor restore failed: %s", e)


def show_menu(
    options: Sequence[str],
    title: str = DEFAULT_TITLE,
    return_index: bool = False,
    *,
    console: Console | None = None,
    terminal: TerminalLike | None = None,
) -> str | int | None:
    """Show an arrow-key menu and return the choice.

    Args:
        options: Entries to choose from. Empty prints usage help instead.
        title: Heading shown above the entries.
        return_index: Return the zero-based index instead of the entry text.
        console: Rich console to draw on (default: stdout).
        terminal: Cursor/key backend (default: a Terminal on the console's file).

    Returns:
        The selected entry, its index when return_index is set, or None when
        the user pressed Escape or no options were given.
    """
    console = console or Console()
    if not options:
        print_usage(console)
        return None
    menu = InteractiveMenu(options, title, return_index, console=console, terminal=terminal)
    return menu.run().unwrap()
