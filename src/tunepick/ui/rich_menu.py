"""Rich implementation of MenuProvider, backed by show_menu."""

from rich.console import Console

from .menu import DEFAULT_TITLE, TerminalLike, show_menu


class RichTerminalMenu:
    """Default MenuProvider drawing on a Rich console."""

    def __init__(self, console: Console | None = None, terminal: TerminalLike | None = None):
        self.console = console or Console()
        self.terminal = terminal

    def select(self, options: list[str], title: str = "") -> int | None:
        """Show selection menu, return index or None if cancelled."""
        if not options:
            return None
        result = show_menu(
            options,
            title=title or DEFAULT_TITLE,
            return_index=True,
            console=self.console,
            terminal=self.terminal,
        )
        return result if isinstance(result, int) else None

    def confirm(self, message: str, default: bool = False) -> bool:
        """Yes/no prompt; cancelling counts as no."""
        # show_menu always starts on the first entry
        options = ["Yes", "No"] if default else ["No", "Yes"]
        choice = self.select(options, title=message)
        return choice is not None and options[choice] == "Yes"
