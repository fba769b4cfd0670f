"""Menu protocol handed to menu consumers."""

from typing import Protocol


class MenuProvider(Protocol):
    """Protocol for swappable menu implementations."""

    def select(self, options: list[str], title: str = "") -> int | None:
        """Show selection menu, return index or None if cancelled."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Yes/no prompt."""
        ...
