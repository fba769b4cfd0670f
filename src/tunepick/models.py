"""Data models for tunepick."""

from dataclasses import dataclass, field
from enum import Enum


class MenuKey(Enum):
    """Keys the interactive menu reacts to."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    OTHER = "other"


class MenuOutcome(Enum):
    """How a menu invocation ended."""

    SELECTED = "selected"
    SELECTED_INDEX = "selected_index"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class MenuResult:
    """Result of one menu invocation.

    Exactly one of the outcomes applies: a selected value, a selected index,
    or a cancellation (no value, no index).
    """

    outcome: MenuOutcome
    value: str | None = None
    index: int | None = None

    @classmethod
    def selected(cls, value: str) -> "MenuResult":
        return cls(MenuOutcome.SELECTED, value=value)

    @classmethod
    def selected_index(cls, index: int) -> "MenuResult":
        return cls(MenuOutcome.SELECTED_INDEX, index=index)

    @classmethod
    def cancelled(cls) -> "MenuResult":
        return cls(MenuOutcome.CANCELLED)

    @property
    def is_cancelled(self) -> bool:
        return self.outcome is MenuOutcome.CANCELLED

    def unwrap(self) -> str | int | None:
        """Return the plain Python value: str, int, or None if cancelled."""
        if self.outcome is MenuOutcome.SELECTED:
            return self.value
        if self.outcome is MenuOutcome.SELECTED_INDEX:
            return self.index
        return None


@dataclass
class MenuState:
    """Mutable state owned by a single menu invocation."""

    options: tuple[str, ...]
    title: str
    return_index: bool = False
    selected_index: int = 0

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("MenuState requires at least one option")

    def move_up(self) -> None:
        n = len(self.options)
        self.selected_index = (self.selected_index - 1 + n) % n

    def move_down(self) -> None:
        self.selected_index = (self.selected_index + 1) % len(self.options)

    @property
    def current(self) -> str:
        return self.options[self.selected_index]

    def result(self) -> MenuResult:
        """Result for confirming the current selection."""
        if self.return_index:
            return MenuResult.selected_index(self.selected_index)
        return MenuResult.selected(self.current)


@dataclass(frozen=True)
class SearchResult:
    """A single video returned by a YouTube search."""

    video_id: str
    title: str
    channel: str | None = None
    duration: int | None = None

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def label(self) -> str:
        """Menu text: title, channel and duration when known."""
        parts = [self.title]
        if self.channel:
            parts.append(f"({self.channel})")
        if self.duration is not None:
            minutes, seconds = divmod(int(self.duration), 60)
            parts.append(f"[{minutes}:{seconds:02d}]")
        return " ".join(parts)

    @classmethod
    def from_dict(cls, data: dict) -> "SearchResult":
        """Build from a yt-dlp flat-playlist JSON entry."""
        duration = data.get("duration")
        return cls(
            video_id=data["id"],
            title=data.get("title") or data["id"],
            channel=data.get("channel") or data.get("uploader"),
            duration=int(duration) if duration is not None else None,
        )


@dataclass(frozen=True)
class DownloadSummary:
    """Immutable accumulator for a batch download.

    Every step returns a new summary; nothing is stored globally.
    """

    succeeded: tuple[str, ...] = field(default_factory=tuple)
    failed: tuple[str, ...] = field(default_factory=tuple)
    skipped: tuple[str, ...] = field(default_factory=tuple)

    def seen(self, url: str) -> bool:
        return url in self.succeeded or url in self.failed

    def with_success(self, url: str) -> "DownloadSummary":
        return DownloadSummary(self.succeeded + (url,), self.failed, self.skipped)

    def with_failure(self, url: str) -> "DownloadSummary":
        return DownloadSummary(self.succeeded, self.failed + (url,), self.skipped)

    def with_skip(self, url: str) -> "DownloadSummary":
        return DownloadSummary(self.succeeded, self.failed, self.skipped + (url,))

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed) + len(self.skipped)

    @property
    def ok(self) -> bool:
        return not self.failed
