"""Exception types raised by tunepick."""


class TunepickError(Exception):
    """Base class for tunepick errors."""


class CursorControlError(TunepickError):
    """The terminal cursor visibility could not be changed."""


class KeyReadError(TunepickError):
    """Reading a key press from the terminal failed."""


class MediaToolError(TunepickError):
    """An external media tool (yt-dlp, mpv) is missing or failed."""

    def __init__(self, tool: str, message: str, returncode: int | None = None):
        super().__init__(f"{tool}: {message}")
        self.tool = tool
        self.returncode = returncode
