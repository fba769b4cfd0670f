"""Terminal capabilities used by the interactive menu."""

from __future__ import annotations

import codecs
import os
import select
import sys
from collections.abc import Callable
from typing import TextIO

import readchar

from tunepick.exceptions import CursorControlError, KeyReadError
from tunepick.models import MenuKey

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

# How long to wait for the rest of an escape sequence after ESC (seconds)
ESCAPE_TIMEOUT = 0.05

_KEY_MAP: dict[str, MenuKey] = {
    readchar.key.UP: MenuKey.UP,
    readchar.key.DOWN: MenuKey.DOWN,
    # Application cursor mode
    "\x1bOA": MenuKey.UP,
    "\x1bOB": MenuKey.DOWN,
    readchar.key.ENTER: MenuKey.ENTER,
    "\r": MenuKey.ENTER,
    "\n": MenuKey.ENTER,
    readchar.key.ESC: MenuKey.ESCAPE,
}


def classify_key(raw: str) -> MenuKey:
    """Map a raw readchar key to the menu keys we handle."""
    return _KEY_MAP.get(raw, MenuKey.OTHER)


def input_pending(fd: int, timeout: float) -> bool:
    """True if `fd` has input ready within `timeout` seconds."""
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def read_key_sequence(read_char: Callable[[], str], pending: Callable[[], bool]) -> str:
    """Read one key, telling a lone ESC apart from an escape sequence.

    A bare ESC is returned when nothing follows it before `pending()` gives up.
    CSI sequences (ESC [ ...) are read up to their final byte, SS3 sequences
    (ESC O x) are three characters.
    """
    first = read_char()
    if first != readchar.key.ESC:
        return first
    if not pending():
        return readchar.key.ESC

    second = read_char()
    if second == "O":
        return first + second + read_char()
    if second != "[":
        return first + second

    sequence = first + second
    while True:
        ch = read_char()
        sequence += ch
        # Parameter and intermediate bytes are below "@"
        if not ch or "@" <= ch <= "~":
            return sequence


class Terminal:
    """Cursor visibility and blocking key reads for one output stream."""

    def __init__(self, stream: TextIO | None = None, input_fd: int | None = None):
        self._stream = stream if stream is not None else sys.stdout
        self._input_fd = input_fd
        self._cursor_visible = True

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    def is_interactive(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        try:
            return bool(isatty and isatty())
        except ValueError:
            # Closed stream
            return False

    def hide_cursor(self) -> None:
        if not self.is_interactive():
            raise CursorControlError("output is not a terminal")
        self._write(HIDE_CURSOR)
        self._cursor_visible = False

    def restore_cursor(self, visible: bool) -> None:
        if not self.is_interactive():
            raise CursorControlError("output is not a terminal")
        self._write(SHOW_CURSOR if visible else HIDE_CURSOR)
        self._cursor_visible = visible

    def read_key(self) -> str:
        """Block until one key press is available."""
        try:
            if sys.platform == "win32":
                key = readchar.readkey()
            else:
                key = self._read_posix_key()
        except KeyboardInterrupt:
            raise
        except Exception as e:
            raise KeyReadError(f"cannot read from terminal: {e}") from e
        if not key:
            raise KeyReadError("input stream closed")
        return key

    def _read_posix_key(self) -> str:
        """Read one key in cbreak mode straight from the file descriptor.

        readchar's POSIX readkey() blocks for a second byte after ESC and
        reads through sys.stdin's buffer, which hides pending bytes from
        select(). Reading the fd directly lets a lone ESC time out.
        """
        import termios
        import tty

        fd = self._input_fd if self._input_fd is not None else sys.stdin.fileno()
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        def read_char() -> str:
            while True:
                data = os.read(fd, 1)
                if not data:
                    return ""
                ch = decoder.decode(data)
                if ch:
                    return ch

        old = termios.tcgetattr(fd)
        try:
            # TCSANOW keeps keys typed ahead of this read
            tty.setcbreak(fd, termios.TCSANOW)
            return read_key_sequence(read_char, lambda: input_pending(fd, ESCAPE_TIMEOUT))
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old)

    def _write(self, sequence: str) -> None:
        try:
            self._stream.write(sequence)
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise CursorControlError(str(e)) from e
