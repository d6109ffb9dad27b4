"""Raw mode, screen switching and keyboard input.

Two read paths live here and stay separate: `read_key()` blocks until
a key arrives and drives normal navigation, while `poll_key()` never
blocks and is only used between chunks of a download to notice a
cancel request.
"""

import logging
import os
import select
import shutil
import signal
import sys
import termios
import tty

from .ansi import (
    CLEAR_ALL,
    ESC,
    HIDE_CURSOR,
    RESET,
    SHOW_CURSOR,
    TO_ALTERNATE_SCREEN,
    TO_MAIN_SCREEN,
)
from .core import keys
from .core.keys import Key

logger = logging.getLogger(__name__)

_SEQUENCES = {
    "\x1b[A": keys.UP,
    "\x1b[B": keys.DOWN,
    "\x1b[C": keys.RIGHT,
    "\x1b[D": keys.LEFT,
    "\x1bOA": keys.UP,
    "\x1bOB": keys.DOWN,
    "\x1bOC": keys.RIGHT,
    "\x1bOD": keys.LEFT,
    "\x1b[H": keys.HOME,
    "\x1b[F": keys.END,
    "\x1bOH": keys.HOME,
    "\x1bOF": keys.END,
    "\x1b[1~": keys.HOME,
    "\x1b[4~": keys.END,
    "\x1b[3~": keys.DELETE,
    "\x1b[5~": keys.PAGE_UP,
    "\x1b[6~": keys.PAGE_DOWN,
}


def decode_key(data: str) -> Key:
    """
    Turn the characters of one keypress into a Key.

    Args:
        data: Everything read for a single keypress, e.g. "a",
            "\\x1b[A" or "\\x03".

    Returns:
        The decoded Key. Unknown escape sequences decode as ESC.
    """
    if data in _SEQUENCES:
        return _SEQUENCES[data]
    if data.startswith(ESC):
        return keys.ESC
    if data in ("\r", "\n"):
        return keys.ENTER
    if data == "\x7f":
        return keys.BACKSPACE
    if data == "\t":
        return keys.char("\t")
    if len(data) == 1 and ord(data) < 32:
        # ctrl-a is 0x01, ctrl-z is 0x1a
        return keys.ctrl(chr(ord(data) + 96))
    return keys.char(data)


class Terminal:
    """The user's terminal: raw-mode input and full-screen output."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._saved_attrs = None

    def fileno(self) -> int:
        return self.stdin.fileno()

    def size(self) -> tuple[int, int]:
        """Current (columns, rows)."""
        size = shutil.get_terminal_size()
        return size.columns, size.lines

    def enter(self) -> None:
        """Switch to raw mode and the alternate screen."""
        fd = self.fileno()
        if os.isatty(fd) and self._saved_attrs is None:
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setraw(fd, when=termios.TCSANOW)
            logger.debug("Terminal switched to raw mode")
        self.write(TO_ALTERNATE_SCREEN + CLEAR_ALL + HIDE_CURSOR)

    def leave(self) -> None:
        """Restore the terminal to how we found it."""
        self.write(RESET + SHOW_CURSOR + TO_MAIN_SCREEN)
        if self._saved_attrs is not None:
            termios.tcsetattr(self.fileno(), termios.TCSANOW, self._saved_attrs)
            self._saved_attrs = None

    def suspend(self) -> None:
        """Hand the terminal back to the shell until we're resumed (ctrl-z)."""
        self.leave()
        logger.debug("Suspending")
        os.kill(os.getpid(), signal.SIGTSTP)
        # execution continues here after `fg`
        self.enter()

    def __enter__(self) -> "Terminal":
        self.enter()
        return self

    def __exit__(self, *exc) -> None:
        self.leave()

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_key(self) -> Key:
        """Block until a key is pressed and return it."""
        fd = self.fileno()
        first = os.read(fd, 1)
        if not first:
            raise EOFError("stdin closed")
        if first == b"\x1b":
            return decode_key(ESC + self._read_pending(fd))
        return decode_key(self._read_utf8(fd, first))

    def poll_key(self) -> Key | None:
        """Return a key if one is waiting, without blocking."""
        fd = self.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        return self.read_key()

    def _read_pending(self, fd: int) -> str:
        """Read the rest of an escape sequence, if any is waiting."""
        out = ""
        while len(out) < 8:
            ready, _, _ = select.select([fd], [], [], 0.01)
            if not ready:
                break
            c = os.read(fd, 1).decode("utf-8", errors="replace")
            out += c
            if len(out) >= 2 and (c.isalpha() or c == "~"):
                break
        return out

    def _read_utf8(self, fd: int, first: bytes) -> str:
        """Read the continuation bytes of a multi-byte character."""
        lead = first[0]
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            extra = 0
        data = first + (os.read(fd, extra) if extra else b"")
        return data.decode("utf-8", errors="replace")
