"""ANSI escape sequences for cursor movement and screen clearing."""

ESC = "\x1b"
RESET = "\x1b[0m"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"
CLEAR_UNTIL_NEWLINE = "\x1b[K"
CLEAR_AFTER_CURSOR = "\x1b[J"
CLEAR_ALL = "\x1b[2J"
TO_ALTERNATE_SCREEN = "\x1b[?1049h"
TO_MAIN_SCREEN = "\x1b[?1049l"


def goto(col: int, row: int) -> str:
    """Move the cursor to a 1-based column and row."""
    return f"\x1b[{row};{col}H"
