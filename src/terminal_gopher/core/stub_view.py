"""Placeholder view for content that isn't a menu."""

from ..ansi import CLEAR_AFTER_CURSOR, CLEAR_LINE, CLEAR_UNTIL_NEWLINE, goto
from ..interfaces.view import View
from .action import Action, Keypress
from .keys import Key


class StubView(View):
    """Shows the top of a plain response and passes every key through.

    Used for text documents and for "view source" of another view.
    """

    def __init__(self, url: str, raw: str):
        self._url = url
        self._raw = raw
        self.size = (0, 0)

    def render(self) -> str:
        cols, rows = self.size
        out = []
        for line in self._raw.splitlines()[:max(0, rows - 1)]:
            out.append(line.expandtabs()[:cols] if cols else line)
            out.append(CLEAR_UNTIL_NEWLINE + "\r\n")
        out.append(CLEAR_AFTER_CURSOR)
        out.append(f"{goto(1, max(1, rows))}{CLEAR_LINE}")
        return "".join(out)

    def respond(self, key: Key) -> Action:
        return Keypress(key)

    def url(self) -> str:
        return self._url

    def raw(self) -> str:
        return self._raw

    def set_viewport(self, cols: int, rows: int) -> None:
        self.size = (cols, rows)
