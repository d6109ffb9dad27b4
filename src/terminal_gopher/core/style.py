"""Terminal styles for menu items, looked up by item type."""

from dataclasses import dataclass

from ..ansi import RESET
from .item_type import ItemType

# SGR foreground codes
GREY = 90
RED = 91
GREEN = 92
YELLOW = 93
BLUE = 94
MAGENTA = 95
CYAN = 96
WHITE = 97

WHITE_BG = 47


@dataclass(frozen=True)
class Style:
    """Foreground color plus text attributes, rendered as one SGR sequence."""

    fg: int | None = None
    bold: bool = False
    underline: bool = False
    background: int | None = None

    def codes(self) -> list[str]:
        codes = []
        if self.fg is not None:
            codes.append(str(self.fg))
        if self.bold:
            codes.append("1")
        if self.underline:
            codes.append("4")
        if self.background is not None:
            codes.append(str(self.background))
        return codes

    def sequence(self) -> str:
        """The escape sequence that turns this style on."""
        codes = self.codes() or ["0"]
        return f"\x1b[{';'.join(codes)}m"

    def apply(self, text: str) -> str:
        """Wrap text in this style and a trailing reset."""
        return f"{self.sequence()}{text}{RESET}"


DEFAULT = Style()
CURSOR = Style(fg=WHITE, bold=True)
NUMBER = Style(fg=MAGENTA)

_BY_TYPE = {
    ItemType.TEXT: Style(fg=CYAN),
    ItemType.MENU: Style(fg=BLUE),
    ItemType.INFO: Style(fg=YELLOW),
    ItemType.HTML: Style(fg=GREEN),
    ItemType.ERROR: Style(fg=RED),
    ItemType.TELNET: Style(fg=GREY, underline=True),
}

_DOWNLOAD = Style(fg=WHITE, underline=True)
_UNSUPPORTED = Style(fg=RED, background=WHITE_BG)


def style_for(typ: ItemType) -> Style:
    """Return the display style for an item type."""
    if typ.is_download():
        return _DOWNLOAD
    if not typ.is_supported():
        return _UNSUPPORTED
    return _BY_TYPE.get(typ, DEFAULT)
