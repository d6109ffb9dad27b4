"""Parser for Gopher menus (item type 1 responses)."""

import logging
from dataclasses import dataclass, field

from .item_type import ItemType
from .url_parser import build_url

logger = logging.getLogger(__name__)

# Widest name we lay out for; longer names are truncated when drawn.
MAX_COLS = 77

URL_MARKER = "URL:"


@dataclass
class Line:
    """A single line of a Gopher menu.

    Attributes:
        name: Display text, without the leading type code.
        url: Absolute URL this line points at.
        typ: Gopher item type.
        link: Position in the menu's links list, or None for info lines.
    """

    name: str
    url: str
    typ: ItemType
    link: int | None = None


@dataclass
class Menu:
    """A parsed Gopher menu.

    Attributes:
        url: URL the menu was fetched from.
        lines: Every recognized line, in server order.
        links: Indexes into `lines` of every non-info line.
        longest: Widest line name, capped at MAX_COLS.
        raw: The response exactly as received.
    """

    url: str
    lines: list[Line] = field(default_factory=list)
    links: list[int] = field(default_factory=list)
    longest: int = 0
    raw: str = ""

    def link(self, i: int) -> Line | None:
        """Get the Line for link number `i`, or None if out of range."""
        if i < 0 or i >= len(self.links):
            return None
        return self.lines[self.links[i]]


def parse_menu(url: str, raw: str) -> Menu:
    """
    Parse a raw Gopher menu response.

    Lines with an unknown type code are skipped, since plenty of
    servers send them.

    Args:
        url: URL the response was fetched from.
        raw: The response text.

    Returns:
        A Menu with lines in source order and its link index built.
    """
    menu = Menu(url=url, raw=raw)

    for raw_line in raw.split("\n"):
        text = raw_line.rstrip("\r")
        if not text:
            continue
        # end of response
        if text == ".":
            break

        line = parse_line(text)
        if line is None:
            logger.debug(f"Skipping unknown item type: {text[:1]!r}")
            continue

        width, _ = measure(line.name)
        menu.longest = max(menu.longest, min(width, MAX_COLS))
        if line.typ.is_link():
            line.link = len(menu.links)
            menu.links.append(len(menu.lines))
        menu.lines.append(line)

    return menu


def measure(text: str, limit: int = MAX_COLS) -> tuple[int, int]:
    """
    Measure text as it appears on screen, skipping `ESC [ ... m` color codes.

    Args:
        text: A menu line name, possibly carrying color codes.
        limit: How many visible characters the cut offset allows.

    Returns:
        (visible length, offset into `text` just past the first `limit`
        visible characters). Cutting at the offset never splits a color
        code.
    """
    width = 0
    cut = 0
    in_color = False
    i = 0
    while i < len(text):
        c = text[i]
        if in_color:
            if c == "m":
                in_color = False
        elif c == "\x1b" and text[i + 1:i + 2] == "[":
            in_color = True
            i += 1
        else:
            width += 1
            if width <= limit:
                cut = i + 1
        i += 1
    return width, cut


def parse_line(text: str) -> Line | None:
    """Parse one menu line, or return None if its type is unknown."""
    typ = ItemType.from_char(text[0])
    if typ is None:
        return None

    fields = text.split("\t")
    name = fields[0][1:]
    selector = fields[1] if len(fields) > 1 else ""
    host = fields[2] if len(fields) > 2 else ""
    port = fields[3].strip() if len(fields) > 3 else ""

    target = selector.lstrip("/") if selector.startswith("/" + URL_MARKER) else selector
    if target.startswith(URL_MARKER):
        url = target[len(URL_MARKER):]
    else:
        url = build_url(typ, host, port, selector)

    return Line(name=name, url=url, typ=typ)
