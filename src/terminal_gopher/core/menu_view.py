"""Interactive view of a Gopher menu.

The MenuView owns the cursor, scroll offset and typed input for one
Menu. It never writes to the terminal or touches the network itself:
`render()` returns a string and `respond()` returns an Action for the
browser to carry out.
"""

import logging
from enum import Enum

from ..ansi import CLEAR_AFTER_CURSOR, CLEAR_LINE, CLEAR_UNTIL_NEWLINE, goto
from ..interfaces.view import View
from . import keys
from .action import Action, Error, Keypress, NoAction, Open, Prompt, Redraw, Status
from .item_type import ItemType
from .keys import Key
from .menu_parser import MAX_COLS, Line, Menu, measure, parse_menu
from .style import CURSOR, NUMBER, style_for

logger = logging.getLogger(__name__)

# Rows moved by page up/down.
SCROLL_LINES = 15

# Rows kept between a jumped-to link and the top of the screen, and
# the distance from either edge at which up/down start scrolling.
LOOKBACK = 5

# Centered menus are shifted left by this much to make room for the
# link numbers.
MARGIN = 6

# Page down stops once this share of the screen is left showing.
BOTTOM_PADDING = 0.75

ELLIPSIS = "..."


class LinkPos(Enum):
    """Where a link is relative to the visible screen."""

    ABOVE = "above"
    BELOW = "below"
    VISIBLE = "visible"


class MenuView(View):
    """A Gopher menu with a cursor, scrolling and quick navigation.

    Typing digits jumps to a link by number; typing anything else
    searches link names. The bottom terminal row is always the status
    line, which shows the typed input.

    Attributes:
        menu: The parsed menu being shown.
        link: Selected link, an index into `menu.links`.
        scroll: Index of the first line on screen.
        input: What the user has typed so far.
        size: Terminal (columns, rows).
        wide: If True, don't center the menu.
        show_cursor: If False, no link is drawn as selected.
    """

    def __init__(self, menu: Menu, wide: bool = False, show_cursor: bool = True):
        self.menu = menu
        self.link = 0
        self.scroll = 0
        self.input = ""
        self.size = (0, 0)
        self.wide = wide
        self.show_cursor = show_cursor

    @classmethod
    def from_response(cls, url: str, raw: str, wide: bool = False) -> "MenuView":
        """Parse a raw menu response and wrap it in a view."""
        return cls(parse_menu(url, raw), wide=wide)

    # View interface

    def render(self) -> str:
        return self.render_lines() + self.render_status()

    def respond(self, key: Key) -> Action:
        return self.process_key(key)

    def url(self) -> str:
        return self.menu.url

    def raw(self) -> str:
        return self.menu.raw

    def set_viewport(self, cols: int, rows: int) -> None:
        self.size = (cols, rows)

    # Geometry

    @property
    def cols(self) -> int:
        return self.size[0]

    @property
    def rows(self) -> int:
        return self.size[1]

    @property
    def lines(self) -> list[Line]:
        return self.menu.lines

    @property
    def links(self) -> list[int]:
        return self.menu.links

    def selected(self) -> Line | None:
        """The currently selected line, if the menu has any links."""
        return self.menu.link(self.link)

    def indent(self) -> int:
        """Left margin used to center the menu."""
        if self.wide:
            return 0
        longest = min(self.menu.longest, MAX_COLS)
        if longest > self.cols:
            return 0
        left = (self.cols - longest) // 2
        return left - MARGIN if left > MARGIN else 0

    def number_width(self) -> int:
        return max(2, len(str(len(self.links))))

    def final_scroll(self) -> int:
        """Furthest page down will scroll."""
        if len(self.lines) <= self.rows - 1:
            return 0
        padding = int(self.rows * BOTTOM_PADDING)
        return max(0, len(self.lines) - padding)

    def link_position(self, i: int) -> LinkPos | None:
        """Where link `i` is relative to the screen, or None if no such link."""
        if i < 0 or i >= len(self.links):
            return None
        pos = self.links[i]
        if pos < self.scroll:
            return LinkPos.ABOVE
        if pos >= self.scroll + self.rows - 1:
            return LinkPos.BELOW
        return LinkPos.VISIBLE

    def is_visible(self, i: int) -> bool:
        return self.link_position(i) == LinkPos.VISIBLE

    def _more_below(self) -> bool:
        return self.rows > 1 and len(self.lines) > self.scroll + self.rows - 1

    # Rendering

    def render_lines(self) -> str:
        """Render the visible menu lines, without the status line."""
        out = []
        margin = " " * self.indent()
        width = self.number_width()
        visible = self.lines[self.scroll:self.scroll + max(0, self.rows - 1)]
        # names plus the ellipsis fit in MAX_COLS and on the row after the gutter
        room = MAX_COLS
        if self.cols > 0:
            room = min(room, self.cols - len(margin) - (width + 4))

        for line in visible:
            out.append(margin)
            if line.typ.is_info():
                out.append(" " * (width + 4))
            else:
                if self.show_cursor and line.link == self.link:
                    out.append(CURSOR.apply("*"))
                else:
                    out.append(" ")
                out.append(" ")
                out.append(NUMBER.apply(f"{line.link + 1:>{width}}."))
                out.append(" ")

            # truncate long names instead of wrapping
            name = line.name
            shown, _ = measure(name)
            if shown > room:
                _, cut = measure(name, max(0, room - len(ELLIPSIS)))
                name = name[:cut] + ELLIPSIS
            out.append(style_for(line.typ).apply(name))
            out.append(CLEAR_UNTIL_NEWLINE)
            out.append("\r\n")

        out.append(CLEAR_AFTER_CURSOR)
        return "".join(out)

    def render_status(self) -> str:
        """Status line: jump to the bottom row and show the typed input."""
        return f"{goto(1, max(1, self.rows))}{CLEAR_LINE}{self.input}"

    def redraw_status(self) -> Action:
        return Status(self.render_status())

    # Input

    def process_key(self, key: Key) -> Action:
        """Turn a keypress into a state change plus an Action."""
        if key == keys.ENTER:
            return self.action_open()
        if key == keys.UP or key.is_ctrl("p"):
            return self.action_up()
        if key == keys.DOWN or key.is_ctrl("n"):
            return self.action_down()
        if key == keys.PAGE_UP:
            return self.action_page_up()
        if key == keys.PAGE_DOWN:
            return self.action_page_down()
        if key == keys.HOME:
            return self.action_home()
        if key == keys.END:
            return self.action_end()
        if key in (keys.BACKSPACE, keys.DELETE):
            if not self.input:
                return Keypress(key)
            self.input = self.input[:-1]
            return self.redraw_status()
        if key == keys.ESC or key.is_ctrl("c"):
            if not self.input:
                return Keypress(key)
            self.input = ""
            return self.redraw_status()
        if key.is_ctrl("w"):
            self.wide = not self.wide
            return Redraw()
        if key.is_char():
            c = key.value
            if c == "-" and not self.input:
                return self.action_page_up()
            if c == " " and not self.input:
                return self.action_page_down()
            if c.isprintable():
                return self.action_type(c)
        return Keypress(key)

    def action_type(self, c: str) -> Action:
        """Add a character to the input and act on what's been typed."""
        self.input += c
        count = len(self.links)

        # jump to a link by number
        if 1 <= len(self.input) <= 3 and all(ch in "0123456789" for ch in self.input):
            num = int(self.input)
            if 0 < num <= count:
                # another digit can't name a real link, so go now
                if count < num * 10:
                    return self.follow_link(num - 1)
                return self.select_link(num - 1)

        found = self.link_matching(0, self.input)
        if found is not None:
            return self.select_link(found)
        return self.redraw_status()

    def link_matching(self, start: int, pattern: str) -> int | None:
        """First link at or after `start` whose name contains `pattern`."""
        pattern = pattern.lower()
        for i in range(max(0, start), len(self.links)):
            if pattern in self.menu.link(i).name.lower():
                return i
        return None

    def rlink_matching(self, start: int, pattern: str) -> int | None:
        """Nearest link before `start` whose name contains `pattern`."""
        pattern = pattern.lower()
        for i in range(min(start, len(self.links)) - 1, -1, -1):
            if pattern in self.menu.link(i).name.lower():
                return i
        return None

    # Movement

    def scroll_to(self, i: int) -> Action:
        """Scroll so link `i` is on screen, a few rows from the top."""
        if i < 0 or i >= len(self.links) or self.is_visible(i):
            return NoAction()
        pos = self.links[i]
        self.scroll = min(max(0, pos - LOOKBACK), self.final_scroll())
        return Redraw()

    def select_link(self, i: int) -> Action:
        if i < 0 or i >= len(self.links):
            return NoAction()
        self.link = i
        self.scroll_to(i)
        return Redraw()

    def follow_link(self, i: int) -> Action:
        """Select link `i` and open it straight away."""
        if i < 0 or i >= len(self.links):
            return NoAction()
        self.select_link(i)
        return self.open_link()

    def action_up(self) -> Action:
        if not self.links or self.link == 0:
            if self.scroll > 0:
                self.scroll -= 1
                return Redraw()
            return NoAction()

        if self.input:
            found = self.rlink_matching(self.link, self.input)
            return self.select_link(found) if found is not None else NoAction()

        new_link = self.link - 1
        pos = self.link_position(new_link)
        if pos == LinkPos.ABOVE:
            if self.scroll > 0:
                self.scroll -= 1
            if self.is_visible(new_link):
                self.link = new_link
        elif pos == LinkPos.BELOW:
            self.scroll = self.links[new_link]
            self.link = new_link
        else:
            self.link = new_link
            # keep some room above the cursor
            if self.scroll > 0 and self.links[new_link] < self.scroll + LOOKBACK:
                self.scroll -= 1
        return Redraw()

    def action_down(self) -> Action:
        new_link = self.link + 1

        # no links, or the last one is selected: keep scrolling
        if new_link >= len(self.links):
            if self._more_below():
                self.scroll += 1
                return Redraw()
            return NoAction()

        if self.input:
            found = self.link_matching(new_link, self.input)
            return self.select_link(found) if found is not None else NoAction()

        pos = self.link_position(new_link)
        if pos == LinkPos.ABOVE:
            self.scroll = self.links[new_link]
            self.link = new_link
        elif pos == LinkPos.BELOW:
            self.scroll += 1
            if self.is_visible(new_link):
                self.link = new_link
        else:
            self.link = new_link
            line = self.links[new_link]
            # keep some room below the cursor
            if (
                len(self.lines) >= self.rows
                and line > self.scroll
                and line >= self.scroll + self.rows - 1 - LOOKBACK
            ):
                self.scroll += 1
        return Redraw()

    def action_page_up(self) -> Action:
        if self.scroll > 0:
            self.scroll = max(0, self.scroll - SCROLL_LINES)
            if self.link == 0:
                return Redraw()
            if self.link_position(self.link) == LinkPos.BELOW:
                for i in range(self.link - 1, -1, -1):
                    if self.is_visible(i):
                        self.link = i
                        break
            return Redraw()
        if self.link > 0:
            self.link = 0
            return Redraw()
        return NoAction()

    def action_page_down(self) -> Action:
        final = self.final_scroll()

        if self.scroll + SCROLL_LINES >= final:
            last = len(self.links) - 1
            if self.scroll >= final and (last < 0 or self.link == last):
                return NoAction()
            self.scroll = max(self.scroll, final)
            if last >= 0:
                self.link = last
            return Redraw()

        self.scroll += SCROLL_LINES
        if self.link_position(self.link) == LinkPos.ABOVE:
            for i in range(self.link + 1, len(self.links)):
                if self.links[i] >= self.scroll:
                    self.link = i
                    break
        return Redraw()

    def action_home(self) -> Action:
        self.scroll = 0
        self.link = 0
        return Redraw()

    def action_end(self) -> Action:
        self.scroll = self.final_scroll()
        if self.links:
            self.link = len(self.links) - 1
        return Redraw()

    # Opening links

    def action_open(self) -> Action:
        """Open the selected link, or scroll to it if it's off screen."""
        if not self.links:
            return NoAction()
        if not self.is_visible(self.link):
            return self.scroll_to(self.link)
        return self.open_link()

    def open_link(self) -> Action:
        line = self.selected()
        if line is None:
            return NoAction()
        self.input = ""
        logger.debug(f"Opening link {self.link + 1}: {line.url}")

        if line.typ == ItemType.SEARCH:
            label = f"{line.name}> "
            url = line.url
            return Prompt(label, lambda query: Open(f"{label}{query}", f"{url}?{query}"))
        if line.typ == ItemType.ERROR:
            return Error(line.name)
        if line.typ == ItemType.TELNET:
            return Error("Telnet not supported")
        return Open(line.name, line.url)
