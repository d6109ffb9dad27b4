"""Built-in pages served without touching the network."""

from .. import __version__
from ..interfaces import ContentProvider

# Host name that routes a gopher:// URL to this provider.
INTERNAL_HOST = "terminal-gopher"

HEADER = """\
i
i   ~ terminal gopher ~
i
"""

HOME = f"""\
i            ~ * ~
i
7search gopher	/v2/vs	gopher.floodgap.com	70
1gopherpedia	/	gopherpedia.com	70
1gopher lawn	/lawn	bitreich.org	70
1welcome to gopherspace	/gopher	gopher.floodgap.com	70
i
i            ~ * ~
i
1show help          (ctrl-h)	/help	{INTERNAL_HOST}	70
1about	/about	{INTERNAL_HOST}	70
i
"""

HELP = f"""\
i      ** help topics **
i
1keyboard shortcuts	/help/keys	{INTERNAL_HOST}	70
1gopher types	/help/types	{INTERNAL_HOST}	70
i
i            ~ * ~
i
1start screen	/home	{INTERNAL_HOST}	70
1about	/about	{INTERNAL_HOST}	70
i
"""

KEYS = """\
i   ** keyboard shortcuts **
i
ileft       back in history
iright      next in history
iup         select prev link
idown       select next link
ipg up/down scroll by many lines
i- or space same as pg up/down
ihome/end   top or bottom of page
i
inum key    open/select link
ienter      open current link
iescape     cancel
i
itype any   find link by name
ictrl-p     select prev link
ictrl-n     select next link
i
ictrl-g     go to gopher url
ictrl-u     edit url
ictrl-r     view raw source
ictrl-w     toggle wide mode
ictrl-h     show help
ictrl-z     suspend
ictrl-q     quit
i
"""

TYPES = """\
i     ** gopher types **
i
isupported:
i
i  0  text file
i  1  menu
i  3  error
i  7  search
i  h  html link
i  i  info line
i  x  xml
i  c  calendar
i
idownloaded to disk:
i
i  4  binhex
i  5  dos file
i  6  uuencoded
i  9  binary
i  g  gif
i  I  image
i  p  png
i  s  sound
i  d  document
i  ;  video
i  M  mime
i
inot supported:
i
i  2  cso entity
i  8  telnet
i  +  mirror
i  T  telnet 3270
i
"""

ABOUT = f"""\
i      ** about **
i
ia small gopher client for the terminal.
i
iversion {__version__}
i
1back to the start screen	/home	{INTERNAL_HOST}	70
i
"""

PAGES = {
    "home": HOME,
    "help": HELP,
    "help/keys": KEYS,
    "help/types": TYPES,
    "about": ABOUT,
}


class InternalProvider(ContentProvider):
    """Serves the start screen, help pages and about page as gophermaps."""

    def __init__(self, pages: dict[str, str] | None = None):
        """
        Initialize with a selector to page body mapping.

        Args:
            pages: Page bodies keyed by selector. Defaults to PAGES.
        """
        self.pages = PAGES if pages is None else pages

    def lookup(self, selector: str) -> str | None:
        """
        Find a built-in page.

        Leading and trailing slashes are ignored, and an empty selector
        means the start screen.

        Returns:
            The page as a gophermap with the header prepended, or None.
        """
        name = selector.strip("/") or "home"
        body = self.pages.get(name)
        if body is None:
            return None
        return HEADER + body

    def selectors(self) -> list[str]:
        return sorted(self.pages)
