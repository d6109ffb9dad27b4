"""Parser for Gopher URLs."""

from typing import NamedTuple

from .item_type import ItemType

SCHEME = "gopher://"
DEFAULT_PORT = "70"
DEFAULT_SELECTOR = "/"


class GopherUrl(NamedTuple):
    """A parsed Gopher URL.

    For an Error-typed result `host` holds a diagnostic message and
    `selector` holds the part of the URL that couldn't be parsed.
    """

    typ: ItemType
    host: str
    port: str
    selector: str


def parse_url(url: str) -> GopherUrl:
    """
    Parse a Gopher URL into its item type, host, port and selector.

    Non-gopher URLs (anything else with a "://" scheme) come back as
    HTML items with the original URL as their selector, so they can be
    handed to an external program.

    Args:
        url: The URL to parse, with or without the gopher:// scheme.

    Returns:
        A GopherUrl. Never raises: malformed IPv6 literals produce an
        Error-typed GopherUrl instead.
    """
    rest = url[len(SCHEME):] if url.startswith(SCHEME) else url

    # bare hostname shorthand
    if ":" not in rest and "/" not in rest:
        return GopherUrl(ItemType.MENU, rest, DEFAULT_PORT, DEFAULT_SELECTOR)

    if "://" in rest:
        return GopherUrl(ItemType.HTML, "", "", url)

    slash = rest.find("/")
    if slash == -1:
        hostport, selector = rest, DEFAULT_SELECTOR
    else:
        hostport, selector = rest[:slash], rest[slash:]

    host, port = hostport, DEFAULT_PORT

    if "[" in hostport:
        start = hostport.index("[")
        end = hostport.find("]", start)
        if end == -1:
            return GopherUrl(
                ItemType.ERROR,
                "Unclosed '[' in IPv6 address",
                "",
                rest[start:],
            )
        host = hostport[start + 1:end]
        after = hostport[end + 1:]
        if after.startswith(":") and after[1:]:
            port = after[1:]
    elif ":" in hostport:
        name, maybe_port = hostport.split(":", 1)
        # more colons means a bare IPv6 address, not host:port
        if ":" not in maybe_port:
            host = name
            if maybe_port:
                port = maybe_port

    typ = ItemType.MENU
    if len(selector) >= 2:
        prefixed = ItemType.from_char(selector[1])
        if prefixed is not None:
            typ = prefixed
            selector = selector[2:] or DEFAULT_SELECTOR

    return GopherUrl(typ, host, port, selector)


def build_url(typ: ItemType, host: str, port: str, selector: str) -> str:
    """Assemble a canonical gopher:// URL for an item."""
    if ":" in host:
        host = f"[{host}]"
    url = SCHEME + host
    if port and port != DEFAULT_PORT:
        url += f":{port}"
    return f"{url}/{typ.char}{selector or DEFAULT_SELECTOR}"
