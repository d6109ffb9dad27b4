"""Gopher item types (RFC 1436 plus common extensions)."""

from enum import Enum


class ItemType(Enum):
    """A Gopher item type, valued by its one-character type code."""

    TEXT = "0"
    MENU = "1"
    CSO_ENTITY = "2"
    ERROR = "3"
    BINHEX = "4"
    DOS_FILE = "5"
    UUENCODED = "6"
    SEARCH = "7"
    TELNET = "8"
    BINARY = "9"
    MIRROR = "+"
    GIF = "g"
    TELNET_3270 = "T"
    HTML = "h"
    IMAGE = "I"
    PNG = "p"
    INFO = "i"
    SOUND = "s"
    DOCUMENT = "d"
    VIDEO = ";"
    XML = "x"
    CALENDAR = "c"
    MIME = "M"

    @property
    def char(self) -> str:
        """The RFC type code for this item type."""
        return self.value

    @classmethod
    def from_char(cls, c: str) -> "ItemType | None":
        """Look up an item type by its type code, or None if unknown."""
        return _BY_CHAR.get(c)

    def is_info(self) -> bool:
        return self is ItemType.INFO

    def is_link(self) -> bool:
        """Anything that isn't an info line gets a link number."""
        return self is not ItemType.INFO

    def is_download(self) -> bool:
        return self in _DOWNLOADS

    def is_text(self) -> bool:
        return self in _TEXTS

    def is_supported(self) -> bool:
        return self not in _UNSUPPORTED


_BY_CHAR = {t.value: t for t in ItemType}

_DOWNLOADS = frozenset({
    ItemType.BINHEX,
    ItemType.DOS_FILE,
    ItemType.UUENCODED,
    ItemType.BINARY,
    ItemType.GIF,
    ItemType.IMAGE,
    ItemType.PNG,
    ItemType.SOUND,
    ItemType.DOCUMENT,
    ItemType.VIDEO,
    ItemType.MIME,
})

_TEXTS = frozenset({ItemType.TEXT, ItemType.XML, ItemType.CALENDAR})

_UNSUPPORTED = frozenset({ItemType.CSO_ENTITY, ItemType.MIRROR, ItemType.TELNET_3270})
