"""Core components for the terminal Gopher client."""

from . import keys
from .keys import Key
from .action import Action, NoAction, Redraw, Status, Open, Error, Keypress, Prompt
from .item_type import ItemType
from .style import Style, style_for
from .url_parser import GopherUrl, parse_url, build_url
from .menu_parser import Line, Menu, parse_menu
from .menu_view import MenuView
from .stub_view import StubView
from .history import History

__all__ = [
    "keys",
    "Key",
    "Action",
    "NoAction",
    "Redraw",
    "Status",
    "Open",
    "Error",
    "Keypress",
    "Prompt",
    "ItemType",
    "Style",
    "style_for",
    "GopherUrl",
    "parse_url",
    "build_url",
    "Line",
    "Menu",
    "parse_menu",
    "MenuView",
    "StubView",
    "History",
]
