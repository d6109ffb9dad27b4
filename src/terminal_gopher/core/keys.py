"""Keypress values shared by the terminal, the views and the browser."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Key:
    """A single decoded keypress.

    `code` is "char" for a typed character, "ctrl" for a control
    combination, or the name of a special key ("up", "pagedown", ...).
    `value` holds the character for "char" and "ctrl" keys.
    """

    code: str
    value: str = ""

    def is_char(self) -> bool:
        return self.code == "char"

    def is_ctrl(self, c: str | None = None) -> bool:
        return self.code == "ctrl" and (c is None or self.value == c)

    def __str__(self) -> str:
        if self.code == "char":
            return repr(self.value)
        if self.code == "ctrl":
            return f"ctrl-{self.value}"
        return self.code


def char(c: str) -> Key:
    """Key for a typed character."""
    return Key("char", c)


def ctrl(c: str) -> Key:
    """Key for a ctrl-<c> combination."""
    return Key("ctrl", c)


UP = Key("up")
DOWN = Key("down")
LEFT = Key("left")
RIGHT = Key("right")
PAGE_UP = Key("pageup")
PAGE_DOWN = Key("pagedown")
HOME = Key("home")
END = Key("end")
BACKSPACE = Key("backspace")
DELETE = Key("delete")
ESC = Key("esc")
ENTER = char("\n")
