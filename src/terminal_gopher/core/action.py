"""Actions a view returns to the browser in response to a keypress."""

from abc import ABC
from dataclasses import dataclass
from typing import Callable

from .keys import Key


class Action(ABC):
    """Base class for all actions."""

    pass


@dataclass(frozen=True)
class NoAction(Action):
    """Nothing changed; nothing to draw."""

    pass


@dataclass(frozen=True)
class Redraw(Action):
    """The whole view needs to be drawn again."""

    pass


@dataclass(frozen=True)
class Status(Action):
    """Only the status line changed. `text` is ready to write."""

    text: str


@dataclass(frozen=True)
class Open(Action):
    """Navigate to a URL."""

    label: str
    url: str


@dataclass(frozen=True)
class Error(Action):
    """Show an error message on the status line."""

    message: str


@dataclass(frozen=True)
class Keypress(Action):
    """A key the view doesn't handle, passed through to the browser."""

    key: Key


@dataclass(frozen=True)
class Prompt(Action):
    """Ask the user for a line of input.

    The browser reads the input and hands it to `on_submit`, which
    returns the follow-up action. Cancelling the prompt drops it.
    """

    label: str
    on_submit: Callable[[str], Action]
