"""Abstract interface for views shown by the browser."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.action import Action
    from ..core.keys import Key


class View(ABC):
    """Something the browser can draw and send keypresses to."""

    @abstractmethod
    def render(self) -> str:
        """Render the current state as a full screen of terminal output."""
        pass

    @abstractmethod
    def respond(self, key: "Key") -> "Action":
        """Handle a keypress and return what the browser should do."""
        pass

    @abstractmethod
    def url(self) -> str:
        """The URL this view represents."""
        pass

    @abstractmethod
    def raw(self) -> str:
        """The raw response this view was built from."""
        pass

    @abstractmethod
    def set_viewport(self, cols: int, rows: int) -> None:
        """Tell the view how big the terminal currently is."""
        pass
