"""Abstract interface for content served without a network request."""

from abc import ABC, abstractmethod


class ContentProvider(ABC):
    """Abstract interface for built-in gopher content."""

    @abstractmethod
    def lookup(self, selector: str) -> str | None:
        """Return the gophermap for a selector, or None if there is none."""
        pass

    @abstractmethod
    def selectors(self) -> list[str]:
        """List the selectors this provider serves."""
        pass
