"""Abstract interface for fetching Gopher resources."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable


class DownloadCancelled(Exception):
    """Raised when the user interrupts a download."""

    pass


class GopherTransport(ABC):
    """Abstract interface for talking to Gopher servers."""

    @abstractmethod
    def fetch(self, host: str, port: str, selector: str) -> str:
        """Fetch a selector and return the whole response as text.

        Args:
            host: Server hostname or IP address.
            port: Server port, as it appears in the URL.
            selector: Selector to request. A "?" starts a search query.

        Raises:
            OSError: On connection, DNS or timeout failures.
        """
        pass

    @abstractmethod
    def download(
        self,
        host: str,
        port: str,
        selector: str,
        dest: Path,
        should_cancel: Callable[[], bool],
    ) -> int:
        """Stream a selector's response into a file.

        Args:
            host: Server hostname or IP address.
            port: Server port.
            selector: Selector to request.
            dest: File to write.
            should_cancel: Polled between chunks; returning True aborts.

        Returns:
            Number of bytes written.

        Raises:
            DownloadCancelled: If should_cancel returned True.
            OSError: On network or file errors.
        """
        pass
