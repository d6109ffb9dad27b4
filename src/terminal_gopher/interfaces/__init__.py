"""Abstract interfaces for the terminal Gopher client."""

from .content_provider import ContentProvider
from .gopher_transport import DownloadCancelled, GopherTransport
from .view import View

__all__ = ["ContentProvider", "DownloadCancelled", "GopherTransport", "View"]
