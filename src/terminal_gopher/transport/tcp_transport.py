"""Plain TCP transport for Gopher requests."""

import logging
import socket
from pathlib import Path
from typing import Callable

from pubsub import pub

from ..interfaces import DownloadCancelled, GopherTransport

logger = logging.getLogger(__name__)

# pypubsub topic for download progress
PROGRESS_TOPIC = "terminal_gopher.download.progress"

CHUNK_SIZE = 8192


def _progress_listener(url, received):
    """Bytes received so far while downloading `url`."""


pub.getDefaultTopicMgr().getOrCreateTopic(PROGRESS_TOPIC, _progress_listener)


class TcpTransport(GopherTransport):
    """Fetches Gopher resources over a plain TCP connection.

    Every request is a fresh connection: send the selector, read until
    the server closes.
    """

    def __init__(self, timeout: float = 10.0, encoding: str = "utf-8"):
        """
        Initialize the transport.

        Args:
            timeout: Seconds to wait when connecting and between reads.
            encoding: Text encoding used to decode responses.
        """
        self.timeout = timeout
        self.encoding = encoding

    def fetch(self, host: str, port: str, selector: str) -> str:
        """
        Fetch a selector and return the decoded response.

        Raises:
            OSError: If the connection fails or times out.
            ValueError: If the port isn't a number.
        """
        logger.info(f"Fetching {host}:{port} {selector!r}")
        chunks = []
        with self._request(host, port, selector) as sock:
            while True:
                chunk = sock.recv(CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)

        body = b"".join(chunks)
        logger.debug(f"Received {len(body)} bytes from {host}:{port}")
        return body.decode(self.encoding, errors="replace")

    def download(
        self,
        host: str,
        port: str,
        selector: str,
        dest: Path,
        should_cancel: Callable[[], bool],
    ) -> int:
        """
        Stream a selector's response into `dest`.

        `should_cancel` is checked between chunks; if it returns True
        the partial file is removed and DownloadCancelled is raised.
        Progress is published on PROGRESS_TOPIC after each chunk.

        Returns:
            Number of bytes written.
        """
        url = f"{host}:{port}{selector}"
        logger.info(f"Downloading {url} to {dest}")
        received = 0
        try:
            with self._request(host, port, selector) as sock, open(dest, "wb") as f:
                while True:
                    if should_cancel():
                        raise DownloadCancelled(f"Download cancelled: {url}")
                    chunk = sock.recv(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    received += len(chunk)
                    pub.sendMessage(PROGRESS_TOPIC, url=url, received=received)
        except (DownloadCancelled, OSError):
            Path(dest).unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded {received} bytes to {dest}")
        return received

    def _request(self, host: str, port: str, selector: str) -> socket.socket:
        """Connect and send the request line. The caller closes the socket."""
        try:
            port_num = int(port)
        except ValueError:
            raise ValueError(f"Invalid port: {port!r}")

        sock = socket.create_connection((host, port_num), timeout=self.timeout)
        try:
            # search queries go after a tab on the wire
            request = selector.replace("?", "\t") + "\r\n"
            sock.sendall(request.encode(self.encoding))
        except OSError:
            sock.close()
            raise
        return sock
