"""Network transports for the terminal Gopher client."""

from .tcp_transport import TcpTransport

__all__ = ["TcpTransport"]
