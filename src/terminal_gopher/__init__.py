"""Terminal client for the Gopher protocol."""

__version__ = "0.1.0"
