"""Content providers for the terminal Gopher client."""

from .internal_provider import INTERNAL_HOST, InternalProvider

__all__ = ["INTERNAL_HOST", "InternalProvider"]
