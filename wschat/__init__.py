"""A terminal WebSocket chat client with its message protocol and page rendering."""

__version__ = "0.1.0"
__all__ = ["__version__"]