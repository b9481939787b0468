class FaviconError(Exception):
    """Base class for errors raised by the favicon resolver."""


class InvalidArgument(FaviconError, ValueError):
    """Raised when resolve() is called with malformed links, strategies or fallback."""
