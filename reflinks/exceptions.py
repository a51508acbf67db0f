"""
Custom exceptions for reference filling operations.
"""


class ReflinksError(Exception):
    """Base exception for reflinks errors."""

    pass


class LinkHandlerError(ReflinksError):
    """Raised when a link handler cannot retrieve metadata for a URL."""

    def __init__(self, message: str = "", code: int = 0):
        super().__init__(message)
        self.message = message
        self.code = code


class WikiError(ReflinksError):
    """Raised when the source page cannot be retrieved from a wiki."""

    pass


class ConfigurationError(ReflinksError):
    """Raised when a configuration file is invalid."""

    pass
