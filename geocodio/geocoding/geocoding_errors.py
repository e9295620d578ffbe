"""
Custom exceptions for the geocoding client.

Every failure raised by the client derives from GeocodioError so callers
can handle the whole domain with a single except clause, or pick out the
specific failure mode they care about.
"""

from typing import Optional


class GeocodioError(Exception):
    """Base exception for the geocoding client."""
    pass


class ValidationError(GeocodioError):
    """Raised when caller input (coordinates, enum values) is malformed."""
    pass


class UploadFileNotFoundError(GeocodioError, FileNotFoundError):
    """Raised when a list upload points at a file that does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File ({path}) not found")
        self.path = path


class RequestError(GeocodioError):
    """
    Raised when the API answers with an HTTP error response.

    The message is the ``error`` field of the response body, surfaced
    verbatim. The underlying requests exception is kept on ``cause``.
    """

    def __init__(self,
                 message: str,
                 status_code: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause


class TransportError(GeocodioError):
    """Raised when a request fails without a usable response (network, timeout)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
