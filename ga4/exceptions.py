"""Exceptions raised by the GA4 client."""

from typing import Optional


class GA4Error(Exception):
    """Base exception for all GA4 client errors."""

    pass


class IdentifierGenerationError(GA4Error):
    """Raised when a user ID could not be generated."""

    pass


class SerializationError(GA4Error):
    """Raised when the request payload cannot be encoded as JSON."""

    pass


class TransportError(GA4Error):
    """Raised when the request could not be sent or timed out."""

    pass


class UnexpectedStatusError(GA4Error):
    """Raised when the collection endpoint answers with a status >= 300."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"validation response got unexpected status {status_code}")


class ResponseReadError(GA4Error):
    """Raised when the validation response body cannot be read."""

    pass


class ResponseParseError(GA4Error):
    """Raised when the validation response body is not valid JSON."""

    pass
