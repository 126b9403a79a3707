"""Client for the Google Analytics 4 Measurement Protocol.

It provides a low-overhead way to report anonymous usage events.
"""

__version__ = "0.1.0"

from ga4.client import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, GA4Client
from ga4.config import GA4Config, set_log_level
from ga4.environment import Environment
from ga4.exceptions import (
    GA4Error,
    IdentifierGenerationError,
    ResponseParseError,
    ResponseReadError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
)
from ga4.models import Event, Payload, ValidationMessage, ValidationResponse


__all__ = [
    "__version__",
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "GA4Client",
    "GA4Config",
    "set_log_level",
    "Environment",
    "GA4Error",
    "IdentifierGenerationError",
    "ResponseParseError",
    "ResponseReadError",
    "SerializationError",
    "TransportError",
    "UnexpectedStatusError",
    "Event",
    "Payload",
    "ValidationMessage",
    "ValidationResponse",
]
