"""Configuration for the GA4 client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_ENDPOINT = "https://www.google-analytics.com"
DEFAULT_TIMEOUT = 5.0

TRUTHY_VALUES = ("1", "true", "yes", "on")

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def set_log_level(level: Optional[int] = None) -> None:
    """Set the logging level for the ga4 logger.

    By default, checks the GA4_LOG_LEVEL environment variable ("DEBUG",
    "INFO", "WARNING" or "ERROR"). Unset or unrecognized values fall back to
    logging.WARNING, so client logs only show up when explicitly requested.

    Args:
        level: The logging level to set (overrides environment variable if provided)
    """
    if level is None:
        env_level = os.environ.get("GA4_LOG_LEVEL", "WARNING").upper()
        level = LOG_LEVELS.get(env_level, logging.WARNING)

    logging.getLogger("ga4").setLevel(level)


@dataclass
class GA4Config:
    """Settings needed to build a GA4Client."""

    measurement_id: str
    api_secret: str
    user_id: str = ""
    debug: bool = False
    timeout: float = DEFAULT_TIMEOUT
    endpoint: str = DEFAULT_ENDPOINT

    @classmethod
    def from_env(cls) -> GA4Config:
        """Load config from environment variables.

        GA4_MEASUREMENT_ID and GA4_API_SECRET are required.

        Raises:
            ValueError: If a required variable is missing or GA4_TIMEOUT is not a number
        """
        measurement_id = os.environ.get("GA4_MEASUREMENT_ID", "")
        api_secret = os.environ.get("GA4_API_SECRET", "")
        if not measurement_id or not api_secret:
            raise ValueError("GA4_MEASUREMENT_ID and GA4_API_SECRET must be set")

        return cls(
            measurement_id=measurement_id,
            api_secret=api_secret,
            user_id=os.environ.get("GA4_USER_ID", ""),
            debug=os.environ.get("GA4_DEBUG", "").lower() in TRUTHY_VALUES,
            timeout=float(os.environ.get("GA4_TIMEOUT", DEFAULT_TIMEOUT)),
            endpoint=os.environ.get("GA4_ENDPOINT", DEFAULT_ENDPOINT).rstrip("/"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary, with the API secret masked."""
        return {
            "measurement_id": self.measurement_id,
            "api_secret": "***" if self.api_secret else "",
            "user_id": self.user_id,
            "debug": self.debug,
            "timeout": self.timeout,
            "endpoint": self.endpoint,
        }
