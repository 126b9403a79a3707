"""Measurement Protocol client that sends one event per request.

Events are posted to https://www.google-analytics.com/mp/collect, or to the
validation endpoint /debug/mp/collect when the client is in debug mode.
See https://developers.google.com/analytics/devguides/collection/protocol/ga4
"""

from __future__ import annotations

import logging
import math
import random
import sys
import time
from typing import Any, Callable, Dict, Optional

import httpx
import uuid6
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ga4.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, GA4Config, set_log_level
from ga4.environment import Environment
from ga4.exceptions import (
    IdentifierGenerationError,
    ResponseParseError,
    ResponseReadError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
)
from ga4.models import Event, Payload, ValidationResponse

logger = logging.getLogger("ga4")

set_log_level()


def _print_diagnostic(message: str) -> None:
    print(message, file=sys.stderr)


def _generate_user_id() -> str:
    try:
        return str(uuid6.uuid7())
    except Exception as e:
        raise IdentifierGenerationError(f"generate user ID failed: {e}") from e


def _contains_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value) or math.isinf(value)
    if isinstance(value, dict):
        return any(_contains_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple, set)):
        return any(_contains_non_finite(v) for v in value)
    return False


class GA4Client:
    """Sends analytics events to a GA4 property."""

    def __init__(
        self,
        measurement_id: str,
        api_secret: str,
        user_id: str = "",
        debug: bool = False,
        *,
        environment: Optional[Environment] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        diagnostic: Optional[Callable[[str], None]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        endpoint: str = DEFAULT_ENDPOINT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            measurement_id: ID of the GA4 data stream (G-XXXXXXX)
            api_secret: Measurement Protocol API secret of the data stream
            user_id: Stable user ID; a UUIDv7 is generated when empty
            debug: Send to the validation endpoint and print diagnostics
            environment: os/arch/version attached to every event (detected if omitted)
            rng: Random source for per-request client IDs
            clock: Returns the current unix time in seconds
            diagnostic: Receives debug-mode diagnostic messages (stderr if omitted)
            timeout: Request timeout in seconds
            endpoint: Scheme and host of the collection service
            transport: Optional httpx transport, mainly for testing

        Raises:
            IdentifierGenerationError: If no user ID was given and generating one failed
        """
        self._measurement_id = measurement_id
        self._api_secret = api_secret
        self._user_id = user_id or _generate_user_id()
        self._debug = debug
        self.environment = environment or Environment.detect()
        self.rng = rng or random.Random()
        self.clock = clock or time.time
        self.diagnostic = diagnostic or _print_diagnostic
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.monotonic = time.monotonic
        self.http_client = httpx.Client(timeout=timeout, transport=transport)

        logger.debug(
            f"Initialized GA4 client for {measurement_id} (user ID: {self._user_id}, debug: {debug})"
        )

    @classmethod
    def from_config(cls, config: GA4Config, **kwargs: Any) -> GA4Client:
        """Create a client from a GA4Config.

        Args:
            config: Client settings
            **kwargs: Extra keyword arguments passed to the constructor
        """
        return cls(
            config.measurement_id,
            config.api_secret,
            config.user_id,
            config.debug,
            timeout=config.timeout,
            endpoint=config.endpoint,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> GA4Client:
        """Create a client from GA4_* environment variables."""
        return cls.from_config(GA4Config.from_env(), **kwargs)

    @property
    def measurement_id(self) -> str:
        return self._measurement_id

    @property
    def api_secret(self) -> str:
        return self._api_secret

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def debug(self) -> bool:
        return self._debug

    def collect_url(self) -> str:
        """Return the collection URL, including credentials as query parameters."""
        path = "/debug/mp/collect" if self._debug else "/mp/collect"
        url = httpx.URL(
            f"{self.endpoint}{path}",
            params={"api_secret": self._api_secret, "measurement_id": self._measurement_id},
        )
        return str(url)

    def build_payload(self, event: Event) -> Payload:
        """Build the request payload for a single event.

        The event parameters are copied before os, arch and version are set,
        so the caller's event is left untouched.
        """
        params: Dict[str, Any] = dict(event.params or {})
        params.update(self.environment.as_params())

        now = self.clock()
        return Payload(
            client_id=f"{self.rng.randrange(2**31)}.{int(now)}",
            user_id=self._user_id,
            timestamp_micros=int(now * 1_000_000),
            events=[Event(name=event.name, params=params)],
        )

    def send_event(self, event: Event) -> None:
        """Send one event to Google Analytics.

        The whole exchange, including the response body read in debug mode,
        must finish within the client timeout.

        Args:
            event: Event to send

        Raises:
            SerializationError: If the payload cannot be encoded as JSON
            TransportError: If the request could not be sent or timed out
            UnexpectedStatusError: If the response status is 300 or above
            ResponseReadError: In debug mode, if the response body cannot be read in time
            ResponseParseError: In debug mode, if the response body is not a validation response
        """
        url = self.collect_url()
        payload = self.build_payload(event)

        if self._debug:
            self._emit(f"[DEBUG] send GA4 event {url} {payload!r}")

        if any(_contains_non_finite(e.params) for e in payload.events):
            logger.debug("Failed to serialize GA4 payload: NaN or infinite parameter value")
            raise SerializationError("marshal GA4 request payload failed")

        try:
            body = payload.model_dump_json()
        except PydanticSerializationError as e:
            logger.debug(f"Failed to serialize GA4 payload: {e}")
            raise SerializationError("marshal GA4 request payload failed") from e

        logger.debug(f"Sending GA4 event: {event.name}")

        deadline = self.monotonic() + self.timeout
        try:
            with self.http_client.stream(
                "POST", url, content=body, headers={"Content-Type": "application/json"}
            ) as response:
                if self.monotonic() > deadline:
                    logger.debug(f"GA4 request exceeded {self.timeout}s")
                    raise TransportError(f"request GA4 timed out after {self.timeout}s")
                self._handle_response(response, deadline)
        except httpx.HTTPError as e:
            logger.debug(f"GA4 request failed: {e}")
            raise TransportError("request GA4 failed") from e

    def _handle_response(self, response: httpx.Response, deadline: float) -> None:
        if response.status_code >= 300:
            logger.debug(f"GA4 responded with status {response.status_code}")
            raise UnexpectedStatusError(response.status_code)

        if not self._debug:
            return

        chunks = []
        try:
            for chunk in response.iter_bytes():
                if self.monotonic() > deadline:
                    raise ResponseReadError(
                        f"read GA4 response body timed out after {self.timeout}s"
                    )
                chunks.append(chunk)
        except httpx.HTTPError as e:
            raise ResponseReadError("read GA4 response body failed") from e

        try:
            validation_response = ValidationResponse.model_validate_json(b"".join(chunks))
        except ValidationError as e:
            raise ResponseParseError("unmarshal GA4 response body failed") from e

        self._emit(
            f"[DEBUG] get GA4 validation response {response.status_code} {validation_response!r}"
        )

    def _emit(self, message: str) -> None:
        try:
            self.diagnostic(message)
        except Exception as e:
            logger.debug(f"Diagnostic sink failed: {e}")

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()

    def __enter__(self) -> GA4Client:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
