"""Tests for payload models and the environment descriptor."""

import sys
from unittest.mock import patch

from ga4 import Environment, Event, Payload, ValidationResponse, __version__


def test_payload_serializes_with_wire_names():
    payload = Payload(
        client_id="123.1700000000",
        user_id="user-42",
        timestamp_micros=1700000000000000,
        events=[Event(name="login", params={"method": "email"})],
    )
    assert payload.model_dump() == {
        "client_id": "123.1700000000",
        "user_id": "user-42",
        "timestamp_micros": 1700000000000000,
        "events": [{"name": "login", "params": {"method": "email"}}],
    }


def test_validation_response_parses_messages():
    response = ValidationResponse.model_validate_json(
        '{"validationMessages": [{"fieldPath": "events[0].name", '
        '"description": "too long", "validationCode": "VALUE_INVALID"}], "extra": 1}'
    )
    assert len(response.validation_messages) == 1
    message = response.validation_messages[0]
    assert message.field_path == "events[0].name"
    assert message.validation_code == "VALUE_INVALID"


def test_validation_response_defaults_to_no_messages():
    assert ValidationResponse.model_validate_json("{}").validation_messages == []


class TestEnvironment:
    """Tests for the environment descriptor."""

    def test_detect(self):
        environment = Environment.detect()
        assert environment.os == sys.platform
        assert environment.arch
        assert environment.version == __version__

    @patch("ga4.environment.platform.machine", return_value="")
    def test_detect_unknown_arch(self, mock_machine):
        assert Environment.detect().arch == "unknown"

    def test_as_params(self):
        environment = Environment(os="linux", arch="x86_64", version="1.0.0")
        assert environment.as_params() == {"os": "linux", "arch": "x86_64", "version": "1.0.0"}


def test_validation_response_accepts_null_messages():
    response = ValidationResponse.model_validate_json('{"validationMessages": null}')
    assert response.validation_messages == []
