"""Models for Measurement Protocol payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    """A single analytics event with optional parameters."""

    name: str
    params: Optional[Dict[str, Any]] = None


class Payload(BaseModel):
    """Request body posted to the collection endpoint."""

    client_id: str
    user_id: str
    timestamp_micros: int
    events: List[Event] = Field(default_factory=list)


class ValidationMessage(BaseModel):
    """One finding reported by the validation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    field_path: Optional[str] = Field(default=None, alias="fieldPath")
    description: Optional[str] = None
    validation_code: Optional[str] = Field(default=None, alias="validationCode")


class ValidationResponse(BaseModel):
    """Body returned by the debug endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    validation_messages: List[ValidationMessage] = Field(
        default_factory=list, alias="validationMessages"
    )

    @field_validator("validation_messages", mode="before")
    @classmethod
    def _null_messages(cls, value: Any) -> Any:
        return [] if value is None else value
