"""Encode request and session state models."""

from datetime import datetime
from enum import StrEnum

import pydantic
from pydantic import BaseModel, Field, model_validator

from encodewatch.models.errors import ValidationError


class EncodeRequest(BaseModel):
    """Parameters for one encode run."""

    input_path: str = Field(..., description="Source media path")
    output_path: str = Field(..., description="Destination media path")
    args: list[str] = Field(default_factory=list, description="Encoder arguments")

    @model_validator(mode="after")
    def check_paths(self) -> "EncodeRequest":
        if not self.input_path or not self.output_path:
            raise ValueError("input_path and output_path are required")
        if self.input_path == self.output_path:
            raise ValueError("output_path must differ from input_path")
        return self


class SessionStatus(StrEnum):
    """Lifecycle of an encode session."""

    RUNNING = "running"
    CANCELLING = "cancelling"
    FINISHED = "finished"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.FINISHED, SessionStatus.FAILED, SessionStatus.CANCELLED)


class SessionState(BaseModel):
    """Latest known state of a session, as seen by a consumer."""

    session_id: str = Field(..., min_length=1)
    status: SessionStatus = Field(default=SessionStatus.RUNNING)
    input_path: str
    output_path: str
    total_ms: int = Field(default=0, ge=0)
    elapsed_ms: int = Field(default=0, ge=0)
    fraction: float | None = None
    percent: float | None = None
    is_encoding: bool = False
    log: str = ""
    events_seen: int = 0
    returncode: int | None = None
    error: str | None = None
    output_size: str | None = None
    started_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


def build_request(
    input_path: str, output_path: str, args: list[str] | None = None
) -> EncodeRequest:
    """Build an EncodeRequest, reporting bad paths as a ValidationError."""
    try:
        return EncodeRequest(input_path=input_path, output_path=output_path, args=args or [])
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid encode request",
            details={"errors": [err["msg"] for err in e.errors()]},
        )
