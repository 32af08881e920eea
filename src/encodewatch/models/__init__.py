"""Data models for EncodeWatch."""

from encodewatch.models.errors import (
    EncodeWatchError,
    ErrorResponse,
    LaunchError,
    ProbeError,
    StreamReadError,
    ValidationError,
)
from encodewatch.models.progress import EventKind, ProgressEvent, ProgressState, TimeCode
from encodewatch.models.session import EncodeRequest, SessionState, SessionStatus

__all__ = [
    "EncodeRequest",
    "EncodeWatchError",
    "ErrorResponse",
    "EventKind",
    "LaunchError",
    "ProbeError",
    "ProgressEvent",
    "ProgressState",
    "SessionState",
    "SessionStatus",
    "StreamReadError",
    "TimeCode",
    "ValidationError",
]
