"""Time-code and progress data models."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from encodewatch.utils.timecode import to_milliseconds


class TimeCode(BaseModel):
    """An hours:minutes:seconds.hundredths value as printed by the encoder."""

    model_config = ConfigDict(frozen=True)

    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0)
    hundredths: int = Field(default=0, ge=0)

    @property
    def milliseconds(self) -> int:
        return to_milliseconds(self.hours, self.minutes, self.seconds, self.hundredths)


class EventKind(StrEnum):
    """What caused a progress event to be emitted."""

    TICK = "tick"
    PHASE = "phase"


class ProgressEvent(BaseModel):
    """Immutable snapshot of encode progress."""

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(..., ge=1)
    kind: EventKind
    elapsed_ms: int = Field(..., ge=0)
    total_ms: int = Field(..., ge=0)
    fraction: float | None = Field(
        default=None, description="elapsed_ms / total_ms, unclamped; None when total is 0"
    )
    is_encoding: bool = False
    log: str = ""
    emitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def percent(self) -> float | None:
        """Display percentage clamped to [0, 100]."""
        if self.fraction is None:
            return None
        return max(0.0, min(100.0, self.fraction * 100))

    @property
    def overrun(self) -> bool:
        return self.fraction is not None and self.fraction > 1.0


class ProgressState(BaseModel):
    """Mutable per-session progress, written only by the parse loop."""

    total_ms: int = Field(..., ge=0)
    elapsed_ms: int = Field(default=0, ge=0)
    fraction: float | None = None
    is_encoding: bool = False
    log_blocks: list[str] = Field(default_factory=list)
    log: str = Field(default="", description="Concatenation of log_blocks")
    events_emitted: int = 0

    def append_log(self, block: str) -> None:
        self.log_blocks.append(block)
        self.log += block

    def snapshot(self, kind: EventKind) -> ProgressEvent:
        """Record one more emission and return it as an immutable event."""
        self.events_emitted += 1
        return ProgressEvent(
            sequence=self.events_emitted,
            kind=kind,
            elapsed_ms=self.elapsed_ms,
            total_ms=self.total_ms,
            fraction=self.fraction,
            is_encoding=self.is_encoding,
            log=self.log,
        )
