"""Error hierarchy and error response models."""

from pydantic import BaseModel, Field


class EncodeWatchError(Exception):
    """Base error for all EncodeWatch errors."""

    def __init__(self, message: str, component: str = "", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.component = component
        self.details = details or {}


class ValidationError(EncodeWatchError):
    """Invalid encode requests or unknown sessions."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="validation", details=details)


class LaunchError(EncodeWatchError):
    """The encoder binary could not be spawned."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="launcher", details=details)


class ProbeError(EncodeWatchError):
    """The source duration could not be determined."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="probe", details=details)


class StreamReadError(EncodeWatchError):
    """Reading the diagnostic stream failed mid-session."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="monitor", details=details)


class ErrorResponse(BaseModel):
    """Standardized error response for API."""

    error_type: str = Field(..., description="Error category")
    component: str = Field(default="", description="Component that raised the error")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict)
    actionable_guidance: str = Field(default="", description="Suggested user action")
    retry_possible: bool = Field(default=False)

    @classmethod
    def from_exception(
        cls, exc: EncodeWatchError, guidance: str = "", retry: bool = False
    ) -> "ErrorResponse":
        return cls(
            error_type=type(exc).__name__,
            component=exc.component,
            message=exc.message,
            details=exc.details,
            actionable_guidance=guidance,
            retry_possible=retry,
        )
