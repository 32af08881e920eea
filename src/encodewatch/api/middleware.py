"""Error handling middleware."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from encodewatch.models.errors import (
    EncodeWatchError,
    ErrorResponse,
    LaunchError,
    ProbeError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def encodewatch_error_handler(request: Request, exc: EncodeWatchError) -> JSONResponse:
    """Handle EncodeWatchError exceptions."""
    response = ErrorResponse.from_exception(exc, guidance=_get_guidance(exc))
    status_code = _get_status_code(exc)
    if status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=response.model_dump())


def _get_status_code(exc: EncodeWatchError) -> int:
    """Map error type to HTTP status code."""
    if isinstance(exc, ValidationError):
        return 400
    elif isinstance(exc, ProbeError):
        return 422
    elif isinstance(exc, LaunchError):
        return 503
    return 500


def _get_guidance(exc: EncodeWatchError) -> str:
    """Generate actionable guidance based on error type."""
    if isinstance(exc, ValidationError):
        return "Check the session id and the input and output paths."
    elif isinstance(exc, ProbeError):
        return "Check that the input file exists and is a readable media file."
    elif isinstance(exc, LaunchError):
        return "Install FFmpeg or set ENCODEWATCH_FFMPEG_BINARY."
    return "Inspect the encoder log for details."
