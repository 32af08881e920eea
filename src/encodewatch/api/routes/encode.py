"""Encode start and cancel endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from encodewatch.api.dependencies import get_session_manager
from encodewatch.models.errors import ValidationError
from encodewatch.models.session import build_request
from encodewatch.pipeline.manager import SessionManager

router = APIRouter(prefix="/api/v1", tags=["encode"])


class EncodeBody(BaseModel):
    input_path: str
    output_path: str
    args: list[str] = Field(default_factory=list)


@router.post("/encode")
def start_encode(
    body: EncodeBody,
    manager: SessionManager = Depends(get_session_manager),
):
    """Probe the input and start encoding it in the background."""
    state = manager.start(build_request(body.input_path, body.output_path, body.args))
    return {
        "session_id": state.session_id,
        "status": state.status.value,
        "total_ms": state.total_ms,
        "message": "Encoding started",
    }


@router.delete("/encode/{session_id}")
async def cancel_encode(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Cancel a running encode."""
    if not manager.cancel(session_id):
        state = manager.get_state(session_id)
        raise ValidationError(
            f"Session {session_id} is not running",
            details={"status": state.status.value if state else None},
        )
    return {
        "session_id": session_id,
        "status": "cancelling",
        "message": "Cancellation requested",
    }
