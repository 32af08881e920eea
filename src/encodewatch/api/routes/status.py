"""Status endpoints."""

from fastapi import APIRouter, Depends

from encodewatch.api.dependencies import get_session_manager
from encodewatch.models.errors import ValidationError
from encodewatch.pipeline.manager import SessionManager
from encodewatch.utils.timecode import format_milliseconds

router = APIRouter(prefix="/api/v1", tags=["status"])


@router.get("/status/{session_id}")
async def get_status(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Get the progress of an encode session."""
    state = manager.get_state(session_id)
    if not state:
        raise ValidationError(f"Session {session_id} not found")

    return {
        "session_id": state.session_id,
        "status": state.status.value,
        "elapsed": format_milliseconds(state.elapsed_ms),
        "total": format_milliseconds(state.total_ms),
        "elapsed_ms": state.elapsed_ms,
        "total_ms": state.total_ms,
        "fraction": state.fraction,
        "percent": state.percent,
        "is_encoding": state.is_encoding,
        "log": state.log,
        "returncode": state.returncode,
        "error": state.error,
        "output_size": state.output_size,
        "started_at": state.started_at.isoformat() if state.started_at else None,
        "updated_at": state.updated_at.isoformat() if state.updated_at else None,
        "completed_at": state.completed_at.isoformat() if state.completed_at else None,
    }


@router.get("/sessions")
async def list_sessions(manager: SessionManager = Depends(get_session_manager)):
    """List all known sessions with their status."""
    return [
        {"session_id": s.session_id, "status": s.status.value, "percent": s.percent}
        for s in manager.list_states()
    ]


@router.delete("/sessions/{session_id}")
async def forget_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Discard a finished session and its log."""
    manager.forget(session_id)
    return {"session_id": session_id, "message": "Session removed"}
