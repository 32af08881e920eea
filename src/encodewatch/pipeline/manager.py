"""Session manager: tracks concurrent encode sessions for status reporting."""

import logging
import threading
from datetime import UTC, datetime
from pathlib import Path

from encodewatch.models.errors import ValidationError
from encodewatch.models.progress import ProgressEvent
from encodewatch.models.session import EncodeRequest, SessionState, SessionStatus
from encodewatch.monitor.engine import ProgressMonitor
from encodewatch.monitor.session import EncodeSession
from encodewatch.process.launcher import exit_status
from encodewatch.utils.format_utils import byte_count_decimal

logger = logging.getLogger(__name__)


class SessionManager:
    """Starts sessions and mirrors each one's event stream into a SessionState."""

    def __init__(self, monitor: ProgressMonitor | None = None):
        self.monitor = monitor or ProgressMonitor()
        self._sessions: dict[str, EncodeSession] = {}
        self._states: dict[str, SessionState] = {}
        self._consumers: dict[str, threading.Thread] = {}
        self._lock = threading.Lock()

    def start(self, request: EncodeRequest) -> SessionState:
        """Start an encode and return its initial state."""
        session = self.monitor.start_request(request)
        now = datetime.now(UTC)
        state = SessionState(
            session_id=session.session_id,
            input_path=request.input_path,
            output_path=request.output_path,
            total_ms=session.total_ms,
            started_at=now,
            updated_at=now,
        )
        consumer = threading.Thread(
            target=self._consume,
            args=(session,),
            name=f"encodewatch-consumer-{session.session_id[:8]}",
            daemon=True,
        )
        with self._lock:
            self._sessions[session.session_id] = session
            self._states[session.session_id] = state
            self._consumers[session.session_id] = consumer
        consumer.start()
        return state.model_copy()

    def get_state(self, session_id: str) -> SessionState | None:
        with self._lock:
            state = self._states.get(session_id)
            return state.model_copy() if state else None

    def list_states(self) -> list[SessionState]:
        with self._lock:
            return [s.model_copy() for s in self._states.values()]

    def cancel(self, session_id: str) -> bool:
        """Request termination of a running session."""
        session = self._get_session(session_id)
        sent = session.cancel()
        if sent:
            with self._lock:
                state = self._states[session_id]
                if not state.status.is_terminal:
                    state.status = SessionStatus.CANCELLING
                    state.updated_at = datetime.now(UTC)
        return sent

    def wait(self, session_id: str, timeout: float | None = None) -> SessionState:
        """Block until the session's consumer has recorded its final state."""
        self._get_session(session_id)
        with self._lock:
            consumer = self._consumers[session_id]
        consumer.join(timeout)
        return self.get_state(session_id)

    def forget(self, session_id: str) -> None:
        """Drop a finished session from the registry."""
        session = self._get_session(session_id)
        if not session.done:
            raise ValidationError(
                f"Session {session_id} is still running",
                details={"status": session.status.value},
            )
        with self._lock:
            del self._sessions[session_id]
            del self._states[session_id]
            del self._consumers[session_id]

    def _get_session(self, session_id: str) -> EncodeSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise ValidationError(f"Session {session_id} not found")
        return session

    def _consume(self, session: EncodeSession) -> None:
        for event in session.events():
            self._apply_event(session.session_id, event)
        session.join()
        self._complete(session)

    def _apply_event(self, session_id: str, event: ProgressEvent) -> None:
        self._update(
            session_id,
            elapsed_ms=event.elapsed_ms,
            fraction=event.fraction,
            percent=event.percent,
            is_encoding=event.is_encoding,
            log=event.log,
            events_seen=event.sequence,
        )

    def _complete(self, session: EncodeSession) -> None:
        fields = {"status": session.status, "completed_at": datetime.now(UTC)}
        if session.returncode is not None:
            fields["returncode"] = exit_status(session.returncode)[0]
        if session.error is not None:
            fields["error"] = session.error.message
        elif session.status is SessionStatus.FAILED:
            fields["error"] = f"Encoder exited with code {session.returncode}"
        output = Path(session.request.output_path)
        if session.status is SessionStatus.FINISHED and output.exists():
            fields["output_size"] = byte_count_decimal(output.stat().st_size)
        self._update(session.session_id, **fields)
        logger.info("Session %s recorded as %s", session.session_id, session.status.value)

    def _update(self, session_id: str, **fields) -> None:
        with self._lock:
            state = self._states.get(session_id)
            if state is None:
                return
            for name, value in fields.items():
                setattr(state, name, value)
            state.updated_at = datetime.now(UTC)
