"""Encode session: one running encoder process and its progress stream."""

import logging
import queue
import subprocess
import threading
import uuid
from collections.abc import Iterator

from encodewatch.config import get_settings
from encodewatch.models.errors import EncodeWatchError, StreamReadError
from encodewatch.models.progress import ProgressEvent
from encodewatch.models.session import EncodeRequest, SessionStatus
from encodewatch.monitor.parser import ProgressParser
from encodewatch.monitor.tokenizer import iter_tokens
from encodewatch.process.launcher import ProcessLauncher

logger = logging.getLogger(__name__)

_END = object()


class EncodeSession:
    """Owns an encoder process and parses its diagnostic stream on a background thread.

    Events are delivered through :meth:`events`, a single-use iterator that ends
    when the stream closes or the session is cancelled.
    """

    def __init__(
        self,
        request: EncodeRequest,
        total_ms: int,
        process: subprocess.Popen,
        launcher: ProcessLauncher,
        session_id: str | None = None,
    ):
        settings = get_settings()
        self.session_id = session_id or str(uuid.uuid4())
        self.request = request
        self.total_ms = total_ms
        self.process = process
        self.launcher = launcher
        self.status = SessionStatus.RUNNING
        self.error: EncodeWatchError | None = None
        self.returncode: int | None = None
        self.last_event: ProgressEvent | None = None

        self._parser = ProgressParser(total_ms, frame_marker=settings.frame_stat_marker)
        self._chunk_size = settings.read_chunk_size
        self._encoding = settings.stream_encoding
        self._queue: queue.Queue = queue.Queue()
        self._cancelled = threading.Event()
        self._consumed = False
        self._stream_closed = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(
            target=self._run, name=f"encodewatch-{self.session_id[:8]}", daemon=True
        )

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def is_encoding(self) -> bool:
        return self._parser.state.is_encoding

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self.status.is_terminal

    def start(self) -> "EncodeSession":
        self._thread.start()
        return self

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the parse loop to finish; returns True if it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def events(self) -> Iterator[ProgressEvent]:
        """Yield progress events in stream order. May only be called once."""
        with self._lock:
            if self._consumed:
                raise RuntimeError("Event stream already consumed")
            self._consumed = True
        return self._drain()

    def _drain(self) -> Iterator[ProgressEvent]:
        while True:
            item = self._queue.get()
            if item is _END or self._cancelled.is_set():
                return
            yield item

    def cancel(self) -> bool:
        """Ask the encoder to terminate without waiting for it to exit.

        Returns True if a termination request was sent by this call.
        """
        with self._lock:
            if self._cancelled.is_set() or self._stream_closed:
                return False
            self._cancelled.set()
            self.status = SessionStatus.CANCELLING
        logger.info("Cancelling session %s (pid %s)", self.session_id, self.pid)
        try:
            self.process.terminate()
        except OSError as e:
            logger.warning("Terminate failed for pid %s: %s", self.pid, e)
        self._queue.put(_END)
        return True

    def _run(self) -> None:
        try:
            for token in iter_tokens(self.process.stderr, self._chunk_size, self._encoding):
                event = self._parser.feed(token)
                if event is None or self._cancelled.is_set():
                    continue
                self.last_event = event
                self._queue.put(event)
        except OSError as e:
            if not self._cancelled.is_set():
                self.error = StreamReadError(
                    f"Reading encoder output failed: {e}",
                    details={"session_id": self.session_id, "error": str(e)},
                )
                logger.error("Session %s: %s", self.session_id, self.error.message)
        finally:
            self._finish()

    def _finish(self) -> None:
        with self._lock:
            self._stream_closed = True
            cancelled = self._cancelled.is_set()

        if cancelled:
            self.launcher.reap(self.process)
        else:
            if self.error is not None:
                self.process.kill()
            self.returncode = self.process.wait()
            if self.process.stderr is not None:
                self.process.stderr.close()

        with self._lock:
            if cancelled:
                self.status = SessionStatus.CANCELLED
            elif self.error is None and self.returncode == 0:
                self.status = SessionStatus.FINISHED
            else:
                self.status = SessionStatus.FAILED

        if self.status is SessionStatus.FAILED and self.error is None:
            logger.error(
                "Session %s: encoder exited with code %s", self.session_id, self.returncode
            )
        else:
            logger.info("Session %s ended: %s", self.session_id, self.status.value)
        if not self.is_encoding and not cancelled:
            logger.warning("Session %s never reached steady-state encoding", self.session_id)
        self._queue.put(_END)
