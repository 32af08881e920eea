"""Streaming parser for encoder progress output."""

import logging
import re

from encodewatch.models.progress import EventKind, ProgressEvent, ProgressState
from encodewatch.utils.timecode import parse_timecode

logger = logging.getLogger(__name__)

ELAPSED_PATTERN = re.compile(r"time=(\d{2}):(\d{2}):(\d{2})\.(\d{2})")
SPEED_PATTERN = re.compile(r"speed=\d+\.\d+x")


def normalize_log_block(tokens: list[str], frame_marker: str = "frame=") -> str:
    """Join statistics tokens so each frame report starts on its own line."""
    block = " ".join(tokens)
    block = block.replace(frame_marker, "\n" + frame_marker)
    return block.replace("= ", "=")


class ProgressParser:
    """Classifies diagnostic tokens and keeps the running ProgressState.

    Tokens seen before the first throughput marker belong to startup and
    analysis output and are dropped. Once encoding, every token is collected
    until the next throughput marker flushes the collection into the log.
    """

    def __init__(self, total_ms: int, frame_marker: str = "frame="):
        self.state = ProgressState(total_ms=total_ms)
        self.frame_marker = frame_marker
        self._pending: list[str] = []
        self._warned_zero = False
        self._warned_overrun = False

    def feed(self, token: str) -> ProgressEvent | None:
        """Consume one token, returning an event if it carried new information."""
        if self.state.is_encoding:
            self._pending.append(token)

        match = ELAPSED_PATTERN.search(token)
        if match:
            return self._on_elapsed(parse_timecode(match.groups()))

        if SPEED_PATTERN.search(token):
            return self._on_speed()

        return None

    def _on_elapsed(self, elapsed_ms: int) -> ProgressEvent:
        state = self.state
        state.elapsed_ms = elapsed_ms
        if state.total_ms == 0:
            state.fraction = None
            if not self._warned_zero:
                logger.warning("Total duration is 0 ms; progress fraction is undefined")
                self._warned_zero = True
        else:
            state.fraction = elapsed_ms / state.total_ms
            if state.fraction > 1.0 and not self._warned_overrun:
                logger.warning(
                    "Elapsed %d ms exceeds total %d ms", elapsed_ms, state.total_ms
                )
                self._warned_overrun = True
        return state.snapshot(EventKind.TICK)

    def _on_speed(self) -> ProgressEvent | None:
        state = self.state
        if not state.is_encoding:
            state.is_encoding = True
            self._flush()
            logger.debug("Encoder reached steady-state encoding")
            return state.snapshot(EventKind.PHASE)

        if all(SPEED_PATTERN.search(t) for t in self._pending):
            self._pending.clear()
            return None
        self._flush()
        return state.snapshot(EventKind.PHASE)

    def _flush(self) -> None:
        if self._pending:
            self.state.append_log(normalize_log_block(self._pending, self.frame_marker))
        self._pending = []
