"""Duration probe: reads the source length from the encoder's input banner."""

import logging
import re
from pathlib import Path

from encodewatch.config import get_settings
from encodewatch.models.errors import LaunchError, ProbeError
from encodewatch.process.launcher import ProcessLauncher
from encodewatch.utils.timecode import parse_timecode

logger = logging.getLogger(__name__)

DURATION_PATTERN = re.compile(r"Duration: (\d{2}):(\d{2}):(\d{2})\.(\d{2})")


class DurationProbe:
    """Determines the total duration of a media file in milliseconds."""

    def __init__(self, launcher: ProcessLauncher | None = None, binary: str | None = None):
        self.settings = get_settings()
        self.launcher = launcher or ProcessLauncher()
        self.binary = binary or self.settings.ffmpeg_binary

    def build_command(self, input_path: str | Path) -> list[str]:
        return [self.binary, "-i", str(input_path)]

    def probe(self, input_path: str | Path) -> int:
        """Return the duration of ``input_path`` in milliseconds.

        Returns as soon as the banner line is seen; the process is handed to the
        launcher to be reaped in the background.
        """
        cmd = self.build_command(input_path)
        try:
            process = self.launcher.spawn(cmd)
        except LaunchError as e:
            raise ProbeError(
                f"Could not launch duration probe: {e.message}",
                details={"input": str(input_path), **e.details},
            ) from e

        try:
            duration = self.scan(process.stderr)
        except OSError as e:
            raise ProbeError(
                f"Failed reading probe output: {e}",
                details={"input": str(input_path), "error": str(e)},
            ) from e
        finally:
            self.launcher.reap(process)

        if duration is None:
            raise ProbeError(
                "No duration found in encoder banner",
                details={"input": str(input_path)},
            )
        logger.info("Probed %s: %d ms", input_path, duration)
        return duration

    def scan(self, stream) -> int | None:
        """Scan a line-oriented byte stream for the first duration announcement."""
        encoding = self.settings.stream_encoding
        for raw in stream:
            line = raw.decode(encoding, errors="replace") if isinstance(raw, bytes) else raw
            match = DURATION_PATTERN.search(line)
            if match:
                return parse_timecode(match.groups())
        return None
