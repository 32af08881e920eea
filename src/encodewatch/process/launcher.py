"""Encoder process launching and reaping."""

import logging
import subprocess
import threading

from encodewatch.models.errors import LaunchError

logger = logging.getLogger(__name__)


class ProcessLauncher:
    """Spawns encoder processes with the diagnostic stream piped back to us."""

    def spawn(self, cmd: list[str]) -> subprocess.Popen:
        """Start ``cmd`` with stderr as a binary pipe."""
        logger.debug("Spawning: %s", " ".join(cmd))
        try:
            return subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError:
            raise LaunchError(
                f"Encoder binary not found: {cmd[0]}",
                details={"command": cmd[0]},
            )
        except OSError as e:
            raise LaunchError(
                f"Failed to start {cmd[0]}: {e}",
                details={"command": cmd[0], "error": str(e)},
            )

    def reap(self, process: subprocess.Popen) -> threading.Thread:
        """Wait for ``process`` on a daemon thread so callers never block on exit."""
        thread = threading.Thread(
            target=self._wait, args=(process,), name="encodewatch-reaper", daemon=True
        )
        thread.start()
        return thread

    def _wait(self, process: subprocess.Popen) -> None:
        if process.stderr is not None:
            process.stderr.close()
        returncode = process.wait()
        logger.debug("Reaped pid %s (exit status %s)", process.pid, returncode)


def exit_status(returncode: int | None) -> tuple[int, bool]:
    """Return ``(code, known)`` for a process return code.

    Negative codes mean the process died from a signal and are reported as 255.
    """
    if returncode is None:
        return 255, False
    if returncode < 0:
        return 255, False
    return returncode, True
