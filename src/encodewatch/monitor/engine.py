"""Progress monitor: probes, launches and tracks an encode."""

import logging
from pathlib import Path

from encodewatch.config import get_settings
from encodewatch.models.session import EncodeRequest, build_request
from encodewatch.monitor.session import EncodeSession
from encodewatch.probe.duration import DurationProbe
from encodewatch.process.launcher import ProcessLauncher

logger = logging.getLogger(__name__)


class ProgressMonitor:
    """Starts encode sessions whose progress is reported as a stream of events."""

    def __init__(self, launcher: ProcessLauncher | None = None, probe: DurationProbe | None = None):
        self.settings = get_settings()
        self.launcher = launcher or ProcessLauncher()
        self.probe = probe or DurationProbe(self.launcher)

    def build_command(self, request: EncodeRequest) -> list[str]:
        """Assemble ``binary [global args] -i input [args] output``."""
        return [
            self.settings.ffmpeg_binary,
            *self.settings.global_args,
            "-i",
            request.input_path,
            *request.args,
            request.output_path,
        ]

    def start(
        self,
        input_path: str | Path,
        output_path: str | Path,
        args: list[str] | None = None,
    ) -> EncodeSession:
        """Probe the input, spawn the encoder and start parsing its output.

        Raises ValidationError for unusable paths, ProbeError when the duration
        cannot be found and LaunchError when the encoder cannot be spawned.
        """
        request = build_request(str(input_path), str(output_path), args)
        return self.start_request(request)

    def start_request(self, request: EncodeRequest) -> EncodeSession:
        total_ms = self.probe.probe(request.input_path)

        cmd = self.build_command(request)
        logger.info("Starting encode: %s -> %s", request.input_path, request.output_path)
        process = self.launcher.spawn(cmd)

        session = EncodeSession(request, total_ms, process, self.launcher)
        return session.start()
