"""Shared test fixtures and fake encoder processes."""

import io
import itertools
import os

import pytest

from encodewatch.models.errors import LaunchError

PROBE_BANNER = (
    b"Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mp4':\n"
    b"  Metadata:\n"
    b"    major_brand     : isom\n"
    b"    encoder         : Lavf58.29.100\n"
    b"  Duration: 00:00:10.00, start: 0.000000, bitrate: 1205 kb/s\n"
    b"    Stream #0:0(und): Video: h264 (High), yuv420p, 1280x720, 1070 kb/s, 30 fps\n"
    b"At least one output file must be specified\n"
)

STARTUP_NOISE = (
    b"Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mp4':\n"
    b"  Duration: 00:00:10.00, start: 0.000000, bitrate: 1205 kb/s\n"
    b"Stream mapping:\n"
    b"  Stream #0:0 -> #0:0 (h264 (native) -> h264 (libx264))\n"
    b"Press [q] to stop, [?] for help\n"
)

_pids = itertools.count(4000)


class FakeProcess:
    """Stands in for subprocess.Popen with a canned diagnostic stream."""

    def __init__(self, stderr: bytes = b"", returncode: int = 0, stream=None):
        self.stderr = stream if stream is not None else io.BytesIO(stderr)
        self.pid = next(_pids)
        self.returncode = None
        self.terminated = False
        self.killed = False
        self._exit_code = returncode

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        if self.returncode is None:
            self.returncode = self._exit_code
        return self.returncode

    def terminate(self):
        self.terminated = True
        if self.returncode is None:
            self._exit_code = -15

    def kill(self):
        self.killed = True
        if self.returncode is None:
            self._exit_code = -9


class PipeProcess(FakeProcess):
    """A fake process whose stream stays open until the test writes or terminates."""

    def __init__(self, returncode: int = 0):
        read_fd, write_fd = os.pipe()
        super().__init__(stream=os.fdopen(read_fd, "rb"), returncode=returncode)
        self._writer = os.fdopen(write_fd, "wb", buffering=0)

    def write(self, data: bytes) -> None:
        self._writer.write(data)

    def close(self) -> None:
        if not self._writer.closed:
            self._writer.close()

    def terminate(self):
        super().terminate()
        self.close()


class BrokenStream:
    """A stream that yields one chunk and then fails."""

    def __init__(self, first: bytes):
        self._first = first

    def read1(self, size=-1):
        if self._first:
            chunk, self._first = self._first, b""
            return chunk
        raise OSError("pipe broken")

    def close(self):
        pass


class FakeLauncher:
    """Hands out prepared processes in order and records every command."""

    def __init__(self, *processes):
        self.processes = list(processes)
        self.commands: list[list[str]] = []
        self.reaped: list[FakeProcess] = []

    def spawn(self, cmd):
        self.commands.append(list(cmd))
        if not self.processes:
            raise LaunchError(f"Encoder binary not found: {cmd[0]}", details={"command": cmd[0]})
        process = self.processes.pop(0)
        if isinstance(process, Exception):
            raise process
        return process

    def reap(self, process):
        self.reaped.append(process)
        if process.stderr is not None:
            process.stderr.close()
        process.wait()


def encode_output(*tokens: str) -> bytes:
    """Join tokens the way the encoder separates progress fields."""
    return (" ".join(tokens) + "\r\n").encode()


@pytest.fixture
def probe_process():
    return FakeProcess(PROBE_BANNER, returncode=1)
