"""Tests for the duration probe."""

import pytest

from encodewatch.models.errors import LaunchError, ProbeError
from encodewatch.probe.duration import DurationProbe
from tests.conftest import BrokenStream, FakeLauncher, FakeProcess


class TestDurationProbe:
    def test_reads_banner(self, probe_process):
        launcher = FakeLauncher(probe_process)
        probe = DurationProbe(launcher, binary="ffmpeg")
        assert probe.probe("in.mp4") == 10000
        assert launcher.commands == [["ffmpeg", "-i", "in.mp4"]]

    def test_hours_minutes(self):
        launcher = FakeLauncher(FakeProcess(b"  Duration: 01:02:03.04, start: 0.0\n"))
        assert DurationProbe(launcher).probe("in.mkv") == 3723040

    def test_process_handed_off_for_reaping(self, probe_process):
        launcher = FakeLauncher(probe_process)
        DurationProbe(launcher).probe("in.mp4")
        assert launcher.reaped == [probe_process]

    def test_returns_on_first_match(self):
        banner = b"Duration: 00:00:01.00\nDuration: 00:00:09.00\n"
        launcher = FakeLauncher(FakeProcess(banner))
        assert DurationProbe(launcher).probe("in.mp4") == 1000

    def test_zero_length_media_is_not_an_error(self):
        launcher = FakeLauncher(FakeProcess(b"  Duration: 00:00:00.00, start: 0.0\n"))
        assert DurationProbe(launcher).probe("in.mp4") == 0

    def test_no_banner_raises(self):
        launcher = FakeLauncher(FakeProcess(b"in.mp4: No such file or directory\n", returncode=1))
        with pytest.raises(ProbeError) as exc_info:
            DurationProbe(launcher).probe("in.mp4")
        assert exc_info.value.component == "probe"
        assert exc_info.value.details["input"] == "in.mp4"

    def test_duration_na_raises(self):
        launcher = FakeLauncher(FakeProcess(b"  Duration: N/A, bitrate: N/A\n"))
        with pytest.raises(ProbeError):
            DurationProbe(launcher).probe("live.ts")

    def test_launch_failure_raises_probe_error(self):
        launcher = FakeLauncher(LaunchError("Encoder binary not found: ffmpeg"))
        with pytest.raises(ProbeError) as exc_info:
            DurationProbe(launcher).probe("in.mp4")
        assert isinstance(exc_info.value.__cause__, LaunchError)

    def test_read_failure_raises_probe_error(self):
        class BrokenLines(BrokenStream):
            def __iter__(self):
                raise OSError("pipe broken")

        launcher = FakeLauncher(FakeProcess(stream=BrokenLines(b"")))
        with pytest.raises(ProbeError):
            DurationProbe(launcher).probe("in.mp4")
