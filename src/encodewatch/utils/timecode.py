"""Time-code arithmetic for encoder diagnostic output."""

import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000
MS_PER_HUNDREDTH = 10


def to_milliseconds(hours: int, minutes: int, seconds: int, hundredths: int) -> int:
    """Convert an hours/minutes/seconds/hundredths code to total milliseconds.

    Fields are not range-checked; out-of-range minutes or seconds are summed as-is.
    """
    return (
        hours * MS_PER_HOUR
        + minutes * MS_PER_MINUTE
        + seconds * MS_PER_SECOND
        + hundredths * MS_PER_HUNDREDTH
    )


def parse_timecode(groups: Sequence[str]) -> int:
    """Convert four captured digit groups to milliseconds.

    A group that is not an unsigned decimal integer makes the whole code worth 0 ms.
    """
    if len(groups) != 4 or not all(g.isascii() and g.isdigit() for g in groups):
        logger.debug("Malformed time code groups: %r", groups)
        return 0
    return to_milliseconds(*(int(g) for g in groups))


def format_milliseconds(ms: int) -> str:
    """Render milliseconds as HH:MM:SS.ff."""
    ms = max(0, int(ms))
    hours, remainder = divmod(ms, MS_PER_HOUR)
    minutes, remainder = divmod(remainder, MS_PER_MINUTE)
    seconds, remainder = divmod(remainder, MS_PER_SECOND)
    return f"{hours:02}:{minutes:02}:{seconds:02}.{remainder // MS_PER_HUNDREDTH:02}"
