"""Hypothesis strategies for property-based testing."""

from hypothesis import strategies as st

from encodewatch.utils.timecode import format_milliseconds


@st.composite
def timecode_fields(draw):
    """Generate two-digit time-code fields, including out-of-range values."""
    return tuple(draw(st.integers(min_value=0, max_value=99)) for _ in range(4))


def timecode_token(ms: int) -> str:
    return f"time={format_milliseconds(ms)}"


noise_tokens = st.sampled_from(
    ["frame=", "120", "fps=", "30", "q=28.0", "size=", "256kB", "bitrate=", "419.4kbits/s",
     "dup=0", "drop=0", "Stream", "#0:0", "->", "Press", "[q]", "speed=N/A"]
)


@st.composite
def encoder_streams(draw, total_ms: int = 60000):
    """Generate token sequences mixing time ticks, throughput markers and noise."""
    tokens = []
    for _ in range(draw(st.integers(min_value=0, max_value=60))):
        kind = draw(st.sampled_from(["time", "speed", "noise", "noise"]))
        if kind == "time":
            ms = draw(st.integers(min_value=0, max_value=total_ms // 10)) * 10
            tokens.append(timecode_token(ms))
        elif kind == "speed":
            tokens.append(f"speed={draw(st.integers(min_value=0, max_value=99))}.{draw(st.integers(min_value=0, max_value=99)):02}x")
        else:
            tokens.append(draw(noise_tokens))
    return tokens
