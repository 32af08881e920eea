"""Human-readable formatting helpers."""


def byte_count_decimal(size_bytes: int) -> str:
    """Format a byte count with SI units, e.g. 1500 -> "1.5 kB"."""
    return _byte_count(size_bytes, 1000, "kMGTPE", "B")


def byte_count_binary(size_bytes: int) -> str:
    """Format a byte count with IEC units, e.g. 1536 -> "1.5 KiB"."""
    return _byte_count(size_bytes, 1024, "KMGTPE", "iB")


def _byte_count(size_bytes: int, unit: int, prefixes: str, suffix: str) -> str:
    size_bytes = max(0, size_bytes)
    if size_bytes < unit:
        return f"{size_bytes} B"
    div, exp = unit, 0
    n = size_bytes // unit
    while n >= unit and exp < len(prefixes) - 1:
        div *= unit
        exp += 1
        n //= unit
    return f"{size_bytes / div:.1f} {prefixes[exp]}{suffix}"
