"""Clock and duration formatting helpers."""

import time


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def elapsed_seconds(start_ms: int, end_ms: int) -> int:
    """Whole seconds between two epoch-millisecond timestamps.

    Args:
        start_ms: Interval start in epoch ms
        end_ms: Interval end in epoch ms

    Returns:
        Floor of the difference in seconds, never negative
    """
    if end_ms <= start_ms:
        return 0
    return (end_ms - start_ms) // 1000


def format_elapsed(total_seconds: int) -> str:
    """Format seconds as ``HH:MM:SS``.

    Hours are not capped, so 360000 seconds formats as "100:00:00".

    Args:
        total_seconds: Duration in seconds

    Returns:
        Zero-padded string like "01:01:01"
    """
    if total_seconds < 0:
        total_seconds = 0

    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
