"""
Time helpers.

Monotonic milliseconds for event stamps; frame period for the render loop.
"""

from __future__ import annotations
import time

DEFAULT_FRAME_RATE = 60
MIN_FRAME_RATE = 1
MAX_FRAME_RATE = 240


def now_ms_monotonic() -> int:
    """Monotonic time in milliseconds as int64."""
    return int(time.monotonic() * 1000)


def frame_period_ms(frame_rate: float) -> int:
    """
    Period for root.after() at the given frame rate.
    Tk schedules in whole milliseconds, so 60 Hz becomes 17 ms.
    """
    fps = max(MIN_FRAME_RATE, min(MAX_FRAME_RATE, float(frame_rate)))
    return max(1, int(round(1000.0 / fps)))
