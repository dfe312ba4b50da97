"""
Angle mapping helpers.

Device angles live in [0, 180]. The gauges are drawn with the range
inverted to [90, -90] so that 0 points right and 180 points left.
"""

from __future__ import annotations

import math

DEVICE_MIN = 0.0
DEVICE_MAX = 180.0
ROT_AT_MIN = 90.0
ROT_AT_MAX = -90.0


def map_range(value: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float) -> float:
    """Linear rescale, no clamping (same as p5/Arduino map())."""
    if in_hi == in_lo:
        return out_lo
    t = (value - in_lo) / (in_hi - in_lo)
    return out_lo + (out_hi - out_lo) * t


def device_to_rotation(raw: float) -> float:
    return map_range(raw, DEVICE_MIN, DEVICE_MAX, ROT_AT_MIN, ROT_AT_MAX)


def rotation_to_device(rot: float) -> float:
    """Inverse of device_to_rotation()."""
    return map_range(rot, ROT_AT_MIN, ROT_AT_MAX, DEVICE_MIN, DEVICE_MAX)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def rotation_to_servo(rot: float) -> int:
    """
    Angle echoed back to the servo: round(rot + 90), clamped to [0, 180].
    """
    angle = round_half_up(rot + 90.0)
    return max(int(DEVICE_MIN), min(int(DEVICE_MAX), angle))
