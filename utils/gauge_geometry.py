"""
Gauge geometry.

Tk canvas items can't be rotated, so each gauge is transformed in Python:
translate to the gauge anchor, then rotate by the gauge angle (degrees,
clockwise on screen since y grows downwards). Every gauge builds its own
Transform2D, so rotations never compose across gauges.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

# Glyph in local coordinates (origin = pivot)
TRIANGLE_LOCAL: tuple[tuple[float, float], ...] = ((-100.0, 0.0), (100.0, 0.0), (0.0, -150.0))
CIRCLE_DIAMETER = 200.0


@dataclass(frozen=True)
class Transform2D:
    tx: float = 0.0
    ty: float = 0.0
    angle_deg: float = 0.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        a = math.radians(self.angle_deg)
        c = math.cos(a)
        s = math.sin(a)
        return (self.tx + x * c - y * s, self.ty + x * s + y * c)


@dataclass
class GaugeGlyph:
    triangle: list[float]                       # flat x0,y0,x1,y1,x2,y2 for create_polygon
    circle_bbox: tuple[float, float, float, float]


def gauge_anchors(width: float, height: float, separation: float) -> tuple[tuple[float, float], tuple[float, float]]:
    """Left (X) and right (Y) pivot points around the canvas centre."""
    cx = width / 2.0
    cy = height / 2.0
    half = separation / 2.0
    return (cx - half, cy), (cx + half, cy)


def build_gauge(anchor: tuple[float, float], rot_deg: float, scale: float = 1.0) -> GaugeGlyph:
    tr = Transform2D(tx=anchor[0], ty=anchor[1], angle_deg=rot_deg)
    pts: list[float] = []
    for x, y in TRIANGLE_LOCAL:
        pts.extend(tr.apply(x * scale, y * scale))
    r = CIRCLE_DIAMETER * scale / 2.0
    ox, oy = tr.apply(0.0, 0.0)
    return GaugeGlyph(triangle=pts, circle_bbox=(ox - r, oy - r, ox + r, oy + r))


def fit_scale(width: float, height: float,
              base_width: float = 700.0, base_height: float = 400.0) -> float:
    """
    Glyph scale for window-derived canvas sizes. The reference layout is
    700x400 with 300 px between pivots; smaller canvases shrink the glyphs.
    """
    if base_width <= 0 or base_height <= 0:
        return 1.0
    s = min(width / base_width, height / base_height)
    return max(0.1, s)
