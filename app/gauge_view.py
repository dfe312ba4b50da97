"""
Gauge view: Tk canvas with two needle-and-circle gauges.
X gauge on the left (cyan), Y gauge on the right (lime), caption on top.
"""

from __future__ import annotations
import tkinter as tk

from app.frame_renderer import GaugeState
from app.settings import DisplayConfig
from app.styles import (
    CANVAS_BG, GAUGE_TRIANGLE, GAUGE_X_FILL, GAUGE_Y_FILL, CAPTION_FG, CAPTION_FONT,
)
from utils.gauge_geometry import GaugeGlyph, gauge_anchors, build_gauge, fit_scale


def _fmt(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else f"{v:g}"


def caption_text(state: GaugeState) -> str:
    return f"X: {_fmt(state.x_raw)}° | Y: {_fmt(state.y_raw)}°"


class GaugeView:
    def __init__(self, master: tk.Widget, cfg: DisplayConfig) -> None:
        self.cfg = cfg
        self.canvas = tk.Canvas(master, width=cfg.width, height=cfg.height, bg=CANVAS_BG, highlightthickness=0)
        if cfg.fit_window:
            self.canvas.pack(fill="both", expand=True)
        else:
            self.canvas.pack()

    def _size(self) -> tuple[int, int]:
        if not self.cfg.fit_window:
            return self.cfg.width, self.cfg.height
        w = max(1, int(self.canvas.winfo_width()))
        h = max(1, int(self.canvas.winfo_height()))
        # Before the first layout pass winfo_* reports 1x1
        if w <= 1 or h <= 1:
            return self.cfg.width, self.cfg.height
        return w, h

    def show_placeholder(self, color: str) -> None:
        c = self.canvas
        c.delete("all")
        c.configure(bg=color)

    def draw_gauges(self, state: GaugeState) -> None:
        c = self.canvas
        w, h = self._size()
        scale = fit_scale(w, h) if self.cfg.fit_window else 1.0
        c.delete("all")
        c.configure(bg=CANVAS_BG)

        c.create_text(w / 2, 30, text=caption_text(state), fill=CAPTION_FG, font=CAPTION_FONT)

        left, right = gauge_anchors(w, h, self.cfg.separation * scale)
        self._draw_one(build_gauge(left, state.rot_x, scale), GAUGE_X_FILL)
        self._draw_one(build_gauge(right, state.rot_y, scale), GAUGE_Y_FILL)

    def _draw_one(self, glyph: GaugeGlyph, fill: str) -> None:
        # Triangle first; the circle covers its base so only the needle tip shows
        self.canvas.create_polygon(*glyph.triangle, fill=GAUGE_TRIANGLE, outline="#000000")
        self.canvas.create_oval(*glyph.circle_bbox, fill=fill, outline="#000000")
