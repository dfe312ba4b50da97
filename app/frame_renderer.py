"""
Per-frame step:
  closed link   -> placeholder background, no I/O
  no line       -> frame skipped (nothing drawn, nothing written)
  line          -> parse, map to rotations, draw both gauges, echo servo angles

Parsing and mapping (compute_gauge_state) don't touch any display, the
drawing goes through a view object (GaugeView on Tk, fakes in tests).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Any

from comm.line_protocol import AnglePair, LineFormatError, parse_angle_line, format_angle_line
from utils.angle_map import device_to_rotation, rotation_to_servo
from utils.timebase import now_ms_monotonic

FRAME_PLACEHOLDER = "placeholder"
FRAME_SKIPPED = "skipped"
FRAME_RENDERED = "rendered"
FRAME_HELD = "held"


@dataclass
class GaugeState:
    x_raw: float
    y_raw: float
    rot_x: float
    rot_y: float
    held: bool = False

    def servo_angles(self) -> tuple[int, int]:
        return rotation_to_servo(self.rot_x), rotation_to_servo(self.rot_y)

    def out_line(self) -> str:
        return format_angle_line(*self.servo_angles())


@dataclass
class RxSample:
    pc_ms: int
    line: str
    x_raw: float
    y_raw: float
    rot_x: float
    rot_y: float
    held: bool


@dataclass
class RxRejected:
    pc_ms: int
    line: str
    error: str


class FrameLink(Protocol):
    is_open: bool

    def read_line_if_available(self) -> str: ...
    def write_line(self, text: str) -> None: ...


class FrameView(Protocol):
    def show_placeholder(self, color: str) -> None: ...
    def draw_gauges(self, state: GaugeState) -> None: ...


def gauge_state_from_pair(pair: AnglePair, held: bool = False) -> GaugeState:
    return GaugeState(
        x_raw=pair.x_raw,
        y_raw=pair.y_raw,
        rot_x=device_to_rotation(pair.x_raw),
        rot_y=device_to_rotation(pair.y_raw),
        held=held,
    )


def compute_gauge_state(line: str, last_good: Optional[AnglePair] = None) -> tuple[Optional[GaugeState], Optional[str]]:
    """
    Returns (state, error). A malformed line falls back to last_good
    (state.held=True); with nothing to fall back on, state is None.
    """
    try:
        pair = parse_angle_line(line)
    except LineFormatError as e:
        if last_good is None:
            return None, str(e)
        return gauge_state_from_pair(last_good, held=True), str(e)
    return gauge_state_from_pair(pair), None


class FrameRenderer:
    def __init__(self, placeholder_color: str = "purple", logger: Optional[Any] = None) -> None:
        self.placeholder_color = placeholder_color
        self.logger = logger
        self.last_good: Optional[AnglePair] = None

    def reset(self) -> None:
        self.last_good = None

    def render_frame(self, link: FrameLink, view: FrameView) -> str:
        if not link.is_open:
            view.show_placeholder(self.placeholder_color)
            return FRAME_PLACEHOLDER

        line = link.read_line_if_available()
        if len(line) == 0:
            return FRAME_SKIPPED

        state, error = compute_gauge_state(line, self.last_good)
        if error is not None:
            self._log(RxRejected(pc_ms=now_ms_monotonic(), line=line, error=error))
        if state is None:
            return FRAME_SKIPPED
        if not state.held:
            self.last_good = AnglePair(x_raw=state.x_raw, y_raw=state.y_raw)

        self._log(RxSample(
            pc_ms=now_ms_monotonic(), line=line,
            x_raw=state.x_raw, y_raw=state.y_raw,
            rot_x=state.rot_x, rot_y=state.rot_y,
            held=state.held,
        ))

        view.draw_gauges(state)
        link.write_line(state.out_line())
        return FRAME_HELD if state.held else FRAME_RENDERED

    def _log(self, obj: Any) -> None:
        if self.logger is not None:
            self.logger.emit(obj)
