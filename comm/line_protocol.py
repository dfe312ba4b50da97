"""
Line protocol.

Wire format (ASCII, both directions):
  "<x>,<y>\n"

Inbound: two numbers, nominally 0..180 (servo/joystick angles from the MCU).
Outbound: two integers 0..180 (servo targets). "\r\n" is tolerated on input.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

LINE_END = b"\n"
ENCODING = "ascii"
MAX_LINE_LEN = 256


class LineFormatError(ValueError):
    pass


@dataclass
class AnglePair:
    x_raw: float
    y_raw: float


class LineParser:
    """
    Incremental newline splitter.
    Bytes after the last newline stay buffered until the rest of the line arrives.
    """
    def __init__(self, max_line_len: int = MAX_LINE_LEN) -> None:
        self._buf = bytearray()
        self._max_line_len = max_line_len
        self._discarding = False
        self.dropped = 0

    def push(self, data: bytes) -> list[str]:
        self._buf.extend(data)
        out: list[str] = []

        while True:
            idx = self._buf.find(LINE_END)
            if idx < 0:
                # No terminator and already too long: garbage, drop it and
                # skip the rest of that line once its newline shows up
                if len(self._buf) > self._max_line_len:
                    self._buf.clear()
                    if not self._discarding:
                        self.dropped += 1
                    self._discarding = True
                return out
            raw = bytes(self._buf[:idx])
            del self._buf[:idx + 1]
            if self._discarding:
                self._discarding = False
                continue
            if len(raw) > self._max_line_len:
                self.dropped += 1
                continue
            out.append(raw.decode(ENCODING, errors="replace").rstrip("\r"))

    def pending(self) -> int:
        return len(self._buf)


def _field(fields: list[str], i: int, name: str) -> float:
    if i >= len(fields):
        raise LineFormatError(f"missing {name} field")
    text = fields[i].strip()
    try:
        v = float(text)
    except ValueError:
        raise LineFormatError(f"{name} is not a number: {text!r}") from None
    if not math.isfinite(v):
        raise LineFormatError(f"{name} is not finite: {text!r}")
    return v


def parse_angle_line(line: str) -> AnglePair:
    """
    Split on ',' and convert the first two fields.
    Extra fields are ignored.
    """
    fields = line.strip().split(",")
    return AnglePair(x_raw=_field(fields, 0, "x"), y_raw=_field(fields, 1, "y"))


def format_angle_line(x: int, y: int) -> str:
    return f"{int(x)},{int(y)}\n"
