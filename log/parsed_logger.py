"""
Session logger.

JSON Lines (.log): one JSON object per line. Every record is echoed to the
console; it is appended to the file only while logging is running.
"""

from __future__ import annotations
import json
import math
from dataclasses import asdict, is_dataclass
from typing import Optional, Any, TextIO
import time


class ParsedLogger:
    def __init__(self, echo: bool = True) -> None:
        self._fh: Optional[TextIO] = None
        self.path: str = ""
        self.echo = echo

    @property
    def is_running(self) -> bool:
        return self._fh is not None

    def start(self, path: str) -> None:
        self.stop()
        self.path = path
        self._fh = open(path, "a", encoding="utf-8")
        self._fh.write(self.format_line({"_type": "log_start", "unix_time": time.time()}) + "\n")
        self._fh.flush()

    def stop(self) -> None:
        if self._fh:
            try:
                self._fh.write(self.format_line({"_type": "log_stop", "unix_time": time.time()}) + "\n")
                self._fh.flush()
                self._fh.close()
            finally:
                self._fh = None

    def emit(self, obj: Any) -> str:
        """Format once; print and (if running) append to the file."""
        line = self.format_line(obj)
        if self.echo:
            print(line, flush=True)
        self.write_line(line)
        return line

    def write_line(self, line: str) -> None:
        if not self._fh:
            return
        self._fh.write(line + "\n")
        self._fh.flush()

    def format_line(self, obj: Any) -> str:
        if is_dataclass(obj) and not isinstance(obj, type):
            payload = asdict(obj)
            payload["_type"] = obj.__class__.__name__
        elif isinstance(obj, dict):
            payload = dict(obj)
        else:
            payload = {"_type": type(obj).__name__, "value": repr(obj)}
        return json.dumps(_json_safe(payload), ensure_ascii=False)


def _json_safe(v: Any) -> Any:
    # json.dumps would emit bare NaN/Infinity, which isn't valid JSON
    if isinstance(v, float) and not math.isfinite(v):
        return None
    if isinstance(v, dict):
        return {k: _json_safe(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_json_safe(x) for x in v]
    return v
