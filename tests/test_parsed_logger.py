"""Unit tests for the JSON Lines session logger."""

from __future__ import annotations

import json

from app.frame_renderer import RxRejected
from comm.serial_link import LinkError
from log.parsed_logger import ParsedLogger


class TestFormat:
    def test_dataclass_gets_type(self):
        line = ParsedLogger().format_line(LinkError(pc_ms=5, error="boom"))
        assert json.loads(line) == {"pc_ms": 5, "error": "boom", "_type": "LinkError"}

    def test_non_finite_becomes_null(self):
        line = ParsedLogger().format_line({"x": float("nan"), "ys": [1.0, float("inf")]})
        assert json.loads(line) == {"x": None, "ys": [1.0, None]}

    def test_other_objects_use_repr(self):
        payload = json.loads(ParsedLogger().format_line(42))
        assert payload == {"_type": "int", "value": "42"}


class TestSession:
    def test_emit_echoes_and_writes_when_running(self, tmp_path, capsys):
        path = tmp_path / "session.log"
        log = ParsedLogger()
        log.emit({"_type": "tx", "line": "1,2"})
        log.start(str(path))
        assert log.is_running
        log.emit(RxRejected(pc_ms=1, line="x", error="bad"))
        log.stop()
        assert not log.is_running

        records = [json.loads(l) for l in path.read_text(encoding="utf-8").splitlines()]
        assert [r["_type"] for r in records] == ["log_start", "RxRejected", "log_stop"]
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 2

    def test_quiet_logger_prints_nothing(self, capsys):
        ParsedLogger(echo=False).emit({"a": 1})
        assert capsys.readouterr().out == ""
