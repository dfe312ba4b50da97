"""Pytest configuration and shared fakes."""

from __future__ import annotations

import threading
import time

import pytest
import serial


class FakeSerial:
    """Stands in for serial.Serial: feeds queued chunks, records writes."""

    def __init__(self, chunks=(), **kwargs):
        self.kwargs = kwargs
        self._chunks = list(chunks)
        self._lock = threading.Lock()
        self.written: list[bytes] = []
        self.closed = False
        self.fail_reads = False
        self.read_error: Exception | None = None

    def feed(self, data: bytes) -> None:
        with self._lock:
            self._chunks.append(data)

    @property
    def in_waiting(self) -> int:
        with self._lock:
            return len(self._chunks[0]) if self._chunks else 0

    def read(self, size: int = 1) -> bytes:
        if self.fail_reads:
            raise serial.SerialException("device disconnected")
        if self.read_error is not None:
            raise self.read_error
        with self._lock:
            if self._chunks:
                return self._chunks.pop(0)
        time.sleep(0.005)
        return b""

    def write(self, data: bytes) -> int:
        with self._lock:
            self.written.append(bytes(data))
        return len(data)

    def reset_input_buffer(self) -> None:
        pass

    def cancel_read(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class FakeLink:
    """Link as seen by the frame renderer and the connect control."""

    def __init__(self, lines=(), is_open=True, ports=()):
        self.is_open = is_open
        self.lines = list(lines)
        self.ports = list(ports)
        self.written: list[str] = []
        self.read_calls = 0
        self.rx_lines = 0
        self.tx_lines = 0
        self.rx_dropped = 0
        self.opened: list[tuple[str, int]] = []
        self.fail_open = False

    def read_line_if_available(self) -> str:
        self.read_calls += 1
        if not self.is_open or not self.lines:
            return ""
        return self.lines.pop(0)

    def write_line(self, text: str) -> None:
        self.written.append(text)

    def open(self, port: str, baud: int) -> None:
        self.opened.append((port, baud))
        self.is_open = not self.fail_open

    def close(self) -> None:
        self.is_open = False

    def list_ports(self) -> list[str]:
        return list(self.ports)


class FakeView:
    def __init__(self):
        self.placeholders: list[str] = []
        self.drawn = []

    def show_placeholder(self, color: str) -> None:
        self.placeholders.append(color)

    def draw_gauges(self, state) -> None:
        self.drawn.append(state)


class RecordingLogger:
    def __init__(self):
        self.records = []

    def emit(self, obj):
        self.records.append(obj)
        return ""


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def fake_view():
    return FakeView()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def fake_serial():
    return FakeSerial()
