"""
Serial link:
- opens COM port (pyserial)
- reader thread splits the byte stream into lines
- complete lines wait in rx_queue until the UI consumes them, one per frame;
  rx_queue holds at most rx_queue_max lines, the oldest are dropped first
- write_line() queues outgoing lines; the reader thread writes them

The UI thread never touches the serial handle directly; it only uses the
queues and the is_open flag.
"""

from __future__ import annotations
import threading
import queue
from dataclasses import dataclass
from typing import Optional, Any, Callable
import os

import serial
import serial.tools.list_ports

from utils.timebase import now_ms_monotonic
from comm.line_protocol import LineParser, ENCODING

DEFAULT_BAUD = 9600
RX_QUEUE_MAX = 64


@dataclass
class LinkError:
    pc_ms: int
    error: str


class SerialLink:
    def __init__(self, serial_factory: Optional[Callable[..., Any]] = None,
                 rx_queue_max: int = RX_QUEUE_MAX) -> None:
        self._serial_factory = serial_factory or serial.Serial
        self._ser: Optional[Any] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_evt: Optional[threading.Event] = None
        self._state_lock = threading.RLock()

        self.rx_queue: "queue.Queue[str]" = queue.Queue(maxsize=max(1, rx_queue_max))
        self.tx_queue: "queue.Queue[bytes]" = queue.Queue()
        self.error_queue: "queue.Queue[LinkError]" = queue.Queue()

        self.is_open = False
        self.port = ""
        self.baud = DEFAULT_BAUD
        self.on_send: Optional[Callable[[str], None]] = None
        self.rx_lines = 0
        self.tx_lines = 0
        self.rx_dropped = 0

    @staticmethod
    def list_ports() -> list[str]:
        return [p.device for p in serial.tools.list_ports.comports()]

    def open(self, port: str, baud: int = DEFAULT_BAUD) -> None:
        self.close()
        with self._state_lock:
            if self._thread is not None and self._thread.is_alive():
                self._report("Serial close is still in progress; refusing to reopen port")
                self.is_open = False
                return
        self.port = port
        self.baud = baud

        open_kwargs: dict[str, Any] = {
            "port": port,
            "baudrate": baud,
            "timeout": 0.05,
            "write_timeout": 0.20,
        }
        if os.name == "posix":
            open_kwargs["exclusive"] = True

        try:
            ser = self._serial_factory(**open_kwargs)
            try:
                ser.reset_input_buffer()
            except (AttributeError, serial.SerialException):
                pass
        except (serial.SerialException, OSError, ValueError) as e:
            self._report(f"Serial open failed: {e}")
            with self._state_lock:
                self.is_open = False
            return

        stop_evt = threading.Event()
        with self._state_lock:
            self._ser = ser
            self._stop_evt = stop_evt
            self.is_open = True
            self._clear(self.rx_queue)
            self._clear(self.tx_queue)
            self._thread = threading.Thread(
                target=self._run,
                args=(ser, stop_evt),
                daemon=True,
                name="serial-reader",
            )
            self._thread.start()

    def close(self) -> None:
        with self._state_lock:
            ser = self._ser
            th = self._thread
            stop_evt = self._stop_evt
            self.is_open = False

        if stop_evt is not None:
            stop_evt.set()
        if ser is not None:
            try:
                ser.cancel_read()
            except (AttributeError, serial.SerialException, OSError):
                pass
        if th is not None and th.is_alive() and th is not threading.current_thread():
            th.join(timeout=2.0)
        if th is not None and th.is_alive():
            self._report("Serial reader did not stop cleanly")
        with self._state_lock:
            if self._thread is th and (th is None or not th.is_alive()):
                self._ser = None
                self._thread = None
                self._stop_evt = None
        self._clear(self.rx_queue)
        self._clear(self.tx_queue)

    def read_line_if_available(self) -> str:
        """Next complete line without its terminator, or "" if none is buffered."""
        if not self.is_open:
            return ""
        try:
            return self.rx_queue.get_nowait()
        except queue.Empty:
            return ""

    def write_line(self, text: str) -> None:
        """Fire-and-forget; dropped when the link is closed."""
        if not self.is_open:
            return
        if not text.endswith("\n"):
            text += "\n"
        if self.on_send:
            self.on_send(text)
        self.tx_queue.put(text.encode(ENCODING))

    def _report(self, error: str) -> None:
        self.error_queue.put(LinkError(pc_ms=now_ms_monotonic(), error=error))

    @staticmethod
    def _clear(q: "queue.Queue[Any]") -> None:
        while True:
            try:
                q.get_nowait()
            except queue.Empty:
                return

    def _run(self, ser: Any, stop_evt: threading.Event) -> None:
        parser = LineParser()
        while not stop_evt.is_set():
            try:
                # TX first
                try:
                    while True:
                        pkt = self.tx_queue.get_nowait()
                        ser.write(pkt)
                        self.tx_lines += 1
                except queue.Empty:
                    pass

                # RX
                chunk = ser.read(ser.in_waiting or 1)
                if chunk:
                    for line in parser.push(chunk):
                        self._put_line(line)
                    self.rx_dropped += parser.dropped
                    parser.dropped = 0

            except Exception as e:
                if not stop_evt.is_set():
                    self._report(f"Serial reader error: {e}")
                break

        try:
            ser.close()
        except Exception:
            pass
        with self._state_lock:
            if self._ser is ser:
                self._ser = None
                self._thread = None
                self._stop_evt = None
                self.is_open = False

    def _put_line(self, line: str) -> None:
        # Reader is the only producer, so after evicting one line there is room
        while True:
            try:
                self.rx_queue.put_nowait(line)
                self.rx_lines += 1
                return
            except queue.Full:
                try:
                    self.rx_queue.get_nowait()
                    self.rx_dropped += 1
                except queue.Empty:
                    pass
