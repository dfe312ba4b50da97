"""
Main GUI application:
- Menus: Files (session log), Settings (port, display)
- Connect/Disconnect button
- Gauge canvas redrawn by a root.after() frame loop
- Serial link + frame renderer + session logger
"""

from __future__ import annotations
import queue
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Optional

from app.connection import auto_connect, button_label, link_status_text, toggle_connection
from app.dialogs import ComSettingsDialog, DisplaySettingsDialog
from app.frame_renderer import FrameRenderer
from app.gauge_view import GaugeView
from app.settings import AppSettings, ComConfig, DEFAULT_SETTINGS_PATH, load_settings, save_settings
from app.styles import PANEL_BG, STATUS_GREEN, STATUS_RED

from comm.serial_link import SerialLink
from utils.timebase import frame_period_ms, now_ms_monotonic

from log.parsed_logger import ParsedLogger


class GaugeApp:
    def __init__(self, settings_path: str = DEFAULT_SETTINGS_PATH, port: Optional[str] = None,
                 echo: bool = True) -> None:
        self.root = tk.Tk()
        self.root.title("Servo gauges")
        self.root.configure(bg=PANEL_BG)
        self._is_shutting_down = False

        self._settings_path = settings_path
        self.settings: AppSettings = load_settings(settings_path)
        if port:
            self.settings.com.port = port

        self.link = SerialLink()
        self.link.baud = self.settings.com.baud
        self.link.on_send = self._log_tx
        self.logger = ParsedLogger(echo=echo)
        self.renderer = FrameRenderer(
            placeholder_color=self.settings.display.placeholder_color,
            logger=self.logger,
        )

        self._build_ui()
        self.root.protocol("WM_DELETE_WINDOW", self._on_exit)

        # Previously used port: open without asking
        auto_connect(self.link, self.settings.com)
        self._refresh_connect_btn()

        self._frame_ms = frame_period_ms(self.settings.display.frame_rate)
        self.root.after(self._frame_ms, self._frame)

    def run(self) -> None:
        try:
            self.root.mainloop()
        finally:
            self.shutdown()

    # ---------------- UI ----------------

    def _build_ui(self) -> None:
        self._build_menu()

        top = ttk.Frame(self.root, padding=6)
        top.pack(fill="x")

        self.connect_btn = ttk.Button(top, text=button_label(False), command=self._toggle_connect)
        self.connect_btn.pack(side="left")

        self.log_status_var = tk.StringVar(value="Log Stopped")
        self.log_status_lbl = tk.Label(top, textvariable=self.log_status_var, bg=PANEL_BG)
        self.log_status_lbl.pack(side="right")
        self._apply_log_status_style()

        self.link_status_var = tk.StringVar(value=link_status_text(self.link))
        ttk.Label(top, textvariable=self.link_status_var).pack(side="left", padx=(12, 0))

        body = ttk.Frame(self.root, padding=(6, 0, 6, 6))
        body.pack(fill="both", expand=True)
        self.view = GaugeView(body, self.settings.display)

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)

        menu_files = tk.Menu(menubar, tearoff=0)
        menu_files.add_command(label="Log path", command=self._choose_log_path)
        menu_files.add_command(label="Start logging", command=self._start_logging)
        menu_files.add_command(label="Stop logging", command=self._stop_logging)
        menu_files.add_separator()
        menu_files.add_command(label="Exit", command=self._on_exit)
        menubar.add_cascade(label="Files", menu=menu_files)

        menu_settings = tk.Menu(menubar, tearoff=0)
        menu_settings.add_command(label="Port", command=self._open_com_settings)
        menu_settings.add_command(label="Display", command=self._open_display_settings)
        menubar.add_cascade(label="Settings", menu=menu_settings)

        self.root.config(menu=menubar)

    def _apply_log_status_style(self) -> None:
        is_run = self.logger.is_running
        self.log_status_lbl.configure(fg=STATUS_GREEN if is_run else STATUS_RED)

    # ---------------- Menu actions ----------------

    def _choose_log_path(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Select log file",
            defaultextension=".log",
            filetypes=[("Log files", "*.log"), ("All files", "*.*")]
        )
        if path:
            self.settings.log_path = path
            self._save_settings()

    def _start_logging(self) -> None:
        if self.logger.is_running:
            return
        if not self.settings.log_path:
            self._choose_log_path()
            if not self.settings.log_path:
                return
        try:
            self.logger.start(self.settings.log_path)
        except OSError as e:
            messagebox.showerror("Logging", f"Failed to start log: {e}")
            return
        self.log_status_var.set("Log Running")
        self._apply_log_status_style()

    def _stop_logging(self) -> None:
        self.logger.stop()
        self.log_status_var.set("Log Stopped")
        self._apply_log_status_style()

    def _ask_port(self, current_port: str) -> Optional[str]:
        dlg = ComSettingsDialog(self.root, current_port, self.settings.com.baud)
        self.root.wait_window(dlg)
        return dlg.result

    def _open_com_settings(self) -> None:
        port = self._ask_port(self.settings.com.port)
        if not port:
            return
        self.link.open(port, self.settings.com.baud)
        if self.link.is_open:
            self.settings.com.port = port
            self._save_settings()
            self.renderer.reset()
        else:
            messagebox.showerror("Port", f"Failed to open {port}")
        self._refresh_connect_btn()

    def _open_display_settings(self) -> None:
        dlg = DisplaySettingsDialog(self.root, self.settings.display)
        self.root.wait_window(dlg)
        if dlg.result:
            self.settings.display = dlg.result
            self.view.cfg = dlg.result
            if not dlg.result.fit_window:
                self.view.canvas.configure(width=dlg.result.width, height=dlg.result.height)
            self.renderer.placeholder_color = dlg.result.placeholder_color
            self._frame_ms = frame_period_ms(dlg.result.frame_rate)
            self._save_settings()

    def _on_exit(self) -> None:
        self.shutdown()

    def shutdown(self) -> None:
        if self._is_shutting_down:
            return
        self._is_shutting_down = True
        try:
            self.link.close()
        finally:
            self.logger.stop()
            try:
                self.root.quit()
            except tk.TclError:
                pass
            try:
                self.root.destroy()
            except tk.TclError:
                pass

    # ---------------- Connection ----------------

    def _toggle_connect(self) -> None:
        tried = toggle_connection(self.link, self.settings.com, self._ask_port, on_remember=self._remember_port)
        if tried is not None:
            if self.link.is_open:
                self.renderer.reset()
            else:
                messagebox.showerror("Connect", f"Failed to open {tried}")
        self._refresh_connect_btn()

    def _remember_port(self, _com: ComConfig) -> None:
        self._save_settings()

    def _refresh_connect_btn(self) -> None:
        self.connect_btn.configure(text=button_label(self.link.is_open))

    # ---------------- Frame loop ----------------

    def _frame(self) -> None:
        if self._is_shutting_down:
            return
        self._drain_link_errors()
        self._refresh_connect_btn()
        self.renderer.render_frame(self.link, self.view)
        self.link_status_var.set(link_status_text(self.link))
        if not self._is_shutting_down:
            self.root.after(self._frame_ms, self._frame)

    def _drain_link_errors(self) -> None:
        while True:
            try:
                err = self.link.error_queue.get_nowait()
            except queue.Empty:
                break
            self.logger.emit(err)

    def _log_tx(self, text: str) -> None:
        self.logger.emit({
            "_type": "tx",
            "pc_ms": now_ms_monotonic(),
            "line": text.rstrip("\n"),
        })

    def _save_settings(self) -> None:
        save_settings(self.settings, self._settings_path)
