"""
Dialogs: port chooser, display settings.
"""

from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox
from dataclasses import replace

from comm.serial_link import SerialLink
from app.settings import DisplayConfig
from utils.timebase import MIN_FRAME_RATE, MAX_FRAME_RATE


class ComSettingsDialog(tk.Toplevel):
    def __init__(self, master: tk.Widget, current_port: str, baud: int) -> None:
        super().__init__(master)
        self.title("Select Arduino port")
        self.resizable(False, False)
        self.result: str | None = None

        frm = ttk.Frame(self, padding=10)
        frm.grid(row=0, column=0, sticky="nsew")

        ttk.Label(frm, text="Port:").grid(row=0, column=0, sticky="w")
        self.port_var = tk.StringVar(value=current_port)
        ports = SerialLink.list_ports()
        if not current_port and ports:
            self.port_var.set(ports[0])
        self.port_cb = ttk.Combobox(frm, textvariable=self.port_var, values=ports, width=25)
        self.port_cb.grid(row=0, column=1, sticky="ew", padx=(8, 0))

        ttk.Label(frm, text="Baud:").grid(row=1, column=0, sticky="w", pady=(8, 0))
        ttk.Label(frm, text=str(baud)).grid(row=1, column=1, sticky="w", padx=(8, 0), pady=(8, 0))

        btns = ttk.Frame(frm)
        btns.grid(row=2, column=0, columnspan=2, sticky="e", pady=(10, 0))

        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=0, padx=(0, 8))
        ttk.Button(btns, text="OK", command=self._ok).grid(row=0, column=1)

        self.grab_set()
        self.protocol("WM_DELETE_WINDOW", self._cancel)

    def _ok(self) -> None:
        port = self.port_var.get().strip()
        if not port:
            messagebox.showerror("Select Arduino port", "Select port")
            return
        self.result = port
        self.destroy()

    def _cancel(self) -> None:
        self.result = None
        self.destroy()


class DisplaySettingsDialog(tk.Toplevel):
    def __init__(self, master: tk.Widget, cfg: DisplayConfig) -> None:
        super().__init__(master)
        self.title("Display Settings")
        self.resizable(False, False)

        self.cfg = cfg
        self.result: DisplayConfig | None = None

        frm = ttk.Frame(self, padding=10)
        frm.grid(row=0, column=0, sticky="nsew")

        self._vars: dict[str, tk.StringVar] = {}

        def add_row(r: int, key: str, label: str, value: object) -> None:
            ttk.Label(frm, text=label).grid(row=r, column=0, sticky="w", pady=4)
            var = tk.StringVar(value=str(value))
            ttk.Entry(frm, textvariable=var, width=10).grid(row=r, column=1, sticky="w", padx=(8, 0))
            self._vars[key] = var

        add_row(0, "width", "Canvas width", cfg.width)
        add_row(1, "height", "Canvas height", cfg.height)
        add_row(2, "separation", "Gauge separation", cfg.separation)
        add_row(3, "frame_rate", "Frame rate (Hz)", cfg.frame_rate)
        add_row(4, "placeholder_color", "Disconnected color", cfg.placeholder_color)

        self.fit_var = tk.BooleanVar(value=cfg.fit_window)
        ttk.Checkbutton(frm, text="Fit canvas to window (restart)", variable=self.fit_var).grid(
            row=5, column=0, columnspan=2, sticky="w", pady=(6, 0))

        btns = ttk.Frame(frm)
        btns.grid(row=6, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=0, padx=(0, 8))
        ttk.Button(btns, text="OK", command=self._ok).grid(row=0, column=1)

        self.grab_set()
        self.protocol("WM_DELETE_WINDOW", self._cancel)

    def _ok(self) -> None:
        try:
            width = int(self._vars["width"].get())
            height = int(self._vars["height"].get())
            separation = int(self._vars["separation"].get())
            frame_rate = int(self._vars["frame_rate"].get())
        except ValueError:
            messagebox.showerror("Display Settings", "Invalid number format")
            return
        if width < 100 or height < 100 or separation < 0:
            messagebox.showerror("Display Settings", "Canvas must be at least 100x100")
            return
        if not MIN_FRAME_RATE <= frame_rate <= MAX_FRAME_RATE:
            messagebox.showerror("Display Settings", f"Frame rate must be {MIN_FRAME_RATE}..{MAX_FRAME_RATE}")
            return
        color = self._vars["placeholder_color"].get().strip()
        try:
            self.winfo_rgb(color)
        except tk.TclError:
            messagebox.showerror("Display Settings", f"Unknown color: {color}")
            return
        self.result = replace(
            self.cfg,
            width=width, height=height, separation=separation,
            frame_rate=frame_rate, placeholder_color=color,
            fit_window=bool(self.fit_var.get()),
        )
        self.destroy()

    def _cancel(self) -> None:
        self.result = None
        self.destroy()
