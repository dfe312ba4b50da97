"""
Settings persistence (app_settings.json).

Each section is read independently; a bad value falls back to its default.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import json
import os

from comm.serial_link import DEFAULT_BAUD
from utils.timebase import DEFAULT_FRAME_RATE
from app.styles import PLACEHOLDER_BG

DEFAULT_SETTINGS_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "app_settings.json"))


@dataclass
class ComConfig:
    port: str = ""
    baud: int = DEFAULT_BAUD


@dataclass
class DisplayConfig:
    width: int = 700
    height: int = 400
    separation: int = 300
    fit_window: bool = False
    frame_rate: int = DEFAULT_FRAME_RATE
    placeholder_color: str = PLACEHOLDER_BG


@dataclass
class AppSettings:
    com: ComConfig = field(default_factory=ComConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_path: str = ""


def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> AppSettings:
    settings = AppSettings()
    if not os.path.isfile(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return settings
    if not isinstance(data, dict):
        return settings

    com = data.get("com", {})
    if isinstance(com, dict):
        try:
            settings.com = ComConfig(
                port=str(com.get("port", settings.com.port) or ""),
                baud=int(com.get("baud", settings.com.baud)),
            )
        except (TypeError, ValueError):
            pass

    disp = data.get("display", {})
    if isinstance(disp, dict):
        d = settings.display
        try:
            settings.display = DisplayConfig(
                width=max(100, int(disp.get("width", d.width))),
                height=max(100, int(disp.get("height", d.height))),
                separation=max(0, int(disp.get("separation", d.separation))),
                fit_window=bool(disp.get("fit_window", d.fit_window)),
                frame_rate=int(disp.get("frame_rate", d.frame_rate)),
                placeholder_color=str(disp.get("placeholder_color", d.placeholder_color)),
            )
        except (TypeError, ValueError):
            pass

    log = data.get("log", {})
    if isinstance(log, dict):
        settings.log_path = str(log.get("path", settings.log_path) or "")

    return settings


def save_settings(settings: AppSettings, path: str = DEFAULT_SETTINGS_PATH) -> bool:
    data = {
        "com": {"port": settings.com.port, "baud": settings.com.baud},
        "display": {
            "width": settings.display.width,
            "height": settings.display.height,
            "separation": settings.display.separation,
            "fit_window": settings.display.fit_window,
            "frame_rate": settings.display.frame_rate,
            "placeholder_color": settings.display.placeholder_color,
        },
        "log": {"path": settings.log_path},
    }
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
    except OSError:
        return False
    return True
