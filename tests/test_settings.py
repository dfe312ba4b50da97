"""Unit tests for settings load/save."""

from __future__ import annotations

import json

from app.settings import AppSettings, ComConfig, DisplayConfig, load_settings, save_settings


class TestSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        s = load_settings(str(tmp_path / "nope.json"))
        assert s == AppSettings()
        assert s.com.baud == 9600
        assert (s.display.width, s.display.height, s.display.separation) == (700, 400, 300)

    def test_save_then_load(self, tmp_path):
        path = str(tmp_path / "app_settings.json")
        s = AppSettings(
            com=ComConfig(port="/dev/ttyACM0"),
            display=DisplayConfig(width=800, fit_window=True, placeholder_color="gray"),
            log_path="/tmp/session.log",
        )
        assert save_settings(s, path) is True
        assert load_settings(path) == s

    def test_bad_section_falls_back(self, tmp_path):
        path = tmp_path / "app_settings.json"
        path.write_text(json.dumps({
            "com": {"port": "COM5", "baud": "fast"},
            "display": {"height": 250},
        }), encoding="utf-8")
        s = load_settings(str(path))
        assert s.com == ComConfig()
        assert s.display.height == 250
        assert s.display.width == 700

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "app_settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(str(path)) == AppSettings()

    def test_save_to_missing_dir_fails_quietly(self, tmp_path):
        assert save_settings(AppSettings(), str(tmp_path / "missing" / "s.json")) is False
