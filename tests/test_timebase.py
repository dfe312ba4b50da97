"""Unit tests for frame timing helpers."""

from __future__ import annotations

from utils.timebase import frame_period_ms, now_ms_monotonic


class TestFramePeriod:
    def test_sixty_hz(self):
        assert frame_period_ms(60) == 17

    def test_clamped(self):
        assert frame_period_ms(0) == 1000
        assert frame_period_ms(10_000) == 4

    def test_monotonic(self):
        a = now_ms_monotonic()
        assert now_ms_monotonic() >= a
