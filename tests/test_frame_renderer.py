"""Unit tests for the per-frame parse / map / draw / echo step."""

from __future__ import annotations

import pytest

from conftest import FakeLink

from app.frame_renderer import (
    FRAME_HELD,
    FRAME_PLACEHOLDER,
    FRAME_RENDERED,
    FRAME_SKIPPED,
    FrameRenderer,
    RxRejected,
    RxSample,
    compute_gauge_state,
)
from comm.line_protocol import AnglePair


class TestComputeGaugeState:
    def test_extremes(self):
        state, err = compute_gauge_state("0,180")
        assert err is None
        assert state.rot_x == pytest.approx(90)
        assert state.rot_y == pytest.approx(-90)
        assert state.out_line() == "180,0\n"

    def test_centre(self):
        state, _ = compute_gauge_state("90,90")
        assert (state.rot_x, state.rot_y) == (0, 0)
        assert state.out_line() == "90,90\n"

    def test_malformed_without_history(self):
        state, err = compute_gauge_state("45")
        assert state is None
        assert "missing y" in err

    def test_malformed_holds_last_good(self):
        state, err = compute_gauge_state("oops", AnglePair(30.0, 60.0))
        assert err is not None
        assert state.held is True
        assert state.servo_angles() == (150, 120)


class TestFrameRenderer:
    def test_closed_link_shows_placeholder_without_io(self, fake_view):
        link = FakeLink(lines=["10,20"], is_open=False)
        r = FrameRenderer(placeholder_color="purple")
        assert r.render_frame(link, fake_view) == FRAME_PLACEHOLDER
        assert fake_view.placeholders == ["purple"]
        assert link.read_calls == 0
        assert link.written == []
        assert fake_view.drawn == []

    def test_empty_read_skips_frame(self, fake_view):
        link = FakeLink(lines=[])
        r = FrameRenderer()
        assert r.render_frame(link, fake_view) == FRAME_SKIPPED
        assert fake_view.drawn == []
        assert link.written == []

    def test_valid_line_draws_and_echoes(self, fake_view):
        link = FakeLink(lines=["0,180"])
        r = FrameRenderer()
        assert r.render_frame(link, fake_view) == FRAME_RENDERED
        state = fake_view.drawn[0]
        assert (state.rot_x, state.rot_y) == (90, -90)
        assert link.written == ["180,0\n"]

    def test_one_line_per_frame(self, fake_view):
        link = FakeLink(lines=["90,90", "0,0"])
        r = FrameRenderer()
        r.render_frame(link, fake_view)
        assert link.written == ["90,90\n"]
        assert link.lines == ["0,0"]
        r.render_frame(link, fake_view)
        assert link.written == ["90,90\n", "180,180\n"]

    def test_malformed_line_before_any_good_is_skipped(self, fake_view, recording_logger):
        link = FakeLink(lines=["abc"])
        r = FrameRenderer(logger=recording_logger)
        assert r.render_frame(link, fake_view) == FRAME_SKIPPED
        assert fake_view.drawn == []
        assert link.written == []
        assert isinstance(recording_logger.records[0], RxRejected)

    def test_malformed_line_holds_last_good(self, fake_view, recording_logger):
        link = FakeLink(lines=["45,135", "45,"])
        r = FrameRenderer(logger=recording_logger)
        r.render_frame(link, fake_view)
        assert r.render_frame(link, fake_view) == FRAME_HELD
        assert link.written == ["135,45\n", "135,45\n"]
        assert fake_view.drawn[-1].held is True
        kinds = [type(rec) for rec in recording_logger.records]
        assert kinds == [RxSample, RxRejected, RxSample]

    def test_reset_forgets_last_good(self, fake_view):
        link = FakeLink(lines=["45,135", "bad"])
        r = FrameRenderer()
        r.render_frame(link, fake_view)
        r.reset()
        assert r.render_frame(link, fake_view) == FRAME_SKIPPED
