"""Tests for the HTML and terminal display consumers."""

from datetime import datetime, timedelta

import pytest
from pytz import utc

from netzclock.engine import NotificationEngine
from netzclock.models import StageDefinition, SunriseSource
from netzclock.renderers.html import (
    format_local_time,
    format_time_left,
    render_countdown_html,
    render_stage_list_html,
)
from netzclock.renderers.terminal import render_schedule_table, render_status_line
from netzclock.schedule import DEFAULT_STAGES

SUNRISE = datetime(2026, 3, 10, 6, 0, 0, tzinfo=utc)


def _view(now: datetime, stages=DEFAULT_STAGES):
    engine = NotificationEngine(stages)
    engine.set_sunrise(SUNRISE, SunriseSource.MANUAL)
    engine.tick(now)
    return engine.view()


@pytest.mark.parametrize(
    ("remaining", "expected"),
    [
        (timedelta(0), "00:00:00"),
        (timedelta(seconds=1, milliseconds=999), "00:00:01"),
        (timedelta(hours=1, minutes=2, seconds=3), "01:02:03"),
        (timedelta(hours=27), "27:00:00"),
        (timedelta(seconds=-5), "00:00:00"),
    ],
)
def test_format_time_left(remaining, expected):
    assert format_time_left(remaining) == expected


def test_format_local_time_uses_host_zone():
    assert format_local_time(SUNRISE) == SUNRISE.astimezone().strftime("%H:%M:%S")


class TestHtml:
    def test_countdown_names_next_stage(self):
        view = _view(SUNRISE - timedelta(minutes=3))
        markup = render_countdown_html(view, "en")
        assert "Time left until Truth" in markup
        assert "00:01:00" in markup
        assert 'dir="ltr"' in markup

    def test_countdown_hebrew(self):
        view = _view(SUNRISE - timedelta(minutes=3))
        markup = render_countdown_html(view, "he")
        assert "זמן נותר עד אמת" in markup
        assert 'dir="rtl"' in markup

    def test_countdown_done(self):
        markup = render_countdown_html(_view(SUNRISE + timedelta(minutes=1)), "en")
        assert "Done for today" in markup
        assert "00:00:00" in markup

    def test_stage_list_highlights_next(self):
        view = _view(SUNRISE - timedelta(minutes=3))
        markup = render_stage_list_html(view, "en")
        assert markup.count("box-shadow") == 1
        assert markup.index("box-shadow") > markup.index("Hear")
        assert markup.index("box-shadow") < markup.index(">Truth<")
        assert "Today's times" in markup

    def test_user_names_are_escaped(self):
        stages = [StageDefinition("<b>x</b>", -1)]
        view = _view(SUNRISE - timedelta(minutes=5), stages)
        assert "<b>x</b>" not in render_stage_list_html(view, "en")
        assert "&lt;b&gt;x&lt;/b&gt;" in render_countdown_html(view, "en")


class TestTerminal:
    def test_status_line(self):
        view = _view(SUNRISE - timedelta(minutes=10, seconds=30))
        assert render_status_line(view, "en") == "Time left until Praised  00:00:30"

    def test_status_line_done(self):
        assert render_status_line(_view(SUNRISE + timedelta(hours=1)), "en") == "Done for today"

    def test_schedule_table_marks_next(self):
        view = _view(SUNRISE - timedelta(minutes=3))
        lines = render_schedule_table(view, "en").splitlines()
        assert lines[0].startswith("Today's times")
        assert len(lines) == 1 + len(DEFAULT_STAGES)
        marked = [line for line in lines[1:] if line.startswith(">")]
        assert len(marked) == 1
        assert "Truth" in marked[0]
