"""Tests for stage derivation and the pure schedule operations."""

from datetime import datetime, timedelta

import pytest
from pytz import utc

from netzclock.models import StageDefinition
from netzclock.schedule import (
    DEFAULT_STAGES,
    StageValidationError,
    check_crossings,
    derive,
    next_pending,
    time_remaining,
    validate_stages,
)

SUNRISE = datetime(2026, 3, 10, 6, 0, 0, tzinfo=utc)
WINDOW = timedelta(seconds=1)


def _at(hour: int, minute: int, second: int = 0, micro: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, second, micro, tzinfo=utc)


class TestDerive:
    def test_offsets_are_applied_exactly(self):
        stages = [
            StageDefinition("Before", -4, -30),
            StageDefinition("After", 3, 15),
            StageDefinition("MixedSigns", -1, 30),
        ]
        derived = derive(SUNRISE, stages)
        assert derived[0].instant == SUNRISE - timedelta(minutes=4, seconds=30)
        assert derived[1].instant == SUNRISE + timedelta(minutes=3, seconds=15)
        assert derived[2].instant == SUNRISE - timedelta(seconds=30)

    def test_output_keeps_input_order(self):
        stages = [
            StageDefinition("Late", 10),
            StageDefinition("Early", -30),
            StageDefinition("Middle", 0),
        ]
        derived = derive(SUNRISE, stages)
        assert [d.name for d in derived] == ["Late", "Early", "Middle"]
        assert [d.definition for d in derived] == stages

    def test_default_stages(self):
        derived = derive(SUNRISE, DEFAULT_STAGES)
        assert [d.name for d in derived] == [
            "Opening",
            "Thanksgiving",
            "Praised",
            "Hear",
            "Truth",
            "Sunrise",
        ]
        assert derived[0].instant == _at(5, 15)
        assert derived[3].instant == _at(5, 55, 30)
        assert derived[-1].instant == SUNRISE

    def test_empty_list(self):
        assert derive(SUNRISE, []) == ()

    def test_duplicate_names_are_not_rejected(self):
        derived = derive(SUNRISE, [StageDefinition("A", -1), StageDefinition("A", -2)])
        assert len(derived) == 2


class TestNextPending:
    def setup_method(self):
        self.derived = derive(
            SUNRISE,
            [StageDefinition("t0", -10), StageDefinition("t1", -5), StageDefinition("t2", 0)],
        )

    def test_between_stages_returns_the_following_one(self):
        stage, index = next_pending(self.derived, _at(5, 52))
        assert stage.name == "t1"
        assert index == 1

    def test_after_last_stage_returns_none(self):
        assert next_pending(self.derived, _at(6, 0, 1)) == (None, -1)

    def test_exactly_at_instant_is_not_pending(self):
        stage, index = next_pending(self.derived, _at(5, 55))
        assert stage.name == "t2"
        assert index == 2

    def test_list_order_wins_over_chronology(self):
        derived = derive(SUNRISE, [StageDefinition("later", 5), StageDefinition("sooner", -5)])
        stage, index = next_pending(derived, _at(5, 0))
        assert stage.name == "later"
        assert index == 0

    def test_identical_instants_first_wins(self):
        derived = derive(SUNRISE, [StageDefinition("first", -1), StageDefinition("second", -1)])
        stage, index = next_pending(derived, _at(5, 0))
        assert (stage.name, index) == ("first", 0)

    def test_empty_schedule(self):
        assert next_pending((), _at(5, 0)) == (None, -1)


class TestTimeRemaining:
    def test_positive_remaining(self):
        stage = derive(SUNRISE, [StageDefinition("A", -10)])[0]
        assert time_remaining(stage, _at(5, 49, 59)) == timedelta(seconds=1)

    def test_clamped_at_zero(self):
        stage = derive(SUNRISE, [StageDefinition("A", 0)])[0]
        assert time_remaining(stage, _at(6, 0, 0, 300_000)) == timedelta(0)

    def test_none_stage(self):
        assert time_remaining(None, _at(6, 0)) == timedelta(0)


class TestCheckCrossings:
    def test_emits_within_window_once(self):
        derived = derive(SUNRISE, [StageDefinition("A", -10), StageDefinition("B", 0)])
        notified: set[str] = set()
        emitted: list[str] = []
        for offset_ms in range(-900, 1000, 100):
            now = _at(5, 50) + timedelta(milliseconds=offset_ms)
            emitted += check_crossings(derived, now, notified, WINDOW)
        assert emitted == ["A"]
        assert notified == {"A"}

    def test_window_is_exclusive(self):
        derived = derive(SUNRISE, [StageDefinition("A", 0)])
        notified: set[str] = set()
        assert check_crossings(derived, _at(5, 59, 59), notified, WINDOW) == []
        assert check_crossings(derived, _at(6, 0, 1), notified, WINDOW) == []
        assert notified == set()

    def test_already_notified_is_skipped(self):
        derived = derive(SUNRISE, [StageDefinition("A", 0)])
        notified = {"A"}
        assert check_crossings(derived, SUNRISE, notified, WINDOW) == []

    def test_simultaneous_stages_in_schedule_order(self):
        derived = derive(SUNRISE, [StageDefinition("Y", 0), StageDefinition("X", 0)])
        notified: set[str] = set()
        assert check_crossings(derived, SUNRISE, notified, WINDOW) == ["Y", "X"]

    def test_far_from_any_stage(self):
        derived = derive(SUNRISE, DEFAULT_STAGES)
        assert check_crossings(derived, _at(3, 0), set(), WINDOW) == []


class TestValidateStages:
    def test_returns_tuple(self):
        assert validate_stages(iter(DEFAULT_STAGES)) == DEFAULT_STAGES

    def test_duplicate_names(self):
        with pytest.raises(StageValidationError, match="Duplicate"):
            validate_stages([StageDefinition("A", 0), StageDefinition("A", -1)])

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name(self, name):
        with pytest.raises(StageValidationError):
            validate_stages([StageDefinition(name, 0)])
