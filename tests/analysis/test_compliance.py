"""Tests for plan compliance and progress summaries.

Tests cover:
- Completion percent (including an empty plan)
- Key session matching by date
- Duration-weighted zone adherence
- Flags
- Unplanned load minutes
- Progress streak and directions
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from coach_engine.analysis.compliance import (
    FLAG_LOW_COMPLIANCE,
    FLAG_MISSED_KEY_SESSION,
    FLAG_Z2_CREEP,
    CompletedActivity,
    IntensityProfile,
    PlannedWorkout,
    planned_zone_percentages,
    summarize_compliance,
    summarize_progress,
)
from coach_engine.analysis.trends import TrendDirection
from coach_engine.zones.types import Zone

WEEK_START = date(2024, 3, 4)
WEEK_END = WEEK_START + timedelta(days=6)


def _planned(
    workout_id: str,
    offset: int,
    workout_type: str = "ENDURANCE",
    minutes: float = 60.0,
    profile: IntensityProfile | None = None,
) -> PlannedWorkout:
    return PlannedWorkout(
        id=workout_id,
        date=WEEK_START + timedelta(days=offset),
        workout_type=workout_type,
        duration_minutes=minutes,
        intensity_profile=profile or IntensityProfile(),
    )


def _activity(external_id: str, offset: int, minutes: float = 60.0) -> CompletedActivity:
    return CompletedActivity(
        external_id=external_id,
        date=WEEK_START + timedelta(days=offset),
        duration_seconds=minutes * 60.0,
    )


def _summarize(planned, completed, zone_minutes=None, classifications=None):
    return summarize_compliance(planned, completed, zone_minutes or {}, classifications or {}, WEEK_START, WEEK_END)


class TestCompletion:
    def test_no_planned_workouts_is_fully_compliant(self) -> None:
        summary = _summarize([], [_activity("a1", 0)])
        assert summary.completion_percent == 100.0

    def test_planned_outside_range_ignored(self) -> None:
        summary = _summarize([_planned("p1", -3), _planned("p2", 10)], [])
        assert summary.completion_percent == 100.0

    def test_partial_completion(self) -> None:
        planned = [_planned(f"p{i}", i) for i in range(5)]
        summary = _summarize(planned, [_activity("a1", 0), _activity("a2", 1)])
        assert summary.completion_percent == pytest.approx(40.0)
        assert FLAG_LOW_COMPLIANCE in summary.flags

    def test_completion_capped_at_100(self) -> None:
        planned = [_planned("p1", 0), _planned("p2", 1)]
        completed = [_activity("a1", 0), _activity("a2", 1), _activity("a3", 2)]
        assert _summarize(planned, completed).completion_percent == 100.0

    def test_completed_outside_range_ignored(self) -> None:
        planned = [_planned("p1", 0), _planned("p2", 1)]
        completed = [_activity("a1", 0), _activity("old", -1)]
        assert _summarize(planned, completed).completion_percent == pytest.approx(50.0)


class TestKeySessions:
    def test_no_key_sessions(self) -> None:
        summary = _summarize([_planned("p1", 0)], [])
        assert summary.key_session_completion_percent == 100.0
        assert FLAG_MISSED_KEY_SESSION not in summary.flags

    def test_matched_by_date(self) -> None:
        planned = [_planned("p1", 1, "THRESHOLD"), _planned("p2", 3, "intervals")]
        completed = [_activity("a1", 1)]
        summary = _summarize(planned, completed)
        assert summary.key_session_completion_percent == pytest.approx(50.0)
        assert FLAG_MISSED_KEY_SESSION in summary.flags

    def test_all_key_sessions_done(self) -> None:
        planned = [_planned("p1", 1, "Threshold"), _planned("p2", 3, "INTERVALS")]
        completed = [_activity("a1", 1), _activity("a2", 3)]
        assert _summarize(planned, completed).key_session_completion_percent == 100.0


class TestZoneAdherence:
    def test_no_zone_minutes_is_full_adherence(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0)], zone_minutes={})
        assert summary.zone_adherence_percent == 100.0

    def test_exact_match(self) -> None:
        planned = [_planned("p1", 0, profile=IntensityProfile(z1_percent=80.0, z2_percent=10.0, z3_percent=10.0))]
        summary = _summarize(planned, [_activity("a1", 0)], zone_minutes={Zone.Z1: 48, Zone.Z2: 6, Zone.Z3: 6})
        assert summary.zone_adherence_percent == pytest.approx(100.0)

    def test_deviation_subtracts_percentage_points(self) -> None:
        planned = [_planned("p1", 0)]
        summary = _summarize(planned, [_activity("a1", 0)], zone_minutes={"Z1": 50, "Z2": 50})
        # |100 - 50| + |0 - 50| + |0 - 0|
        assert summary.zone_adherence_percent == pytest.approx(0.0)

    def test_adherence_floor_is_zero(self) -> None:
        planned = [_planned("p1", 0)]
        summary = _summarize(planned, [_activity("a1", 0)], zone_minutes={"Z1": 20, "Z2": 80})
        assert summary.zone_adherence_percent == 0.0

    def test_empty_plan_has_no_deviation(self) -> None:
        summary = _summarize([], [], zone_minutes={"Z1": 20, "Z2": 80})
        assert summary.zone_adherence_percent == 100.0

    def test_planned_percentages_are_duration_weighted(self) -> None:
        planned = [
            _planned("p1", 0, minutes=60.0),
            _planned("p2", 1, minutes=30.0, profile=IntensityProfile(z1_percent=40.0, z2_percent=30.0, z3_percent=30.0)),
        ]
        targets = planned_zone_percentages(planned)
        assert targets[Zone.Z1] == pytest.approx(80.0)
        assert targets[Zone.Z2] == pytest.approx(10.0)
        assert targets[Zone.Z3] == pytest.approx(10.0)

    def test_profile_validation(self) -> None:
        with pytest.raises(ValidationError):
            IntensityProfile(z1_percent=80.0, z2_percent=20.0, z3_percent=10.0)
        with pytest.raises(ValidationError):
            IntensityProfile(z1_percent=-1.0)


class TestFlags:
    def test_z2_creep_over_seventy_percent(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0)], zone_minutes={"Z1": 20, "Z2": 80})
        assert FLAG_Z2_CREEP in summary.flags

    def test_no_creep_at_half(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0)], zone_minutes={"Z1": 50, "Z2": 50})
        assert FLAG_Z2_CREEP not in summary.flags

    def test_clean_week_has_no_flags(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0)], zone_minutes={"Z1": 60})
        assert summary.flags == []


class TestUnplannedLoad:
    def test_activity_on_unplanned_day(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0), _activity("a2", 2, minutes=45.0)])
        assert summary.unplanned_load_minutes == pytest.approx(45.0)

    def test_ad_hoc_on_planned_day(self) -> None:
        completed = [_activity("a1", 0), _activity("a2", 0, minutes=30.0)]
        summary = _summarize([_planned("p1", 0)], completed, classifications={"a2": "AD_HOC", "a1": "planned"})
        assert summary.unplanned_load_minutes == pytest.approx(30.0)

    def test_all_matched(self) -> None:
        summary = _summarize([_planned("p1", 0)], [_activity("a1", 0)])
        assert summary.unplanned_load_minutes == 0.0


class TestProgress:
    def test_streak_counts_trailing_positive_weeks(self) -> None:
        progress = summarize_progress([0.0, 5.0, 6.0, 7.0], [10.0, 20.0, 30.0, 40.0])
        assert progress.completion_streak == 3
        assert progress.volume_direction == TrendDirection.IMPROVING
        assert progress.load_direction == TrendDirection.IMPROVING
        assert progress.weekly_volume_trend == [0.0, 5.0, 6.0, 7.0]

    def test_streak_broken_by_last_week(self) -> None:
        assert summarize_progress([5.0, 0.0], []).completion_streak == 0

    def test_empty(self) -> None:
        progress = summarize_progress([], [])
        assert progress.completion_streak == 0
        assert progress.volume_direction == TrendDirection.INSUFFICIENT_DATA
