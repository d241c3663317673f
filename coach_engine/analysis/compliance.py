"""Plan compliance computation.

Compare planned workouts against completed activities over a date range.
Returns high-level reconciliation only: percentages, flags and unplanned
minutes. No recommendations, no mutations.
"""

from collections.abc import Mapping, Sequence
from datetime import date

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from coach_engine.analysis.distribution import zone_minutes_by_zone
from coach_engine.analysis.trends import TrendDirection, calculate_trend
from coach_engine.core.numeric import safe_divide
from coach_engine.zones.types import Zone

KEY_SESSION_TYPES = frozenset({"THRESHOLD", "INTERVALS"})
AD_HOC_CLASSIFICATION = "ad_hoc"

Z2_CREEP_SHARE = 0.7
LOW_COMPLIANCE_PERCENT = 60.0

FLAG_Z2_CREEP = "Z2_CREEP"
FLAG_LOW_COMPLIANCE = "LOW_COMPLIANCE"
FLAG_MISSED_KEY_SESSION = "MISSED_KEY_SESSION"


class IntensityProfile(BaseModel):
    """Planned share of a workout per zone, in percent."""

    model_config = ConfigDict(frozen=True)

    z1_percent: float = 100.0
    z2_percent: float = 0.0
    z3_percent: float = 0.0

    @model_validator(mode="after")
    def validate_profile(self) -> "IntensityProfile":
        values = (self.z1_percent, self.z2_percent, self.z3_percent)
        if any(value < 0 for value in values):
            raise ValueError("Intensity percentages must be non-negative")
        if sum(values) > 100.0 + 1e-9:
            raise ValueError("Intensity percentages must sum to at most 100")
        return self

    def percent(self, zone: Zone) -> float:
        return {Zone.Z1: self.z1_percent, Zone.Z2: self.z2_percent, Zone.Z3: self.z3_percent}[zone]


class PlannedWorkout(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    workout_type: str
    duration_minutes: float
    intensity_profile: IntensityProfile = IntensityProfile()

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Planned duration must be positive")
        return value

    @property
    def is_key_session(self) -> bool:
        return self.workout_type.upper() in KEY_SESSION_TYPES


class CompletedActivity(BaseModel):
    model_config = ConfigDict(frozen=True)

    external_id: str
    date: date
    duration_seconds: float
    workout_type: str | None = None

    @field_validator("duration_seconds")
    @classmethod
    def validate_duration(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Activity duration must be non-negative")
        return value


class ComplianceSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    completion_percent: float
    key_session_completion_percent: float
    zone_adherence_percent: float
    flags: list[str]
    unplanned_load_minutes: float


class ProgressSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    weekly_volume_trend: list[float]
    training_load_trend: list[float]
    completion_streak: int
    volume_direction: TrendDirection
    load_direction: TrendDirection


def _in_range(day: date, range_start: date, range_end: date) -> bool:
    return range_start <= day <= range_end


def planned_zone_percentages(planned: Sequence[PlannedWorkout]) -> dict[Zone, float]:
    """Duration-weighted planned share per zone. Empty plan yields an empty mapping."""
    total_minutes = sum(workout.duration_minutes for workout in planned)
    if total_minutes == 0:
        return {}
    return {
        zone: sum(workout.intensity_profile.percent(zone) * workout.duration_minutes for workout in planned)
        / total_minutes
        for zone in Zone
    }


def zone_deviation_percent(planned: Sequence[PlannedWorkout], zone_minutes: Mapping[Zone, float]) -> float:
    """Sum of absolute percentage-point gaps between planned and actual time-in-zone."""
    total = sum(zone_minutes.values())
    if total == 0 or not planned:
        return 0.0
    targets = planned_zone_percentages(planned)
    return sum(
        abs(targets.get(zone, 0.0) - safe_divide(zone_minutes.get(zone, 0.0), total) * 100.0) for zone in Zone
    )


def unplanned_load_minutes(
    planned: Sequence[PlannedWorkout],
    completed: Sequence[CompletedActivity],
    classifications: Mapping[str, str],
) -> float:
    """Minutes from activities on days with no plan, or explicitly classified as ad hoc."""
    planned_dates = {workout.date for workout in planned}
    minutes = 0.0
    for activity in completed:
        classification = classifications.get(activity.external_id)
        is_ad_hoc = classification is not None and classification.lower() == AD_HOC_CLASSIFICATION
        if activity.date not in planned_dates or is_ad_hoc:
            minutes += activity.duration_seconds / 60.0
    return minutes


def summarize_compliance(
    planned: Sequence[PlannedWorkout],
    completed: Sequence[CompletedActivity],
    zone_minutes: Mapping[Zone | str, float],
    classifications: Mapping[str, str],
    range_start: date,
    range_end: date,
) -> ComplianceSummary:
    """Summarize plan compliance over [range_start, range_end].

    Args:
        planned: Planned workouts (filtered to the range)
        completed: Completed activities (filtered to the range)
        zone_minutes: Actual minutes per zone over the range
        classifications: Activity classification tags keyed by external_id
        range_start: First day of the range (inclusive)
        range_end: Last day of the range (inclusive)

    Returns:
        ComplianceSummary. No planned workouts means 100% completion; no key
        sessions means 100% key completion; no zone minutes means 100% adherence.
    """
    planned_in_range = [workout for workout in planned if _in_range(workout.date, range_start, range_end)]
    completed_in_range = [activity for activity in completed if _in_range(activity.date, range_start, range_end)]
    completed_dates = {activity.date for activity in completed_in_range}

    planned_count = len(planned_in_range)
    completion_percent = (
        100.0 if planned_count == 0 else min(100.0, len(completed_in_range) / planned_count * 100.0)
    )

    key_sessions = [workout for workout in planned_in_range if workout.is_key_session]
    completed_key = sum(1 for workout in key_sessions if workout.date in completed_dates)
    key_completion_percent = (
        100.0 if not key_sessions else min(100.0, completed_key / len(key_sessions) * 100.0)
    )

    actual = zone_minutes_by_zone(zone_minutes)
    total_minutes = sum(actual.values())
    adherence = (
        100.0 if total_minutes == 0 else max(0.0, 100.0 - zone_deviation_percent(planned_in_range, actual))
    )

    flags: list[str] = []
    if total_minutes > 0 and actual[Zone.Z2] / total_minutes > Z2_CREEP_SHARE:
        flags.append(FLAG_Z2_CREEP)
    if completion_percent < LOW_COMPLIANCE_PERCENT:
        flags.append(FLAG_LOW_COMPLIANCE)
    if key_completion_percent < 100.0:
        flags.append(FLAG_MISSED_KEY_SESSION)

    summary = ComplianceSummary(
        completion_percent=completion_percent,
        key_session_completion_percent=key_completion_percent,
        zone_adherence_percent=adherence,
        flags=flags,
        unplanned_load_minutes=unplanned_load_minutes(planned_in_range, completed_in_range, classifications),
    )
    if flags:
        logger.info(
            f"[COMPLIANCE] {range_start.isoformat()} to {range_end.isoformat()}: "
            f"completion={completion_percent:.1f}% flags={','.join(flags)}"
        )
    return summary


def summarize_progress(weekly_volumes: Sequence[float], training_loads: Sequence[float]) -> ProgressSummary:
    """Summarize progress from weekly volumes and loads.

    The completion streak counts trailing weeks with positive volume.
    """
    streak = 0
    for volume in reversed(weekly_volumes):
        if volume <= 0:
            break
        streak += 1

    return ProgressSummary(
        weekly_volume_trend=list(weekly_volumes),
        training_load_trend=list(training_loads),
        completion_streak=streak,
        volume_direction=calculate_trend(weekly_volumes),
        load_direction=calculate_trend(training_loads),
    )
