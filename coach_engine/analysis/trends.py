"""Trend computation.

Half-window comparison for metrics over time: the series is split at its
midpoint and the relative change between the two half averages decides the
direction.
"""

import statistics
from collections.abc import Callable, Iterable, Sequence
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from coach_engine.core.numeric import safe_divide
from coach_engine.wellness.types import WellnessSnapshot

MIN_TREND_POINTS = 3
STRONG_CHANGE = 0.05


class TrendDirection(StrEnum):
    IMPROVING = "improving"
    SLIGHT_IMPROVEMENT = "slight_improvement"
    STABLE = "stable"
    SLIGHT_DECLINE = "slight_decline"
    DECLINING = "declining"
    INSUFFICIENT_DATA = "insufficient_data"


class WellnessTrends(BaseModel):
    """Per-metric trend directions over a run of wellness snapshots."""

    model_config = ConfigDict(frozen=True)

    resting_hr: TrendDirection
    hrv: TrendDirection
    body_weight: TrendDirection
    sleep_hours: TrendDirection
    readiness: TrendDirection
    tss: TrendDirection
    average_readiness: float
    average_hrv: float | None = None
    average_sleep_hours: float | None = None
    readiness_variance: float
    days_analyzed: int


def calculate_trend(values: Sequence[float]) -> TrendDirection:
    """Classify the direction of a chronological series.

    Args:
        values: Numeric values over time (chronological order)

    Returns:
        TrendDirection. Fewer than 3 points, or a first-half average <= 0,
        yields INSUFFICIENT_DATA.
    """
    if len(values) < MIN_TREND_POINTS:
        return TrendDirection.INSUFFICIENT_DATA

    midpoint = len(values) // 2
    first_avg = statistics.fmean(values[:midpoint])
    second_avg = statistics.fmean(values[midpoint:])

    # Relative change is undefined against a non-positive baseline
    if first_avg <= 0:
        return TrendDirection.INSUFFICIENT_DATA

    change = safe_divide(second_avg - first_avg, first_avg)

    if change > STRONG_CHANGE:
        return TrendDirection.IMPROVING
    if change > 0:
        return TrendDirection.SLIGHT_IMPROVEMENT
    if change < -STRONG_CHANGE:
        return TrendDirection.DECLINING
    if change < 0:
        return TrendDirection.SLIGHT_DECLINE
    return TrendDirection.STABLE


def _series(snapshots: Iterable[WellnessSnapshot], extract: Callable[[WellnessSnapshot], float | None]) -> list[float]:
    values = (extract(snapshot) for snapshot in snapshots)
    return [value for value in values if value is not None]


def _sleep_hours(snapshot: WellnessSnapshot) -> float | None:
    if snapshot.physiological is None or snapshot.physiological.sleep is None:
        return None
    return snapshot.physiological.sleep.total_hours


def calculate_wellness_trends(snapshots: Iterable[WellnessSnapshot]) -> WellnessTrends:
    """Compute per-metric trends over snapshots (sorted by date first).

    Metrics missing on a given day are left out of that metric's series.
    """
    ordered = sorted(snapshots, key=lambda snapshot: snapshot.date)

    resting_hr = _series(ordered, lambda s: s.physiological.resting_hr if s.physiological else None)
    hrv = _series(ordered, lambda s: s.physiological.hrv if s.physiological else None)
    body_weight = _series(ordered, lambda s: s.physiological.body_weight_kg if s.physiological else None)
    sleep_hours = _series(ordered, _sleep_hours)
    readiness = [snapshot.readiness_score for snapshot in ordered]
    tss = _series(ordered, lambda s: s.load_summary.tss if s.load_summary else None)

    return WellnessTrends(
        resting_hr=calculate_trend(resting_hr),
        hrv=calculate_trend(hrv),
        body_weight=calculate_trend(body_weight),
        sleep_hours=calculate_trend(sleep_hours),
        readiness=calculate_trend(readiness),
        tss=calculate_trend(tss),
        average_readiness=statistics.fmean(readiness) if readiness else 0.0,
        average_hrv=statistics.fmean(hrv) if hrv else None,
        average_sleep_hours=statistics.fmean(sleep_hours) if sleep_hours else None,
        readiness_variance=statistics.pvariance(readiness) if readiness else 0.0,
        days_analyzed=len(ordered),
    )
