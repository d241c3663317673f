"""Readiness score calculation.

Blends physiological signals, subjective wellness and training stress balance
into a single 0-100 score:

    readiness = 0.25 * hrv + 0.20 * rhr + 0.20 * sleep + 0.25 * subjective + 0.10 * tsb

Missing or non-positive inputs give a neutral sub-score of 50. The blend is
clamped to [0, 100] once, after weighting.
"""

from collections.abc import Iterable

from loguru import logger

from coach_engine.core.numeric import clamp, safe_divide
from coach_engine.metrics.training_load import TrainingLoadSummary
from coach_engine.wellness.types import (
    DailySignal,
    PhysiologicalData,
    SleepMetrics,
    SubjectiveWellness,
    WellnessSnapshot,
)

HRV_WEIGHT = 0.25
RHR_WEIGHT = 0.20
SLEEP_WEIGHT = 0.20
SUBJECTIVE_WEIGHT = 0.25
TSB_WEIGHT = 0.10

NEUTRAL_SCORE = 50.0
TYPICAL_HRV = 50.0
TYPICAL_RHR = 60.0
TARGET_SLEEP_HOURS = 8.0
TSB_FULL_SCORE = 15.0

# Overrides applied on top of the blended score
SEVERE_FATIGUE_CAP = 40.0
SEVERE_SCORE = 8
POOR_SLEEP_HOURS = 6.0
POOR_SLEEP_QUALITY = 4
POOR_SLEEP_PENALTY = 10.0
MISSED_WORKOUT_PENALTY = 5.0
LOW_MOTIVATION = 5
LOW_MOTIVATION_PENALTY = 5.0


def hrv_score(hrv: float | None) -> float:
    if hrv is None or hrv <= 0:
        return NEUTRAL_SCORE
    return clamp(hrv / TYPICAL_HRV * 75.0, 0.0, 100.0)


def rhr_score(resting_hr: float | None) -> float:
    """Inverted ratio: a lower resting HR scores higher."""
    if resting_hr is None or resting_hr <= 0:
        return NEUTRAL_SCORE
    return clamp(TYPICAL_RHR / resting_hr * 75.0, 0.0, 100.0)


def sleep_score(sleep: SleepMetrics | None) -> float:
    """Hours component (capped at 100) plus quality component, summed without a final clamp."""
    if sleep is None or sleep.total_hours <= 0:
        return NEUTRAL_SCORE
    hours_component = min(100.0, sleep.total_hours / TARGET_SLEEP_HOURS * 80.0)
    quality_component = (sleep.quality_score - 1) / 9 * 20.0
    return hours_component + quality_component


def subjective_score(subjective: SubjectiveWellness | None) -> float:
    if subjective is None:
        return NEUTRAL_SCORE
    score = (
        (11 - subjective.fatigue) / 10 * 30.0
        + (11 - subjective.stress) / 10 * 25.0
        + (subjective.motivation - 1) / 9 * 25.0
        + (10 - subjective.soreness) / 10 * 20.0
    )
    return clamp(score, 0.0, 100.0)


def tsb_score(load_summary: TrainingLoadSummary | None) -> float:
    if load_summary is None or load_summary.tsb <= 0:
        return NEUTRAL_SCORE
    return min(100.0, safe_divide(load_summary.tsb, TSB_FULL_SCORE) * 100.0)


def calculate_readiness(
    physiological: PhysiologicalData | None,
    subjective: SubjectiveWellness | None,
    load_summary: TrainingLoadSummary | None,
) -> float:
    """Calculate the 0-100 readiness score for one athlete-day.

    Args:
        physiological: Objective measurements (any field may be missing)
        subjective: Self-reported wellness
        load_summary: Training load for the same date

    Returns:
        Readiness in [0, 100]; exactly 50.0 when every input is missing
    """
    physiological = physiological or PhysiologicalData()
    score = (
        HRV_WEIGHT * hrv_score(physiological.hrv)
        + RHR_WEIGHT * rhr_score(physiological.resting_hr)
        + SLEEP_WEIGHT * sleep_score(physiological.sleep)
        + SUBJECTIVE_WEIGHT * subjective_score(subjective)
        + TSB_WEIGHT * tsb_score(load_summary)
    )
    return clamp(score, 0.0, 100.0)


def apply_readiness_overrides(
    score: float,
    subjective: SubjectiveWellness | None,
    sleep: SleepMetrics | None,
    missed_workouts: int = 0,
) -> float:
    """Apply hard overrides to a blended readiness score.

    Rules:
        - Fatigue and soreness both >= 8: cap at 40
        - Poor sleep (< 6 h or quality <= 4): -10
        - Each missed workout: -5
        - Motivation < 5: -5

    Returns:
        Adjusted score clamped to [0, 100]
    """
    adjusted = score
    if subjective is not None and subjective.fatigue >= SEVERE_SCORE and subjective.soreness >= SEVERE_SCORE:
        adjusted = min(adjusted, SEVERE_FATIGUE_CAP)
    if sleep is not None and (sleep.total_hours < POOR_SLEEP_HOURS or sleep.quality_score <= POOR_SLEEP_QUALITY):
        adjusted -= POOR_SLEEP_PENALTY
    adjusted -= MISSED_WORKOUT_PENALTY * max(0, missed_workouts)
    if subjective is not None and subjective.motivation < LOW_MOTIVATION:
        adjusted -= LOW_MOTIVATION_PENALTY
    return clamp(adjusted, 0.0, 100.0)


def latest_signals(signals: Iterable[DailySignal]) -> list[DailySignal]:
    """Keep one signal per (athlete_id, date), last write wins.

    Later entries replace earlier ones unless both carry submitted_at and the
    later entry was submitted first.
    """
    latest: dict[tuple, DailySignal] = {}
    for signal in signals:
        current = latest.get(signal.key)
        if (
            current is not None
            and current.submitted_at is not None
            and signal.submitted_at is not None
            and signal.submitted_at < current.submitted_at
        ):
            continue
        latest[signal.key] = signal
    return sorted(latest.values(), key=lambda signal: signal.key)


def build_wellness_snapshot(
    signal: DailySignal,
    load_summary: TrainingLoadSummary | None = None,
) -> WellnessSnapshot:
    """Build the readiness view for a signal and the same day's training load."""
    readiness = calculate_readiness(signal.physiological, signal.subjective, load_summary)
    logger.debug(f"[READINESS] athlete_id={signal.athlete_id} date={signal.date.isoformat()} score={readiness:.1f}")
    return WellnessSnapshot(
        athlete_id=signal.athlete_id,
        date=signal.date,
        physiological=signal.physiological,
        subjective=signal.subjective,
        load_summary=load_summary,
        readiness_score=readiness,
    )
