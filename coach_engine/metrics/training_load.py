"""Training load metrics computation (CTL, ATL, TSB).

This module provides deterministic, idempotent computation of training load
metrics from stored daily stress (TSS) records.

Metrics:
- CTL (Chronic Training Load): 42-day exponentially decayed load
- ATL (Acute Training Load): 7-day exponentially decayed load
- TSB (Training Stress Balance): CTL - ATL

Properties:
- Stateless: Every call is a pure fold over the supplied history window
- Deterministic: Same input always produces same output
- Idempotent: Batch recomputation rebuilds each day independently
- Missing data handling: Days absent from history are skipped; a stored day
  with no TSS contributes zero stress
- One record per day: when a date repeats, the last record in the history wins
"""

import math
from collections.abc import Iterable
from datetime import date, timedelta

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from coach_engine.core.errors import InvalidInputError

CTL_WINDOW_DAYS = 42
ATL_WINDOW_DAYS = 7

TSB_OPTIMAL = 15.0
TSB_GOOD = 0.0
TSB_MODERATE = -15.0


class DailyLoadRecord(BaseModel):
    """One stored day of training stress."""

    model_config = ConfigDict(frozen=True)

    date: date
    tss: float | None = None
    training_minutes: float = 0.0

    @field_validator("tss")
    @classmethod
    def validate_tss(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("TSS must be non-negative")
        return value

    @field_validator("training_minutes")
    @classmethod
    def validate_minutes(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Training minutes must be non-negative")
        return value


class TrainingLoadSummary(BaseModel):
    """Per-day training load view.

    Attributes:
        tss: Stress score for the day
        ctl: Chronic training load (fitness)
        atl: Acute training load (fatigue)
        tsb: Training stress balance (form), ctl - atl
        training_minutes: Minutes trained on the day
    """

    model_config = ConfigDict(frozen=True)

    tss: float
    ctl: float
    atl: float
    tsb: float
    training_minutes: float

    @field_validator("tss", "ctl", "atl", "training_minutes")
    @classmethod
    def validate_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Training load values must be non-negative")
        return value

    @classmethod
    def empty(cls) -> "TrainingLoadSummary":
        return cls(tss=0.0, ctl=0.0, atl=0.0, tsb=0.0, training_minutes=0.0)

    @property
    def has_training_data(self) -> bool:
        return self.tss > 0 or self.training_minutes > 0

    @property
    def recovery_status(self) -> str:
        """Recovery status derived from TSB: optimal, good, moderate or high_load."""
        if self.tsb > TSB_OPTIMAL:
            return "optimal"
        if self.tsb > TSB_GOOD:
            return "good"
        if self.tsb > TSB_MODERATE:
            return "moderate"
        return "high_load"


class DailyTrainingLoad(BaseModel):
    """Batch recomputation output row, keyed by (athlete_id, date)."""

    model_config = ConfigDict(frozen=True)

    athlete_id: str
    date: date
    summary: TrainingLoadSummary

    @property
    def key(self) -> tuple[str, date]:
        return (self.athlete_id, self.date)


def records_by_date(history: Iterable[DailyLoadRecord]) -> dict[date, DailyLoadRecord]:
    """Collapse history to one record per day; a later record replaces an earlier one."""
    return {record.date: record for record in history}


def _decayed_load(history: Iterable[DailyLoadRecord], target_date: date, window_days: int) -> float:
    """Sum tss * exp(-days_ago / window) over records inside the window, divided by the window.

    The divisor is the fixed window length, not the number of observed days,
    so short histories under-estimate the load.
    """
    total = 0.0
    for record in records_by_date(history).values():
        days_ago = (target_date - record.date).days
        if days_ago < 0 or days_ago >= window_days:
            continue
        tss = record.tss if record.tss is not None else 0.0
        total += tss * math.exp(-days_ago / window_days)
    return total / window_days


def calculate_ctl(history: Iterable[DailyLoadRecord], target_date: date) -> float:
    """Chronic training load over the trailing 42 days."""
    return _decayed_load(history, target_date, CTL_WINDOW_DAYS)


def calculate_atl(history: Iterable[DailyLoadRecord], target_date: date) -> float:
    """Acute training load over the trailing 7 days."""
    return _decayed_load(history, target_date, ATL_WINDOW_DAYS)


def calculate_training_load(
    athlete_id: str,
    target_date: date,
    history: Iterable[DailyLoadRecord],
) -> TrainingLoadSummary:
    """Compute the training load summary for one athlete-day.

    Args:
        athlete_id: Athlete identifier (used for logging only)
        target_date: Day to compute the summary for
        history: Stored daily stress records; records after target_date are ignored
            and a repeated date keeps its last record

    Returns:
        TrainingLoadSummary with tss/minutes from the target day's record (0 if absent)
    """
    records = records_by_date(history)
    ctl = calculate_ctl(records.values(), target_date)
    atl = calculate_atl(records.values(), target_date)

    today = records.get(target_date)
    tss = today.tss if today is not None and today.tss is not None else 0.0
    minutes = today.training_minutes if today is not None else 0.0

    summary = TrainingLoadSummary(
        tss=tss,
        ctl=ctl,
        atl=atl,
        tsb=ctl - atl,
        training_minutes=minutes,
    )
    logger.debug(
        f"[TRAINING_LOAD] athlete_id={athlete_id} date={target_date.isoformat()} "
        f"ctl={summary.ctl:.2f} atl={summary.atl:.2f} tsb={summary.tsb:.2f}"
    )
    return summary


def recompute_training_loads(
    athlete_id: str,
    start_date: date,
    end_date: date,
    history: Iterable[DailyLoadRecord],
) -> list[DailyTrainingLoad]:
    """Recompute every day in [start_date, end_date] independently.

    Not incremental: each day is a fresh fold over the supplied window, so a
    changed TSS value anywhere in the trailing 42 days is picked up. Callers
    must serialize recomputations for the same athlete.

    Raises:
        InvalidInputError: If end_date is before start_date
    """
    if end_date < start_date:
        raise InvalidInputError("end_date", "end_date must not be before start_date")

    records = list(records_by_date(history).values())
    rows: list[DailyTrainingLoad] = []
    current = start_date
    while current <= end_date:
        rows.append(
            DailyTrainingLoad(
                athlete_id=athlete_id,
                date=current,
                summary=calculate_training_load(athlete_id, current, records),
            )
        )
        current += timedelta(days=1)

    logger.info(
        f"[TRAINING_LOAD] Recomputed {len(rows)} days for athlete_id={athlete_id} "
        f"({start_date.isoformat()} to {end_date.isoformat()})"
    )
    return rows


def upsert_training_loads(
    existing: Iterable[DailyTrainingLoad],
    rows: Iterable[DailyTrainingLoad],
) -> list[DailyTrainingLoad]:
    """Merge recomputed rows into existing ones by (athlete_id, date); new rows win.

    Returns:
        Merged rows sorted by athlete_id then date
    """
    merged: dict[tuple[str, date], DailyTrainingLoad] = {row.key: row for row in existing}
    for row in rows:
        merged[row.key] = row
    return sorted(merged.values(), key=lambda row: row.key)
