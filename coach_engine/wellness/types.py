"""Wellness signal types.

A DailySignal is created once per athlete per day; a later submission for the
same (athlete_id, date) replaces the earlier one.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator

from coach_engine.metrics.training_load import TrainingLoadSummary

SUBJECTIVE_MIN = 1
SUBJECTIVE_MAX = 10


class SleepMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_hours: float
    quality_score: int
    deep_hours: float | None = None
    rem_hours: float | None = None

    @field_validator("total_hours")
    @classmethod
    def validate_hours(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Sleep hours must be non-negative")
        return value

    @field_validator("deep_hours", "rem_hours")
    @classmethod
    def validate_stage_hours(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("Sleep stage hours must be non-negative")
        return value

    @field_validator("quality_score")
    @classmethod
    def validate_quality(cls, value: int) -> int:
        if value < SUBJECTIVE_MIN or value > SUBJECTIVE_MAX:
            raise ValueError("Sleep quality must be between 1 and 10")
        return value


class PhysiologicalData(BaseModel):
    """Objective morning measurements; every field is individually optional."""

    model_config = ConfigDict(frozen=True)

    resting_hr: float | None = None
    hrv: float | None = None
    body_weight_kg: float | None = None
    sleep: SleepMetrics | None = None

    @field_validator("resting_hr", "hrv", "body_weight_kg")
    @classmethod
    def validate_non_negative(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("Physiological values must be non-negative")
        return value


class SubjectiveWellness(BaseModel):
    """Self-reported wellness, each score on a 1-10 scale.

    Out-of-range scores are rejected rather than clamped.
    """

    model_config = ConfigDict(frozen=True)

    fatigue: int
    stress: int
    sleep_quality: int
    motivation: int
    soreness: int
    notes: str | None = None

    @field_validator("fatigue", "stress", "sleep_quality", "motivation", "soreness")
    @classmethod
    def validate_score(cls, value: int) -> int:
        if value < SUBJECTIVE_MIN or value > SUBJECTIVE_MAX:
            raise ValueError(f"Subjective scores must be between {SUBJECTIVE_MIN} and {SUBJECTIVE_MAX}")
        return value


class DailySignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    athlete_id: str
    date: date
    physiological: PhysiologicalData | None = None
    subjective: SubjectiveWellness | None = None
    submitted_at: datetime | None = None

    @property
    def key(self) -> tuple[str, date]:
        return (self.athlete_id, self.date)


class WellnessSnapshot(BaseModel):
    """Read-only view of one athlete-day: signals, load and the derived readiness."""

    model_config = ConfigDict(frozen=True)

    athlete_id: str
    date: date
    physiological: PhysiologicalData | None = None
    subjective: SubjectiveWellness | None = None
    load_summary: TrainingLoadSummary | None = None
    readiness_score: float

    @field_validator("readiness_score")
    @classmethod
    def validate_readiness(cls, value: float) -> float:
        if value < 0 or value > 100:
            raise ValueError("Readiness score must be between 0 and 100")
        return value
