"""Workout intensity purposes and %FTP prescription bands.

Purposes are narrower target bands living inside the Seiler Z1/Z2/Z3
distribution zones. Distribution is still tracked with LT1/LT2-anchored zones;
these bands only guide prescription.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

from coach_engine.core.errors import InvalidInputError
from coach_engine.zones.types import Zone

PERCENT_FTP_PROXY = "PERCENT_FTP_PROXY"
PURPOSE_CLASSIFICATION_CONFIDENCE = 0.35

# Interval session classification thresholds (fraction of FTP)
VO2_OPTIMAL_MIN_PCT = 1.05
VO2_OPTIMAL_MAX_PCT = 1.25
SPRINT_MIN_PCT = 1.30
TEMPO_MIN_PCT = 0.85


class WorkoutIntensityPurpose(StrEnum):
    Z1_RECOVERY = "Z1_RECOVERY"
    Z1_ENDURANCE = "Z1_ENDURANCE"
    Z1_FATMAX = "Z1_FATMAX"
    Z2_DISCOURAGED_TEMPO = "Z2_DISCOURAGED_TEMPO"
    Z2_THRESHOLD = "Z2_THRESHOLD"
    Z3_VO2_OPTIMAL = "Z3_VO2_OPTIMAL"
    Z3_SPRINT = "Z3_SPRINT"

    @property
    def zone(self) -> Zone:
        return Zone(self.value[:2])


class IntensityClassification(StrEnum):
    VO2_OPTIMAL = "VO2_OPTIMAL"
    SPRINT = "SPRINT"
    THRESHOLD = "THRESHOLD"
    TEMPO = "TEMPO"
    ENDURANCE = "ENDURANCE"
    RECOVERY = "RECOVERY"
    FATMAX = "FATMAX"


class WorkoutIntensityPrescription(BaseModel):
    """Target %FTP range for a purpose (fractions, e.g. 0.56-0.73)."""

    model_config = ConfigDict(frozen=True)

    purpose: WorkoutIntensityPurpose
    percent_ftp_lower: float
    percent_ftp_upper: float
    method: str = PERCENT_FTP_PROXY
    confidence: float
    rationale: str

    @model_validator(mode="after")
    def validate_prescription(self) -> "WorkoutIntensityPrescription":
        if self.confidence < 0.0 or self.confidence > 1.0:
            raise ValueError("Confidence must be between 0.0 and 1.0")
        if self.percent_ftp_upper < self.percent_ftp_lower:
            raise ValueError("Upper %FTP must be >= lower %FTP")
        return self

    def target_watts(self, ftp: float) -> tuple[float, float]:
        return (ftp * self.percent_ftp_lower, ftp * self.percent_ftp_upper)


class PurposeClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    purpose: WorkoutIntensityPurpose
    method: str
    confidence: float


# purpose -> (lower, upper, confidence, rationale)
_PRESCRIPTIONS: dict[WorkoutIntensityPurpose, tuple[float, float, float, str]] = {
    WorkoutIntensityPurpose.Z1_RECOVERY: (0.40, 0.55, 0.3, "Very easy recovery below LT1"),
    WorkoutIntensityPurpose.Z1_ENDURANCE: (0.56, 0.73, 0.3, "Steady aerobic endurance below LT1"),
    WorkoutIntensityPurpose.Z1_FATMAX: (
        0.74,
        0.82,
        0.2,
        "Upper Z1 band below LT1, often near FATMAX for an athlete",
    ),
    WorkoutIntensityPurpose.Z2_DISCOURAGED_TEMPO: (
        0.83,
        0.87,
        0.2,
        "Discouraged tempo band in polarized models; use sparingly",
    ),
    WorkoutIntensityPurpose.Z2_THRESHOLD: (0.88, 1.00, 0.3, "Between LT1 and LT2; minimize in polarized models"),
    WorkoutIntensityPurpose.Z3_VO2_OPTIMAL: (
        1.05,
        1.15,
        0.4,
        "VO2-oriented intervals (cycling), distinct from sprint work",
    ),
    WorkoutIntensityPurpose.Z3_SPRINT: (1.16, 2.00, 0.4, "Sprint/neuromuscular work above VO2-optimal band"),
}

# Lower bound (inclusive) -> purpose, checked top-down
_PURPOSE_FLOORS: tuple[tuple[float, WorkoutIntensityPurpose], ...] = (
    (1.05, WorkoutIntensityPurpose.Z3_VO2_OPTIMAL),
    (0.88, WorkoutIntensityPurpose.Z2_THRESHOLD),
    (0.83, WorkoutIntensityPurpose.Z2_DISCOURAGED_TEMPO),
    (0.74, WorkoutIntensityPurpose.Z1_FATMAX),
    (0.56, WorkoutIntensityPurpose.Z1_ENDURANCE),
)

_SESSION_TYPE_PURPOSES: dict[str, WorkoutIntensityPurpose] = {
    "FATMAX": WorkoutIntensityPurpose.Z1_FATMAX,
    "RECOVERY": WorkoutIntensityPurpose.Z1_RECOVERY,
    "ENDURANCE": WorkoutIntensityPurpose.Z1_ENDURANCE,
    "TEMPO": WorkoutIntensityPurpose.Z2_DISCOURAGED_TEMPO,
    "THRESHOLD": WorkoutIntensityPurpose.Z2_THRESHOLD,
    "INTERVALS": WorkoutIntensityPurpose.Z3_VO2_OPTIMAL,
    "VO2": WorkoutIntensityPurpose.Z3_VO2_OPTIMAL,
    "SPRINT": WorkoutIntensityPurpose.Z3_SPRINT,
}


def prescribe_by_purpose(purpose: WorkoutIntensityPurpose) -> WorkoutIntensityPrescription:
    """Return the default %FTP range for a purpose."""
    lower, upper, confidence, rationale = _PRESCRIPTIONS[purpose]
    return WorkoutIntensityPrescription(
        purpose=purpose,
        percent_ftp_lower=lower,
        percent_ftp_upper=upper,
        confidence=confidence,
        rationale=rationale,
    )


def classify_purpose_by_percent_ftp(percent_ftp: float) -> WorkoutIntensityPurpose:
    """Classify an interval target (fraction of FTP) into a purpose.

    VO2-optimal is 105-115% FTP; anything above 115% is sprint work.
    """
    if percent_ftp < 0:
        raise InvalidInputError("percent_ftp", "percent_ftp must be non-negative")
    if percent_ftp > 1.15:
        return WorkoutIntensityPurpose.Z3_SPRINT
    for floor, purpose in _PURPOSE_FLOORS:
        if percent_ftp >= floor:
            return purpose
    return WorkoutIntensityPurpose.Z1_RECOVERY


def classify_purpose_with_confidence(percent_ftp: float) -> PurposeClassification:
    return PurposeClassification(
        purpose=classify_purpose_by_percent_ftp(percent_ftp),
        method=PERCENT_FTP_PROXY,
        confidence=PURPOSE_CLASSIFICATION_CONFIDENCE,
    )


def classify_interval_session(percent_ftp: float, duration_seconds: int) -> IntensityClassification:
    """Classify an interval session from its %FTP and per-interval duration."""
    if percent_ftp >= SPRINT_MIN_PCT and duration_seconds <= 60:
        return IntensityClassification.SPRINT
    if VO2_OPTIMAL_MIN_PCT <= percent_ftp <= VO2_OPTIMAL_MAX_PCT and 180 <= duration_seconds <= 600:
        return IntensityClassification.VO2_OPTIMAL
    if percent_ftp < TEMPO_MIN_PCT:
        return IntensityClassification.ENDURANCE
    return IntensityClassification.THRESHOLD


def classify_purpose_for_session_type(session_type: str) -> WorkoutIntensityPurpose:
    """Map a session type label to a purpose; unknown labels are treated as endurance."""
    return _SESSION_TYPE_PURPOSES.get(session_type.upper(), WorkoutIntensityPurpose.Z1_ENDURANCE)


def is_below_lt1(percent_ftp: float, ftp: float, lt1: float) -> bool:
    """True when the prescribed target (fraction of FTP) sits below LT1."""
    return ftp * percent_ftp < lt1
