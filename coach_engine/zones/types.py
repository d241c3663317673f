"""Seiler 3-zone model types.

Zones are anchored on two lactate thresholds:
- Z1: at or below LT1 (low intensity, FATMAX region)
- Z2: above LT1, at or below LT2 (moderate intensity)
- Z3: above LT2 (high intensity)

Boundaries are inclusive on the lower zone: LT1 itself is Z1 and LT2 itself
is Z2.
"""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Zone(StrEnum):
    Z1 = "Z1"
    Z2 = "Z2"
    Z3 = "Z3"


class ThresholdMethod(StrEnum):
    """How a threshold pair was obtained. Lab results carry the most confidence."""

    LAB_LACTATE = "LAB_LACTATE"
    FIELD_PROXY = "FIELD_PROXY"
    ESTIMATED = "ESTIMATED"


class FtpTestMethod(StrEnum):
    LAB_LACTATE = "LAB_LACTATE"
    FIELD_RAMP = "FIELD_RAMP"
    FIELD_20MIN = "FIELD_20MIN"
    ESTIMATED = "ESTIMATED"


class PowerThresholds(BaseModel):
    """LT1/LT2 power pair. Immutable per estimation event."""

    model_config = ConfigDict(frozen=True)

    lt1_watts: float
    lt2_watts: float

    @model_validator(mode="after")
    def validate_ordering(self) -> "PowerThresholds":
        if self.lt1_watts <= 0:
            raise ValueError("LT1 must be positive")
        if self.lt2_watts <= 0:
            raise ValueError("LT2 must be positive")
        if self.lt2_watts <= self.lt1_watts:
            raise ValueError("LT2 must be greater than LT1")
        return self


class IntensityZones(BaseModel):
    """Zone boundaries derived from LT1 and LT2.

    Attributes:
        lt1: First lactate threshold in watts
        lt2: Second lactate threshold in watts
        z1_upper: Upper bound of Z1 (== lt1)
        z2_upper: Upper bound of Z2 (== lt2)
        z3_upper: Ceiling used for Z3 prescriptions
    """

    model_config = ConfigDict(frozen=True)

    lt1: float
    lt2: float
    z1_upper: float
    z2_upper: float
    z3_upper: float

    @model_validator(mode="after")
    def validate_thresholds(self) -> "IntensityZones":
        if self.lt1 <= 0:
            raise ValueError("LT1 must be positive")
        if self.lt2 <= 0:
            raise ValueError("LT2 must be positive")
        if self.lt2 <= self.lt1:
            raise ValueError("LT2 must be greater than LT1")
        return self

    def classify(self, power: float) -> Zone:
        if power <= self.z1_upper:
            return Zone.Z1
        if power <= self.z2_upper:
            return Zone.Z2
        return Zone.Z3

    def is_below_lt1(self, power: float) -> bool:
        return power < self.lt1

    def is_between_lt1_and_lt2(self, power: float) -> bool:
        return self.lt1 <= power < self.lt2

    def is_at_or_above_lt2(self, power: float) -> bool:
        return power >= self.lt2


class FtpTestResult(BaseModel):
    """Completed FTP test with the protocol used and the tester's confidence."""

    model_config = ConfigDict(frozen=True)

    ftp_watts: float
    test_date: date
    method: FtpTestMethod
    confidence_percent: float

    @field_validator("ftp_watts")
    @classmethod
    def validate_ftp(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("FTP must be positive")
        return value

    @field_validator("confidence_percent")
    @classmethod
    def validate_confidence(cls, value: float) -> float:
        if value < 0 or value > 100:
            raise ValueError("Confidence must be 0-100")
        return value


class ThresholdEstimate(BaseModel):
    """Result of a threshold estimation.

    Attributes:
        lt1_watts: Estimated LT1 power
        lt2_watts: Estimated LT2 power
        lt1_bpm: Optional LT1 heart rate
        lt2_bpm: Optional LT2 heart rate
        method: Estimation method
        confidence: Confidence in [0, 1]
        effective_date: Date the estimate applies from (None for ad-hoc estimates)
    """

    model_config = ConfigDict(frozen=True)

    lt1_watts: float
    lt2_watts: float
    lt1_bpm: float | None = None
    lt2_bpm: float | None = None
    method: ThresholdMethod
    confidence: float
    effective_date: date | None = None

    @model_validator(mode="after")
    def validate_estimate(self) -> "ThresholdEstimate":
        if self.confidence < 0.0 or self.confidence > 1.0:
            raise ValueError("Confidence must be between 0.0 and 1.0")
        if self.lt1_watts <= 0 or self.lt2_watts <= 0:
            raise ValueError("Threshold watts must be positive")
        if self.lt2_watts <= self.lt1_watts:
            raise ValueError("LT2 watts must be greater than LT1 watts")
        if self.lt1_bpm is not None and self.lt1_bpm < 0:
            raise ValueError("LT1 bpm must be non-negative")
        if self.lt2_bpm is not None and self.lt2_bpm < 0:
            raise ValueError("LT2 bpm must be non-negative")
        if self.lt1_bpm is not None and self.lt2_bpm is not None and self.lt2_bpm <= self.lt1_bpm:
            raise ValueError("LT2 bpm must be greater than LT1 bpm")
        return self

    @property
    def thresholds(self) -> PowerThresholds:
        return PowerThresholds(lt1_watts=self.lt1_watts, lt2_watts=self.lt2_watts)


class PowerRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    lower: float
    upper: float

    @model_validator(mode="after")
    def validate_range(self) -> "PowerRange":
        if self.lower < 0:
            raise ValueError("Range lower bound must be non-negative")
        if self.upper < self.lower:
            raise ValueError("Range upper bound must be >= lower bound")
        return self


class PrescriptionBand(BaseModel):
    """A zone paired with a target power range, its derivation method and confidence (0-100)."""

    model_config = ConfigDict(frozen=True)

    zone: Zone
    target_range: PowerRange
    method: str
    confidence: float

    @field_validator("method")
    @classmethod
    def validate_method(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Method cannot be blank")
        return value

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, value: float) -> float:
        if value < 0 or value > 100:
            raise ValueError("Confidence must be 0-100")
        return value
