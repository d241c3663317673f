"""Zone model and threshold estimation - Seiler 3-zone model anchored on LT1/LT2."""

from coach_engine.zones.classification import classify_power, derive_zones
from coach_engine.zones.prescription import (
    IntensityClassification,
    WorkoutIntensityPrescription,
    WorkoutIntensityPurpose,
    classify_interval_session,
    classify_purpose_by_percent_ftp,
    classify_purpose_for_session_type,
    prescribe_by_purpose,
)
from coach_engine.zones.thresholds import (
    calculate_bands_from_ftp,
    calculate_zone_ranges,
    estimate_from_ftp,
    estimate_thresholds,
    recalculate_bands,
    thresholds_from_ftp_test,
)
from coach_engine.zones.types import (
    FtpTestMethod,
    FtpTestResult,
    IntensityZones,
    PowerRange,
    PowerThresholds,
    PrescriptionBand,
    ThresholdEstimate,
    ThresholdMethod,
    Zone,
)

__all__ = [
    "FtpTestMethod",
    "FtpTestResult",
    "IntensityClassification",
    "IntensityZones",
    "PowerRange",
    "PowerThresholds",
    "PrescriptionBand",
    "ThresholdEstimate",
    "ThresholdMethod",
    "WorkoutIntensityPrescription",
    "WorkoutIntensityPurpose",
    "Zone",
    "calculate_bands_from_ftp",
    "calculate_zone_ranges",
    "classify_interval_session",
    "classify_power",
    "classify_purpose_by_percent_ftp",
    "classify_purpose_for_session_type",
    "derive_zones",
    "estimate_from_ftp",
    "estimate_thresholds",
    "prescribe_by_purpose",
    "recalculate_bands",
    "thresholds_from_ftp_test",
]
