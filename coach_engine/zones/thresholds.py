"""Threshold estimation (LT1/LT2) from FTP or FTP test results.

Two estimation paths exist and are intentionally distinct:
- Generic FTP estimate: LT1 = 75% FTP, LT2 = 90% FTP, confidence 0.5
- Completed FTP test:   LT1 = 82% FTP, LT2 = FTP, confidence from the test

Prescription bands follow the FTP test path (LT1 at 82%, LT2 at FTP).
"""

from datetime import date

from loguru import logger

from coach_engine.core.errors import InvalidInputError
from coach_engine.zones.types import (
    FtpTestMethod,
    FtpTestResult,
    PowerRange,
    PrescriptionBand,
    ThresholdEstimate,
    ThresholdMethod,
    Zone,
)

LT1_TO_FTP_RATIO = 0.75
LT2_TO_FTP_RATIO = 0.90
ESTIMATE_CONFIDENCE = 0.5

# FTP test path: LT1 is ~81-84% of LT2, LT2 is at FTP
TEST_LT1_TO_FTP_RATIO = 0.82
TEST_LT1_TO_FTHR_RATIO = 0.88
DEFAULT_FTHR_BPM = 170.0
Z3_RANGE_FTP_MULTIPLE = 1.15

_TEST_METHOD_TO_THRESHOLD_METHOD: dict[FtpTestMethod, ThresholdMethod] = {
    FtpTestMethod.LAB_LACTATE: ThresholdMethod.LAB_LACTATE,
    FtpTestMethod.FIELD_RAMP: ThresholdMethod.FIELD_PROXY,
    FtpTestMethod.FIELD_20MIN: ThresholdMethod.FIELD_PROXY,
    FtpTestMethod.ESTIMATED: ThresholdMethod.ESTIMATED,
}


def _require_positive_ftp(ftp: float) -> None:
    if ftp <= 0:
        raise InvalidInputError("ftp", "FTP must be positive")


def estimate_from_ftp(
    ftp: float,
    method: ThresholdMethod = ThresholdMethod.ESTIMATED,
    effective_date: date | None = None,
) -> ThresholdEstimate:
    """Estimate LT1 and LT2 from FTP (LT1 ~75%, LT2 ~90%).

    Carries a lower confidence (0.5) than lab-derived thresholds.
    """
    _require_positive_ftp(ftp)
    return ThresholdEstimate(
        lt1_watts=ftp * LT1_TO_FTP_RATIO,
        lt2_watts=ftp * LT2_TO_FTP_RATIO,
        method=method,
        confidence=ESTIMATE_CONFIDENCE,
        effective_date=effective_date,
    )


def thresholds_from_ftp_test(result: FtpTestResult, fthr_bpm: float = DEFAULT_FTHR_BPM) -> ThresholdEstimate:
    """Derive thresholds from a completed FTP test.

    LT2 is at FTP and LT1 at 82% of FTP. Heart-rate thresholds are approximated
    from FTHR (LT2 = FTHR, LT1 = 88% FTHR) until a lab or field calibration
    replaces them.

    Args:
        result: FTP test result
        fthr_bpm: Functional threshold heart rate (defaults to 170 bpm)

    Returns:
        ThresholdEstimate effective from the test date
    """
    if fthr_bpm <= 0:
        raise InvalidInputError("fthr_bpm", "FTHR must be positive")
    ftp = result.ftp_watts
    return ThresholdEstimate(
        lt1_watts=ftp * TEST_LT1_TO_FTP_RATIO,
        lt2_watts=ftp,
        lt1_bpm=fthr_bpm * TEST_LT1_TO_FTHR_RATIO,
        lt2_bpm=fthr_bpm,
        method=_TEST_METHOD_TO_THRESHOLD_METHOD[result.method],
        confidence=result.confidence_percent / 100.0,
        effective_date=result.test_date,
    )


def estimate_thresholds(source: float | FtpTestResult) -> ThresholdEstimate:
    """Estimate thresholds from a bare FTP value or from an FTP test result."""
    if isinstance(source, FtpTestResult):
        estimate = thresholds_from_ftp_test(source)
    else:
        estimate = estimate_from_ftp(float(source))
    logger.debug(
        f"[THRESHOLDS] Estimated lt1={estimate.lt1_watts:.1f}W lt2={estimate.lt2_watts:.1f}W "
        f"method={estimate.method} confidence={estimate.confidence:.2f}"
    )
    return estimate


def calculate_zone_ranges(ftp: float) -> dict[Zone, PowerRange]:
    """Calculate zone power ranges from FTP.

    - Z1: 0 to LT1 (82% FTP)
    - Z2: LT1 to LT2 (FTP)
    - Z3: LT2 to 115% FTP
    """
    _require_positive_ftp(ftp)
    lt1 = ftp * TEST_LT1_TO_FTP_RATIO
    lt2 = ftp
    return {
        Zone.Z1: PowerRange(lower=0.0, upper=lt1),
        Zone.Z2: PowerRange(lower=lt1, upper=lt2),
        Zone.Z3: PowerRange(lower=lt2, upper=ftp * Z3_RANGE_FTP_MULTIPLE),
    }


def calculate_bands_from_ftp(ftp: float, method: str, confidence: float) -> list[PrescriptionBand]:
    """Build one prescription band per zone.

    Args:
        ftp: Current FTP in watts
        method: Testing method label
        confidence: Confidence 0-100

    Returns:
        Bands ordered Z1, Z2, Z3
    """
    ranges = calculate_zone_ranges(ftp)
    return [
        PrescriptionBand(zone=zone, target_range=power_range, method=method, confidence=confidence)
        for zone, power_range in ranges.items()
    ]


def recalculate_bands(estimate: ThresholdEstimate) -> list[PrescriptionBand]:
    """Rebuild prescription bands when new thresholds are available (LT2 is used as FTP)."""
    return calculate_bands_from_ftp(estimate.lt2_watts, str(estimate.method), estimate.confidence * 100)


def calculate_zone_boundaries(estimate: ThresholdEstimate) -> dict[str, float]:
    return {
        "Z1_Z2_boundary": estimate.lt1_watts,
        "Z2_Z3_boundary": estimate.lt2_watts,
    }
