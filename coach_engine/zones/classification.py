"""Power to zone classification.

Z1 if power <= LT1, Z2 if LT1 < power <= LT2, else Z3.
"""

from coach_engine.core.errors import InvalidInputError
from coach_engine.zones.types import IntensityZones, Zone

# LT1 sits at roughly 75% of FTP; used to back-estimate FTP for the Z3 ceiling
LT1_TO_FTP_RATIO = 0.75
Z3_CEILING_FTP_MULTIPLE = 1.5


def validate_thresholds(lt1: float, lt2: float) -> None:
    """Reject non-positive or mis-ordered thresholds.

    Raises:
        InvalidInputError: If lt1 <= 0, lt2 <= 0, or lt2 <= lt1
    """
    if lt1 <= 0:
        raise InvalidInputError("lt1", "LT1 must be positive")
    if lt2 <= 0:
        raise InvalidInputError("lt2", "LT2 must be positive")
    if lt2 <= lt1:
        raise InvalidInputError("lt2", "LT2 must be greater than LT1")


def classify_power(power: float, lt1: float, lt2: float) -> Zone:
    """Classify a power value into a Seiler zone.

    Args:
        power: Power in watts
        lt1: LT1 threshold in watts
        lt2: LT2 threshold in watts

    Returns:
        Zone.Z1, Zone.Z2 or Zone.Z3
    """
    validate_thresholds(lt1, lt2)
    if power <= lt1:
        return Zone.Z1
    if power <= lt2:
        return Zone.Z2
    return Zone.Z3


def derive_zones(lt1: float, lt2: float) -> IntensityZones:
    """Build zone boundaries from LT1 and LT2.

    The Z3 ceiling is 150% of an FTP back-estimated from LT1 (LT1 ~ 75% FTP),
    i.e. 1.5 * (lt1 / 0.75).
    """
    validate_thresholds(lt1, lt2)
    ftp_estimate = lt1 / LT1_TO_FTP_RATIO
    return IntensityZones(
        lt1=lt1,
        lt2=lt2,
        z1_upper=lt1,
        z2_upper=lt2,
        z3_upper=ftp_estimate * Z3_CEILING_FTP_MULTIPLE,
    )
