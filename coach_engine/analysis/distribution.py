"""Training distribution analysis.

Aggregates time-in-zone into percentages and classifies the shape of a
training week. Predicates may overlap; recommendation text follows a fixed
priority: Z2 creep, polarized, tempo-heavy, threshold-focus, within range.
"""

from collections.abc import Iterable, Mapping

from loguru import logger
from pydantic import BaseModel, ConfigDict, model_validator

from coach_engine.core.errors import InvalidInputError
from coach_engine.core.numeric import safe_divide
from coach_engine.zones.classification import classify_power
from coach_engine.zones.types import ThresholdEstimate, Zone

POLARIZED_Z1_MIN = 75.0
POLARIZED_Z2_MAX = 10.0
POLARIZED_Z3_MIN = 15.0
Z2_CREEP_THRESHOLD = 20.0
TEMPO_Z2_MIN = 25.0
TEMPO_Z3_MAX = 10.0
THRESHOLD_FOCUS_Z2_MIN = 20.0
THRESHOLD_FOCUS_Z2_MAX = 40.0
THRESHOLD_FOCUS_Z3_MIN = 10.0

# Sums further than this from 100 are re-normalized
NORMALIZATION_TOLERANCE = 0.01

AVG_POWER_PROXY_MAX_CONFIDENCE = 0.25

RECOMMENDATION_Z2_CREEP = "Z2_CREEP: Zone 2 training exceeds 20%. Consider adding more polarized intervals."
RECOMMENDATION_POLARIZED = "Good polarized distribution maintained."
RECOMMENDATION_TEMPO_HEAVY = "Tempo-heavy distribution detected. Consider adding more high-intensity intervals."
RECOMMENDATION_THRESHOLD_FOCUS = "Threshold-focused training. Ensure adequate recovery between sessions."
RECOMMENDATION_WITHIN_RANGE = "Distribution within acceptable ranges."


class ZoneDistribution(BaseModel):
    """Share of training time per zone, in percent."""

    model_config = ConfigDict(frozen=True)

    z1_percent: float
    z2_percent: float
    z3_percent: float

    @model_validator(mode="before")
    @classmethod
    def normalize_percentages(cls, data: dict) -> dict:
        """Re-normalize to 100 when rounding pushed the sum outside tolerance."""
        if not isinstance(data, dict):
            return data
        try:
            values = [float(data.get(key, 0.0)) for key in ("z1_percent", "z2_percent", "z3_percent")]
        except (TypeError, ValueError) as e:
            raise ValueError("Zone percentages must be numeric") from e
        if any(value < 0 for value in values):
            raise ValueError("Zone percentages must be non-negative")
        total = sum(values)
        if total > 0 and abs(total - 100.0) > NORMALIZATION_TOLERANCE:
            values = [value / total * 100.0 for value in values]
        return {"z1_percent": values[0], "z2_percent": values[1], "z3_percent": values[2]}

    @classmethod
    def from_minutes(cls, z1_minutes: float, z2_minutes: float, z3_minutes: float) -> "ZoneDistribution":
        """Build a distribution from minutes per zone; an all-zero week yields (0, 0, 0)."""
        if z1_minutes < 0 or z2_minutes < 0 or z3_minutes < 0:
            raise InvalidInputError("zone_minutes", "Zone minutes must be non-negative")
        total = z1_minutes + z2_minutes + z3_minutes
        return cls(
            z1_percent=safe_divide(z1_minutes, total) * 100.0,
            z2_percent=safe_divide(z2_minutes, total) * 100.0,
            z3_percent=safe_divide(z3_minutes, total) * 100.0,
        )

    def percent(self, zone: Zone) -> float:
        return {Zone.Z1: self.z1_percent, Zone.Z2: self.z2_percent, Zone.Z3: self.z3_percent}[zone]

    def is_polarized(self) -> bool:
        """Seiler polarized model: ~80% Z1, little Z2, meaningful Z3."""
        return (
            self.z1_percent >= POLARIZED_Z1_MIN
            and self.z3_percent >= POLARIZED_Z3_MIN
            and self.z2_percent <= POLARIZED_Z2_MAX
        )

    def has_z2_creep(self) -> bool:
        return self.z2_percent > Z2_CREEP_THRESHOLD

    def is_tempo_heavy(self) -> bool:
        return self.z2_percent > TEMPO_Z2_MIN and self.z3_percent < TEMPO_Z3_MAX

    def is_threshold_focus(self) -> bool:
        return (
            THRESHOLD_FOCUS_Z2_MIN < self.z2_percent <= THRESHOLD_FOCUS_Z2_MAX
            and self.z3_percent >= THRESHOLD_FOCUS_Z3_MIN
        )


class DistributionAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    distribution: ZoneDistribution
    has_z2_creep: bool
    is_polarized: bool
    is_tempo_heavy: bool
    is_threshold_focus: bool
    recommendation: str


class AveragePowerClassification(BaseModel):
    """Time-in-zone inferred from a single average power value."""

    model_config = ConfigDict(frozen=True)

    distribution: ZoneDistribution
    zone_minutes: dict[Zone, float]
    method_used: str
    lt1_watts: float
    lt2_watts: float
    confidence: float


def _zone_key(key: Zone | str) -> Zone:
    try:
        return Zone(str(key).upper())
    except ValueError as e:
        raise InvalidInputError("zone_minutes", f"Unknown zone: {key}") from e


def zone_minutes_by_zone(zone_minutes: Mapping[Zone | str, float]) -> dict[Zone, float]:
    """Normalize a zone-minutes mapping keyed by Zone or "Z1"/"z1" strings; missing zones count as 0."""
    totals = dict.fromkeys(Zone, 0.0)
    for key, minutes in zone_minutes.items():
        totals[_zone_key(key)] += float(minutes)
    return totals


def build_recommendation(distribution: ZoneDistribution) -> str:
    """Pick recommendation text; the earliest matching rule wins."""
    rules = (
        (distribution.has_z2_creep, RECOMMENDATION_Z2_CREEP),
        (distribution.is_polarized, RECOMMENDATION_POLARIZED),
        (distribution.is_tempo_heavy, RECOMMENDATION_TEMPO_HEAVY),
        (distribution.is_threshold_focus, RECOMMENDATION_THRESHOLD_FOCUS),
    )
    for predicate, text in rules:
        if predicate():
            return text
    return RECOMMENDATION_WITHIN_RANGE


def analyze_distribution(zone_minutes: Mapping[Zone | str, float]) -> DistributionAnalysis:
    """Analyze a week's zone distribution.

    Args:
        zone_minutes: Minutes per zone (missing zones count as 0)

    Returns:
        DistributionAnalysis with predicate flags and recommendation
    """
    minutes = zone_minutes_by_zone(zone_minutes)
    distribution = ZoneDistribution.from_minutes(minutes[Zone.Z1], minutes[Zone.Z2], minutes[Zone.Z3])
    analysis = DistributionAnalysis(
        distribution=distribution,
        has_z2_creep=distribution.has_z2_creep(),
        is_polarized=distribution.is_polarized(),
        is_tempo_heavy=distribution.is_tempo_heavy(),
        is_threshold_focus=distribution.is_threshold_focus(),
        recommendation=build_recommendation(distribution),
    )
    if analysis.has_z2_creep:
        logger.info(f"[DISTRIBUTION] Z2 creep detected: z2={distribution.z2_percent:.1f}%")
    return analysis


def detect_z2_creep(distributions: Iterable[ZoneDistribution]) -> bool:
    """True if any week in the sequence shows Z2 creep."""
    return any(distribution.has_z2_creep() for distribution in distributions)


def meets_polarized_targets(distribution: ZoneDistribution) -> bool:
    return distribution.is_polarized()


def classify_from_average_power(
    total_minutes: float,
    average_power: float,
    estimate: ThresholdEstimate,
) -> AveragePowerClassification:
    """Assign a whole session to one zone from its average power.

    A coarse proxy: confidence is capped at 0.25 regardless of the thresholds'
    own confidence.
    """
    if total_minutes < 0:
        raise InvalidInputError("total_minutes", "Total minutes must be non-negative")
    zone = classify_power(average_power, estimate.lt1_watts, estimate.lt2_watts)
    zone_minutes = dict.fromkeys(Zone, 0.0)
    zone_minutes[zone] = float(total_minutes)
    return AveragePowerClassification(
        distribution=ZoneDistribution.from_minutes(zone_minutes[Zone.Z1], zone_minutes[Zone.Z2], zone_minutes[Zone.Z3]),
        zone_minutes=zone_minutes,
        method_used="avg_power_proxy",
        lt1_watts=estimate.lt1_watts,
        lt2_watts=estimate.lt2_watts,
        confidence=min(estimate.confidence, AVG_POWER_PROXY_MAX_CONFIDENCE),
    )
