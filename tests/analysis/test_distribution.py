"""Tests for zone distribution analysis.

Tests cover:
- Minutes to percentages (including an all-zero week)
- Percentage re-normalization
- Polarized / Z2 creep / tempo-heavy / threshold-focus predicates
- Recommendation priority
- Average power proxy classification
"""

import pytest
from pydantic import ValidationError

from coach_engine.analysis.distribution import (
    RECOMMENDATION_POLARIZED,
    RECOMMENDATION_WITHIN_RANGE,
    RECOMMENDATION_Z2_CREEP,
    ZoneDistribution,
    analyze_distribution,
    build_recommendation,
    classify_from_average_power,
    detect_z2_creep,
    meets_polarized_targets,
)
from coach_engine.core.errors import InvalidInputError
from coach_engine.zones.thresholds import estimate_from_ftp
from coach_engine.zones.types import Zone

# ============================================================================
# CONSTRUCTION
# ============================================================================


def test_from_minutes_all_zero() -> None:
    distribution = ZoneDistribution.from_minutes(0, 0, 0)
    assert (distribution.z1_percent, distribution.z2_percent, distribution.z3_percent) == (0.0, 0.0, 0.0)


def test_from_minutes_percentages() -> None:
    distribution = ZoneDistribution.from_minutes(80, 10, 10)
    assert distribution.z1_percent == pytest.approx(80.0)
    assert distribution.z2_percent == pytest.approx(10.0)
    assert distribution.z3_percent == pytest.approx(10.0)


def test_from_minutes_rejects_negative() -> None:
    with pytest.raises(InvalidInputError):
        ZoneDistribution.from_minutes(-1, 10, 10)


def test_percentages_renormalized_when_sum_is_off() -> None:
    distribution = ZoneDistribution(z1_percent=40.0, z2_percent=10.0, z3_percent=0.0)
    assert distribution.z1_percent == pytest.approx(80.0)
    assert distribution.z2_percent == pytest.approx(20.0)
    assert distribution.z3_percent == 0.0


def test_percentages_within_tolerance_kept() -> None:
    distribution = ZoneDistribution(z1_percent=80.0, z2_percent=10.0, z3_percent=10.005)
    assert distribution.z3_percent == 10.005


def test_negative_percentage_rejected() -> None:
    with pytest.raises(ValidationError):
        ZoneDistribution(z1_percent=110.0, z2_percent=-10.0, z3_percent=0.0)


@pytest.mark.parametrize("bad_value", [None, "lots", [10.0]])
def test_non_numeric_percentage_rejected(bad_value: object) -> None:
    with pytest.raises(ValidationError):
        ZoneDistribution(z1_percent=bad_value, z2_percent=10.0, z3_percent=10.0)


def test_percent_lookup() -> None:
    distribution = ZoneDistribution.from_minutes(70, 20, 10)
    assert distribution.percent(Zone.Z2) == pytest.approx(20.0)


# ============================================================================
# PREDICATES
# ============================================================================


class TestPredicates:
    """Predicates are independent and may overlap."""

    def test_even_split_80_10_10_is_not_creep(self) -> None:
        distribution = ZoneDistribution.from_minutes(80, 10, 10)
        assert distribution.has_z2_creep() is False
        # Z3 at 10% is below the 15% polarized floor
        assert distribution.is_polarized() is False

    def test_polarized(self) -> None:
        distribution = ZoneDistribution.from_minutes(78, 5, 17)
        assert distribution.is_polarized() is True
        assert meets_polarized_targets(distribution) is True

    def test_polarized_boundaries_inclusive(self) -> None:
        distribution = ZoneDistribution(z1_percent=75.0, z2_percent=10.0, z3_percent=15.0)
        assert distribution.is_polarized() is True

    def test_tempo_heavy(self) -> None:
        distribution = ZoneDistribution.from_minutes(50, 30, 5)
        assert distribution.is_tempo_heavy() is True
        assert distribution.has_z2_creep() is True

    def test_z2_creep_boundary_exclusive(self) -> None:
        assert ZoneDistribution(z1_percent=70.0, z2_percent=20.0, z3_percent=10.0).has_z2_creep() is False
        assert ZoneDistribution(z1_percent=69.0, z2_percent=21.0, z3_percent=10.0).has_z2_creep() is True

    def test_threshold_focus(self) -> None:
        distribution = ZoneDistribution(z1_percent=55.0, z2_percent=30.0, z3_percent=15.0)
        assert distribution.is_threshold_focus() is True
        assert distribution.is_tempo_heavy() is False

    def test_threshold_focus_upper_bound(self) -> None:
        assert ZoneDistribution(z1_percent=50.0, z2_percent=40.0, z3_percent=10.0).is_threshold_focus() is True
        assert ZoneDistribution(z1_percent=49.0, z2_percent=41.0, z3_percent=10.0).is_threshold_focus() is False


# ============================================================================
# ANALYSIS
# ============================================================================


class TestAnalyzeDistribution:
    def test_polarized_week(self) -> None:
        analysis = analyze_distribution({Zone.Z1: 480, Zone.Z2: 20, Zone.Z3: 100})
        assert analysis.is_polarized is True
        assert analysis.has_z2_creep is False
        assert analysis.recommendation == RECOMMENDATION_POLARIZED

    def test_z2_creep_takes_priority(self) -> None:
        """Tempo-heavy and creep overlap; creep text wins."""
        analysis = analyze_distribution({"Z1": 50, "Z2": 30, "Z3": 5})
        assert analysis.is_tempo_heavy is True
        assert analysis.recommendation == RECOMMENDATION_Z2_CREEP

    def test_within_range(self) -> None:
        analysis = analyze_distribution({"z1": 85, "z2": 10, "z3": 5})
        assert analysis.recommendation == RECOMMENDATION_WITHIN_RANGE

    def test_missing_zones_count_as_zero(self) -> None:
        analysis = analyze_distribution({Zone.Z1: 60})
        assert analysis.distribution.z1_percent == pytest.approx(100.0)
        assert analysis.distribution.z3_percent == 0.0

    def test_empty_week(self) -> None:
        analysis = analyze_distribution({})
        assert analysis.distribution.z1_percent == 0.0
        assert analysis.recommendation == RECOMMENDATION_WITHIN_RANGE

    def test_unknown_zone_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            analyze_distribution({"Z4": 10})

    def test_build_recommendation_threshold_focus_text(self) -> None:
        # Threshold focus always implies creep, so creep text is what callers see
        distribution = ZoneDistribution(z1_percent=55.0, z2_percent=30.0, z3_percent=15.0)
        assert build_recommendation(distribution) == RECOMMENDATION_Z2_CREEP


def test_detect_z2_creep_over_weeks() -> None:
    weeks = [ZoneDistribution.from_minutes(78, 5, 17), ZoneDistribution.from_minutes(60, 30, 10)]
    assert detect_z2_creep(weeks) is True
    assert detect_z2_creep(weeks[:1]) is False
    assert detect_z2_creep([]) is False


class TestClassifyFromAveragePower:
    def test_session_assigned_to_single_zone(self) -> None:
        estimate = estimate_from_ftp(250.0)
        result = classify_from_average_power(60.0, 200.0, estimate)
        assert result.zone_minutes[Zone.Z2] == 60.0
        assert result.zone_minutes[Zone.Z1] == 0.0
        assert result.distribution.z2_percent == pytest.approx(100.0)

    def test_confidence_capped(self) -> None:
        estimate = estimate_from_ftp(250.0)
        result = classify_from_average_power(60.0, 120.0, estimate)
        assert result.confidence == 0.25
        assert result.method_used == "avg_power_proxy"
        assert result.zone_minutes[Zone.Z1] == 60.0

    def test_negative_minutes_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            classify_from_average_power(-5.0, 200.0, estimate_from_ftp(250.0))
