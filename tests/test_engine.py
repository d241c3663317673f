"""Smoke tests for the package-level entry points."""

from datetime import date

import pytest

import coach_engine
from coach_engine import InvalidInputError
from coach_engine.metrics.training_load import DailyLoadRecord
from coach_engine.zones.types import Zone


def test_entry_points_exported() -> None:
    for name in coach_engine.__all__:
        assert callable(getattr(coach_engine, name))


def test_weekly_flow() -> None:
    estimate = coach_engine.estimate_thresholds(250.0)
    assert coach_engine.classify_power(150.0, estimate.lt1_watts, estimate.lt2_watts) == Zone.Z1

    analysis = coach_engine.analyze_distribution({Zone.Z1: 480, Zone.Z2: 20, Zone.Z3: 100})
    assert analysis.is_polarized is True

    summary = coach_engine.calculate_training_load(
        "athlete-1", date(2024, 3, 15), [DailyLoadRecord(date=date(2024, 3, 15), tss=100.0)]
    )
    readiness = coach_engine.calculate_readiness(None, None, summary)
    assert 0.0 <= readiness <= 100.0

    decision = coach_engine.check_guardrail("THRESHOLD", fatigue=8, soreness=2, readiness=7.0)
    assert decision.blocked is True


def test_invalid_input_is_value_error() -> None:
    with pytest.raises(ValueError):
        coach_engine.classify_power(200.0, 250.0, 200.0)
    assert issubclass(InvalidInputError, ValueError)
