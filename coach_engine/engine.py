"""Engine entry points consumed by application services.

Every call is a pure, synchronous function over caller-supplied inputs:
- classify_power: power -> Seiler zone
- estimate_thresholds: FTP or FTP test -> LT1/LT2 estimate
- analyze_distribution: zone minutes -> distribution diagnostics
- calculate_training_load: stress history -> CTL/ATL/TSB summary
- calculate_readiness: signals + load -> 0-100 readiness
- calculate_trend: ordered series -> trend direction
- summarize_compliance: planned vs completed -> compliance summary
- check_guardrail: workout type + fatigue/soreness/readiness -> decision
"""

from coach_engine.analysis.compliance import summarize_compliance
from coach_engine.analysis.distribution import analyze_distribution
from coach_engine.analysis.guardrails import check_guardrail
from coach_engine.analysis.trends import calculate_trend
from coach_engine.metrics.training_load import calculate_training_load
from coach_engine.wellness.readiness import calculate_readiness
from coach_engine.zones.classification import classify_power
from coach_engine.zones.thresholds import estimate_thresholds

__all__ = [
    "analyze_distribution",
    "calculate_readiness",
    "calculate_training_load",
    "calculate_trend",
    "check_guardrail",
    "classify_power",
    "estimate_thresholds",
    "summarize_compliance",
]
