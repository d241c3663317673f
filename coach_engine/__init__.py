"""Training-load and readiness analytics engine.

This package provides:
- Seiler 3-zone classification and LT1/LT2 threshold estimation
- Zone distribution diagnostics (polarized, tempo-heavy, Z2 creep)
- CTL/ATL/TSB training load
- Readiness scoring and wellness trends
- Plan compliance, safety guardrails and recovery insights
"""

from coach_engine.core.errors import InvalidInputError
from coach_engine.core.logger import setup_logger
from coach_engine.engine import (
    analyze_distribution,
    calculate_readiness,
    calculate_training_load,
    calculate_trend,
    check_guardrail,
    classify_power,
    estimate_thresholds,
    summarize_compliance,
)

__all__ = [
    "InvalidInputError",
    "analyze_distribution",
    "calculate_readiness",
    "calculate_training_load",
    "calculate_trend",
    "check_guardrail",
    "classify_power",
    "estimate_thresholds",
    "setup_logger",
    "summarize_compliance",
]
