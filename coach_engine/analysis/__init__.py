from coach_engine.analysis.compliance import summarize_compliance, summarize_progress
from coach_engine.analysis.distribution import (
    ZoneDistribution,
    analyze_distribution,
    classify_from_average_power,
    detect_z2_creep,
    meets_polarized_targets,
)
from coach_engine.analysis.guardrails import (
    GuardrailDecision,
    attempt_override,
    check_guardrail,
    check_load_ramp,
    check_recovery_days,
    filter_ai_suggestions,
    propose_adjustment,
)
from coach_engine.analysis.insights import (
    generate_recovery_recommendations,
    generate_wellness_insights,
    suggest_adjustment,
)
from coach_engine.analysis.trends import TrendDirection, calculate_trend, calculate_wellness_trends

__all__ = [
    "GuardrailDecision",
    "TrendDirection",
    "ZoneDistribution",
    "analyze_distribution",
    "attempt_override",
    "calculate_trend",
    "calculate_wellness_trends",
    "check_guardrail",
    "check_load_ramp",
    "check_recovery_days",
    "classify_from_average_power",
    "detect_z2_creep",
    "filter_ai_suggestions",
    "generate_recovery_recommendations",
    "generate_wellness_insights",
    "meets_polarized_targets",
    "propose_adjustment",
    "suggest_adjustment",
    "summarize_compliance",
    "summarize_progress",
]
