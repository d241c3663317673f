"""Wellness insights and recovery recommendations.

Turns readiness, trends, compliance and load into human-readable flags,
recommendations and achievements. Flags are descriptive; hard rules may be
blocking. Free-text coaching advice is produced elsewhere: this module only
builds the prompt for it.
"""

from collections.abc import Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from coach_engine.analysis.trends import TrendDirection, WellnessTrends, calculate_wellness_trends
from coach_engine.core.settings import settings
from coach_engine.wellness.types import WellnessSnapshot

LOW_READINESS = 50.0
CRITICAL_READINESS = 30.0
HIGH_FATIGUE_TSB = -20.0
LOW_SLEEP_HOURS = 6.0
LOW_SLEEP_DAYS = 3

EXCELLENT_COMPLIANCE = 90
GOOD_COMPLIANCE = 80
LOW_COMPLIANCE = 70

# Adjustment suggestions take readiness on the 0-10 scale
ADJUSTMENT_LOW_READINESS = 5.0
ADJUSTMENT_LOW_COMPLIANCE = 80.0

_DOWNWARD = frozenset({TrendDirection.DECLINING, TrendDirection.SLIGHT_DECLINE})
_UPWARD = frozenset({TrendDirection.IMPROVING, TrendDirection.SLIGHT_IMPROVEMENT})


class WellnessInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    flags: list[str]
    recommendations: list[str]
    compliance_rate: int
    training_volume_hours: float
    achievements: list[str]


class HardRule(BaseModel):
    """A recovery rule that fired. Blocking rules forbid training for the day."""

    model_config = ConfigDict(frozen=True)

    rule_name: str
    condition: str
    recommendation: str
    is_blocking: bool = False

    @field_validator("rule_name", "recommendation")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Rule name and recommendation cannot be blank")
        return value


class RecoveryRecommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    athlete_id: str
    hard_rules: list[HardRule] = []
    safe_adjustments: list[str] = []
    readiness_score: float = 0.0
    prompt: str = ""

    @field_validator("athlete_id")
    @classmethod
    def validate_athlete_id(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Athlete ID cannot be blank")
        return value

    @classmethod
    def empty(cls, athlete_id: str) -> "RecoveryRecommendations":
        return cls(athlete_id=athlete_id)

    @property
    def has_blocking_rules(self) -> bool:
        return any(rule.is_blocking for rule in self.hard_rules)


def _latest(snapshots: Sequence[WellnessSnapshot]) -> WellnessSnapshot | None:
    return max(snapshots, key=lambda snapshot: snapshot.date, default=None)


def generate_wellness_insights(
    snapshots: Sequence[WellnessSnapshot],
    trends: WellnessTrends,
    compliance_rate: int,
    training_volume_hours: float,
) -> WellnessInsights:
    """Compose flags, recommendations and achievements for a period.

    Args:
        snapshots: Wellness snapshots for the period
        trends: Trends computed over the same snapshots
        compliance_rate: Plan compliance in percent
        training_volume_hours: Training volume for the period

    Returns:
        WellnessInsights
    """
    flags: list[str] = []
    recommendations: list[str] = []
    achievements: list[str] = []

    if trends.average_readiness < LOW_READINESS:
        flags.append("Average readiness score below 50 - athlete may be fatigued")
        recommendations.append("Consider reducing training load for 1-2 days")
        recommendations.append("Focus on recovery activities and sleep hygiene")

    if trends.hrv in _DOWNWARD:
        flags.append("HRV trending downward - possible overreaching")
        recommendations.append("Monitor closely for signs of overtraining")

    if trends.sleep_hours in _DOWNWARD:
        flags.append("Sleep duration decreasing")
        recommendations.append("Prioritize sleep hygiene and recovery")

    latest = _latest(snapshots)
    if latest is not None and latest.load_summary is not None and latest.load_summary.tsb < HIGH_FATIGUE_TSB:
        flags.append("Training Stress Balance heavily negative - high fatigue")
        recommendations.append("Consider an easy day or rest day")

    if compliance_rate >= EXCELLENT_COMPLIANCE:
        achievements.append(f"Excellent training compliance ({compliance_rate}%)")
    elif compliance_rate >= GOOD_COMPLIANCE:
        achievements.append(f"Good training compliance ({compliance_rate}%)")

    if trends.readiness in _UPWARD:
        achievements.append("Readiness improving over the period")

    if trends.hrv in _UPWARD:
        achievements.append("HRV improving - athlete adapting well to training")

    if compliance_rate < LOW_COMPLIANCE:
        recommendations.append("Training compliance below 70% - review schedule")

    if training_volume_hours > settings.high_volume_hours:
        recommendations.append("High training volume - ensure adequate recovery")

    return WellnessInsights(
        flags=flags,
        recommendations=recommendations,
        compliance_rate=compliance_rate,
        training_volume_hours=training_volume_hours,
        achievements=achievements,
    )


def _hard_rules(
    snapshots: Sequence[WellnessSnapshot],
    latest: WellnessSnapshot,
    trends: WellnessTrends,
) -> list[HardRule]:
    rules: list[HardRule] = []
    readiness = latest.readiness_score

    if readiness < CRITICAL_READINESS:
        rules.append(
            HardRule(
                rule_name="CRITICAL_LOW_READINESS",
                condition="Readiness score below 30",
                recommendation="REST DAY REQUIRED - Athlete is severely fatigued. No training recommended.",
                is_blocking=True,
            )
        )
    elif readiness < LOW_READINESS:
        rules.append(
            HardRule(
                rule_name="LOW_READINESS",
                condition="Readiness score between 30-50",
                recommendation="Consider reducing training intensity. Focus on recovery workouts.",
            )
        )

    if trends.hrv in _DOWNWARD:
        rules.append(
            HardRule(
                rule_name="DECLINING_HRV",
                condition="HRV trending downward",
                recommendation="Monitor for signs of overreaching. Consider reducing training load.",
            )
        )

    low_sleep_days = sum(
        1
        for snapshot in snapshots
        if snapshot.physiological is not None
        and snapshot.physiological.sleep is not None
        and snapshot.physiological.sleep.total_hours < LOW_SLEEP_HOURS
    )
    if low_sleep_days >= LOW_SLEEP_DAYS:
        rules.append(
            HardRule(
                rule_name="CHRONIC_SLEEP_DEBT",
                condition=f"Less than 6 hours sleep for {LOW_SLEEP_DAYS}+ days",
                recommendation="Prioritize sleep hygiene. Reduce training to allow recovery.",
            )
        )

    if latest.load_summary is not None and latest.load_summary.tsb < HIGH_FATIGUE_TSB:
        rules.append(
            HardRule(
                rule_name="HIGH_FATIGUE_TSB",
                condition="Training Stress Balance below -20",
                recommendation="High accumulated fatigue. Consider easy day or rest day.",
            )
        )

    return rules


def _safe_adjustments(readiness: float, trends: WellnessTrends) -> list[str]:
    if readiness >= LOW_READINESS:
        adjustments = [
            "Maintain current training plan",
            "Include 1-2 recovery-focused workouts this week",
        ]
    elif readiness >= CRITICAL_READINESS:
        adjustments = [
            "Reduce training volume by 20%",
            "Replace high-intensity intervals with steady endurance",
            "Add extra recovery day",
        ]
    else:
        adjustments = [
            "Rest day recommended",
            "Light activity only (walking, stretching)",
            "Focus on sleep and nutrition",
        ]

    if trends.readiness in _UPWARD:
        adjustments.append("Readiness improving - gradual load increase OK")
    return adjustments


def build_recovery_prompt(
    athlete_id: str,
    latest: WellnessSnapshot,
    trends: WellnessTrends,
    hard_rules: Sequence[HardRule],
) -> str:
    """Build the prompt handed to the external text generator."""
    parts = [
        f"Generate recovery recommendations for athlete {athlete_id}.",
        f"Current readiness: {latest.readiness_score:.1f}/100.",
        f"HRV trend: {trends.hrv}.",
        f"Sleep trend: {trends.sleep_hours}.",
        f"Average sleep hours: {trends.average_sleep_hours or 0.0:.1f}.",
    ]
    if hard_rules:
        parts.append(f"Hard rules triggered: {', '.join(rule.rule_name for rule in hard_rules)}.")
    parts.append("Provide specific, actionable recovery advice. Keep response under 200 words.")
    return " ".join(parts)


def generate_recovery_recommendations(
    athlete_id: str,
    snapshots: Sequence[WellnessSnapshot],
) -> RecoveryRecommendations:
    """Evaluate recovery hard rules and safe adjustments from the latest snapshot.

    Returns:
        RecoveryRecommendations; empty when there are no snapshots
    """
    if not snapshots:
        return RecoveryRecommendations.empty(athlete_id)

    ordered = sorted(snapshots, key=lambda snapshot: snapshot.date)
    latest = ordered[-1]
    trends = calculate_wellness_trends(ordered)
    hard_rules = _hard_rules(ordered, latest, trends)

    recommendations = RecoveryRecommendations(
        athlete_id=athlete_id,
        hard_rules=hard_rules,
        safe_adjustments=_safe_adjustments(latest.readiness_score, trends),
        readiness_score=latest.readiness_score,
        prompt=build_recovery_prompt(athlete_id, latest, trends, hard_rules),
    )
    if recommendations.has_blocking_rules:
        logger.warning(f"[RECOVERY] Blocking recovery rule for athlete_id={athlete_id}")
    return recommendations


def suggest_adjustment(readiness: float, compliance: float) -> str:
    """Suggest a plan adjustment from readiness (0-10) and compliance (percent)."""
    if readiness < ADJUSTMENT_LOW_READINESS:
        return "Reduce volume by 20-30% and focus on recovery. Consider swapping high-intensity sessions."
    if compliance < ADJUSTMENT_LOW_COMPLIANCE:
        return "Increase motivation cues or adjust schedule. Review workout accessibility."
    return "Maintain current plan. Athlete is performing well."
