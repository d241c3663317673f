"""Safety guardrail rules.

Rule gate for high-intensity prescriptions. Rules are an ordered tuple and the
first matching rule wins; at most one blocking rule is reported per call.

Guardrail rules:
- SG-FATIGUE-001: Block high intensity when fatigue >= 7
- SG-SORENESS-001: Block high intensity when soreness >= 7
- SG-READINESS-001: Block high intensity when readiness (0-10) <= 4.0
- SG-LOAD-001: Cap weekly load progression (15% by default)
- SG-RECOVERY-001: Minimum recovery days between high-intensity sessions
- SG-AI-001: Filter unsafe AI suggestions when readiness (0-100) is low
- SG-OVERRIDE-001: Admin override with justification

Decisions are never stored; each one is logged as the audit trail.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from loguru import logger
from pydantic import BaseModel, ConfigDict

from coach_engine.core.errors import InvalidInputError
from coach_engine.core.settings import settings

HIGH_INTENSITY_TYPES = frozenset({"INTERVALS", "VO2_MAX", "THRESHOLD", "SPRINT"})

HIGH_FATIGUE_THRESHOLD = 7.0
HIGH_SORENESS_THRESHOLD = 7.0
LOW_READINESS_THRESHOLD = 4.0

DEFAULT_NOTIFICATIONS = ("athlete", "coach")
OVERRIDE_NOTIFICATIONS = ("coach", "admin")

RECOVERY_RIDE_ALTERNATIVE = "Schedule a recovery ride or easy endurance workout instead"
ACTIVE_RECOVERY_ALTERNATIVE = "Schedule active recovery or a rest day instead"
LOW_INTENSITY_ALTERNATIVE = "Schedule a low-intensity Zone 1 session instead"
RECOVERY_DAYS_ALTERNATIVE = "Schedule active recovery (Zone 1), rest day, or endurance ride"

UNSAFE_SUGGESTION_PHRASES = ("increase interval intensity", "extra vo2 max", "add extra sprint")


class GuardrailDecision(BaseModel):
    """Outcome of a guardrail check.

    Attributes:
        blocked: Whether the prescription is blocked
        rule_id: Identifier of the rule that fired (e.g., "SG-FATIGUE-001")
        blocking_rule: Human-readable reason
        safe_alternative: Suggested alternative session
        notifications: Parties to notify
    """

    model_config = ConfigDict(frozen=True)

    blocked: bool
    rule_id: str | None = None
    blocking_rule: str | None = None
    safe_alternative: str | None = None
    notifications: list[str] = []

    @classmethod
    def approved(cls, suggestion: str | None = None) -> "GuardrailDecision":
        return cls(blocked=False, safe_alternative=suggestion)

    @classmethod
    def block(cls, rule_id: str, reason: str, alternative: str) -> "GuardrailDecision":
        return cls(
            blocked=True,
            rule_id=rule_id,
            blocking_rule=reason,
            safe_alternative=alternative,
            notifications=list(DEFAULT_NOTIFICATIONS),
        )


@dataclass(frozen=True)
class GuardrailRule:
    """One intensity rule: fires when triggered(fatigue, soreness, readiness) is true."""

    rule_id: str
    triggered: Callable[[float, float, float], bool]
    reason: Callable[[float, float, float], str]
    alternative: str


INTENSITY_RULES: tuple[GuardrailRule, ...] = (
    GuardrailRule(
        rule_id="SG-FATIGUE-001",
        triggered=lambda fatigue, soreness, readiness: fatigue >= HIGH_FATIGUE_THRESHOLD,
        reason=lambda fatigue, soreness, readiness: (
            f"High fatigue ({fatigue}) detected. High-intensity workouts are blocked."
        ),
        alternative=RECOVERY_RIDE_ALTERNATIVE,
    ),
    GuardrailRule(
        rule_id="SG-SORENESS-001",
        triggered=lambda fatigue, soreness, readiness: soreness >= HIGH_SORENESS_THRESHOLD,
        reason=lambda fatigue, soreness, readiness: (
            f"High soreness ({soreness}) detected. High-intensity workouts are blocked."
        ),
        alternative=ACTIVE_RECOVERY_ALTERNATIVE,
    ),
    GuardrailRule(
        rule_id="SG-READINESS-001",
        triggered=lambda fatigue, soreness, readiness: readiness <= LOW_READINESS_THRESHOLD,
        reason=lambda fatigue, soreness, readiness: (
            f"Low readiness ({readiness}) detected. High-intensity workouts are blocked."
        ),
        alternative=LOW_INTENSITY_ALTERNATIVE,
    ),
)


def is_high_intensity(workout_type: str | None) -> bool:
    return workout_type is not None and workout_type.upper() in HIGH_INTENSITY_TYPES


def _log_decision(decision: GuardrailDecision, athlete_id: str | None) -> None:
    if decision.blocked:
        logger.warning(
            f"[GUARDRAIL] BLOCKED rule={decision.rule_id} athlete_id={athlete_id}: {decision.blocking_rule}"
        )


def check_guardrail(
    workout_type: str | None,
    fatigue: float,
    soreness: float,
    readiness: float,
    athlete_id: str | None = None,
) -> GuardrailDecision:
    """Gate a prescription against fatigue, soreness and readiness.

    Only INTERVALS, VO2_MAX, THRESHOLD and SPRINT (case-insensitive) are
    evaluated; any other workout type is never blocked here.

    Args:
        workout_type: Prescribed workout type
        fatigue: Fatigue score (0-10)
        soreness: Soreness score (0-10)
        readiness: Readiness on the 0-10 scale
        athlete_id: Optional athlete identifier for the audit log

    Returns:
        GuardrailDecision from the first matching rule, or approved
    """
    if not is_high_intensity(workout_type):
        return GuardrailDecision.approved()

    for rule in INTENSITY_RULES:
        if rule.triggered(fatigue, soreness, readiness):
            decision = GuardrailDecision.block(
                rule.rule_id,
                rule.reason(fatigue, soreness, readiness),
                rule.alternative,
            )
            _log_decision(decision, athlete_id)
            return decision

    return GuardrailDecision.approved()


def check_load_ramp(
    current_weekly_load: float,
    proposed_weekly_load: float,
    cap_percent: float | None = None,
    athlete_id: str | None = None,
) -> GuardrailDecision:
    """SG-LOAD-001: block a week-over-week load increase above the cap.

    No current load means there is no baseline to ramp from, so the check passes.
    """
    cap = settings.load_ramp_cap_percent if cap_percent is None else cap_percent
    if current_weekly_load <= 0:
        return GuardrailDecision.approved()

    ramp_percent = (proposed_weekly_load - current_weekly_load) * 100.0 / current_weekly_load
    if ramp_percent <= cap:
        return GuardrailDecision.approved()

    max_safe_load = current_weekly_load * (1.0 + cap / 100.0)
    decision = GuardrailDecision.block(
        "SG-LOAD-001",
        f"Load increase of {ramp_percent:.1f}% exceeds the {cap:.1f}% ramp cap.",
        f"Maximum safe load: {max_safe_load:.0f} TSS",
    )
    _log_decision(decision, athlete_id)
    return decision


def check_recovery_days(
    last_high_intensity: date | None,
    workout_type: str | None,
    today: date,
    min_days: int | None = None,
    athlete_id: str | None = None,
) -> GuardrailDecision:
    """SG-RECOVERY-001: require min_days between high-intensity sessions."""
    required = settings.min_recovery_days if min_days is None else min_days
    if not is_high_intensity(workout_type) or last_high_intensity is None:
        return GuardrailDecision.approved()

    days_since = (today - last_high_intensity).days
    if days_since >= required:
        return GuardrailDecision.approved()

    decision = GuardrailDecision.block(
        "SG-RECOVERY-001",
        f"Only {days_since} day(s) since last high-intensity session. Minimum {required} recovery days required.",
        RECOVERY_DAYS_ALTERNATIVE,
    )
    _log_decision(decision, athlete_id)
    return decision


def is_unsafe_suggestion(suggestion: str) -> bool:
    lower = suggestion.lower()
    if any(phrase in lower for phrase in UNSAFE_SUGGESTION_PHRASES):
        return True
    return "hard" in lower and "workout" in lower


def filter_ai_suggestions(
    readiness_score: float,
    suggestions: Sequence[str],
    threshold: float | None = None,
    athlete_id: str | None = None,
) -> list[str]:
    """SG-AI-001: drop unsafe suggestions when readiness (0-100) is below the threshold.

    Suggestions are returned unchanged, in order, when readiness is adequate.
    """
    limit = settings.ai_filter_readiness if threshold is None else threshold
    if readiness_score >= limit:
        return list(suggestions)

    kept = [suggestion for suggestion in suggestions if not is_unsafe_suggestion(suggestion)]
    logger.info(
        f"[GUARDRAIL] SG-AI-001 athlete_id={athlete_id}: "
        f"{len(suggestions) - len(kept)} rejected out of {len(suggestions)} suggestions"
    )
    return kept


def attempt_override(decision: GuardrailDecision, admin_user: str, justification: str) -> GuardrailDecision:
    """SG-OVERRIDE-001: lift a blocked decision with an admin justification.

    Raises:
        InvalidInputError: If admin_user or justification is blank
    """
    if not decision.blocked:
        return decision
    if not admin_user or not admin_user.strip():
        raise InvalidInputError("admin_user", "Override requires an admin user")
    if not justification or not justification.strip():
        raise InvalidInputError("justification", "Override requires a justification")

    logger.warning(
        f"[GUARDRAIL] OVERRIDE rule={decision.rule_id} by={admin_user} justification={justification!r}"
    )
    return GuardrailDecision(
        blocked=False,
        rule_id=decision.rule_id,
        blocking_rule=f"GUARDRAIL OVERRIDE: {decision.rule_id}",
        safe_alternative=f"Justification: {justification} | Approved by: {admin_user}",
        notifications=list(OVERRIDE_NOTIFICATIONS),
    )


def workout_type_for_adjustment(adjustment_type: str) -> str:
    """Map a free-form adjustment label to the workout type the rules evaluate."""
    lower = adjustment_type.lower()
    if "interval" in lower or "vo2" in lower or "threshold" in lower:
        return "INTERVALS"
    if "recovery" in lower or "easy" in lower:
        return "RECOVERY"
    return "ENDURANCE"


def propose_adjustment(
    adjustment_type: str,
    fatigue: float,
    soreness: float,
    readiness: float,
    current_weekly_load: float,
    proposed_weekly_load: float,
    cap_percent: float | None = None,
    athlete_id: str | None = None,
) -> GuardrailDecision:
    """Check a proposed plan adjustment against the intensity rules and the load ramp.

    The load ramp is only checked when the proposal raises weekly load; a load
    block replaces the intensity decision.
    """
    workout_type = workout_type_for_adjustment(adjustment_type)
    decision = check_guardrail(workout_type, fatigue, soreness, readiness, athlete_id=athlete_id)

    if proposed_weekly_load > current_weekly_load:
        load_decision = check_load_ramp(current_weekly_load, proposed_weekly_load, cap_percent, athlete_id=athlete_id)
        if load_decision.blocked:
            decision = load_decision

    logger.info(
        f"[GUARDRAIL] Adjustment proposed athlete_id={athlete_id} type={adjustment_type} "
        f"decision={'BLOCKED' if decision.blocked else 'APPROVED'}"
    )
    return decision
