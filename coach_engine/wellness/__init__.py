from coach_engine.wellness.readiness import (
    apply_readiness_overrides,
    build_wellness_snapshot,
    calculate_readiness,
    latest_signals,
)
from coach_engine.wellness.types import (
    DailySignal,
    PhysiologicalData,
    SleepMetrics,
    SubjectiveWellness,
    WellnessSnapshot,
)

__all__ = [
    "DailySignal",
    "PhysiologicalData",
    "SleepMetrics",
    "SubjectiveWellness",
    "WellnessSnapshot",
    "apply_readiness_overrides",
    "build_wellness_snapshot",
    "calculate_readiness",
    "latest_signals",
]
