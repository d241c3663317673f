from coach_engine.metrics.training_load import (
    DailyLoadRecord,
    DailyTrainingLoad,
    TrainingLoadSummary,
    calculate_atl,
    calculate_ctl,
    calculate_training_load,
    recompute_training_loads,
    upsert_training_loads,
)

__all__ = [
    "DailyLoadRecord",
    "DailyTrainingLoad",
    "TrainingLoadSummary",
    "calculate_atl",
    "calculate_ctl",
    "calculate_training_load",
    "recompute_training_loads",
    "upsert_training_loads",
]
