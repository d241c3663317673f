"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import date, timedelta

import pytest
from loguru import logger

from coach_engine.metrics.training_load import DailyLoadRecord, TrainingLoadSummary
from coach_engine.wellness.types import PhysiologicalData, SleepMetrics, SubjectiveWellness


@pytest.fixture
def caplog_loguru():
    """Capture loguru messages emitted during a test.

    Yields:
        List of formatted messages
    """
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def target_date() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def steady_history(target_date: date) -> list[DailyLoadRecord]:
    """Six weeks of 60 TSS / 60 minute days ending on target_date."""
    return [
        DailyLoadRecord(date=target_date - timedelta(days=offset), tss=60.0, training_minutes=60.0)
        for offset in range(42)
    ]


@pytest.fixture
def rested_load() -> TrainingLoadSummary:
    return TrainingLoadSummary(tss=0.0, ctl=40.0, atl=25.0, tsb=15.0, training_minutes=0.0)


@pytest.fixture
def fresh_subjective() -> SubjectiveWellness:
    return SubjectiveWellness(fatigue=2, stress=3, sleep_quality=8, motivation=8, soreness=2)


@pytest.fixture
def good_physiological() -> PhysiologicalData:
    return PhysiologicalData(
        resting_hr=50.0,
        hrv=60.0,
        body_weight_kg=70.0,
        sleep=SleepMetrics(total_hours=8.0, quality_score=8),
    )
