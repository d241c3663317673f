"""Tests for engine log sinks: the engine must leave host sinks alone."""

import subprocess
import sys
import textwrap
from pathlib import Path

from loguru import logger

from coach_engine.core.logger import remove_engine_sinks, setup_logger


def test_import_keeps_host_sinks() -> None:
    """A sink added before the first import still receives messages afterwards."""
    script = textwrap.dedent(
        """
        from loguru import logger

        seen = []
        logger.add(lambda message: seen.append(message.record["message"]), format="{message}")
        import coach_engine  # noqa: F401
        from coach_engine.analysis.guardrails import check_guardrail

        logger.info("host message")
        check_guardrail("THRESHOLD", fatigue=9, soreness=1, readiness=8.0)
        assert "host message" in seen, seen
        assert any("SG-FATIGUE-001" in message for message in seen), seen
        """
    )
    result = subprocess.run(
        [sys.executable, "-c", script],
        capture_output=True,
        text=True,
        check=False,
        cwd=Path(__file__).resolve().parents[2],
    )
    assert result.returncode == 0, result.stderr


def test_setup_logger_keeps_host_sinks(tmp_path) -> None:
    seen: list[str] = []
    host_id = logger.add(lambda message: seen.append(message.record["message"]), format="{message}")
    try:
        setup_logger(level="WARNING", log_file=str(tmp_path / "logs" / "engine.log"), console=False)
        logger.warning("after engine setup")
        assert "after engine setup" in seen
        assert (tmp_path / "logs").is_dir()
    finally:
        remove_engine_sinks()
        logger.remove(host_id)


def test_reconfigure_replaces_only_engine_sinks() -> None:
    first = setup_logger(level="INFO")
    second = setup_logger(level="DEBUG")
    try:
        assert len(first) == 1
        assert len(second) == 1
        assert first != second
    finally:
        remove_engine_sinks()
