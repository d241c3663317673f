from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="COACH_ENGINE_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="COACH_ENGINE_LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="COACH_ENGINE_LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="COACH_ENGINE_LOG_RETENTION")
    load_ramp_cap_percent: float = Field(
        default=15.0,
        validation_alias="COACH_ENGINE_LOAD_RAMP_CAP_PERCENT",
        description="Maximum week-over-week load increase before SG-LOAD-001 blocks",
    )
    min_recovery_days: int = Field(
        default=2,
        validation_alias="COACH_ENGINE_MIN_RECOVERY_DAYS",
        description="Minimum days between high-intensity sessions (SG-RECOVERY-001)",
    )
    ai_filter_readiness: float = Field(
        default=40.0,
        validation_alias="COACH_ENGINE_AI_FILTER_READINESS",
        description="Readiness (0-100) below which unsafe AI suggestions are filtered",
    )
    high_volume_hours: float = Field(
        default=15.0,
        validation_alias="COACH_ENGINE_HIGH_VOLUME_HOURS",
        description="Weekly training hours above which insights recommend extra recovery",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(
                f"Invalid COACH_ENGINE_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. "
                "Defaulting to INFO."
            )
            return "INFO"
        return upper_value

    @field_validator("load_ramp_cap_percent", "ai_filter_readiness", "high_volume_hours")
    @classmethod
    def validate_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Guardrail and insight thresholds must be non-negative")
        return value

    @field_validator("min_recovery_days")
    @classmethod
    def validate_recovery_days(cls, value: int) -> int:
        if value < 0:
            raise ValueError("COACH_ENGINE_MIN_RECOVERY_DAYS must be non-negative")
        return value


settings = EngineSettings()
