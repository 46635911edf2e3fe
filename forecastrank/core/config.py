"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "ForecastRank"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 8123

    # Analysis defaults
    analysis_min_observations: int = 10
    analysis_max_observations: int = 100_000
    analysis_train_ratio: float = 0.8
    analysis_alpha: float = 0.3
    analysis_beta: float = 0.1
    analysis_gamma: float = 0.1
    analysis_max_lag: int = 24
    analysis_moving_average_window: int = 3

    @field_validator("analysis_min_observations")
    @classmethod
    def validate_min_observations(cls, v: int) -> int:
        """Validate the observation floor is at least 10."""
        if v < 10:
            raise ValueError(f"analysis_min_observations must be >= 10, got {v}")
        return v

    @field_validator("analysis_train_ratio")
    @classmethod
    def validate_train_ratio(cls, v: float) -> float:
        """Validate the default train ratio lies in [0.5, 0.9].

        Args:
            v: Train ratio.

        Returns:
            Validated train ratio.

        Raises:
            ValueError: If the ratio is out of range.
        """
        if not 0.5 <= v <= 0.9:
            raise ValueError(f"analysis_train_ratio must be in [0.5, 0.9], got {v}")
        return v

    @field_validator("analysis_alpha", "analysis_beta", "analysis_gamma")
    @classmethod
    def validate_smoothing_constant(cls, v: float) -> float:
        """Validate smoothing constants lie strictly between 0 and 1."""
        if not 0.0 < v < 1.0:
            raise ValueError(f"Smoothing constants must be in (0, 1), got {v}")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
