"""Configuration system for the EquiSplit calculation engine.

This module provides Pydantic Settings-based configuration with environment
variable support and defaults for the policy constants of the engine: the
bounds on the equity factor and the confidence scoring baseline.

The bounding constants are policy decisions without a single statutory
citation. They are configuration so a domain expert can tune them without
a code change.

Usage:
    from equisplit_core.config import EquiSplitConfig

    # Load from environment variables and .env file
    config = EquiSplitConfig()

    print(config.equity.floor, config.equity.ceiling)
    print(config.confidence.baseline)
"""

import logging
from decimal import Decimal

import structlog
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Courts rarely award more than 70% of a marital estate to one spouse
# without a full evidentiary hearing.
DEFAULT_EQUITY_FLOOR = Decimal("0.30")
DEFAULT_EQUITY_CEILING = Decimal("0.70")

DEFAULT_CONFIDENCE_BASELINE = 0.95
DEFAULT_MINIMUM_LINE_ITEMS = 3


class EquitySettings(BaseSettings):
    """Bounds on the equitable-distribution equity factor.

    Environment Variables:
        EQUISPLIT_EQUITY_FLOOR: Lowest share of the marital estate spouse1 may receive
        EQUISPLIT_EQUITY_CEILING: Highest share of the marital estate spouse1 may receive
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUISPLIT_EQUITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    floor: Decimal = Field(
        default=DEFAULT_EQUITY_FLOOR,
        ge=Decimal("0"),
        le=Decimal("0.5"),
        description="Minimum equity factor (spouse1 share) after clamping",
    )
    ceiling: Decimal = Field(
        default=DEFAULT_EQUITY_CEILING,
        ge=Decimal("0.5"),
        le=Decimal("1"),
        description="Maximum equity factor (spouse1 share) after clamping",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "EquitySettings":
        """Floor must not exceed ceiling."""
        if self.floor > self.ceiling:
            raise ValueError(
                f"Equity floor ({self.floor}) cannot exceed ceiling ({self.ceiling})"
            )
        return self


class ConfidenceSettings(BaseSettings):
    """Confidence scoring settings.

    Environment Variables:
        EQUISPLIT_CONFIDENCE_BASELINE: Starting score before penalties (0.0-1.0)
        EQUISPLIT_CONFIDENCE_MINIMUM_LINE_ITEMS: Fewer items than this is "insufficient data"
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUISPLIT_CONFIDENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    baseline: float = Field(
        default=DEFAULT_CONFIDENCE_BASELINE,
        ge=0.0,
        le=1.0,
        description="Confidence before any penalty is applied",
    )
    minimum_line_items: int = Field(
        default=DEFAULT_MINIMUM_LINE_ITEMS,
        ge=0,
        description="Number of assets plus debts below which data is considered insufficient",
    )


class EquiSplitConfig(BaseSettings):
    """Root configuration for the EquiSplit engine.

    Environment Variables:
        EQUISPLIT_ENV: Environment name (development, staging, production, test)
        EQUISPLIT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        # Load all configuration from environment
        config = EquiSplitConfig()

        # Override specific settings
        config = EquiSplitConfig(
            equity=EquitySettings(floor=Decimal("0.25"), ceiling=Decimal("0.75")),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUISPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    equity: EquitySettings = Field(default_factory=EquitySettings)
    confidence: ConfidenceSettings = Field(default_factory=ConfidenceSettings)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def configure_logging(config: EquiSplitConfig) -> None:
    """Filter structlog output below the configured log level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level)
        ),
    )
