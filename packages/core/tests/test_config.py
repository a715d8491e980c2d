"""Tests for engine configuration."""

from decimal import Decimal

import pytest
import structlog
from pydantic import ValidationError
from structlog.testing import capture_logs

from equisplit_core.config import (
    DEFAULT_CONFIDENCE_BASELINE,
    DEFAULT_EQUITY_CEILING,
    DEFAULT_EQUITY_FLOOR,
    ConfidenceSettings,
    EquiSplitConfig,
    EquitySettings,
    configure_logging,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove any EQUISPLIT_* variables from the environment."""
    for name in (
        "EQUISPLIT_ENV",
        "EQUISPLIT_LOG_LEVEL",
        "EQUISPLIT_EQUITY_FLOOR",
        "EQUISPLIT_EQUITY_CEILING",
        "EQUISPLIT_CONFIDENCE_BASELINE",
        "EQUISPLIT_CONFIDENCE_MINIMUM_LINE_ITEMS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestDefaults:
    """Test suite for default configuration."""

    def test_defaults(self):
        config = EquiSplitConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"
        assert config.equity.floor == DEFAULT_EQUITY_FLOOR == Decimal("0.30")
        assert config.equity.ceiling == DEFAULT_EQUITY_CEILING == Decimal("0.70")
        assert config.confidence.baseline == DEFAULT_CONFIDENCE_BASELINE
        assert config.confidence.minimum_line_items == 3
        assert config.is_production is False
        assert config.is_debug is False

    def test_frozen(self):
        config = EquiSplitConfig()
        with pytest.raises(ValidationError):
            config.env = "production"


class TestEnvironment:
    """Test suite for environment variable loading."""

    def test_env_and_log_level(self, monkeypatch):
        monkeypatch.setenv("EQUISPLIT_ENV", " Production ")
        monkeypatch.setenv("EQUISPLIT_LOG_LEVEL", "debug")

        config = EquiSplitConfig()
        assert config.env == "production"
        assert config.is_production is True
        assert config.log_level == "DEBUG"
        assert config.is_debug is True

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("EQUISPLIT_ENV", "qa")
        with pytest.raises(ValidationError):
            EquiSplitConfig()

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            EquiSplitConfig(log_level="VERBOSE")

    def test_equity_bounds_from_env(self, monkeypatch):
        monkeypatch.setenv("EQUISPLIT_EQUITY_FLOOR", "0.25")
        monkeypatch.setenv("EQUISPLIT_EQUITY_CEILING", "0.75")

        config = EquiSplitConfig()
        assert config.equity.floor == Decimal("0.25")
        assert config.equity.ceiling == Decimal("0.75")

    def test_confidence_from_env(self, monkeypatch):
        monkeypatch.setenv("EQUISPLIT_CONFIDENCE_BASELINE", "0.9")
        monkeypatch.setenv("EQUISPLIT_CONFIDENCE_MINIMUM_LINE_ITEMS", "5")

        settings = ConfidenceSettings()
        assert settings.baseline == pytest.approx(0.9)
        assert settings.minimum_line_items == 5


class TestValidation:
    """Test suite for settings validation."""

    @pytest.mark.parametrize(
        "floor,ceiling",
        [
            ("0.55", "0.70"),
            ("0.30", "0.45"),
            ("-0.1", "0.70"),
            ("0.30", "1.5"),
        ],
    )
    def test_bounds_must_contain_even_split(self, floor: str, ceiling: str):
        with pytest.raises(ValidationError):
            EquitySettings(floor=Decimal(floor), ceiling=Decimal(ceiling))

    def test_even_split_only(self):
        """A floor and ceiling of 0.5 pins every division at 50/50."""
        settings = EquitySettings(floor=Decimal("0.5"), ceiling=Decimal("0.5"))
        assert settings.floor == settings.ceiling

    def test_baseline_range(self):
        with pytest.raises(ValidationError):
            ConfidenceSettings(baseline=1.2)


class TestConfigureLogging:
    """Test suite for structlog level filtering."""

    def test_filters_below_level(self, reset_structlog):
        configure_logging(EquiSplitConfig(log_level="ERROR"))
        logger = structlog.get_logger()

        with capture_logs() as logs:
            logger.info("division_calculation_step")
            logger.error("calculation_failed")

        assert [e["event"] for e in logs] == ["calculation_failed"]
