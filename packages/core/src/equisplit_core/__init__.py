"""EquiSplit Core - Marital property division calculations."""

__version__ = "0.1.0"

from .calculator import PropertyDivisionCalculator, calculate_property_division
from .classification import ClassifiedEstate, classify
from .confidence import CompletenessSignals, ComplexitySignals, score_confidence
from .config import EquiSplitConfig, EquitySettings, ConfidenceSettings
from .division import allocate_items, compute_equalization, divide, split_net_estate
from .equity import compute_equity_factor, compute_equity_factor_value
from .exceptions import (
    EquiSplitError,
    CalculationInputError,
    InvalidItemValueError,
    InconsistentOwnershipError,
    UnknownJurisdictionError,
    ConfigurationError,
)
from .jurisdictions import (
    DEFAULT_JURISDICTION_TABLE,
    JurisdictionRule,
    JurisdictionTable,
    USState,
    select_regime,
)
from .models import (
    Spouse,
    Ownership,
    ItemKind,
    ItemCategory,
    HealthStatus,
    CustodyArrangement,
    Regime,
    Classification,
    MaritalEstateItem,
    SpecialCircumstances,
    CalculationInput,
    AuditEntry,
    ItemAllocation,
    EqualizationPayment,
    AppliedFactor,
    DivisionResult,
)

__all__ = [
    # Calculator
    "PropertyDivisionCalculator",
    "calculate_property_division",
    # Pipeline stages
    "ClassifiedEstate",
    "classify",
    "select_regime",
    "compute_equity_factor",
    "compute_equity_factor_value",
    "split_net_estate",
    "allocate_items",
    "compute_equalization",
    "divide",
    "CompletenessSignals",
    "ComplexitySignals",
    "score_confidence",
    # Jurisdictions
    "DEFAULT_JURISDICTION_TABLE",
    "JurisdictionRule",
    "JurisdictionTable",
    "USState",
    # Configuration
    "EquiSplitConfig",
    "EquitySettings",
    "ConfidenceSettings",
    # Exceptions
    "EquiSplitError",
    "CalculationInputError",
    "InvalidItemValueError",
    "InconsistentOwnershipError",
    "UnknownJurisdictionError",
    "ConfigurationError",
    # Models
    "Spouse",
    "Ownership",
    "ItemKind",
    "ItemCategory",
    "HealthStatus",
    "CustodyArrangement",
    "Regime",
    "Classification",
    "MaritalEstateItem",
    "SpecialCircumstances",
    "CalculationInput",
    "AuditEntry",
    "ItemAllocation",
    "EqualizationPayment",
    "AppliedFactor",
    "DivisionResult",
]
