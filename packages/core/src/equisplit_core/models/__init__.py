"""Data models for equisplit-core.

This package provides the records exchanged with the surrounding
application:
- Calculation input: estate items, special circumstances (estate.py)
- Calculation output: allocations, equalization, audit trail (result.py)
"""

from equisplit_core.models.estate import (
    # Enumerations
    Spouse,
    Ownership,
    ItemKind,
    ItemCategory,
    HealthStatus,
    CustodyArrangement,
    # Input records
    MaritalEstateItem,
    SpecialCircumstances,
    CalculationInput,
)

from equisplit_core.models.result import (
    # Enumerations
    Regime,
    Classification,
    # Output records
    AuditEntry,
    ItemAllocation,
    EqualizationPayment,
    AppliedFactor,
    DivisionResult,
)

__all__ = [
    # Enumerations
    "Spouse",
    "Ownership",
    "ItemKind",
    "ItemCategory",
    "HealthStatus",
    "CustodyArrangement",
    "Regime",
    "Classification",
    # Input records
    "MaritalEstateItem",
    "SpecialCircumstances",
    "CalculationInput",
    # Output records
    "AuditEntry",
    "ItemAllocation",
    "EqualizationPayment",
    "AppliedFactor",
    "DivisionResult",
]
