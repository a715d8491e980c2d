"""Result models emitted by the property division engine.

A DivisionResult is handed to the report/document layer and stored next
to its input for audit. It is frozen so nothing downstream can alter a
computed division after the fact.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .estate import ItemCategory, ItemKind, Spouse


class Regime(str, Enum):
    """Marital property division regime of a jurisdiction."""
    COMMUNITY = "community"
    EQUITABLE = "equitable"


class Classification(str, Enum):
    """Whether an item is divided or kept by its owner."""
    MARITAL = "marital"
    SEPARATE = "separate"


class AuditEntry(BaseModel):
    """Single step in the calculation audit trail."""

    model_config = ConfigDict(frozen=True)

    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


class ItemAllocation(BaseModel):
    """Which spouse ends up holding an asset or carrying a debt."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    description: str = ""
    kind: ItemKind
    category: ItemCategory = ItemCategory.OTHER
    value: Decimal = Field(description="Item value in cents, always non-negative")
    classification: Classification
    awarded_to: Spouse
    pre_assigned: bool = Field(
        default=False,
        description="True when the parties had already agreed who keeps the item",
    )
    reasoning: str = ""

    @computed_field
    @property
    def net_effect(self) -> Decimal:
        """Contribution to the holder's total: positive for assets, negative for debts."""
        return -self.value if self.kind is ItemKind.DEBT else self.value


class EqualizationPayment(BaseModel):
    """Cash transfer that trues up an approximate item allocation."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(gt=Decimal("0"))
    from_spouse: Spouse
    to_spouse: Spouse

    @model_validator(mode="after")
    def validate_parties(self) -> "EqualizationPayment":
        """A spouse cannot pay themselves."""
        if self.from_spouse == self.to_spouse:
            raise ValueError("from_spouse and to_spouse must differ")
        return self


class AppliedFactor(BaseModel):
    """An equitable-distribution factor that moved the split."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str
    weight: Decimal
    favors: Spouse

    @computed_field
    @property
    def signed_weight(self) -> Decimal:
        """Weight as a shift of spouse1's share (negative when favoring spouse2)."""
        return self.weight if self.favors is Spouse.SPOUSE1 else -self.weight


class DivisionResult(BaseModel):
    """Complete output of a property division calculation.

    ``spouse1_share`` and ``spouse2_share`` are each spouse's final share of
    the marital estate after the equalization payment. They always sum to
    ``net_marital_estate_value`` exactly. Separate property is reported
    apart and only enters the per-spouse totals.
    """

    model_config = ConfigDict(frozen=True)

    jurisdiction: str
    jurisdiction_name: str
    regime: Regime
    equity_factor: Decimal = Field(
        ge=Decimal("0"),
        le=Decimal("1"),
        description="Spouse1's target share of the marital estate",
    )
    applied_factors: list[AppliedFactor] = Field(default_factory=list)

    total_marital_assets_value: Decimal
    total_marital_debts_value: Decimal
    net_marital_estate_value: Decimal

    spouse1_share: Decimal
    spouse2_share: Decimal
    equalization_payment: Optional[EqualizationPayment] = None

    spouse1_separate_value: Decimal = Decimal("0.00")
    spouse2_separate_value: Decimal = Decimal("0.00")

    allocations: list[ItemAllocation] = Field(default_factory=list)

    confidence_level: float = Field(ge=0.0, le=1.0)

    warnings: list[str] = Field(default_factory=list)
    jurisdiction_notes: list[str] = Field(default_factory=list)
    audit_log: list[AuditEntry] = Field(default_factory=list)

    methodology_version: str
    jurisdiction_table_version: str

    @computed_field
    @property
    def is_negative_estate(self) -> bool:
        """True when marital debts exceed marital assets."""
        return self.net_marital_estate_value < 0

    @computed_field
    @property
    def spouse1_total(self) -> Decimal:
        """Spouse1's marital share plus their separate property."""
        return self.spouse1_share + self.spouse1_separate_value

    @computed_field
    @property
    def spouse2_total(self) -> Decimal:
        """Spouse2's marital share plus their separate property."""
        return self.spouse2_share + self.spouse2_separate_value

    def allocations_for(self, spouse: Spouse) -> list[ItemAllocation]:
        """Items held by one spouse after the division."""
        return [a for a in self.allocations if a.awarded_to is spouse]
