"""Input models for property division calculations.

These records are produced upstream (forms, document extraction) after
schema validation. The engine only reads them: every model is frozen and
the calculation never mutates its input.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Spouse(str, Enum):
    """One party to the marriage.

    Spouse1 is the person running the calculation.
    """
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"

    @property
    def other(self) -> "Spouse":
        """The opposite party."""
        return Spouse.SPOUSE2 if self is Spouse.SPOUSE1 else Spouse.SPOUSE1


class Ownership(str, Enum):
    """Title holder of an asset or obligor of a debt."""
    JOINT = "joint"
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"

    @property
    def spouse(self) -> Optional[Spouse]:
        """The single owning spouse, or None for joint ownership."""
        if self is Ownership.JOINT:
            return None
        return Spouse(self.value)


class ItemKind(str, Enum):
    """Whether an estate item adds to or subtracts from the estate."""
    ASSET = "asset"
    DEBT = "debt"


class ItemCategory(str, Enum):
    """Categories of marital estate items."""
    # Assets
    REAL_ESTATE = "real_estate"
    VEHICLE = "vehicle"
    FINANCIAL_ACCOUNT = "financial_account"
    BANK_ACCOUNT = "bank_account"
    INVESTMENT_ACCOUNT = "investment_account"
    RETIREMENT_ACCOUNT = "retirement_account"
    BUSINESS_INTEREST = "business_interest"
    PERSONAL_PROPERTY = "personal_property"
    CRYPTOCURRENCY = "cryptocurrency"
    INSURANCE = "insurance"

    # Debts
    MORTGAGE = "mortgage"
    VEHICLE_LOAN = "vehicle_loan"
    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    BUSINESS_DEBT = "business_debt"
    PERSONAL_LOAN = "personal_loan"

    OTHER = "other"


class HealthStatus(str, Enum):
    """Self-reported health level of a spouse."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def rank(self) -> int:
        """Ordinal rank, 0 for excellent through 3 for poor."""
        return list(HealthStatus).index(self)


class CustodyArrangement(str, Enum):
    """Custody of minor children."""
    SOLE_SPOUSE1 = "sole_spouse1"
    SOLE_SPOUSE2 = "sole_spouse2"
    JOINT = "joint"
    NONE = "none"


# =============================================================================
# ESTATE ITEMS
# =============================================================================

class MaritalEstateItem(BaseModel):
    """A single asset or debt of the marriage.

    Assets and debts share one shape for division purposes. Values are
    always non-negative; ``kind`` decides whether the item adds to or
    reduces a spouse's total. Sign and finiteness are checked by the
    classification step, not here, so the engine can report them as
    domain errors.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "house-1",
                    "description": "Family home, 12 Elm St",
                    "kind": "asset",
                    "category": "real_estate",
                    "current_value": "500000.00",
                    "is_separate_property": False,
                    "owned_by": "joint",
                }
            ]
        },
    )

    id: str = Field(min_length=1, description="Stable identifier of the item")
    description: str = Field(default="", description="Human-readable description")
    kind: ItemKind = Field(default=ItemKind.ASSET, description="Asset or debt")
    category: ItemCategory = Field(default=ItemCategory.OTHER)
    current_value: Decimal = Field(
        allow_inf_nan=True,
        description="Current fair market value (assets) or balance (debts)",
    )
    is_separate_property: Optional[bool] = Field(
        default=None,
        description="True/False when tagged; None lets the marital presumption decide",
    )
    owned_by: Ownership = Field(default=Ownership.JOINT)
    acquisition_date: Optional[date] = None
    valuation_date: Optional[date] = Field(
        default=None,
        description="Date the current value was established (appraisal, statement)",
    )
    awarded_to: Optional[Spouse] = Field(
        default=None,
        description="Spouse who keeps this marital item by agreement",
    )
    notes: Optional[str] = None

    @field_validator("current_value", mode="before")
    @classmethod
    def coerce_value_to_decimal(cls, v):
        """Coerce strings and floats to Decimal without binary drift."""
        if isinstance(v, (str, float)):
            return Decimal(str(v))
        return v

    @property
    def is_debt(self) -> bool:
        """Returns True if the item is a debt."""
        return self.kind is ItemKind.DEBT


# =============================================================================
# SPECIAL CIRCUMSTANCES
# =============================================================================

class SpecialCircumstances(BaseModel):
    """Qualitative and quantitative factors weighed in equitable distribution.

    Every field is optional. An absent field means the factor does not
    apply and contributes nothing to the equity factor. Incomes and
    earning capacities are annual amounts.
    """

    model_config = ConfigDict(frozen=True)

    marriage_duration_years: Optional[Decimal] = Field(default=None, ge=0)

    age_spouse1: Optional[int] = Field(default=None, ge=0, le=130)
    age_spouse2: Optional[int] = Field(default=None, ge=0, le=130)

    health_spouse1: Optional[HealthStatus] = None
    health_spouse2: Optional[HealthStatus] = None

    income_spouse1: Optional[Decimal] = Field(default=None, ge=0)
    income_spouse2: Optional[Decimal] = Field(default=None, ge=0)

    earning_capacity_spouse1: Optional[Decimal] = Field(default=None, ge=0)
    earning_capacity_spouse2: Optional[Decimal] = Field(default=None, ge=0)

    custody_arrangement: Optional[CustodyArrangement] = None

    domestic_violence: Optional[bool] = None
    domestic_violence_victim: Spouse = Field(
        default=Spouse.SPOUSE1,
        description="Spouse who suffered the abuse",
    )

    wasting_of_assets: Optional[bool] = None
    wasting_spouse: Spouse = Field(
        default=Spouse.SPOUSE2,
        description="Spouse who dissipated marital assets",
    )

    marital_misconduct: Optional[bool] = None
    misconduct_spouse: Spouse = Field(
        default=Spouse.SPOUSE2,
        description="Spouse at fault for the misconduct",
    )

    prior_marriage_spouse1: Optional[bool] = None
    prior_marriage_spouse2: Optional[bool] = None

    education_contribution_by: Optional[Spouse] = Field(
        default=None,
        description="Spouse who supported the other's education or training",
    )
    homemaker_contribution_by: Optional[Spouse] = Field(
        default=None,
        description="Spouse who contributed primarily as homemaker or caregiver",
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes; recorded but never scored",
    )

    @field_validator(
        "marriage_duration_years",
        "income_spouse1",
        "income_spouse2",
        "earning_capacity_spouse1",
        "earning_capacity_spouse2",
        mode="before",
    )
    @classmethod
    def coerce_to_decimal(cls, v):
        """Coerce strings and floats to Decimal."""
        if isinstance(v, (str, float)):
            return Decimal(str(v))
        return v


# =============================================================================
# CALCULATION INPUT
# =============================================================================

class CalculationInput(BaseModel):
    """Everything the engine needs for one property division calculation."""

    model_config = ConfigDict(frozen=True)

    jurisdiction: str = Field(description="Two-letter state code (50 states + DC)")
    marriage_date: Optional[date] = None
    separation_date: Optional[date] = None
    has_prenup: bool = False
    assets: list[MaritalEstateItem] = Field(default_factory=list)
    debts: list[MaritalEstateItem] = Field(default_factory=list)
    special_circumstances: Optional[SpecialCircumstances] = None

    @field_validator("jurisdiction")
    @classmethod
    def normalize_jurisdiction(cls, v: str) -> str:
        """Strip whitespace and upper-case the code."""
        return v.strip().upper()

    @field_validator("assets")
    @classmethod
    def mark_assets(cls, v: list[MaritalEstateItem]) -> list[MaritalEstateItem]:
        """Items listed as assets are assets."""
        return [
            item if item.kind is ItemKind.ASSET else item.model_copy(update={"kind": ItemKind.ASSET})
            for item in v
        ]

    @field_validator("debts")
    @classmethod
    def mark_debts(cls, v: list[MaritalEstateItem]) -> list[MaritalEstateItem]:
        """Items listed as debts are debts."""
        return [
            item if item.kind is ItemKind.DEBT else item.model_copy(update={"kind": ItemKind.DEBT})
            for item in v
        ]

    @model_validator(mode="after")
    def validate_input(self) -> "CalculationInput":
        """Check date order and item id uniqueness."""
        if (
            self.marriage_date is not None
            and self.separation_date is not None
            and self.separation_date < self.marriage_date
        ):
            raise ValueError("separation_date must be on or after marriage_date")

        seen: set[str] = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"Duplicate estate item id: {item.id}")
            seen.add(item.id)
        return self

    @property
    def items(self) -> list[MaritalEstateItem]:
        """All assets followed by all debts."""
        return [*self.assets, *self.debts]

    @computed_field
    @property
    def marriage_duration_years(self) -> Optional[Decimal]:
        """Years from marriage to separation, to two decimal places.

        None unless both dates are known; the engine never reads the clock.
        """
        if self.marriage_date is None or self.separation_date is None:
            return None
        days = (self.separation_date - self.marriage_date).days
        return (Decimal(days) / Decimal("365.25")).quantize(Decimal("0.01"))
