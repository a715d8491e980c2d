"""Confidence scoring for property division results.

The score estimates how closely the computed division is likely to match
an adjudicated outcome. It starts from a baseline and loses a fixed
penalty for each signal of incomplete data or of a circumstance that
courts resolve unpredictably. The score is informational only; it never
changes the division itself.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .classification import ClassifiedEstate
from .config import ConfidenceSettings
from .models import CalculationInput, ItemCategory


class CompletenessSignals(BaseModel):
    """How complete the calculation input is."""

    model_config = ConfigDict(frozen=True)

    line_item_count: int = Field(default=0, ge=0, description="Assets plus debts")
    missing_valuation_dates: int = Field(default=0, ge=0)
    unresolved_classifications: int = Field(
        default=0,
        ge=0,
        description="Items whose marital/separate status was presumed, not tagged",
    )

    @classmethod
    def from_input(
        cls,
        calculation_input: CalculationInput,
        classified: Optional[ClassifiedEstate] = None,
    ) -> "CompletenessSignals":
        """Derive completeness signals from a calculation input."""
        items = calculation_input.items
        if classified is not None:
            unresolved = len(classified.inferred_ids)
        else:
            unresolved = sum(1 for item in items if item.is_separate_property is None)
        return cls(
            line_item_count=len(items),
            missing_valuation_dates=sum(1 for item in items if item.valuation_date is None),
            unresolved_classifications=unresolved,
        )


class ComplexitySignals(BaseModel):
    """Circumstances whose outcome in court is hard to predict."""

    model_config = ConfigDict(frozen=True)

    domestic_violence: bool = False
    wasting_of_assets: bool = False
    marital_misconduct: bool = False
    business_interest: bool = Field(default=False, description="A business must be valued")
    cryptocurrency: bool = Field(default=False, description="Volatile holdings must be valued")

    @classmethod
    def from_input(cls, calculation_input: CalculationInput) -> "ComplexitySignals":
        """Derive complexity signals from a calculation input."""
        circumstances = calculation_input.special_circumstances
        categories = {item.category for item in calculation_input.assets}
        return cls(
            domestic_violence=bool(circumstances and circumstances.domestic_violence),
            wasting_of_assets=bool(circumstances and circumstances.wasting_of_assets),
            marital_misconduct=bool(circumstances and circumstances.marital_misconduct),
            business_interest=ItemCategory.BUSINESS_INTEREST in categories,
            cryptocurrency=ItemCategory.CRYPTOCURRENCY in categories,
        )


@dataclass(frozen=True)
class ConfidencePenalty:
    """A fixed deduction applied when its signal is present."""
    key: str
    description: str
    amount: float
    applies: Callable[[CompletenessSignals, ComplexitySignals, ConfidenceSettings], bool]


CONFIDENCE_PENALTIES: tuple[ConfidencePenalty, ...] = (
    ConfidencePenalty(
        key="missing_valuation_dates",
        description="One or more items have no valuation date",
        amount=0.05,
        applies=lambda c, x, s: c.missing_valuation_dates > 0,
    ),
    ConfidencePenalty(
        key="insufficient_line_items",
        description="Too few assets and debts to characterize the estate",
        amount=0.10,
        applies=lambda c, x, s: c.line_item_count < s.minimum_line_items,
    ),
    ConfidencePenalty(
        key="unresolved_classification",
        description="Marital or separate status was presumed for some items",
        amount=0.05,
        applies=lambda c, x, s: c.unresolved_classifications > 0,
    ),
    ConfidencePenalty(
        key="domestic_violence",
        description="Domestic violence findings vary widely between courts",
        amount=0.10,
        applies=lambda c, x, s: x.domestic_violence,
    ),
    ConfidencePenalty(
        key="wasting_of_assets",
        description="Dissipation claims require forensic tracing",
        amount=0.10,
        applies=lambda c, x, s: x.wasting_of_assets,
    ),
    ConfidencePenalty(
        key="marital_misconduct",
        description="Weight given to marital fault is discretionary",
        amount=0.05,
        applies=lambda c, x, s: x.marital_misconduct,
    ),
    ConfidencePenalty(
        key="business_interest",
        description="Business interest valuation is contested",
        amount=0.15,
        applies=lambda c, x, s: x.business_interest,
    ),
    ConfidencePenalty(
        key="cryptocurrency",
        description="Cryptocurrency values are volatile",
        amount=0.10,
        applies=lambda c, x, s: x.cryptocurrency,
    ),
)


def applicable_penalties(
    completeness: CompletenessSignals,
    complexity: ComplexitySignals,
    settings: Optional[ConfidenceSettings] = None,
) -> list[ConfidencePenalty]:
    """Penalties triggered by the given signals, in table order."""
    settings = settings or ConfidenceSettings()
    return [p for p in CONFIDENCE_PENALTIES if p.applies(completeness, complexity, settings)]


def score_confidence(
    completeness: CompletenessSignals,
    complexity: ComplexitySignals,
    settings: Optional[ConfidenceSettings] = None,
) -> float:
    """Score confidence in a division result.

    Args:
        completeness: Data completeness signals
        complexity: High-uncertainty circumstance signals
        settings: Baseline and thresholds (default: from environment)

    Returns:
        Confidence between 0.0 and 1.0, rounded to two decimals. Adding a
        signal never raises the score.
    """
    settings = settings or ConfidenceSettings()
    penalty = sum(p.amount for p in applicable_penalties(completeness, complexity, settings))
    score = settings.baseline - penalty
    return round(min(max(score, 0.0), 1.0), 2)
