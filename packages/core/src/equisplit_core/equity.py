"""Equity factor for equitable-distribution jurisdictions.

The equity factor is spouse1's target share of the marital estate. It
starts at an even split (0.5) and moves by a fixed weight for each
statutory factor that clearly favors one spouse. The result is clamped to
policy bounds because courts rarely award lopsided splits without a full
hearing.

Factors are data, not branches: EQUITY_FACTOR_RULES lists every factor
with its default weight and a function that reports which spouse, if
either, the factor favors. Jurisdictions can re-weight or disable a factor
through their factor weights.

Weights are published constants, expressed as a shift in spouse1's share
(0.05 = five percentage points). They are pending review by family-law
practitioners.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from .config import DEFAULT_EQUITY_CEILING, DEFAULT_EQUITY_FLOOR
from .exceptions import ConfigurationError
from .jurisdictions import FactorWeights
from .models import AppliedFactor, CustodyArrangement, HealthStatus, SpecialCircumstances, Spouse

EVEN_SPLIT = Decimal("0.5")

# Share-of-income thresholds beyond which incomes are "meaningfully unequal"
INCOME_DISPARITY_LOW = Decimal("0.30")
INCOME_DISPARITY_HIGH = Decimal("0.70")
EARNING_CAPACITY_LOW = Decimal("0.40")
EARNING_CAPACITY_HIGH = Decimal("0.60")

LONG_MARRIAGE_YEARS = Decimal("20")
SIGNIFICANT_AGE_GAP_YEARS = 10


@dataclass(frozen=True)
class EquityFactorRule:
    """One statutory factor: who it favors and by how much."""
    key: str
    description: str
    weight: Decimal
    favors: Callable[[SpecialCircumstances], Optional[Spouse]]


@dataclass(frozen=True)
class EquityFactorResult:
    """Equity factor with the factors that produced it."""
    factor: Decimal
    raw_sum: Decimal
    applied_factors: tuple[AppliedFactor, ...] = ()

    @property
    def was_clamped(self) -> bool:
        """True when the bounds changed the factor."""
        return self.factor != EVEN_SPLIT + self.raw_sum


# =============================================================================
# FACTOR PREDICATES
# =============================================================================

def _lower_share(
    amount_spouse1: Optional[Decimal],
    amount_spouse2: Optional[Decimal],
    low: Decimal,
    high: Decimal,
) -> Optional[Spouse]:
    """Spouse whose share of a combined amount falls outside [low, high]."""
    if amount_spouse1 is None or amount_spouse2 is None:
        return None
    total = amount_spouse1 + amount_spouse2
    if total <= 0:
        return None
    ratio = amount_spouse1 / total
    if ratio < low:
        return Spouse.SPOUSE1
    if ratio > high:
        return Spouse.SPOUSE2
    return None


def _income_disparity(c: SpecialCircumstances) -> Optional[Spouse]:
    return _lower_share(c.income_spouse1, c.income_spouse2, INCOME_DISPARITY_LOW, INCOME_DISPARITY_HIGH)


def _earning_capacity(c: SpecialCircumstances) -> Optional[Spouse]:
    return _lower_share(
        c.earning_capacity_spouse1,
        c.earning_capacity_spouse2,
        EARNING_CAPACITY_LOW,
        EARNING_CAPACITY_HIGH,
    )


def _marriage_duration(c: SpecialCircumstances) -> Optional[Spouse]:
    """A long marriage favors the economically dependent spouse."""
    if c.marriage_duration_years is None or c.marriage_duration_years < LONG_MARRIAGE_YEARS:
        return None
    if c.income_spouse1 is None or c.income_spouse2 is None:
        return None
    if c.income_spouse1 < c.income_spouse2:
        return Spouse.SPOUSE1
    if c.income_spouse2 < c.income_spouse1:
        return Spouse.SPOUSE2
    return None


def _age_difference(c: SpecialCircumstances) -> Optional[Spouse]:
    """Favors the younger spouse when ages differ by more than ten years."""
    if c.age_spouse1 is None or c.age_spouse2 is None:
        return None
    gap = c.age_spouse1 - c.age_spouse2
    if abs(gap) <= SIGNIFICANT_AGE_GAP_YEARS:
        return None
    return Spouse.SPOUSE2 if gap > 0 else Spouse.SPOUSE1


def _health(c: SpecialCircumstances) -> Optional[Spouse]:
    h1, h2 = c.health_spouse1, c.health_spouse2
    if h1 is None or h2 is None:
        return None
    one_poor = (h1 is HealthStatus.POOR) != (h2 is HealthStatus.POOR)
    if not one_poor and abs(h1.rank - h2.rank) < 2:
        return None
    return Spouse.SPOUSE1 if h1.rank > h2.rank else Spouse.SPOUSE2


def _custody(c: SpecialCircumstances) -> Optional[Spouse]:
    if c.custody_arrangement is CustodyArrangement.SOLE_SPOUSE1:
        return Spouse.SPOUSE1
    if c.custody_arrangement is CustodyArrangement.SOLE_SPOUSE2:
        return Spouse.SPOUSE2
    return None


def _domestic_violence(c: SpecialCircumstances) -> Optional[Spouse]:
    return c.domestic_violence_victim if c.domestic_violence else None


def _wasting_of_assets(c: SpecialCircumstances) -> Optional[Spouse]:
    return c.wasting_spouse.other if c.wasting_of_assets else None


def _marital_misconduct(c: SpecialCircumstances) -> Optional[Spouse]:
    return c.misconduct_spouse.other if c.marital_misconduct else None


def _prior_marriage(c: SpecialCircumstances) -> Optional[Spouse]:
    """Obligations from a prior marriage favor the spouse who carries them."""
    prior1, prior2 = bool(c.prior_marriage_spouse1), bool(c.prior_marriage_spouse2)
    if prior1 == prior2:
        return None
    return Spouse.SPOUSE1 if prior1 else Spouse.SPOUSE2


def _education_contribution(c: SpecialCircumstances) -> Optional[Spouse]:
    return c.education_contribution_by


def _homemaker_contribution(c: SpecialCircumstances) -> Optional[Spouse]:
    return c.homemaker_contribution_by


# =============================================================================
# FACTOR TABLE
# =============================================================================

EQUITY_FACTOR_RULES: tuple[EquityFactorRule, ...] = (
    EquityFactorRule(
        key="income_disparity",
        description="Lower-earning spouse (under 30% of combined income)",
        weight=Decimal("0.10"),
        favors=_income_disparity,
    ),
    EquityFactorRule(
        key="earning_capacity",
        description="Spouse with lower future earning capacity",
        weight=Decimal("0.05"),
        favors=_earning_capacity,
    ),
    EquityFactorRule(
        key="marriage_duration",
        description="Economically dependent spouse after a marriage of 20+ years",
        weight=Decimal("0.05"),
        favors=_marriage_duration,
    ),
    EquityFactorRule(
        key="age_difference",
        description="Younger spouse when ages differ by more than 10 years",
        weight=Decimal("0.03"),
        favors=_age_difference,
    ),
    EquityFactorRule(
        key="health",
        description="Spouse in markedly poorer health",
        weight=Decimal("0.05"),
        favors=_health,
    ),
    EquityFactorRule(
        key="custody",
        description="Spouse with sole custody of minor children",
        weight=Decimal("0.08"),
        favors=_custody,
    ),
    EquityFactorRule(
        key="domestic_violence",
        description="Victim of domestic violence",
        weight=Decimal("0.10"),
        favors=_domestic_violence,
    ),
    EquityFactorRule(
        key="wasting_of_assets",
        description="Spouse who did not dissipate marital assets",
        weight=Decimal("0.05"),
        favors=_wasting_of_assets,
    ),
    EquityFactorRule(
        key="marital_misconduct",
        description="Spouse not at fault for marital misconduct",
        weight=Decimal("0.05"),
        favors=_marital_misconduct,
    ),
    EquityFactorRule(
        key="prior_marriage",
        description="Spouse carrying obligations from a prior marriage",
        weight=Decimal("0.02"),
        favors=_prior_marriage,
    ),
    EquityFactorRule(
        key="education_contribution",
        description="Spouse who supported the other's education or training",
        weight=Decimal("0.05"),
        favors=_education_contribution,
    ),
    EquityFactorRule(
        key="homemaker_contribution",
        description="Spouse who contributed as homemaker or caregiver",
        weight=Decimal("0.03"),
        favors=_homemaker_contribution,
    ),
)

EQUITY_FACTOR_KEYS = frozenset(rule.key for rule in EQUITY_FACTOR_RULES)


def _validate_bounds(floor: Decimal, ceiling: Decimal) -> None:
    if not (Decimal("0") <= floor <= EVEN_SPLIT <= ceiling <= Decimal("1")):
        raise ConfigurationError(
            f"Equity bounds [{floor}, {ceiling}] must contain an even split",
            config_key="equity",
            expected="0 <= floor <= 0.5 <= ceiling <= 1",
            actual=f"floor={floor}, ceiling={ceiling}",
        )


def _validate_weights(factor_weights: FactorWeights) -> None:
    unknown = sorted(set(factor_weights) - EQUITY_FACTOR_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown equity factor keys: {', '.join(unknown)}",
            config_key="factor_weights",
            expected=f"Any of: {', '.join(sorted(EQUITY_FACTOR_KEYS))}",
            actual=unknown,
        )
    negative = sorted(key for key, weight in factor_weights.items() if weight < 0)
    if negative:
        raise ConfigurationError(
            f"Equity factor weights cannot be negative: {', '.join(negative)}",
            config_key="factor_weights",
            actual=negative,
        )


def compute_equity_factor(
    circumstances: Optional[SpecialCircumstances],
    factor_weights: Optional[FactorWeights] = None,
    floor: Decimal = DEFAULT_EQUITY_FLOOR,
    ceiling: Decimal = DEFAULT_EQUITY_CEILING,
) -> EquityFactorResult:
    """Weigh special circumstances into spouse1's target share.

    Args:
        circumstances: Special circumstances of the marriage (None = none known)
        factor_weights: Jurisdiction weight overrides by factor key
        floor: Lowest factor the calculation may produce
        ceiling: Highest factor the calculation may produce

    Returns:
        EquityFactorResult; the factor is exactly 0.5 when no factor applies

    Raises:
        ConfigurationError: Bounds exclude 0.5 or weights are malformed
    """
    _validate_bounds(floor, ceiling)
    weights = factor_weights or {}
    _validate_weights(weights)

    if circumstances is None:
        return EquityFactorResult(factor=EVEN_SPLIT, raw_sum=Decimal("0"))

    applied: list[AppliedFactor] = []
    raw_sum = Decimal("0")

    for rule in EQUITY_FACTOR_RULES:
        weight = weights.get(rule.key, rule.weight)
        if weight == 0:
            continue
        favored = rule.favors(circumstances)
        if favored is None:
            continue
        factor = AppliedFactor(
            key=rule.key,
            description=rule.description,
            weight=weight,
            favors=favored,
        )
        applied.append(factor)
        raw_sum += factor.signed_weight

    factor = min(max(EVEN_SPLIT + raw_sum, floor), ceiling)
    return EquityFactorResult(factor=factor, raw_sum=raw_sum, applied_factors=tuple(applied))


def compute_equity_factor_value(
    circumstances: Optional[SpecialCircumstances],
    factor_weights: Optional[FactorWeights] = None,
    floor: Decimal = DEFAULT_EQUITY_FLOOR,
    ceiling: Decimal = DEFAULT_EQUITY_CEILING,
) -> Decimal:
    """Shortcut for compute_equity_factor(...).factor."""
    return compute_equity_factor(circumstances, factor_weights, floor, ceiling).factor
