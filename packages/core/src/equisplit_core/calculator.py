"""Property division calculation pipeline.

PropertyDivisionCalculator runs the full calculation for one marriage:

1. Jurisdiction lookup (community property or equitable distribution)
2. Marital / separate classification of every asset and debt
3. Equity factor from special circumstances (equitable states only)
4. Item allocation and equalization payment
5. Confidence scoring

Every step is recorded in the result's audit log and emitted through
structlog as it happens, so a stored result can be traced back to its
inputs.
"""

from decimal import Decimal
from typing import Optional

import structlog

from .classification import classify
from .confidence import (
    CompletenessSignals,
    ComplexitySignals,
    applicable_penalties,
    score_confidence,
)
from .config import EquiSplitConfig
from .division import describe_payment, divide
from .equity import EVEN_SPLIT, compute_equity_factor
from .jurisdictions import DEFAULT_JURISDICTION_TABLE, JurisdictionTable
from .money import format_currency, format_percentage
from .models import (
    AppliedFactor,
    AuditEntry,
    CalculationInput,
    Classification,
    DivisionResult,
    Regime,
    SpecialCircumstances,
)

logger = structlog.get_logger()

METHODOLOGY_VERSION = "equisplit-core-1.0"


class PropertyDivisionCalculator:
    """
    Divide a marital estate between two spouses.

    The calculator is configured once (policy bounds, jurisdiction table)
    and then holds no per-calculation state, so a single instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        config: Optional[EquiSplitConfig] = None,
        jurisdictions: Optional[JurisdictionTable] = None,
    ):
        """
        Initialize calculator.

        Args:
            config: Engine configuration (default: loaded from environment)
            jurisdictions: Jurisdiction table (default: built-in 50 states + DC)
        """
        self.config = config or EquiSplitConfig()
        self.jurisdictions = jurisdictions if jurisdictions is not None else DEFAULT_JURISDICTION_TABLE

    def _log_step(
        self,
        audit_log: list[AuditEntry],
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        audit_log.append(AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        ))
        logger.info(
            "division_calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _effective_circumstances(
        self,
        calculation_input: CalculationInput,
        audit_log: list[AuditEntry],
    ) -> Optional[SpecialCircumstances]:
        """Fill in the marriage duration from the marriage dates when missing."""
        circumstances = calculation_input.special_circumstances
        derived = calculation_input.marriage_duration_years
        if circumstances is None or circumstances.marriage_duration_years is not None or derived is None:
            return circumstances

        self._log_step(
            audit_log,
            step="marriage_duration",
            input_value=f"married={calculation_input.marriage_date}, separated={calculation_input.separation_date}",
            output_value=f"years={derived}",
            source="Derived from marriage dates",
        )
        return circumstances.model_copy(update={"marriage_duration_years": derived})

    def calculate(self, calculation_input: CalculationInput) -> DivisionResult:
        """
        Calculate the property division for one marriage.

        Args:
            calculation_input: Validated jurisdiction, dates, items and circumstances

        Returns:
            DivisionResult with allocations, equalization payment and audit trail

        Raises:
            UnknownJurisdictionError: Jurisdiction not in the table
            InvalidItemValueError: Negative or non-finite item value
            InconsistentOwnershipError: Contradictory ownership of an item
        """
        audit_log: list[AuditEntry] = []
        warnings: list[str] = []

        self._log_step(
            audit_log,
            step="calculation_start",
            input_value=f"jurisdiction={calculation_input.jurisdiction}",
            output_value=f"assets={len(calculation_input.assets)}, debts={len(calculation_input.debts)}",
            source="User Input",
        )

        # Step 1: Jurisdiction regime
        rule = self.jurisdictions.get_rule(calculation_input.jurisdiction)
        self._log_step(
            audit_log,
            step="jurisdiction_regime",
            input_value=rule.code,
            output_value=rule.regime.value,
            source=f"Jurisdiction table {self.jurisdictions.version}",
            notes=rule.name,
        )

        # Step 2: Classification
        classified = classify(calculation_input.items, calculation_input.marriage_date)
        self._log_step(
            audit_log,
            step="classification",
            input_value=f"{len(calculation_input.items)} items",
            output_value=(
                f"marital={len(classified.marital)}, "
                f"separate_spouse1={len(classified.separate_spouse1)}, "
                f"separate_spouse2={len(classified.separate_spouse2)}"
            ),
            source="Marital property presumption",
            notes=f"presumed={', '.join(classified.inferred_ids)}" if classified.inferred_ids else None,
        )
        if classified.inferred_ids:
            warnings.append(
                f"Marital or separate status was presumed for {len(classified.inferred_ids)} item(s). "
                "Confirm acquisition dates and title to improve accuracy."
            )

        # Step 3: Equity factor
        applied_factors: list[AppliedFactor] = []
        if rule.regime is Regime.EQUITABLE:
            circumstances = self._effective_circumstances(calculation_input, audit_log)
            equity = compute_equity_factor(
                circumstances,
                factor_weights=rule.factor_weights,
                floor=self.config.equity.floor,
                ceiling=self.config.equity.ceiling,
            )
            applied_factors = list(equity.applied_factors)

            for factor in applied_factors:
                self._log_step(
                    audit_log,
                    step=f"equity_factor_{factor.key}",
                    input_value=f"favors={factor.favors.value}",
                    output_value=f"shift={factor.signed_weight}",
                    source=f"{rule.name} equitable distribution factors",
                    notes=factor.description,
                )

            self._log_step(
                audit_log,
                step="equity_factor",
                input_value=f"{EVEN_SPLIT} + {equity.raw_sum}",
                output_value=f"factor={equity.factor}",
                source="Weighted equitable distribution factors",
                notes=f"bounds=[{self.config.equity.floor}, {self.config.equity.ceiling}]",
            )
            if equity.was_clamped:
                warnings.append(
                    f"Special circumstances pointed to a split beyond "
                    f"{format_percentage(self.config.equity.floor)}-{format_percentage(self.config.equity.ceiling)}; "
                    "the estimate was capped. A court could deviate further."
                )
            equity_factor: Decimal = equity.factor
        else:
            equity_factor = EVEN_SPLIT
            self._log_step(
                audit_log,
                step="community_property_split",
                input_value=rule.code,
                output_value=f"factor={EVEN_SPLIT}",
                source="Community property 50/50 rule",
            )
            if calculation_input.special_circumstances is not None:
                warnings.append(
                    f"{rule.name} divides community property equally; "
                    "special circumstances were not weighed."
                )

        # Step 4: Division
        outcome = divide(classified, rule.regime, equity_factor)

        self._log_step(
            audit_log,
            step="net_marital_estate",
            input_value=(
                f"assets={outcome.total_marital_assets_value} - "
                f"debts={outcome.total_marital_debts_value}"
            ),
            output_value=f"net={outcome.net_marital_estate_value}",
            source="Calculated",
        )
        self._log_step(
            audit_log,
            step="target_shares",
            input_value=f"net={outcome.net_marital_estate_value} x factor={outcome.equity_factor}",
            output_value=f"spouse1={outcome.spouse1_share}, spouse2={outcome.spouse2_share}",
            source="Rounded half-up to the cent; remainder to spouse1",
        )
        for allocation in outcome.allocations:
            self._log_step(
                audit_log,
                step=f"allocate_{allocation.item_id}",
                input_value=f"{allocation.kind.value} {allocation.value}",
                output_value=f"{allocation.classification.value} -> {allocation.awarded_to.value}",
                source="Greedy allocation by descending value"
                if allocation.classification is Classification.MARITAL
                else "Separate property",
                notes=allocation.reasoning,
            )
        self._log_step(
            audit_log,
            step="equalization_payment",
            input_value=f"spouse1_target={outcome.spouse1_share}",
            output_value=describe_payment(outcome.equalization_payment),
            source="Physical allocation trued up to target shares",
        )

        if outcome.net_marital_estate_value < 0:
            logger.warning(
                "negative_marital_estate",
                jurisdiction=rule.code,
                net=str(outcome.net_marital_estate_value),
            )
            warnings.append(
                f"Marital debts exceed marital assets by "
                f"{format_currency(-outcome.net_marital_estate_value)}. "
                "Each spouse's share represents debt owed."
            )

        if calculation_input.has_prenup:
            warnings.append(
                "A prenuptial agreement is on file and may override this division."
            )

        if rule.quasi_community_property:
            warnings.append(
                f"{rule.name} treats property acquired out of state during the marriage "
                "as quasi-community property."
            )

        # Step 5: Confidence
        completeness = CompletenessSignals.from_input(calculation_input, classified)
        complexity = ComplexitySignals.from_input(calculation_input)
        confidence = score_confidence(completeness, complexity, self.config.confidence)
        penalties = applicable_penalties(completeness, complexity, self.config.confidence)

        self._log_step(
            audit_log,
            step="confidence",
            input_value=", ".join(p.key for p in penalties) or "no penalties",
            output_value=f"confidence={confidence}",
            source=f"Baseline {self.config.confidence.baseline} less fixed penalties",
        )

        return DivisionResult(
            jurisdiction=rule.code,
            jurisdiction_name=rule.name,
            regime=rule.regime,
            equity_factor=outcome.equity_factor,
            applied_factors=applied_factors,
            total_marital_assets_value=outcome.total_marital_assets_value,
            total_marital_debts_value=outcome.total_marital_debts_value,
            net_marital_estate_value=outcome.net_marital_estate_value,
            spouse1_share=outcome.spouse1_share,
            spouse2_share=outcome.spouse2_share,
            equalization_payment=outcome.equalization_payment,
            spouse1_separate_value=outcome.spouse1_separate_value,
            spouse2_separate_value=outcome.spouse2_separate_value,
            allocations=list(outcome.allocations),
            confidence_level=confidence,
            warnings=warnings,
            jurisdiction_notes=list(rule.special_rules),
            audit_log=audit_log,
            methodology_version=METHODOLOGY_VERSION,
            jurisdiction_table_version=self.jurisdictions.version,
        )


def calculate_property_division(
    calculation_input: CalculationInput,
    config: Optional[EquiSplitConfig] = None,
    jurisdictions: Optional[JurisdictionTable] = None,
) -> DivisionResult:
    """Run a one-off calculation with a fresh calculator."""
    return PropertyDivisionCalculator(config=config, jurisdictions=jurisdictions).calculate(calculation_input)
