"""Tests for the property division calculator."""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from equisplit_core import (
    CalculationInput,
    Classification,
    CustodyArrangement,
    DivisionResult,
    EquiSplitConfig,
    EquitySettings,
    InvalidItemValueError,
    ItemCategory,
    JurisdictionRule,
    JurisdictionTable,
    MaritalEstateItem,
    Ownership,
    PropertyDivisionCalculator,
    Regime,
    SpecialCircumstances,
    Spouse,
    UnknownJurisdictionError,
    calculate_property_division,
)


def marital(item_id: str, value: str, **kwargs) -> MaritalEstateItem:
    return MaritalEstateItem(
        id=item_id,
        current_value=Decimal(value),
        is_separate_property=False,
        **kwargs,
    )


@pytest.fixture
def calculator() -> PropertyDivisionCalculator:
    return PropertyDivisionCalculator(config=EquiSplitConfig(env="test"))


@pytest.fixture
def house_only() -> list[MaritalEstateItem]:
    return [marital("house", "500000", category=ItemCategory.REAL_ESTATE)]


@pytest.fixture
def pennsylvania_dv_input() -> CalculationInput:
    """One asset, one debt and domestic violence against spouse1."""
    return CalculationInput(
        jurisdiction="PA",
        assets=[marital("house", "300000", category=ItemCategory.REAL_ESTATE)],
        debts=[marital("loan", "100000", category=ItemCategory.PERSONAL_LOAN)],
        special_circumstances=SpecialCircumstances(domestic_violence=True),
    )


class TestScenarios:
    """End-to-end division scenarios."""

    def test_community_property_house(self, calculator, house_only):
        """California house split 50/50; spouse1 keeps it and pays out half."""
        result = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))

        assert isinstance(result, DivisionResult)
        assert result.regime == Regime.COMMUNITY
        assert result.equity_factor == Decimal("0.5")
        assert result.spouse1_share == Decimal("250000.00")
        assert result.spouse2_share == Decimal("250000.00")
        assert result.allocations[0].awarded_to is Spouse.SPOUSE1

        payment = result.equalization_payment
        assert payment.amount == Decimal("250000.00")
        assert payment.from_spouse is Spouse.SPOUSE1
        assert payment.to_spouse is Spouse.SPOUSE2

    def test_equitable_without_circumstances_matches_community(self, calculator, house_only):
        community = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))
        equitable = calculator.calculate(CalculationInput(jurisdiction="PA", assets=house_only))

        assert equitable.regime == Regime.EQUITABLE
        assert equitable.equity_factor == community.equity_factor
        assert equitable.spouse1_share == community.spouse1_share
        assert equitable.spouse2_share == community.spouse2_share
        assert equitable.equalization_payment == community.equalization_payment
        assert equitable.applied_factors == []

    def test_equitable_domestic_violence(self, calculator, pennsylvania_dv_input):
        result = calculator.calculate(pennsylvania_dv_input)

        assert result.net_marital_estate_value == Decimal("200000.00")
        assert result.equity_factor == Decimal("0.60")
        assert result.spouse1_share == Decimal("120000.00")
        assert result.spouse2_share == Decimal("80000.00")
        assert result.spouse1_share + result.spouse2_share == result.net_marital_estate_value
        assert [f.key for f in result.applied_factors] == ["domestic_violence"]

        # Spouse1 receives both the house and the loan, then pays the excess
        assert result.equalization_payment.amount == Decimal("80000.00")
        assert result.equalization_payment.from_spouse is Spouse.SPOUSE1

    def test_separate_property_added_to_owner_total(self, calculator):
        result = calculator.calculate(CalculationInput(
            jurisdiction="CA",
            assets=[
                marital("brokerage", "100000"),
                MaritalEstateItem(
                    id="inherited-account",
                    current_value=Decimal("50000"),
                    is_separate_property=True,
                    owned_by=Ownership.SPOUSE2,
                ),
            ],
        ))

        assert result.net_marital_estate_value == Decimal("100000.00")
        assert result.spouse1_share == Decimal("50000.00")
        assert result.spouse2_share == Decimal("50000.00")
        assert result.spouse2_separate_value == Decimal("50000.00")
        assert result.spouse1_total == Decimal("50000.00")
        assert result.spouse2_total == Decimal("100000.00")

        separate = [a for a in result.allocations_for(Spouse.SPOUSE2) if a.classification is Classification.SEPARATE]
        assert [a.item_id for a in separate] == ["inherited-account"]


    @pytest.mark.parametrize("jurisdiction", ["CA", "PA"])
    def test_separate_value_isolated_to_owner(self, calculator, pennsylvania_dv_input, jurisdiction: str):
        """Revaluing spouse2's separate account leaves spouse1 and the payment untouched."""
        def run(value: str) -> DivisionResult:
            separate = MaritalEstateItem(
                id="inherited-account",
                current_value=Decimal(value),
                is_separate_property=True,
                owned_by=Ownership.SPOUSE2,
            )
            return calculator.calculate(pennsylvania_dv_input.model_copy(update={
                "jurisdiction": jurisdiction,
                "assets": [*pennsylvania_dv_input.assets, separate],
            }))

        small, large = run("50000"), run("80000")

        assert small.spouse1_total == large.spouse1_total
        assert small.spouse1_share == large.spouse1_share
        assert small.spouse2_share == large.spouse2_share
        assert small.equalization_payment == large.equalization_payment
        assert large.spouse2_total - small.spouse2_total == Decimal("30000.00")


class TestJurisdictionRules:
    """Jurisdiction-specific behavior through the full pipeline."""

    def test_misconduct_excluded_in_pennsylvania(self, calculator, house_only):
        circumstances = SpecialCircumstances(marital_misconduct=True)

        pennsylvania = calculator.calculate(
            CalculationInput(jurisdiction="PA", assets=house_only, special_circumstances=circumstances)
        )
        new_york = calculator.calculate(
            CalculationInput(jurisdiction="NY", assets=house_only, special_circumstances=circumstances)
        )

        assert pennsylvania.equity_factor == Decimal("0.5")
        assert new_york.equity_factor == Decimal("0.55")

    def test_marriage_duration_derived_from_dates(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(
            jurisdiction="NY",
            marriage_date=date(1995, 6, 1),
            separation_date=date(2020, 6, 1),
            assets=house_only,
            special_circumstances=SpecialCircumstances(
                income_spouse1=Decimal("30000"),
                income_spouse2=Decimal("70000"),
            ),
        ))

        assert result.equity_factor == Decimal("0.55")
        assert [f.key for f in result.applied_factors] == ["marriage_duration"]
        assert "marriage_duration" in [entry.step for entry in result.audit_log]

    def test_community_property_ignores_circumstances(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(
            jurisdiction="TX",
            assets=house_only,
            special_circumstances=SpecialCircumstances(domestic_violence=True),
        ))

        assert result.equity_factor == Decimal("0.5")
        assert result.applied_factors == []
        assert any("not weighed" in w for w in result.warnings)

    def test_unknown_jurisdiction(self, calculator, house_only):
        with pytest.raises(UnknownJurisdictionError):
            calculator.calculate(CalculationInput(jurisdiction="ZZ", assets=house_only))

    def test_custom_jurisdiction_table(self, house_only):
        table = JurisdictionTable(
            [JurisdictionRule(code="CA", name="California", regime=Regime.EQUITABLE)],
            version="test-1",
        )
        calculator = PropertyDivisionCalculator(config=EquiSplitConfig(env="test"), jurisdictions=table)
        result = calculator.calculate(CalculationInput(
            jurisdiction="ca",
            assets=house_only,
            special_circumstances=SpecialCircumstances(domestic_violence=True),
        ))

        assert result.regime == Regime.EQUITABLE
        assert result.equity_factor == Decimal("0.60")
        assert result.jurisdiction_table_version == "test-1"

    def test_custom_equity_bounds(self, house_only):
        config = EquiSplitConfig(
            env="test",
            equity=EquitySettings(floor=Decimal("0.45"), ceiling=Decimal("0.55")),
        )
        result = calculate_property_division(
            CalculationInput(
                jurisdiction="NY",
                assets=house_only,
                special_circumstances=SpecialCircumstances(domestic_violence=True),
            ),
            config=config,
        )

        assert result.equity_factor == Decimal("0.55")
        assert any("capped" in w for w in result.warnings)


class TestWarnings:
    """Test suite for result warnings."""

    def test_negative_estate(self, calculator):
        result = calculator.calculate(CalculationInput(
            jurisdiction="NY",
            assets=[marital("car", "10000")],
            debts=[marital("card", "30000")],
        ))

        assert result.is_negative_estate is True
        assert result.net_marital_estate_value == Decimal("-20000.00")
        assert result.spouse1_share + result.spouse2_share == Decimal("-20000.00")
        assert any("$20,000.00" in w and "debt owed" in w for w in result.warnings)

    def test_prenup(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(jurisdiction="NY", has_prenup=True, assets=house_only))
        assert any("prenuptial" in w for w in result.warnings)

    def test_presumed_classification(self, calculator):
        result = calculator.calculate(CalculationInput(
            jurisdiction="NY",
            assets=[MaritalEstateItem(id="watch", current_value=Decimal("5000"))],
        ))
        assert any("presumed" in w for w in result.warnings)

    def test_clamped_factor(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(
            jurisdiction="NY",
            assets=house_only,
            special_circumstances=SpecialCircumstances(
                income_spouse1=Decimal("20000"),
                income_spouse2=Decimal("80000"),
                domestic_violence=True,
                custody_arrangement=CustodyArrangement.SOLE_SPOUSE1,
                education_contribution_by=Spouse.SPOUSE1,
            ),
        ))

        assert result.equity_factor == Decimal("0.70")
        assert any("capped" in w for w in result.warnings)

    def test_quasi_community_note(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))
        assert any("quasi-community" in w for w in result.warnings)
        assert result.jurisdiction_notes

    def test_clean_equitable_result_has_no_warnings(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(jurisdiction="NY", assets=house_only))
        assert result.warnings == []


class TestAuditAndDeterminism:
    """Test suite for the audit trail and repeatability."""

    def test_audit_steps(self, calculator, pennsylvania_dv_input):
        result = calculator.calculate(pennsylvania_dv_input)
        steps = [entry.step for entry in result.audit_log]

        assert steps == [
            "calculation_start",
            "jurisdiction_regime",
            "classification",
            "equity_factor_domestic_violence",
            "equity_factor",
            "net_marital_estate",
            "target_shares",
            "allocate_house",
            "allocate_loan",
            "equalization_payment",
            "confidence",
        ]

    def test_audit_values(self, calculator, pennsylvania_dv_input):
        result = calculator.calculate(pennsylvania_dv_input)
        by_step = {entry.step: entry for entry in result.audit_log}

        assert by_step["jurisdiction_regime"].output_value == "equitable"
        assert by_step["equity_factor"].output_value == "factor=0.60"
        assert by_step["equalization_payment"].output_value == "$80,000.00 from spouse1 to spouse2"

    def test_steps_logged(self, calculator, pennsylvania_dv_input):
        with capture_logs() as logs:
            result = calculator.calculate(pennsylvania_dv_input)

        step_events = [e for e in logs if e["event"] == "division_calculation_step"]
        assert [e["step"] for e in step_events] == [entry.step for entry in result.audit_log]

    def test_negative_estate_logged_as_warning(self, calculator):
        with capture_logs() as logs:
            calculator.calculate(CalculationInput(jurisdiction="TX", debts=[marital("card", "500")]))

        warnings = [e for e in logs if e["event"] == "negative_marital_estate"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["net"] == "-500.00"

    def test_deterministic(self, calculator, pennsylvania_dv_input):
        first = calculator.calculate(pennsylvania_dv_input)
        second = calculator.calculate(pennsylvania_dv_input)
        assert first.model_dump() == second.model_dump()

    def test_input_not_mutated(self, calculator, pennsylvania_dv_input):
        before = pennsylvania_dv_input.model_dump()
        calculator.calculate(pennsylvania_dv_input)
        assert pennsylvania_dv_input.model_dump() == before

    def test_calculator_reusable_across_inputs(self, calculator, house_only, pennsylvania_dv_input):
        """Audit logs do not leak between calculations."""
        calculator.calculate(pennsylvania_dv_input)
        result = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))
        assert "equity_factor_domestic_violence" not in [e.step for e in result.audit_log]

    def test_versions_recorded(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))
        assert result.methodology_version
        assert result.jurisdiction_table_version == "2025.1"


class TestConfidence:
    """Confidence scores through the full pipeline."""

    def test_small_estate_without_valuation_dates(self, calculator, house_only):
        result = calculator.calculate(CalculationInput(jurisdiction="CA", assets=house_only))
        # baseline 0.95 - missing valuation dates 0.05 - fewer than 3 items 0.10
        assert result.confidence_level == pytest.approx(0.80)

    def test_domestic_violence_lowers_confidence(self, calculator, pennsylvania_dv_input):
        result = calculator.calculate(pennsylvania_dv_input)
        assert result.confidence_level == pytest.approx(0.70)

    def test_confidence_never_changes_division(self, calculator):
        items = [marital("llc", "250000", category=ItemCategory.BUSINESS_INTEREST)]
        plain = [marital("llc", "250000", category=ItemCategory.OTHER)]

        business = calculator.calculate(CalculationInput(jurisdiction="NY", assets=items))
        other = calculator.calculate(CalculationInput(jurisdiction="NY", assets=plain))

        assert business.confidence_level < other.confidence_level
        assert business.spouse1_share == other.spouse1_share
        assert business.equalization_payment == other.equalization_payment


class TestInputErrors:
    """Domain errors raised by the calculator."""

    def test_negative_value(self, calculator):
        with pytest.raises(InvalidItemValueError) as exc_info:
            calculator.calculate(CalculationInput(jurisdiction="CA", assets=[marital("house", "-5")]))
        assert exc_info.value.recoverable is True
