"""Tests for scenario summaries and generated variants."""

from decimal import Decimal

import pytest

from clearsplit_core.models import (
    AssetItem,
    Document,
    FlowItem,
    LiabilityItem,
    ScenarioConfig,
)
from clearsplit_core.scenarios import (
    REFI,
    SELL_HOUSE,
    auto_build_scenarios,
    compare_scenarios,
    compute_scenario_summary,
    document_summary,
    round_half_away,
)


@pytest.fixture
def household():
    """Document with one income, one expense and a kept house."""
    return Document(
        income=(FlowItem(id="i1", name="Salary", amount=1200, frequency="biweekly"),),
        expenses=(FlowItem(id="e1", name="Groceries", amount=1000, frequency="monthly"),),
        assets=(AssetItem(id="a1", name="Savings", value=20000),),
        liabilities=(LiabilityItem(id="l1", name="Car loan", balance=5000),),
        scenarios={
            "base": ScenarioConfig(
                name="Current",
                keep_house=True,
                house_value=300000,
                mortgage_balance=250000,
                mortgage_payment=1500,
                property_tax_monthly=200,
                insurance_monthly=100,
                alimony=400,
            ),
        },
    )


class TestComputeScenarioSummary:
    """Tests for compute_scenario_summary."""

    def test_net_worth_example(self):
        """Assets plus home equity minus debts."""
        document = Document(
            assets=(AssetItem(id="a", value=500000),),
            liabilities=(LiabilityItem(id="l", balance=200000),),
            scenarios={
                "base": ScenarioConfig(keep_house=True, house_value=300000, mortgage_balance=250000)
            },
        )
        assert compute_scenario_summary(document, "base").net_worth == Decimal(350000)

    def test_base_summary(self, household):
        summary = compute_scenario_summary(household, "base")

        # 1200 biweekly = 2600/month, plus 400 alimony
        assert summary.income == Decimal(3000)
        assert summary.expenses == Decimal(1000 + 1500 + 200 + 100)
        assert summary.cash_flow == Decimal(3000 - 2800)
        assert summary.net_worth == Decimal(20000 + 50000 - 5000)

    def test_sold_house_has_no_housing(self, household):
        scenario = household.base_scenario.model_copy(update={"keep_house": False})
        summary = compute_scenario_summary(household, scenario)

        assert summary.expenses == Decimal(1000)
        assert summary.net_worth == Decimal(15000)

    def test_expense_reduction_applies_to_variable_expenses_only(self, household):
        scenario = household.base_scenario.model_copy(
            update={"expense_reduction_percent": Decimal(10)}
        )
        summary = compute_scenario_summary(household, scenario)
        assert summary.expenses == Decimal(900 + 1800)

    def test_extra_income(self, household):
        scenario = household.base_scenario.model_copy(
            update={"extra_income_monthly": Decimal(300)}
        )
        assert compute_scenario_summary(household, scenario).income == Decimal(3300)

    def test_scenario_support_replaces_base_support(self, household):
        """Support comes from the scenario being computed, not from base."""
        scenario = household.base_scenario.model_copy(
            update={"alimony": Decimal(0), "child_support": Decimal(250)}
        )
        assert compute_scenario_summary(household, scenario).income == Decimal(2850)

    def test_unknown_key_raises(self, household):
        with pytest.raises(KeyError):
            compute_scenario_summary(household, "missing")

    def test_document_summary_uses_base(self, household):
        assert document_summary(household) == compute_scenario_summary(household, "base")

    def test_empty_document(self):
        summary = document_summary(Document())
        assert summary.income == 0
        assert summary.expenses == 0
        assert summary.cash_flow == 0
        assert summary.net_worth == 0

    def test_compare_scenarios(self, household):
        document = household.evolve(
            scenarios={**household.scenarios, "altA": ScenarioConfig(name="Alt A")}
        )
        result = compare_scenarios(document)
        assert list(result) == ["base", "altA"]
        assert result["altA"].expenses == Decimal(1000)


class TestAutoBuildScenarios:
    """Tests for auto_build_scenarios."""

    @pytest.fixture
    def base(self):
        return ScenarioConfig(
            name="Current",
            keep_house=True,
            mortgage_payment=2000,
            house_value=300000,
            mortgage_balance=250000,
            property_tax_monthly=250,
            insurance_monthly=90,
            alimony=500,
            child_support=0,
        )

    def test_order_and_names(self, base):
        names = [s.name for s in auto_build_scenarios(base)]
        assert names == [SELL_HOUSE, REFI, "Current", "Current"]

    def test_sell_house(self, base):
        sell = auto_build_scenarios(base)[0]
        assert sell.keep_house is False
        assert sell.house_value == 0
        assert sell.mortgage_balance == 0
        assert sell.mortgage_payment == 0
        assert sell.property_tax_monthly == 0
        assert sell.insurance_monthly == 0
        assert sell.alimony == Decimal(500)

    def test_refi_payment(self, base):
        """Mortgage payment is cut to 85% and rounded."""
        refi = auto_build_scenarios(base)[1]
        assert refi.mortgage_payment == Decimal(1700)
        assert refi.keep_house is True
        assert refi.house_value == Decimal(300000)
        assert refi.property_tax_monthly == Decimal(250)
        assert refi.alimony == Decimal(500)

    def test_refi_rounds_half_away_from_zero(self, base):
        # 1010 * 0.85 = 858.5
        refi = auto_build_scenarios(base.model_copy(update={"mortgage_payment": Decimal(1010)}))[1]
        assert refi.mortgage_payment == Decimal(859)

    def test_trim_and_side_income(self, base):
        _, _, trim, side = auto_build_scenarios(base)
        assert trim.expense_reduction_percent == Decimal(10)
        assert trim.extra_income_monthly is None
        assert trim.mortgage_payment == base.mortgage_payment
        assert side.extra_income_monthly == Decimal(300)
        assert side.expense_reduction_percent is None

    def test_huge_mortgage_payment(self, base):
        refi = auto_build_scenarios(base.model_copy(update={"mortgage_payment": Decimal("1e30")}))[1]
        assert refi.mortgage_payment == Decimal("8.5e29")

    def test_deterministic(self, base):
        assert auto_build_scenarios(base) == auto_build_scenarios(base)

    def test_base_unchanged(self, base):
        snapshot = base.model_dump()
        auto_build_scenarios(base)
        assert base.model_dump() == snapshot


class TestRoundHalfAway:
    def test_halves(self):
        assert round_half_away(Decimal("2.5")) == Decimal(3)
        assert round_half_away(Decimal("-2.5")) == Decimal(-3)
        assert round_half_away(Decimal("2.49")) == Decimal(2)

    def test_beyond_default_precision(self):
        value = Decimal("12345678901234567890123456789.5")
        assert round_half_away(value) == Decimal("12345678901234567890123456790")
