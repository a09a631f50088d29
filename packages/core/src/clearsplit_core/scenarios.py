"""Scenario summaries and generated scenario variants.

A scenario is a set of housing and support assumptions layered over the
document's income, expenses, assets and debts. Summaries are recomputed
from the full document on every call.

Income under a scenario is the raw income items plus that scenario's
support figures (and any extra income); the base scenario's support is
never baked into the raw income sum. The document-level totals are the
same formula applied to ``scenarios.base``.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional, Union

import structlog

from .models import (
    BASE_SCENARIO_KEY,
    Document,
    FlowItem,
    ScenarioConfig,
    ScenarioSummary,
)
from .normalizer import ZERO, quantize_half_up, to_monthly

logger = structlog.get_logger()

REFI_PAYMENT_FACTOR = Decimal("0.85")
TRIM_PERCENT = Decimal("10")
SIDE_INCOME_MONTHLY = Decimal("300")
HUNDRED = Decimal("100")

SELL_HOUSE = "Sell House"
REFI = "Refi"


def _monthly_total(items: Iterable[FlowItem]) -> Decimal:
    return sum((to_monthly(item.amount, item.frequency) for item in items), ZERO)


def _resolve(document: Document, scenario: Union[str, ScenarioConfig]) -> ScenarioConfig:
    if isinstance(scenario, ScenarioConfig):
        return scenario
    return document.scenarios[scenario]


def total_assets(document: Document) -> Decimal:
    return sum((a.value for a in document.assets), ZERO)


def total_liabilities(document: Document) -> Decimal:
    return sum((l.balance for l in document.liabilities), ZERO)


def housing_cost(scenario: ScenarioConfig) -> Decimal:
    """Monthly cost of keeping the house, or 0 when it is sold."""
    if not scenario.keep_house:
        return ZERO
    return scenario.mortgage_payment + scenario.property_tax_monthly + scenario.insurance_monthly


def home_equity(scenario: ScenarioConfig) -> Decimal:
    if not scenario.keep_house:
        return ZERO
    return scenario.house_value - scenario.mortgage_balance


def compute_scenario_summary(
    document: Document,
    scenario: Union[str, ScenarioConfig] = BASE_SCENARIO_KEY,
) -> ScenarioSummary:
    """Derive the monthly picture and net worth under one scenario.

    Args:
        document: Current document snapshot.
        scenario: A key into ``document.scenarios`` or a scenario value
            (useful for previewing generated variants).

    Returns:
        ScenarioSummary with income, expenses, cash flow and net worth.

    Raises:
        KeyError: If a key is given that names no scenario.
    """
    config = _resolve(document, scenario)

    income = (
        _monthly_total(document.income)
        + config.alimony
        + config.child_support
        + (config.extra_income_monthly or ZERO)
    )

    variable_expenses = _monthly_total(document.expenses)
    if config.expense_reduction_percent:
        variable_expenses = variable_expenses * (1 - config.expense_reduction_percent / HUNDRED)

    expenses = variable_expenses + housing_cost(config)
    net_worth = total_assets(document) + home_equity(config) - total_liabilities(document)

    return ScenarioSummary(
        income=income,
        expenses=expenses,
        cash_flow=income - expenses,
        net_worth=net_worth,
    )


def document_summary(document: Document) -> ScenarioSummary:
    """Document-level totals: the base scenario's summary."""
    return compute_scenario_summary(document, BASE_SCENARIO_KEY)


def monthly_income(document: Document) -> Decimal:
    return document_summary(document).income


def monthly_expenses(document: Document) -> Decimal:
    return document_summary(document).expenses


def cash_flow(document: Document) -> Decimal:
    return document_summary(document).cash_flow


def net_worth(document: Document) -> Decimal:
    return document_summary(document).net_worth


def compare_scenarios(
    document: Document,
    keys: Optional[Iterable[str]] = None,
) -> dict[str, ScenarioSummary]:
    """Summaries for several scenarios, in document order by default."""
    selected = list(keys) if keys is not None else list(document.scenarios)
    return {key: compute_scenario_summary(document, key) for key in selected}


def round_half_away(value: Decimal) -> Decimal:
    """Round to a whole number, halves away from zero."""
    return quantize_half_up(value, Decimal("1"))


def auto_build_scenarios(base: ScenarioConfig) -> list[ScenarioConfig]:
    """Propose four variants of ``base``.

    Order is fixed and callers rely on it:
        0. Sell House: house sold, housing fields zeroed, support kept.
        1. Refi: house kept, mortgage payment cut to 85% (rounded).
        2. Trim 10%: copy of base (name included) plus a 10% cut to
           non-housing expenses.
        3. Side Income: copy of base (name included) plus $300/month
           extra income.
    """
    sell_house = ScenarioConfig(
        name=SELL_HOUSE,
        keep_house=False,
        alimony=base.alimony,
        child_support=base.child_support,
    )

    refi = ScenarioConfig(
        name=REFI,
        keep_house=True,
        house_value=base.house_value,
        mortgage_balance=base.mortgage_balance,
        mortgage_payment=max(ZERO, round_half_away(base.mortgage_payment * REFI_PAYMENT_FACTOR)),
        property_tax_monthly=base.property_tax_monthly,
        insurance_monthly=base.insurance_monthly,
        alimony=base.alimony,
        child_support=base.child_support,
    )

    trim = base.model_copy(update={"expense_reduction_percent": TRIM_PERCENT})
    side_income = base.model_copy(update={"extra_income_monthly": SIDE_INCOME_MONTHLY})

    logger.debug("scenarios_built", count=4)
    return [sell_house, refi, trim, side_income]


__all__ = [
    "SELL_HOUSE",
    "REFI",
    "total_assets",
    "total_liabilities",
    "housing_cost",
    "home_equity",
    "compute_scenario_summary",
    "document_summary",
    "monthly_income",
    "monthly_expenses",
    "cash_flow",
    "net_worth",
    "compare_scenarios",
    "round_half_away",
    "auto_build_scenarios",
]
