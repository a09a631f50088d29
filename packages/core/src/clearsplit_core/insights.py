"""Rule-based advisory tips.

Rules are evaluated in a fixed order and each fires independently. A tip
may carry a suggested action, but the advisor only describes it; applying
it is up to the caller (see ``editing.apply_action``).
"""

from decimal import Decimal
from typing import Optional

import structlog

from .models import ApplyRefi, ApplyTrim10, Document, Tip
from .normalizer import coerce_amount
from .scenarios import document_summary

logger = structlog.get_logger()

HIGH_APR_THRESHOLD = Decimal("15")
HOUSING_RATIO_LIMIT = Decimal("0.35")
CARD_KEYWORD = "card"

TRIM10_TEXT = "Cash flow is negative. Try a 10% trim to non-housing expenses."
HIGH_APR_TEXT = "High APR credit card detected. Consider consolidating or payoff plan."
HOUSING_RATIO_TEXT = "Mortgage over ~35% of income. Explore refinance or sell scenario."


def has_high_apr_card(document: Document) -> bool:
    """True when any debt named like a card charges more than 15% APR."""
    return any(
        CARD_KEYWORD in liability.name.lower() and liability.rate > HIGH_APR_THRESHOLD
        for liability in document.liabilities
    )


def evaluate(
    document: Document,
    monthly_income: Optional[Decimal] = None,
    monthly_expenses: Optional[Decimal] = None,
    cash_flow: Optional[Decimal] = None,
) -> list[Tip]:
    """Evaluate every advisory rule against the document.

    The income, expense and cash-flow figures default to the document's
    base-scenario totals when not supplied.

    Rules, in order:
        1. Negative cash flow -> ``trim10`` (suggests ApplyTrim10).
        2. A card debt above 15% APR -> ``highAPR`` (no action).
        3. Keeping the house with the mortgage above 35% of income ->
           ``housingRatio`` (suggests ApplyRefi).
    """
    if monthly_income is None or monthly_expenses is None or cash_flow is None:
        summary = document_summary(document)
        monthly_income = summary.income if monthly_income is None else monthly_income
        monthly_expenses = summary.expenses if monthly_expenses is None else monthly_expenses
        cash_flow = summary.cash_flow if cash_flow is None else cash_flow

    tips: list[Tip] = []

    if cash_flow < 0:
        tips.append(Tip(id="trim10", text=TRIM10_TEXT, suggested_action=ApplyTrim10()))

    if has_high_apr_card(document):
        tips.append(Tip(id="highAPR", text=HIGH_APR_TEXT, suggested_action=None))

    base = document.base_scenario
    if base.keep_house and base.mortgage_payment > HOUSING_RATIO_LIMIT * coerce_amount(monthly_income):
        tips.append(Tip(id="housingRatio", text=HOUSING_RATIO_TEXT, suggested_action=ApplyRefi()))

    logger.debug("insights_evaluated", tips=[t.id for t in tips])
    return tips


__all__ = [
    "HIGH_APR_THRESHOLD",
    "HOUSING_RATIO_LIMIT",
    "has_high_apr_card",
    "evaluate",
]
