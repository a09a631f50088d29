"""Deadline and disclosure rules for a divorce case.

Deadlines are computed as whole-day offsets from the filing date. The
offsets have defaults and can be overridden per case. The rule
functions are pure: the same input always yields list-equal output, and
ids are left for the caller to assign.

These rules are planning aids only. They are not checked against any
jurisdiction's actual court rules.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .ids import IdGenerator
from .models import Deadline, Disclosure, Document, RuleOverrides

logger = structlog.get_logger()

FINANCIAL_DISCLOSURE = "Financial disclosure due"
INITIAL_EXCHANGE = "Initial disclosures exchange"
PARENTING_PLAN = "Parenting plan draft"
MEDIATION = "Mediation/settlement conference"

BASE_DISCLOSURES = (
    "Income documentation (pay stubs / 1099s)",
    "Tax returns (3 years)",
    "Bank statements (12 months)",
    "Retirement/investment statements (12 months)",
    "Debt statements (12 months)",
)
CHILDREN_DISCLOSURE = "Childcare/education expenses"


class RuleOffsets(BaseModel):
    """Days from the filing date to each generated deadline."""

    model_config = ConfigDict(frozen=True)

    financial_disclosure_days: int = Field(default=30, description="Financial disclosure due")
    initial_exchange_days: int = Field(default=45, description="Initial disclosures exchange")
    parenting_plan_days: int = Field(default=20, description="Parenting plan draft (children only)")
    mediation_days: int = Field(default=60, description="Mediation (contested cases only)")

    def with_overrides(
        self, rules: Union["RuleOffsets", RuleOverrides, Mapping[str, Any], None]
    ) -> "RuleOffsets":
        """Return a copy with any set override applied."""
        if rules is None:
            return self
        if isinstance(rules, RuleOffsets):
            return rules
        if not isinstance(rules, RuleOverrides):
            rules = RuleOverrides.model_validate(dict(rules))
        overrides = rules.model_dump(exclude_none=True)
        return self.model_copy(update=overrides)


DEFAULT_OFFSETS = RuleOffsets()

RulesArg = Union[RuleOffsets, RuleOverrides, Mapping[str, Any], None]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_filing_date(value: Optional[str], today: Optional[date] = None) -> date:
    """Parse an ISO date or datetime into a calendar date.

    Datetimes with an offset are converted to UTC before truncating.
    A missing or unparseable value yields ``today``.
    """
    fallback = today or utc_today()
    if not value or not value.strip():
        return fallback

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("filing_date_unparseable", value=text)
        return fallback

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def compute_deadlines(
    filing_date_iso: Optional[str],
    contested: bool,
    has_children: bool,
    rules: RulesArg = None,
    today: Optional[date] = None,
    defaults: RuleOffsets = DEFAULT_OFFSETS,
) -> list[Deadline]:
    """Generate the standard case deadlines.

    Emitted in order:
        1. Financial disclosure due
        2. Initial disclosures exchange
        3. Parenting plan draft: at its offset when there are children,
           otherwise on the filing date and already done (not applicable)
        4. Mediation/settlement conference, contested cases only

    Args:
        filing_date_iso: Filing date; the current date when absent.
        contested: Whether the case is contested.
        has_children: Whether there are minor children.
        rules: Optional overrides of the default day offsets.
        today: Date used when no filing date is given.
        defaults: Offsets the overrides are applied to.

    Returns:
        Deadlines without ids.
    """
    offsets = defaults.with_overrides(rules)
    filed = parse_filing_date(filing_date_iso, today)

    def add_days(n: int) -> str:
        return (filed + timedelta(days=n)).isoformat()

    items = [
        Deadline(label=FINANCIAL_DISCLOSURE, date_iso=add_days(offsets.financial_disclosure_days)),
        Deadline(label=INITIAL_EXCHANGE, date_iso=add_days(offsets.initial_exchange_days)),
        Deadline(
            label=PARENTING_PLAN,
            date_iso=add_days(offsets.parenting_plan_days if has_children else 0),
            done=not has_children,
        ),
    ]
    if contested:
        items.append(Deadline(label=MEDIATION, date_iso=add_days(offsets.mediation_days)))
    return items


def default_disclosures(has_children: bool) -> list[Disclosure]:
    """The initial disclosure checklist, none provided yet."""
    labels = list(BASE_DISCLOSURES)
    if has_children:
        labels.append(CHILDREN_DISCLOSURE)
    return [Disclosure(label=label, provided=False) for label in labels]


# =============================================================================
# CASE HELPERS
# =============================================================================


def is_contested(case_type: str) -> bool:
    """True for contested case types; "uncontested" does not count."""
    normalized = (case_type or "").strip().lower()
    return "contested" in normalized and "uncontested" not in normalized


def build_case_deadlines(
    document: Document,
    id_gen: IdGenerator,
    today: Optional[date] = None,
    defaults: RuleOffsets = DEFAULT_OFFSETS,
) -> tuple[Deadline, ...]:
    """Deadlines for the document's case, with ids assigned.

    The support start date stands in for the filing date, and the case's
    ``deadlineRules`` overrides apply.
    """
    case = document.divorce
    items = compute_deadlines(
        case.support.start_date_iso,
        contested=is_contested(case.case_type),
        has_children=case.has_children,
        rules=case.deadline_rules,
        today=today,
        defaults=defaults,
    )
    return tuple(item.model_copy(update={"id": id_gen()}) for item in items)


def build_case_disclosures(document: Document, id_gen: IdGenerator) -> tuple[Disclosure, ...]:
    items = default_disclosures(document.divorce.has_children)
    return tuple(item.model_copy(update={"id": id_gen()}) for item in items)


def next_upcoming_deadline(
    deadlines: Iterable[Deadline],
    today: Optional[date] = None,
) -> Optional[Deadline]:
    """Earliest open deadline strictly after today, if any."""
    today = today or utc_today()
    upcoming = []
    for deadline in deadlines:
        if deadline.done or not deadline.date_iso:
            continue
        try:
            due = date.fromisoformat(deadline.date_iso[:10])
        except ValueError:
            continue
        if due > today:
            upcoming.append((due, deadline))
    if not upcoming:
        return None
    upcoming.sort(key=lambda pair: pair[0])
    return upcoming[0][1]


def disclosure_progress(disclosures: Iterable[Disclosure]) -> int:
    """Percent of disclosures provided, rounded; 0 for an empty list."""
    items = list(disclosures)
    if not items:
        return 0
    provided = sum(1 for d in items if d.provided)
    return int(provided * 100 / len(items) + 0.5)


__all__ = [
    "FINANCIAL_DISCLOSURE",
    "INITIAL_EXCHANGE",
    "PARENTING_PLAN",
    "MEDIATION",
    "RuleOffsets",
    "DEFAULT_OFFSETS",
    "parse_filing_date",
    "compute_deadlines",
    "default_disclosures",
    "is_contested",
    "build_case_deadlines",
    "build_case_disclosures",
    "next_upcoming_deadline",
    "disclosure_progress",
]
