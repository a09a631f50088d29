"""Default documents and repair of loaded state.

A document loaded from storage or an import file may come from an older
version, may be missing whole sub-trees, or may have been edited by hand.
``reconcile`` turns any such value into a complete, valid Document by
filling defaults in a fixed order, so no reader ever has to guard
against missing pieces.
"""

from collections.abc import Mapping
from typing import Any, Optional

import structlog

from .ids import IdGenerator, UuidIdGenerator
from .models import (
    ALT_SCENARIO_KEY,
    BASE_SCENARIO_KEY,
    ChecklistItem,
    DivorceCase,
    Document,
    Profile,
)

logger = structlog.get_logger()

DEFAULT_JURISDICTION = "AZ"

BASE_CHECKLIST: tuple[tuple[str, str], ...] = (
    ("Last 3 years of tax returns (federal & state)", "Income"),
    ("Recent pay stubs (last 3 months)", "Income"),
    ("Bank account statements (last 12 months)", "Assets"),
    ("Investment/retirement account statements (last 12 months)", "Assets"),
    ("Mortgage/HELOC statements and property deeds", "Assets"),
    ("Vehicle titles and loan statements", "Assets"),
    ("Credit card statements (last 12 months)", "Debts"),
    ("Personal/auto/student loan statements", "Debts"),
    ("Health insurance & medical expense records", "Expenses"),
    ("Childcare/school/tuition invoices", "Expenses"),
    ("Household bills (utilities, phone, internet)", "Expenses"),
    ("Business ownership docs (if applicable)", "Business"),
    ("Marriage/relationship agreements (if any)", "Legal"),
)

CHECKLIST_CATEGORIES = ("Income", "Assets", "Debts", "Expenses", "Business", "Legal", "Other")

_ROOT_LISTS = ("checklist", "assets", "liabilities", "income", "expenses")
_CASE_LISTS = ("attorneyContacts", "deadlines", "disclosures")

# Older exports used these keys
_LEGACY_SCENARIO_KEYS = {
    "_expenseReductionPct": "expenseReductionPercent",
    "_extraIncomeMo": "extraIncomeMonthly",
}


def default_divorce_case(profile: Optional[Profile] = None) -> DivorceCase:
    """Empty divorce case, filed in the profile's jurisdiction."""
    return DivorceCase(filing_state=profile.jurisdiction if profile else "")


def default_document(
    id_gen: Optional[IdGenerator] = None,
    jurisdiction: str = DEFAULT_JURISDICTION,
) -> Document:
    """Build the document a brand new session starts with."""
    id_gen = id_gen or UuidIdGenerator()
    profile = Profile(jurisdiction=jurisdiction)
    checklist = tuple(
        ChecklistItem(id=id_gen(), label=label, category=category)
        for label, category in BASE_CHECKLIST
    )
    return Document(
        profile=profile,
        checklist=checklist,
        divorce=default_divorce_case(profile),
    )


def _default_checklist_rows() -> list[dict[str, Any]]:
    return [
        {"label": label, "category": category, "done": False}
        for label, category in BASE_CHECKLIST
    ]


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _rename(data: dict[str, Any], old: str, new: str) -> None:
    if old in data:
        value = data.pop(old)
        data.setdefault(new, value)


def _assign_ids(items: list[Any], id_gen: IdGenerator) -> list[dict[str, Any]]:
    """Drop non-object entries and give every row a unique id."""
    seen: set[str] = set()
    result = []
    for raw in items:
        if not isinstance(raw, Mapping):
            continue
        row = dict(raw)
        row_id = row.get("id")
        key = "" if row_id is None else str(row_id).strip()
        if not key or key in seen:
            key = id_gen()
            while key in seen:
                key = id_gen()
        seen.add(key)
        row["id"] = key
        result.append(row)
    return result


def _reconcile_scenarios(value: Any, defaults: dict[str, Any]) -> dict[str, Any]:
    scenarios: dict[str, Any] = {}
    for key, raw in _as_dict(value).items():
        if not isinstance(raw, Mapping):
            continue
        scenario = dict(raw)
        for old, new in _LEGACY_SCENARIO_KEYS.items():
            _rename(scenario, old, new)
        scenarios[str(key)] = scenario
    scenarios.setdefault(BASE_SCENARIO_KEY, defaults[BASE_SCENARIO_KEY])
    scenarios.setdefault(ALT_SCENARIO_KEY, defaults[ALT_SCENARIO_KEY])
    return scenarios


def _reconcile_divorce(value: Any, profile: dict[str, Any], id_gen: IdGenerator) -> dict[str, Any]:
    jurisdiction = profile.get("jurisdiction")
    defaults = default_divorce_case(
        Profile(jurisdiction=jurisdiction or "")
    ).model_dump(mode="json", by_alias=True)

    if not isinstance(value, Mapping):
        return defaults

    loaded = dict(value)
    case = {**defaults, **loaded}
    case["support"] = {**defaults["support"], **_as_dict(loaded.get("support"))}
    case["deadlineRules"] = _as_dict(loaded.get("deadlineRules"))
    for key in _CASE_LISTS:
        items = loaded.get(key)
        case[key] = _assign_ids(items, id_gen) if isinstance(items, list) else []
    return case


def reconcile(
    loaded: Any,
    id_gen: Optional[IdGenerator] = None,
    jurisdiction: str = DEFAULT_JURISDICTION,
) -> Document:
    """Turn a loaded (possibly partial or legacy) value into a full Document.

    Default-filling order:
        1. Anything that is not a JSON object yields the default document.
        2. Missing top-level keys take their defaults; list sections that
           are not lists become empty (checklist falls back to the base
           checklist).
        3. Legacy keys are renamed: ``profile.state`` -> ``jurisdiction``,
           checklist ``cat`` -> ``category``, income ``source`` -> ``name``,
           ``_expenseReductionPct`` / ``_extraIncomeMo`` on scenarios.
        4. ``scenarios`` gains ``base`` and ``altA`` when missing.
        5. ``divorce`` is back-filled with its default shape; ``support``
           is merged over the default support; contact, deadline and
           disclosure lists that are not lists become empty.
        6. Rows without an id, or with a duplicate id, get a fresh one.
        7. The result is validated, which coerces non-numeric numbers to
           0 and unknown frequencies to monthly.

    Args:
        loaded: Value read from storage or an import file (camelCase JSON).
        id_gen: Generator for any ids that need assigning.
        jurisdiction: Jurisdiction used when the profile has none.

    Returns:
        A complete Document.
    """
    id_gen = id_gen or UuidIdGenerator()

    if isinstance(loaded, Document):
        return loaded
    if not isinstance(loaded, Mapping):
        logger.debug("reconcile_defaults", reason="not_an_object")
        return default_document(id_gen, jurisdiction)

    defaults = Document(profile=Profile(jurisdiction=jurisdiction)).to_json_dict()
    data = dict(loaded)

    profile = _as_dict(data.get("profile"))
    _rename(profile, "state", "jurisdiction")
    data["profile"] = {**defaults["profile"], **profile}

    for key in _ROOT_LISTS:
        items = data.get(key)
        if not isinstance(items, list):
            items = _default_checklist_rows() if key == "checklist" else []
        data[key] = [dict(row) for row in items if isinstance(row, Mapping)]

    for row in data["checklist"]:
        _rename(row, "cat", "category")
    for row in data["income"]:
        _rename(row, "source", "name")

    for key in _ROOT_LISTS:
        data[key] = _assign_ids(data[key], id_gen)

    data["scenarios"] = _reconcile_scenarios(data.get("scenarios"), defaults["scenarios"])
    data["notes"] = data.get("notes") or ""
    data["divorce"] = _reconcile_divorce(data.get("divorce"), data["profile"], id_gen)

    return Document.model_validate(data)


__all__ = [
    "DEFAULT_JURISDICTION",
    "BASE_CHECKLIST",
    "CHECKLIST_CATEGORIES",
    "default_divorce_case",
    "default_document",
    "reconcile",
]
