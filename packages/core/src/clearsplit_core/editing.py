"""Updater factories for DocumentStore.set.

Each function here returns an updater: a pure function from the current
document to the next one. Nothing is mutated in place. Patched values go
through model validation, so the usual coercion rules apply (non-numeric
numbers become 0, unknown frequencies become monthly, child counts are
floored at 0).

Example:
    store.set(add_row("income", {"name": "Salary", "amount": 5000}, id_gen))
    store.set(update_scenario("base", mortgage_payment=2100))
    for tip in evaluate(store.present):
        if tip.suggested_action is not None:
            store.set(apply_action(tip.suggested_action))
"""

import re
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

import structlog
from pydantic import BaseModel

from .deadlines import DEFAULT_OFFSETS, RuleOffsets, build_case_deadlines, build_case_disclosures
from .ids import IdGenerator
from .models import (
    ALT_SCENARIO_KEY,
    BASE_SCENARIO_KEY,
    ApplyRefi,
    ApplyTrim10,
    AssetItem,
    ChecklistItem,
    Contact,
    Deadline,
    Disclosure,
    Document,
    FlowItem,
    LiabilityItem,
    ScenarioConfig,
)
from .normalizer import Frequency, coerce_amount
from .scenarios import REFI, REFI_PAYMENT_FACTOR, TRIM_PERCENT, auto_build_scenarios, round_half_away

logger = structlog.get_logger()

Updater = Callable[[Document], Document]
ModelT = TypeVar("ModelT", bound=BaseModel)

ROW_MODELS: dict[str, type[BaseModel]] = {
    "checklist": ChecklistItem,
    "assets": AssetItem,
    "liabilities": LiabilityItem,
    "income": FlowItem,
    "expenses": FlowItem,
}

CASE_LIST_MODELS: dict[str, type[BaseModel]] = {
    "attorney_contacts": Contact,
    "deadlines": Deadline,
    "disclosures": Disclosure,
}


def _patched(model: ModelT, patch: Mapping[str, Any]) -> ModelT:
    """Copy of ``model`` with ``patch`` applied, re-validated."""
    return type(model).model_validate({**model.model_dump(), **patch})


def _row_model(section: str) -> type[BaseModel]:
    try:
        return ROW_MODELS[section]
    except KeyError:
        raise KeyError(f"Unknown section: {section}") from None


def _case_model(list_name: str) -> type[BaseModel]:
    try:
        return CASE_LIST_MODELS[list_name]
    except KeyError:
        raise KeyError(f"Unknown case list: {list_name}") from None


# =============================================================================
# TOP-LEVEL LISTS
# =============================================================================


def add_row(section: str, row: Optional[Mapping[str, Any]], id_gen: IdGenerator) -> Updater:
    """Append a new row to a list section.

    The id is drawn each time the updater runs, so replaying one updater
    never commits the same id twice.
    """
    model = _row_model(section)
    fields = dict(row or {})

    def updater(document: Document) -> Document:
        item = model.model_validate({**fields, "id": id_gen()})
        return document.evolve(**{section: (*document.section(section), item)})

    return updater


def add_rows(section: str, rows: list[BaseModel]) -> Updater:
    """Append already-built rows (e.g. from CSV ingestion) in one commit."""
    _row_model(section)

    def updater(document: Document) -> Document:
        return document.evolve(**{section: (*document.section(section), *rows)})

    return updater


def update_row(section: str, row_id: str, **patch: Any) -> Updater:
    """Patch the row with ``row_id``; other rows are untouched."""
    _row_model(section)
    patch.pop("id", None)

    def updater(document: Document) -> Document:
        rows = tuple(
            _patched(row, patch) if row.id == row_id else row
            for row in document.section(section)
        )
        return document.evolve(**{section: rows})

    return updater


def remove_row(section: str, row_id: str) -> Updater:
    _row_model(section)

    def updater(document: Document) -> Document:
        rows = tuple(row for row in document.section(section) if row.id != row_id)
        return document.evolve(**{section: rows})

    return updater


def update_profile(**patch: Any) -> Updater:
    def updater(document: Document) -> Document:
        return document.evolve(profile=_patched(document.profile, patch))

    return updater


def set_notes(text: str) -> Updater:
    def updater(document: Document) -> Document:
        return document.evolve(notes=text or "")

    return updater


# =============================================================================
# SCENARIOS
# =============================================================================


def _with_scenario(document: Document, key: str, scenario: ScenarioConfig) -> Document:
    return document.evolve(scenarios={**document.scenarios, key: scenario})


def update_scenario(key: str, **patch: Any) -> Updater:
    """Patch a scenario, creating it from defaults if it does not exist."""

    def updater(document: Document) -> Document:
        current = document.scenarios.get(key, ScenarioConfig(name=key))
        return _with_scenario(document, key, _patched(current, patch))

    return updater


def remove_scenario(key: str) -> Updater:
    """Drop a scenario. The base scenario is never removed."""

    def updater(document: Document) -> Document:
        if key == BASE_SCENARIO_KEY:
            logger.warning("base_scenario_remove_ignored")
            return document
        if key not in document.scenarios:
            return document
        scenarios = {k: v for k, v in document.scenarios.items() if k != key}
        return document.evolve(scenarios=scenarios)

    return updater


def clone_base_as_alt(key: str = ALT_SCENARIO_KEY, name: str = "Alt A") -> Updater:
    """Replace the alternative scenario with a copy of the current one."""

    def updater(document: Document) -> Document:
        clone = document.base_scenario.model_copy(update={"name": name})
        return _with_scenario(document, key, clone)

    return updater


def apply_suggestion(index: int, key: str = ALT_SCENARIO_KEY) -> Updater:
    """Merge the ``index``-th generated variant of base into a scenario."""

    def updater(document: Document) -> Document:
        suggestion = auto_build_scenarios(document.base_scenario)[index]
        current = document.scenarios.get(key, ScenarioConfig())
        merged = current.model_copy(update=suggestion.model_dump(exclude_none=True))
        return _with_scenario(document, key, merged)

    return updater


def apply_action(action: Any, key: str = ALT_SCENARIO_KEY) -> Updater:
    """Resolve a tip's suggested action into an updater.

    ApplyTrim10 sets a 10% expense reduction on the alternative scenario.
    ApplyRefi makes the alternative a copy of base named "Refi" with the
    mortgage payment cut to 85%.
    """
    if isinstance(action, ApplyTrim10):

        def trim(document: Document) -> Document:
            current = document.scenarios.get(key, ScenarioConfig())
            return _with_scenario(
                document, key, current.model_copy(update={"expense_reduction_percent": TRIM_PERCENT})
            )

        return trim

    if isinstance(action, ApplyRefi):

        def refi(document: Document) -> Document:
            base = document.base_scenario
            payment = round_half_away(base.mortgage_payment * REFI_PAYMENT_FACTOR)
            return _with_scenario(
                document, key, base.model_copy(update={"name": REFI, "mortgage_payment": payment})
            )

        return refi

    raise TypeError(f"Unsupported action: {action!r}")


# =============================================================================
# DIVORCE CASE
# =============================================================================


def update_divorce(**patch: Any) -> Updater:
    """Patch top-level case fields (case type, filing state, children...)."""

    def updater(document: Document) -> Document:
        return document.evolve(divorce=_patched(document.divorce, patch))

    return updater


def update_support(**patch: Any) -> Updater:
    def updater(document: Document) -> Document:
        support = _patched(document.divorce.support, patch)
        return document.evolve(divorce=document.divorce.model_copy(update={"support": support}))

    return updater


def update_deadline_rules(**patch: Any) -> Updater:
    def updater(document: Document) -> Document:
        rules = _patched(document.divorce.deadline_rules, patch)
        return document.evolve(divorce=document.divorce.model_copy(update={"deadline_rules": rules}))

    return updater


def _set_case_list(document: Document, list_name: str, items: tuple) -> Document:
    return document.evolve(divorce=document.divorce.model_copy(update={list_name: items}))


def add_case_item(list_name: str, id_gen: IdGenerator, **fields: Any) -> Updater:
    """Append a contact, deadline or disclosure with a fresh id."""
    model = _case_model(list_name)

    def updater(document: Document) -> Document:
        item = model.model_validate({**fields, "id": id_gen()})
        return _set_case_list(
            document, list_name, (*getattr(document.divorce, list_name), item)
        )

    return updater


def add_case_items(list_name: str, items: list[BaseModel]) -> Updater:
    _case_model(list_name)

    def updater(document: Document) -> Document:
        return _set_case_list(
            document, list_name, (*getattr(document.divorce, list_name), *items)
        )

    return updater


def update_case_item(list_name: str, item_id: str, **patch: Any) -> Updater:
    _case_model(list_name)
    patch.pop("id", None)

    def updater(document: Document) -> Document:
        items = tuple(
            _patched(item, patch) if item.id == item_id else item
            for item in getattr(document.divorce, list_name)
        )
        return _set_case_list(document, list_name, items)

    return updater


def remove_case_item(list_name: str, item_id: str) -> Updater:
    _case_model(list_name)

    def updater(document: Document) -> Document:
        items = tuple(
            item for item in getattr(document.divorce, list_name) if item.id != item_id
        )
        return _set_case_list(document, list_name, items)

    return updater


def add_contact(id_gen: IdGenerator, **fields: Any) -> Updater:
    return add_case_item("attorney_contacts", id_gen, **fields)


def add_deadline(id_gen: IdGenerator, **fields: Any) -> Updater:
    return add_case_item("deadlines", id_gen, **fields)


def add_disclosure(id_gen: IdGenerator, **fields: Any) -> Updater:
    return add_case_item("disclosures", id_gen, **fields)


def build_deadlines(
    id_gen: IdGenerator,
    today: Optional[date] = None,
    defaults: RuleOffsets = DEFAULT_OFFSETS,
) -> Updater:
    """Replace the case deadlines with freshly generated ones.

    ``defaults`` are the configured offsets; the case's own
    ``deadlineRules`` overrides still win.
    """

    def updater(document: Document) -> Document:
        deadlines = build_case_deadlines(document, id_gen, today, defaults)
        return _set_case_list(document, "deadlines", deadlines)

    return updater


def build_disclosures(id_gen: IdGenerator) -> Updater:
    """Replace the case disclosures with the default checklist."""

    def updater(document: Document) -> Document:
        return _set_case_list(document, "disclosures", build_case_disclosures(document, id_gen))

    return updater


# =============================================================================
# QUICK ENTRY
# =============================================================================

QUICK_LINE = re.compile(
    r"^([a-zA-Z ]+)\s+(\d+(?:\.\d+)?)\s+(weekly|biweekly|monthly|annual)$",
    re.IGNORECASE,
)


def parse_quick_line(text: str) -> Optional[tuple[str, Decimal, Frequency]]:
    """Parse ``"<name> <amount> <frequency>"``, e.g. ``"rent 1200 monthly"``."""
    match = QUICK_LINE.match((text or "").strip())
    if not match:
        return None
    name, amount, frequency = match.groups()
    return name.strip(), coerce_amount(amount), Frequency(frequency.lower())


def quick_add(section: str, text: str, id_gen: IdGenerator) -> Optional[Updater]:
    """Updater adding an income or expense row from a quick line, or None."""
    if section not in ("income", "expenses"):
        raise KeyError(f"Quick entry only supports income and expenses, not {section}")
    parsed = parse_quick_line(text)
    if parsed is None:
        return None
    name, amount, frequency = parsed
    return add_row(section, {"name": name, "amount": amount, "frequency": frequency}, id_gen)


__all__ = [
    "Updater",
    "ROW_MODELS",
    "CASE_LIST_MODELS",
    "add_row",
    "add_rows",
    "update_row",
    "remove_row",
    "update_profile",
    "set_notes",
    "update_scenario",
    "remove_scenario",
    "clone_base_as_alt",
    "apply_suggestion",
    "apply_action",
    "update_divorce",
    "update_support",
    "update_deadline_rules",
    "add_case_item",
    "add_case_items",
    "update_case_item",
    "remove_case_item",
    "add_contact",
    "add_deadline",
    "add_disclosure",
    "build_deadlines",
    "build_disclosures",
    "parse_quick_line",
    "quick_add",
]
