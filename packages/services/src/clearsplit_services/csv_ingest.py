"""CSV ingestion for list sections and case contacts.

Pasted or uploaded CSV text is read with a header row. Headers are
matched case-insensitively; unknown columns are ignored and missing ones
read as blank. Each ingest becomes a single updater, so one import is one
undo step.

Expected headers:
    income:       source | name, amount, frequency
    expenses:     name | category, amount, frequency
    assets:       name, value, notes
    liabilities:  name, balance, rate, payment, notes
    contacts:     name, email, phone, role
"""

import csv
import io
from typing import Any, Callable

import structlog
from pydantic import BaseModel

from clearsplit_core.editing import Updater, add_case_items, add_rows
from clearsplit_core.ids import IdGenerator
from clearsplit_core.models import AssetItem, Contact, Document, FlowItem, LiabilityItem

logger = structlog.get_logger()

Row = dict[str, str]


def parse_csv_rows(text: str) -> list[Row]:
    """Read CSV text into header-keyed rows.

    Headers are stripped and lower-cased, cell values are stripped, and
    rows with no non-blank cell are skipped. Quoted fields may contain
    commas, doubled quotes and newlines.
    """
    reader = csv.reader(io.StringIO(text or ""))
    header: list[str] = []
    rows: list[Row] = []
    for cells in reader:
        if not any(cell.strip() for cell in cells):
            continue
        if not header:
            header = [cell.strip().lower() for cell in cells]
            continue
        rows.append(
            {name: (cells[i].strip() if i < len(cells) else "") for i, name in enumerate(header) if name}
        )
    return rows


def _first(row: Row, *names: str, default: str = "") -> str:
    for name in names:
        value = row.get(name, "")
        if value:
            return value
    return default


def income_row(row: Row, id_gen: IdGenerator) -> FlowItem:
    return FlowItem(
        id=id_gen(),
        name=_first(row, "source", "name"),
        amount=row.get("amount", ""),
        frequency=row.get("frequency", ""),
    )


def expense_row(row: Row, id_gen: IdGenerator) -> FlowItem:
    return FlowItem(
        id=id_gen(),
        name=_first(row, "name", "category"),
        amount=row.get("amount", ""),
        frequency=row.get("frequency", ""),
    )


def asset_row(row: Row, id_gen: IdGenerator) -> AssetItem:
    return AssetItem(
        id=id_gen(),
        name=row.get("name", ""),
        value=row.get("value", ""),
        notes=row.get("notes", ""),
    )


def liability_row(row: Row, id_gen: IdGenerator) -> LiabilityItem:
    return LiabilityItem(
        id=id_gen(),
        name=row.get("name", ""),
        balance=row.get("balance", ""),
        rate=row.get("rate", ""),
        payment=row.get("payment", ""),
        notes=row.get("notes", ""),
    )


def contact_row(row: Row, id_gen: IdGenerator) -> Contact:
    return Contact(
        id=id_gen(),
        name=row.get("name", ""),
        email=row.get("email", ""),
        phone=row.get("phone", ""),
        role=_first(row, "role", default="attorney"),
    )


ROW_BUILDERS: dict[str, Callable[[Row, IdGenerator], BaseModel]] = {
    "income": income_row,
    "expenses": expense_row,
    "assets": asset_row,
    "liabilities": liability_row,
}


def build_rows(section: str, text: str, id_gen: IdGenerator) -> list[Any]:
    """Build validated section rows from CSV text."""
    try:
        builder = ROW_BUILDERS[section]
    except KeyError:
        raise KeyError(f"CSV import is not supported for section: {section}") from None
    return [builder(row, id_gen) for row in parse_csv_rows(text)]


def append_csv(section: str, text: str, id_gen: IdGenerator) -> Updater:
    """Updater appending every CSV row to ``section`` in one commit.

    Rows are built, and their ids drawn, each time the updater runs.
    """
    if section not in ROW_BUILDERS:
        raise KeyError(f"CSV import is not supported for section: {section}")

    def updater(document: Document) -> Document:
        rows = build_rows(section, text, id_gen)
        logger.info("csv_rows_parsed", section=section, count=len(rows))
        return add_rows(section, rows)(document)

    return updater


def append_contacts_csv(text: str, id_gen: IdGenerator) -> Updater:
    """Updater appending CSV contacts to the divorce case."""

    def updater(document: Document) -> Document:
        contacts = [contact_row(row, id_gen) for row in parse_csv_rows(text)]
        logger.info("csv_rows_parsed", section="attorney_contacts", count=len(contacts))
        return add_case_items("attorney_contacts", contacts)(document)

    return updater


__all__ = [
    "ROW_BUILDERS",
    "parse_csv_rows",
    "income_row",
    "expense_row",
    "asset_row",
    "liability_row",
    "contact_row",
    "build_rows",
    "append_csv",
    "append_contacts_csv",
]
