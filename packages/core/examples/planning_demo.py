#!/usr/bin/env python3
"""
Divorce Planning Demonstration

This script walks through a typical session:
1. Enter income, expenses, assets and debts
2. Compare what-if housing scenarios and apply a suggestion
3. Build case deadlines and disclosures with the guided workflow
4. Export the document and print a report

Run: python packages/core/examples/planning_demo.py
"""

from clearsplit_core import CounterIdGenerator, evaluate, guided_next
from clearsplit_core.editing import (
    add_contact,
    add_row,
    apply_action,
    build_disclosures,
    quick_add,
    update_divorce,
    update_scenario,
    update_support,
)
from clearsplit_core.formatting import format_usd
from clearsplit_core.models import PromptKind
from clearsplit_core.scenarios import auto_build_scenarios, compare_scenarios
from clearsplit_core.wizard import advance
from clearsplit_services import (
    ClearsplitConfig,
    ReportGenerator,
    StorageBackend,
    StorageConfig,
    build_calendar,
    configured_deadlines,
    export_document,
    export_filename,
    open_store,
)


def main():
    """Run the demo."""
    config = ClearsplitConfig(log_level="WARNING", storage=StorageConfig(backend=StorageBackend.MEMORY))
    id_gen = CounterIdGenerator()
    store = open_store(config, id_gen=id_gen)

    print("=" * 70)
    print("CLEARSPLIT PLANNING DEMO")
    print("=" * 70)
    print()

    # Step 1: Finances
    print("Step 1: Entering finances...")
    store.set(add_row("income", {"name": "Salary", "amount": 2100, "frequency": "biweekly"}, id_gen))
    store.set(quick_add("expenses", "groceries 180 weekly", id_gen))
    store.set(add_row("expenses", {"name": "Utilities", "amount": 320}, id_gen))
    store.set(add_row("assets", {"name": "Savings", "value": 18000}, id_gen))
    store.set(add_row("liabilities", {"name": "Visa card", "balance": 4200, "rate": 23.9, "payment": 150}, id_gen))
    store.set(
        update_scenario(
            "base",
            house_value=410000,
            mortgage_balance=290000,
            mortgage_payment=2350,
            property_tax_monthly=310,
            insurance_monthly=120,
        )
    )
    print()

    # Step 2: Scenarios
    print("Step 2: Comparing scenarios...")
    for key, summary in compare_scenarios(store.present).items():
        print(f"  - {key:<6} cash flow {format_usd(summary.cash_flow):>12}  net worth {format_usd(summary.net_worth):>12}")
    for variant in auto_build_scenarios(store.present.base_scenario):
        print(
            f"  - suggestion: {variant.name}"
            f" (trim {variant.expense_reduction_percent or 0}%, extra {format_usd(variant.extra_income_monthly or 0)})"
        )

    for tip in evaluate(store.present):
        print(f"  * {tip.text}")
        if tip.suggested_action is not None:
            store.set(apply_action(tip.suggested_action))
    print()

    # Step 3: Divorce case
    print("Step 3: Guided case setup...")
    store.set(update_divorce(filing_state="AZ", case_type="contested", children=1))
    store.set(add_contact(id_gen, name="Dana Ruiz", email="dana@example.com", phone="555-0100"))
    store.set(
        update_support(
            start_date_iso="2025-03-01",
            requested_alimony_monthly=600,
            requested_child_support_monthly=450,
        )
    )
    store.set(configured_deadlines(id_gen, config))
    store.set(advance)
    store.set(build_disclosures(id_gen))
    store.set(advance)

    prompt = guided_next(store.present)
    print(f"  - Guided entry: {prompt.label}")
    assert prompt.kind is PromptKind.DONE
    for deadline in store.present.divorce.deadlines:
        print(f"  - {deadline.date_iso}  {deadline.label}")
    print()

    # Step 4: Outputs
    print("Step 4: Exporting...")
    payload = export_document(store.present, passphrase="demo")
    print(f"  - {export_filename()}: {len(payload)} characters (obfuscated)")
    calendar = build_calendar(store.present.divorce.deadlines)
    print(f"  - Calendar: {calendar.count('BEGIN:VEVENT')} events")
    print()
    print(ReportGenerator().generate(store.present))

    print()
    print("=" * 70)
    print(f"Demo complete! {len(store.past)} undo steps available.")
    print("=" * 70)


if __name__ == "__main__":
    main()
