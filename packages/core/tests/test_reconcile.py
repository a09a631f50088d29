"""Tests for default documents and reconciliation of loaded state."""

from decimal import Decimal

import pytest

from clearsplit_core.models import Document
from clearsplit_core.normalizer import Frequency
from clearsplit_core.reconcile import BASE_CHECKLIST, default_document, reconcile


class TestDefaultDocument:
    """Tests for default_document."""

    def test_shape(self, id_gen):
        document = default_document(id_gen)

        assert document.profile.jurisdiction == "AZ"
        assert len(document.checklist) == len(BASE_CHECKLIST) == 13
        assert document.checklist[0].id == "id-1"
        assert set(document.scenarios) == {"base", "altA"}
        assert document.base_scenario.keep_house is True
        assert document.divorce.filing_state == "AZ"
        assert document.divorce.case_type == "dissolution"

    def test_jurisdiction(self, id_gen):
        document = default_document(id_gen, jurisdiction="CA")
        assert document.profile.jurisdiction == "CA"
        assert document.divorce.filing_state == "CA"


class TestReconcile:
    """Tests for reconcile."""

    @pytest.mark.parametrize("loaded", [None, "text", 42, []])
    def test_non_object_yields_defaults(self, loaded, id_gen):
        document = reconcile(loaded, id_gen)
        assert len(document.checklist) == 13

    def test_empty_object(self, id_gen):
        document = reconcile({}, id_gen)
        assert len(document.checklist) == 13
        assert "base" in document.scenarios
        assert "altA" in document.scenarios
        assert document.divorce.wizard_step.value == "basics"

    def test_legacy_keys(self, id_gen):
        loaded = {
            "profile": {"state": "NV", "fullName": "Alex"},
            "checklist": [{"id": "x", "label": "Returns", "cat": "Income"}],
            "income": [{"id": "i", "source": "Job", "amount": "100", "frequency": "WEEKLY"}],
            "scenarios": {"base": {"name": "Now", "_expenseReductionPct": 5}},
        }
        document = reconcile(loaded, id_gen)

        assert document.profile.jurisdiction == "NV"
        assert document.checklist[0].category == "Income"
        assert document.income[0].name == "Job"
        assert document.income[0].frequency is Frequency.WEEKLY
        assert document.base_scenario.expense_reduction_percent == Decimal(5)

    def test_missing_base_scenario(self, id_gen):
        document = reconcile({"scenarios": {"altA": {"name": "Other"}}}, id_gen)
        assert document.base_scenario.name == "Current"
        assert document.scenarios["altA"].name == "Other"

    def test_assigns_missing_and_duplicate_ids(self, id_gen):
        loaded = {
            "assets": [
                {"id": "a", "name": "one"},
                {"id": "a", "name": "two"},
                {"name": "three"},
                "junk",
            ]
        }
        document = reconcile(loaded, id_gen)
        ids = [a.id for a in document.assets]

        assert len(ids) == 3
        assert len(set(ids)) == 3
        assert ids[0] == "a"

    def test_non_list_sections(self, id_gen):
        document = reconcile({"assets": "oops", "checklist": None}, id_gen)
        assert document.assets == ()
        assert len(document.checklist) == 13

    def test_non_numeric_values(self, id_gen):
        loaded = {
            "liabilities": [{"id": "l", "name": "Card", "balance": "lots", "rate": None}],
            "expenses": [{"id": "e", "amount": "12.5", "frequency": "sometimes"}],
            "divorce": {"children": -3},
        }
        document = reconcile(loaded, id_gen)

        assert document.liabilities[0].balance == 0
        assert document.liabilities[0].rate == 0
        assert document.expenses[0].amount == Decimal("12.5")
        assert document.expenses[0].frequency is Frequency.MONTHLY
        assert document.divorce.children == 0

    def test_divorce_back_filled(self, id_gen):
        loaded = {
            "profile": {"jurisdiction": "TX"},
            "divorce": {
                "caseType": "contested",
                "support": {"startDateISO": "2024-02-02"},
                "deadlines": {"not": "a list"},
                "disclosures": [{"label": "Tax returns", "provided": True}],
            },
        }
        case = reconcile(loaded, id_gen).divorce

        assert case.case_type == "contested"
        assert case.filing_state == "TX"
        assert case.support.start_date_iso == "2024-02-02"
        assert case.support.requested_alimony_monthly is None
        assert case.deadlines == ()
        assert case.disclosures[0].provided is True
        assert case.disclosures[0].id

    def test_divorce_not_object(self, id_gen):
        case = reconcile({"divorce": "x"}, id_gen).divorce
        assert case.attorney_contacts == ()
        assert case.wizard_step.value == "basics"

    def test_round_trips_own_output(self, id_gen):
        document = default_document(id_gen)
        assert reconcile(document.to_json_dict(), id_gen) == document

    def test_document_passes_through(self, document):
        assert reconcile(document) is document

    def test_returns_document(self, id_gen):
        assert isinstance(reconcile({}, id_gen), Document)
