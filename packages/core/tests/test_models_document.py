"""Tests for document models and their JSON shape."""

import json
from decimal import Decimal

from clearsplit_core.exceptions import ConfigurationError, MalformedImportError, StorageError
from clearsplit_core.formatting import format_percent, format_usd
from clearsplit_core.ids import CounterIdGenerator, IdGenerator, UuidIdGenerator
from clearsplit_core.models import (
    Contact,
    Deadline,
    Document,
    LiabilityItem,
    ScenarioConfig,
    ScenarioMap,
    SupportRequest,
)


class TestJsonShape:
    """Tests for camelCase serialization."""

    def test_camel_case_keys(self, document):
        data = document.to_json_dict()

        assert "disclaimerAccepted" in data["profile"]
        assert "keepHouse" in data["scenarios"]["base"]
        assert "attorneyContacts" in data["divorce"]
        assert "wizardStep" in data["divorce"]
        assert "startDateISO" in data["divorce"]["support"]

    def test_deadline_date_alias(self):
        deadline = Deadline.model_validate({"id": "d", "label": "x", "dateISO": "2024-01-01"})
        assert deadline.date_iso == "2024-01-01"
        assert deadline.model_dump(by_alias=True)["dateISO"] == "2024-01-01"

    def test_numbers_serialize_as_json_numbers(self):
        document = Document(liabilities=(LiabilityItem(id="l", balance="100", rate="19.5"),))
        data = json.loads(json.dumps(document.to_json_dict()))
        assert data["liabilities"][0]["balance"] == 100
        assert data["liabilities"][0]["rate"] == 19.5

    def test_unknown_fields_ignored(self):
        scenario = ScenarioConfig.model_validate({"name": "x", "colour": "blue"})
        assert scenario.name == "x"


class TestFieldCoercion:
    """Tests for ingestion-time coercion."""

    def test_role_lower_cased(self):
        assert Contact(id="c", role="Attorney").role == "attorney"
        assert Contact(id="c", role="").role == "attorney"

    def test_blank_support_is_missing(self):
        support = SupportRequest.model_validate(
            {"requestedAlimonyMonthly": "", "startDateISO": "  "}
        )
        assert support.requested_alimony_monthly is None
        assert support.start_date_iso is None

    def test_non_numeric_support_is_zero(self):
        support = SupportRequest(requested_child_support_monthly="abc")
        assert support.requested_child_support_monthly == Decimal(0)

    def test_base_scenario_always_present(self):
        document = Document(scenarios={"altA": ScenarioConfig(name="Alt")})
        assert document.base_scenario.name == "Current"
        assert list(document.scenarios) == ["base", "altA"]

    def test_scenarios_stay_read_only_after_evolve(self):
        document = Document()
        evolved = document.evolve(scenarios={**document.scenarios, "altB": ScenarioConfig()})

        assert isinstance(document.scenarios, ScenarioMap)
        assert isinstance(evolved.scenarios, ScenarioMap)
        assert evolved.to_json_dict()["scenarios"]["altB"]["name"] == ""


class TestFormatting:
    def test_format_usd(self):
        assert format_usd(1234.5) == "$1,234.50"
        assert format_usd(Decimal("-50")) == "-$50.00"
        assert format_usd("junk") == "$0.00"
        assert format_usd(1e30) == "$1" + ",000" * 10 + ".00"

    def test_format_percent(self):
        assert format_percent("24.99") == "24.99%"
        assert format_percent(15) == "15%"
        assert format_percent(1e30) == "1" + "0" * 30 + "%"


class TestIds:
    def test_counter(self):
        gen = CounterIdGenerator(prefix="row-", start=5)
        assert [gen(), gen()] == ["row-5", "row-6"]

    def test_uuid(self):
        gen = UuidIdGenerator()
        ids = {gen() for _ in range(50)}
        assert len(ids) == 50
        assert all(len(i) == 12 for i in ids)

    def test_protocol(self):
        assert isinstance(CounterIdGenerator(), IdGenerator)


class TestExceptions:
    def test_details(self):
        error = MalformedImportError("bad", stage="parse", source="f.json")
        assert error.details == {"stage": "parse", "source": "f.json"}
        assert error.recoverable is True
        assert str(error) == "bad"

    def test_storage_error(self):
        error = StorageError("nope", operation="save", location="/tmp/x")
        assert error.details["operation"] == "save"

    def test_configuration_error(self):
        error = ConfigurationError("missing", config_key="X", actual=0)
        assert error.details == {"config_key": "X", "actual": 0}
        assert error.recoverable is False
