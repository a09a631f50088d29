"""Document data models.

The Document is the single root value holding everything the user has
entered: profile, document checklist, assets, debts, income, expenses,
what-if scenarios, notes and the divorce case sub-document.

Committed documents are immutable. Every model here is frozen and every
sequence is a tuple, so a snapshot handed to a reader can never be
changed underneath another reader. Changes are made by building a new
document (``model_copy(update=...)``) and committing it to the store.

Field names are snake_case in Python and camelCase on the wire, so the
persisted JSON keeps the shape the export files have always had.
"""

from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from ..normalizer import Frequency, coerce_amount, normalize_frequency


# =============================================================================
# FIELD TYPES
# =============================================================================


def _json_number(value: Optional[Decimal]) -> Union[int, float, None]:
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _coerce_optional_amount(value: Any) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return coerce_amount(value)


def _coerce_count(value: Any) -> int:
    amount = coerce_amount(value).to_integral_value(rounding=ROUND_FLOOR)
    return max(0, int(amount))


def _coerce_optional_days(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(coerce_amount(value).to_integral_value(rounding=ROUND_FLOOR))


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def _coerce_role(value: Any) -> str:
    return _coerce_text(value).strip().lower() or "attorney"


Money = Annotated[
    Decimal,
    BeforeValidator(coerce_amount),
    PlainSerializer(_json_number, when_used="json"),
]
"""Finite Decimal; anything non-numeric becomes 0."""

OptionalMoney = Annotated[
    Optional[Decimal],
    BeforeValidator(_coerce_optional_amount),
    PlainSerializer(_json_number, when_used="json"),
]
"""Like Money, but blank stays None so "not entered" is distinguishable."""

Count = Annotated[int, BeforeValidator(_coerce_count)]
Days = Annotated[Optional[int], BeforeValidator(_coerce_optional_days)]
Text = Annotated[str, BeforeValidator(_coerce_text)]
Flag = Annotated[bool, BeforeValidator(_coerce_flag)]
Role = Annotated[str, BeforeValidator(_coerce_role)]
FrequencyField = Annotated[Frequency, BeforeValidator(normalize_frequency)]


class DocumentModel(BaseModel):
    """Frozen base for every document record."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# FINANCES
# =============================================================================


class Profile(DocumentModel):
    """Who the document belongs to."""

    full_name: Text = Field(default="", description="User's full name")
    email: Text = Field(default="", description="Contact email")
    jurisdiction: Text = Field(default="", description="US state code, e.g. 'AZ'")
    disclaimer_accepted: Flag = Field(
        default=False,
        description="Whether the informational-use disclaimer was accepted",
    )


class ChecklistItem(DocumentModel):
    """A document the user needs to gather."""

    id: Text
    label: Text = ""
    category: Text = Field(default="Other", description="Income, Assets, Debts, ...")
    done: Flag = False


class AssetItem(DocumentModel):
    """Something the user owns."""

    id: Text
    name: Text = ""
    value: Money = Decimal("0")
    notes: Text = ""


class LiabilityItem(DocumentModel):
    """Something the user owes."""

    id: Text
    name: Text = ""
    balance: Money = Decimal("0")
    rate: Money = Field(default=Decimal("0"), description="APR in percent")
    payment: Money = Field(default=Decimal("0"), description="Monthly payment")
    notes: Text = ""


class FlowItem(DocumentModel):
    """An income or expense entry with a recurrence frequency."""

    id: Text
    name: Text = ""
    amount: Money = Decimal("0")
    frequency: FrequencyField = Frequency.MONTHLY


class ScenarioConfig(DocumentModel):
    """Housing and support assumptions for one what-if scenario.

    ``extra_income_monthly`` and ``expense_reduction_percent`` are only
    set on generated variants; None means "not applied".
    """

    name: Text = ""
    alimony: Money = Decimal("0")
    child_support: Money = Decimal("0")
    keep_house: Flag = False
    house_value: Money = Decimal("0")
    mortgage_balance: Money = Decimal("0")
    mortgage_payment: Money = Decimal("0")
    property_tax_monthly: Money = Decimal("0")
    insurance_monthly: Money = Decimal("0")
    extra_income_monthly: OptionalMoney = None
    expense_reduction_percent: OptionalMoney = None

    @property
    def support_total(self) -> Decimal:
        """Alimony plus child support, monthly."""
        return self.alimony + self.child_support


BASE_SCENARIO_KEY = "base"
ALT_SCENARIO_KEY = "altA"


def default_base_scenario() -> ScenarioConfig:
    return ScenarioConfig(name="Current", keep_house=True)


def default_alt_scenario() -> ScenarioConfig:
    return ScenarioConfig(name="Alt A", keep_house=False)


class ScenarioMap(dict):
    """Read-only scenario mapping shared between document snapshots.

    It is still a ``dict`` so validation and serialization treat it as
    one, but every in-place mutation raises TypeError.
    """

    def _readonly(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("Document scenarios are read-only; commit a new document instead")

    __setitem__ = __delitem__ = __ior__ = _readonly
    pop = popitem = clear = update = setdefault = _readonly

    def __reduce__(self):
        return (type(self), (dict(self),))


def default_scenarios() -> ScenarioMap:
    return ScenarioMap(
        {
            BASE_SCENARIO_KEY: default_base_scenario(),
            ALT_SCENARIO_KEY: default_alt_scenario(),
        }
    )


# =============================================================================
# DIVORCE CASE
# =============================================================================


class WizardStep(str, Enum):
    """Positions in the guided divorce workflow, in order."""

    BASICS = "basics"
    DEADLINES = "deadlines"
    DISCLOSURES = "disclosures"
    CHECKOFF = "checkoff"


def _coerce_step(value: Any) -> WizardStep:
    if isinstance(value, WizardStep):
        return value
    try:
        return WizardStep(_coerce_text(value).strip().lower())
    except ValueError:
        return WizardStep.BASICS


class Contact(DocumentModel):
    """Attorney, mediator or other professional on the case."""

    id: Text
    name: Text = ""
    email: Text = ""
    phone: Text = ""
    role: Role = "attorney"


class Deadline(DocumentModel):
    """A dated case milestone."""

    id: Text = ""
    label: Text = ""
    date_iso: Text = Field(default="", alias="dateISO", description="YYYY-MM-DD")
    done: Flag = False


class Disclosure(DocumentModel):
    """A document owed to the other party."""

    id: Text = ""
    label: Text = ""
    provided: Flag = False
    notes: Text = ""


class SupportRequest(DocumentModel):
    """Support amounts the user intends to request."""

    requested_alimony_monthly: OptionalMoney = None
    requested_child_support_monthly: OptionalMoney = None
    start_date_iso: Optional[Text] = Field(default=None, alias="startDateISO")

    @field_validator("start_date_iso", mode="before")
    @classmethod
    def blank_date_is_missing(cls, v):
        """Treat an empty date input as not entered."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RuleOverrides(DocumentModel):
    """Per-case overrides of the default deadline offsets (days)."""

    financial_disclosure_days: Days = None
    initial_exchange_days: Days = None
    parenting_plan_days: Days = None
    mediation_days: Days = None


class DivorceCase(DocumentModel):
    """Facts about the divorce case itself."""

    case_type: Text = Field(default="dissolution", description="dissolution, contested, ...")
    filing_state: Text = ""
    children: Count = 0
    attorney_contacts: tuple[Contact, ...] = ()
    deadlines: tuple[Deadline, ...] = ()
    disclosures: tuple[Disclosure, ...] = ()
    support: SupportRequest = Field(default_factory=SupportRequest)
    deadline_rules: RuleOverrides = Field(default_factory=RuleOverrides)
    wizard_step: Annotated[WizardStep, BeforeValidator(_coerce_step)] = WizardStep.BASICS

    @property
    def has_children(self) -> bool:
        return self.children > 0


# =============================================================================
# ROOT
# =============================================================================

LIST_SECTIONS = ("checklist", "assets", "liabilities", "income", "expenses")


class Document(DocumentModel):
    """The root aggregate.

    ``scenarios`` always holds a ``base`` entry; validation inserts the
    default one when it is missing.
    """

    profile: Profile = Field(default_factory=Profile)
    checklist: tuple[ChecklistItem, ...] = ()
    assets: tuple[AssetItem, ...] = ()
    liabilities: tuple[LiabilityItem, ...] = ()
    income: tuple[FlowItem, ...] = ()
    expenses: tuple[FlowItem, ...] = ()
    scenarios: dict[str, ScenarioConfig] = Field(default_factory=default_scenarios)
    notes: Text = ""
    divorce: DivorceCase = Field(default_factory=DivorceCase)

    @field_validator("scenarios", mode="after")
    @classmethod
    def ensure_base_scenario(cls, v: dict[str, ScenarioConfig]) -> ScenarioMap:
        """Guarantee the distinguished ``base`` scenario exists."""
        if BASE_SCENARIO_KEY not in v:
            return ScenarioMap({BASE_SCENARIO_KEY: default_base_scenario(), **v})
        return ScenarioMap(v)

    @property
    def base_scenario(self) -> ScenarioConfig:
        return self.scenarios[BASE_SCENARIO_KEY]

    def section(self, name: str) -> tuple:
        """Return one of the top-level list sections by name."""
        if name not in LIST_SECTIONS:
            raise KeyError(f"Unknown section: {name}")
        return getattr(self, name)

    def evolve(self, **changes: Any) -> "Document":
        """Return a copy with the given top-level fields replaced."""
        if "scenarios" in changes:
            changes["scenarios"] = ScenarioMap(changes["scenarios"])
        return self.model_copy(update=changes)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to the persisted camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "Money",
    "OptionalMoney",
    "DocumentModel",
    "ScenarioMap",
    "Profile",
    "ChecklistItem",
    "AssetItem",
    "LiabilityItem",
    "FlowItem",
    "ScenarioConfig",
    "BASE_SCENARIO_KEY",
    "ALT_SCENARIO_KEY",
    "default_base_scenario",
    "default_alt_scenario",
    "default_scenarios",
    "WizardStep",
    "Contact",
    "Deadline",
    "Disclosure",
    "SupportRequest",
    "RuleOverrides",
    "DivorceCase",
    "LIST_SECTIONS",
    "Document",
]
