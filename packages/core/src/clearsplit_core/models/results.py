"""Derived, read-only result models.

These are produced by the engine from a document snapshot and are never
stored in the document itself: scenario summaries, advisory tips with
their suggested actions, and guided-entry prompts.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ScenarioSummary(BaseModel):
    """Monthly cash picture and net worth under one scenario."""

    model_config = ConfigDict(frozen=True)

    income: Decimal = Field(description="Monthly income including support and extra income")
    expenses: Decimal = Field(description="Monthly expenses including housing")
    cash_flow: Decimal = Field(description="income - expenses")
    net_worth: Decimal = Field(description="Assets plus home equity minus debts")


# =============================================================================
# ACTIONS
# =============================================================================


class ApplyTrim10(BaseModel):
    """Apply a 10% trim to non-housing expenses in the alternative scenario."""

    model_config = ConfigDict(frozen=True)

    type: Literal["applyTrim10"] = "applyTrim10"


class ApplyRefi(BaseModel):
    """Create a refinance alternative from the current scenario."""

    model_config = ConfigDict(frozen=True)

    type: Literal["applyRefi"] = "applyRefi"


ActionDescriptor = Annotated[Union[ApplyTrim10, ApplyRefi], Field(discriminator="type")]
"""Closed set of actions a tip may suggest. The advisor never runs them."""


class Tip(BaseModel):
    """A non-binding suggestion."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    suggested_action: Optional[ActionDescriptor] = None


# =============================================================================
# GUIDED ENTRY
# =============================================================================


class PromptKind(str, Enum):
    FIELD = "field"
    ACTION = "action"
    DONE = "done"


class GuidedAction(str, Enum):
    """Actions guided entry may ask the caller to perform."""

    ADD_CONTACT = "addContact"
    BUILD_DISCLOSURES = "buildDisclosures"


class GuidedPrompt(BaseModel):
    """What the user should fill in or do next.

    ``locator`` is a dotted path into the document for field prompts,
    e.g. ``divorce.attorneyContacts.0.email``.
    """

    model_config = ConfigDict(frozen=True)

    kind: PromptKind
    label: str
    locator: Optional[str] = None
    action: Optional[GuidedAction] = None

    @property
    def is_done(self) -> bool:
        return self.kind == PromptKind.DONE


__all__ = [
    "ScenarioSummary",
    "ApplyTrim10",
    "ApplyRefi",
    "ActionDescriptor",
    "Tip",
    "PromptKind",
    "GuidedAction",
    "GuidedPrompt",
]
