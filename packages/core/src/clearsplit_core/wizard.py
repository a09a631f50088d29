"""Guided divorce workflow.

Two independent pieces:

- The step machine moves ``divorce.wizardStep`` along the fixed sequence
  basics -> deadlines -> disclosures -> checkoff, clamping at both ends.
- ``guided_next`` inspects the document and reports the first missing
  input, by fixed priority. It never changes anything; the caller
  decides how to act on the prompt.
"""

from dataclasses import dataclass
from decimal import Decimal

from .models import (
    Document,
    GuidedAction,
    GuidedPrompt,
    PromptKind,
    WizardStep,
)

STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.BASICS,
    WizardStep.DEADLINES,
    WizardStep.DISCLOSURES,
    WizardStep.CHECKOFF,
)


@dataclass(frozen=True)
class StepInfo:
    step: WizardStep
    title: str
    description: str


STEP_INFO: dict[WizardStep, StepInfo] = {
    WizardStep.BASICS: StepInfo(WizardStep.BASICS, "Enter basics", "Case type, state, and children"),
    WizardStep.DEADLINES: StepInfo(WizardStep.DEADLINES, "Build deadlines", "Auto-generate key deadlines"),
    WizardStep.DISCLOSURES: StepInfo(
        WizardStep.DISCLOSURES, "Build disclosures", "Create initial disclosure checklist"
    ),
    WizardStep.CHECKOFF: StepInfo(WizardStep.CHECKOFF, "Check off items", "Mark disclosures as provided"),
}


def step_index(step: WizardStep) -> int:
    return STEP_ORDER.index(step)


def next_step(step: WizardStep) -> WizardStep:
    """The following step, or ``step`` itself at the end."""
    return STEP_ORDER[min(len(STEP_ORDER) - 1, step_index(step) + 1)]


def prev_step(step: WizardStep) -> WizardStep:
    """The preceding step, or ``step`` itself at the start."""
    return STEP_ORDER[max(0, step_index(step) - 1)]


def advance(document: Document) -> Document:
    """Document with the wizard moved forward one step (clamped)."""
    return _with_step(document, next_step(document.divorce.wizard_step))


def retreat(document: Document) -> Document:
    """Document with the wizard moved back one step (clamped)."""
    return _with_step(document, prev_step(document.divorce.wizard_step))


def go_to(step: WizardStep):
    """Updater that jumps straight to ``step``."""

    def updater(document: Document) -> Document:
        return _with_step(document, WizardStep(step))

    return updater


def _with_step(document: Document, step: WizardStep) -> Document:
    if document.divorce.wizard_step == step:
        return document
    divorce = document.divorce.model_copy(update={"wizard_step": step})
    return document.evolve(divorce=divorce)


def _field(label: str, locator: str) -> GuidedPrompt:
    return GuidedPrompt(kind=PromptKind.FIELD, label=label, locator=locator)


def guided_next(document: Document) -> GuidedPrompt:
    """Describe the next required input for the divorce case.

    Priority (first unmet wins):
        1. Filing state
        2. At least one contact (action)
        3. First contact's name, then email, then phone
        4. Support start date
        5. Requested alimony amount
        6. Requested child support amount
        7. At least one disclosure (action)
        8. First disclosure with an empty label
        9. Done
    """
    case = document.divorce

    if not case.filing_state.strip():
        return _field("Enter the filing state", "divorce.filingState")

    if not case.attorney_contacts:
        return GuidedPrompt(
            kind=PromptKind.ACTION,
            label="Add a contact",
            action=GuidedAction.ADD_CONTACT,
        )

    contact = case.attorney_contacts[0]
    for attribute, label in (("name", "name"), ("email", "email"), ("phone", "phone")):
        if not getattr(contact, attribute).strip():
            return _field(
                f"Enter the contact's {label}",
                f"divorce.attorneyContacts.0.{attribute}",
            )

    support = case.support
    if not support.start_date_iso:
        return _field("Enter the support start date", "divorce.support.startDateISO")

    if not isinstance(support.requested_alimony_monthly, Decimal):
        return _field(
            "Enter the requested alimony (monthly)",
            "divorce.support.requestedAlimonyMonthly",
        )

    if not isinstance(support.requested_child_support_monthly, Decimal):
        return _field(
            "Enter the requested child support (monthly)",
            "divorce.support.requestedChildSupportMonthly",
        )

    if not case.disclosures:
        return GuidedPrompt(
            kind=PromptKind.ACTION,
            label="Build disclosures",
            action=GuidedAction.BUILD_DISCLOSURES,
        )

    for index, disclosure in enumerate(case.disclosures):
        if not disclosure.label.strip():
            return _field("Label this disclosure", f"divorce.disclosures.{index}.label")

    return GuidedPrompt(kind=PromptKind.DONE, label="All required case details are entered")


__all__ = [
    "STEP_ORDER",
    "StepInfo",
    "STEP_INFO",
    "step_index",
    "next_step",
    "prev_step",
    "advance",
    "retreat",
    "go_to",
    "guided_next",
]
