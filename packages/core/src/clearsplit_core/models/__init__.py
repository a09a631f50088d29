"""Data models for clearsplit-core.

This package provides:
- The immutable Document aggregate and its records (document.py)
- Derived results: scenario summaries, tips, guided prompts (results.py)
"""

from clearsplit_core.models.document import (
    ALT_SCENARIO_KEY,
    BASE_SCENARIO_KEY,
    LIST_SECTIONS,
    AssetItem,
    ChecklistItem,
    Contact,
    Deadline,
    Disclosure,
    DivorceCase,
    Document,
    DocumentModel,
    FlowItem,
    LiabilityItem,
    Money,
    OptionalMoney,
    Profile,
    RuleOverrides,
    ScenarioConfig,
    ScenarioMap,
    SupportRequest,
    WizardStep,
    default_alt_scenario,
    default_base_scenario,
    default_scenarios,
)
from clearsplit_core.models.results import (
    ActionDescriptor,
    ApplyRefi,
    ApplyTrim10,
    GuidedAction,
    GuidedPrompt,
    PromptKind,
    ScenarioSummary,
    Tip,
)

__all__ = [
    # Document
    "Document",
    "DocumentModel",
    "Profile",
    "ChecklistItem",
    "AssetItem",
    "LiabilityItem",
    "FlowItem",
    "ScenarioConfig",
    "ScenarioMap",
    "DivorceCase",
    "Contact",
    "Deadline",
    "Disclosure",
    "SupportRequest",
    "RuleOverrides",
    "WizardStep",
    # Field types
    "Money",
    "OptionalMoney",
    # Scenario keys and defaults
    "BASE_SCENARIO_KEY",
    "ALT_SCENARIO_KEY",
    "LIST_SECTIONS",
    "default_base_scenario",
    "default_alt_scenario",
    "default_scenarios",
    # Results
    "ScenarioSummary",
    "ActionDescriptor",
    "ApplyTrim10",
    "ApplyRefi",
    "Tip",
    "PromptKind",
    "GuidedAction",
    "GuidedPrompt",
]
