"""Clearsplit Core - document state and computation engine."""

__version__ = "0.1.0"

from .deadlines import RuleOffsets, compute_deadlines, default_disclosures
from .exceptions import ClearsplitError, MalformedImportError, StorageError
from .ids import CounterIdGenerator, IdGenerator, UuidIdGenerator
from .insights import evaluate
from .models import Document, ScenarioConfig, ScenarioSummary, Tip
from .normalizer import Frequency, to_monthly
from .reconcile import default_document, reconcile
from .scenarios import auto_build_scenarios, compute_scenario_summary, document_summary
from .store import DocumentStore
from .wizard import guided_next

__all__ = [
    "Document",
    "ScenarioConfig",
    "ScenarioSummary",
    "Tip",
    "DocumentStore",
    "Frequency",
    "to_monthly",
    "compute_scenario_summary",
    "document_summary",
    "auto_build_scenarios",
    "evaluate",
    "RuleOffsets",
    "compute_deadlines",
    "default_disclosures",
    "guided_next",
    "default_document",
    "reconcile",
    "IdGenerator",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "ClearsplitError",
    "MalformedImportError",
    "StorageError",
]
