"""Shared fixtures for core tests."""

import pytest

from clearsplit_core.ids import CounterIdGenerator
from clearsplit_core.reconcile import default_document


@pytest.fixture
def id_gen():
    """Deterministic id generator: id-1, id-2, ..."""
    return CounterIdGenerator()


@pytest.fixture
def document(id_gen):
    """A fresh default document."""
    return default_document(id_gen)
