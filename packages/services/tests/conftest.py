"""Shared fixtures for services tests."""

import os

import pytest

from clearsplit_core.ids import CounterIdGenerator
from clearsplit_core.reconcile import default_document


@pytest.fixture
def id_gen():
    return CounterIdGenerator()


@pytest.fixture
def document(id_gen):
    return default_document(id_gen)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any CLEARSPLIT_ variables from the environment."""
    for key in list(os.environ):
        if key.startswith("CLEARSPLIT_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
