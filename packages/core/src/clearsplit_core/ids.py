"""Identifier generators for document records.

Every list item in a document carries an id that is unique within its
sequence and never reused. Ids are handed out by an injectable generator
so tests can assert exact values.
"""

import itertools
from typing import Protocol, runtime_checkable
from uuid import uuid4


@runtime_checkable
class IdGenerator(Protocol):
    """Anything callable with no arguments that returns a fresh id."""

    def __call__(self) -> str:
        ...


class CounterIdGenerator:
    """Deterministic monotonic ids: ``id-1``, ``id-2``, ...

    Args:
        prefix: Text placed before the counter value.
        start: First counter value handed out.
    """

    def __init__(self, prefix: str = "id-", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class UuidIdGenerator:
    """Random short hex ids backed by uuid4."""

    def __init__(self, length: int = 12):
        self.length = length

    def __call__(self) -> str:
        return uuid4().hex[: self.length]


__all__ = ["IdGenerator", "CounterIdGenerator", "UuidIdGenerator"]
