"""
Shared pytest fixtures for memostate tests.
"""

from collections import Counter
from dataclasses import dataclass

import pytest


class CallLog:
    """Counts calls to wrapped functions by name."""

    def __init__(self):
        self.counts = Counter()

    def wrap(self, name, fn):
        def counted(*args):
            self.counts[name] += 1
            return fn(*args)

        counted.__qualname__ = name
        return counted

    def __getitem__(self, name):
        return self.counts[name]


@dataclass(frozen=True)
class Person:
    first_name: str
    last_name: str
    age: int


@pytest.fixture
def calls():
    """Fresh call counter for each test."""
    return CallLog()


@pytest.fixture
def ada():
    return Person("Ada", "Lovelace", 36)
