"""
Pytest configuration and fixtures for Furigana Match tests.

Provides word pair factories, a manually driven timer queue and in-memory
storage, plus the Hypothesis profile for property-based tests.
"""

import random

import pytest
from hypothesis import settings, Verbosity

from furigana_match.errors import ErrorHandler
from furigana_match.game.timers import ManualClock, TimerQueue
from furigana_match.models import make_pair
from furigana_match.storage import MemoryStore, ProgressStore


settings.register_profile("furigana_match",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None
)
settings.load_profile("furigana_match")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based test using Hypothesis")


def sample_pairs(count):
    """Build count distinct word pairs with ids p1..pN."""
    return [
        make_pair(f"p{i}", [(f"語{i}", f"ご{i}"), ("する", None)], f"词{i}")
        for i in range(1, count + 1)
    ]


class RecordingSpeaker:
    """Speaker that remembers what it was asked to say."""

    def __init__(self):
        self.spoken = []

    def speak(self, text, locale, rate):
        self.spoken.append((text, locale, rate))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def timers(clock):
    return TimerQueue(clock=clock)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def speaker():
    return RecordingSpeaker()


@pytest.fixture
def errors():
    return ErrorHandler()


@pytest.fixture
def progress_store(errors):
    return ProgressStore(MemoryStore(), errors=errors)


@pytest.fixture
def make_pairs():
    return sample_pairs
