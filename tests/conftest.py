"""
conftest.py
-----------
Shared pytest configuration and fixtures for Dino Dash tests.

Contains:
- Deterministic clock and random sources
- Score layer fixtures wired to an in-memory backend
- Pytest configuration and hooks
"""

import os
import sys

import pytest

# Add src directory to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from dino_dash.core.debug.debug_logger import LoggerConfig  # noqa: E402
from dino_dash.core.services.config_manager import GameConfig  # noqa: E402
from dino_dash.core.services.event_manager import EventManager  # noqa: E402
from dino_dash.scores.score_context import ScoreContext  # noqa: E402
from dino_dash.scores.score_service import ScoreService  # noqa: E402
from dino_dash.scores.score_store import ScoreStore  # noqa: E402
from dino_dash.scores.storage_backend import MemoryBackend  # noqa: E402


# ===========================================================
# Test Helpers
# ===========================================================

class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class SequenceRandom:
    """Random source returning queued values, then a fixed fallback."""

    def __init__(self, values=(), fallback=0.99):
        self.values = list(values)
        self.fallback = fallback
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.fallback


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output clean."""
    previous = LoggerConfig.ENABLE_LOGGING
    LoggerConfig.ENABLE_LOGGING = False
    yield
    LoggerConfig.ENABLE_LOGGING = previous


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def no_spawn_rng():
    return SequenceRandom(fallback=0.99)


@pytest.fixture
def make_rng():
    """Factory for SequenceRandom sources with queued draws."""
    return SequenceRandom


@pytest.fixture
def events():
    return EventManager()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend, clock):
    return ScoreStore(backend, clock=clock)


@pytest.fixture
def service(store, clock):
    counter = iter(range(1, 10_000))
    return ScoreService(store, clock=clock, id_factory=lambda now: f"score_{now}_{next(counter)}")


@pytest.fixture
def context(service, events):
    return ScoreContext(service, events)


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Mark everything outside integration modules as a unit test."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
