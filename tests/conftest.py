from datetime import datetime, timezone

import pytest

from ease_actions.execution.context import ExecutionContext
from ease_actions.persistence.in_memory import InMemoryWellnessStore
from ease_actions.registry.wellness_actions import build_default_registry


FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


class Navigator:
    def __init__(self):
        self.calls = []

    def __call__(self, section):
        self.calls.append(section)


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def store():
    return InMemoryWellnessStore()


@pytest.fixture
def navigator():
    return Navigator()


@pytest.fixture
def context(store, navigator):
    return ExecutionContext(
        navigate=navigator,
        user={"id": "user-1", "name": "Alex"},
        clock=lambda: FIXED_NOW,
        **store.hooks(),
    )


@pytest.fixture
def fixed_now():
    return FIXED_NOW
