from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import Settings
from task_tracker.main import create_app
from task_tracker.store import TaskStore


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def store(clock: TickingClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def settings() -> Settings:
    return Settings(seed_sample_tasks=False)


@pytest.fixture()
def client(settings: Settings, store: TaskStore) -> TestClient:
    return TestClient(create_app(settings, store))
