"""Pytest configuration for kvadapter tests."""

from unittest.mock import AsyncMock

import pytest

from kvadapter import InMemoryCommands, KeyValueAdapter, KeyValueCommands


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def commands() -> AsyncMock:
    """Command client double with Redis-like method signatures."""
    return AsyncMock(spec=KeyValueCommands)


@pytest.fixture
def adapter(commands: AsyncMock) -> KeyValueAdapter:
    """Adapter wired to the command double."""
    return KeyValueAdapter(commands)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory(clock: FakeClock) -> InMemoryCommands:
    """In-memory backend driven by the fake clock."""
    return InMemoryCommands(maxsize=100, timer=clock)


@pytest.fixture
def kv(memory: InMemoryCommands) -> KeyValueAdapter:
    """Adapter over the in-memory backend."""
    return KeyValueAdapter(memory)


@pytest.fixture(autouse=True)
def clean_redis_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep KV_REDIS_* variables from the host out of config tests."""
    for name in ("ADDRESS", "PORT", "PASSWORD", "DB"):
        monkeypatch.delenv(f"KV_REDIS_{name}", raising=False)
