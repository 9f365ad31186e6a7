"""Shared pytest fixtures — async test client, in-memory tracker, fixed clock."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from plant_tracker.dependencies import get_tracker
from plant_tracker.main import app
from plant_tracker.models.plant import Plant
from plant_tracker.services.moisture_sensor import SimulatedMoistureSensor
from plant_tracker.services.notifications import Notifier
from plant_tracker.services.persistence import InMemoryStorage
from plant_tracker.services.plant_tracker import PlantTracker

FIXED_NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


class FakeClock:
	def __init__(self, now: datetime = FIXED_NOW) -> None:
		self.now = now

	def __call__(self) -> datetime:
		return self.now

	def advance(self, **delta: float) -> datetime:
		self.now = self.now + timedelta(**delta)
		return self.now


class FakeRedis:
	def __init__(self) -> None:
		self.values: dict[str, str] = {}
		self.set_calls = 0

	def get(self, key: str) -> str | None:
		return self.values.get(key)

	def set(self, key: str, value: str) -> bool:
		self.values[key] = value
		self.set_calls += 1
		return True


class SequentialIds:
	def __init__(self) -> None:
		self.counter = 0

	def __call__(self) -> str:
		self.counter += 1
		return f"plant-{self.counter}"


def make_plant(now: datetime = FIXED_NOW, **overrides: Any) -> Plant:
	fields: dict[str, Any] = {
		"id": "plant-1",
		"name": "Monstera",
		"type": "Houseplant",
		"last_watered": now - timedelta(days=8),
		"watering_frequency": 7,
		"image": "/placeholder.svg?height=100&width=100",
		"moisture_level": 20,
		"moisture_threshold": 30,
		"last_moisture_reading": now - timedelta(hours=1),
	}
	fields.update(overrides)
	return Plant(**fields)


@pytest.fixture
def clock() -> FakeClock:
	return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
	"""Empty in-memory storage; assert on ``.document`` to see what was persisted."""
	return InMemoryStorage()


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def tracker(storage: InMemoryStorage, clock: FakeClock) -> PlantTracker:
	return PlantTracker.hydrate(
		storage,
		Notifier(history_size=10, clock=clock),
		SimulatedMoistureSensor(seed=1),
		clock=clock,
		id_factory=SequentialIds(),
	)


@pytest.fixture
async def client(tracker: PlantTracker) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and the tracker dependency overridden."""

	app.dependency_overrides[get_tracker] = lambda: tracker
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()


@pytest.fixture
def plant_factory(clock: FakeClock) -> Callable[..., Plant]:
	"""Build a plant watered 8 days before the fixed clock, dry and overdue by default."""
	return lambda **overrides: make_plant(clock.now, **overrides)


@pytest.fixture
def now_utc(clock: FakeClock) -> datetime:
	return clock.now
