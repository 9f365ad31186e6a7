"""Plant collection persistence — whole-collection load/save over a key-value store.

The stored document is a JSON array of plant records (camelCase keys,
ISO-8601 timestamps). There is no version field; a document that fails
validation is a bug and the error propagates.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import structlog
from pydantic import TypeAdapter
from redis import Redis

from plant_tracker.config import Settings, StorageBackend
from plant_tracker.models.plant import Plant

logger = structlog.get_logger("plant_tracker.persistence")

_PLANT_LIST = TypeAdapter(list[Plant])


def encode_plants(plants: Sequence[Plant]) -> str:
	return _PLANT_LIST.dump_json(list(plants), by_alias=True).decode("utf-8")


def decode_plants(raw: str | bytes) -> list[Plant]:
	return _PLANT_LIST.validate_json(raw)


class PlantStorage(Protocol):
	def load(self) -> list[Plant] | None: ...

	def save(self, plants: Sequence[Plant]) -> None: ...


class InMemoryStorage:
	"""Process-local storage; holds the encoded document like the real backends."""

	def __init__(self, document: str | None = None):
		self.document = document

	def load(self) -> list[Plant] | None:
		if self.document is None:
			return None
		return decode_plants(self.document)

	def save(self, plants: Sequence[Plant]) -> None:
		self.document = encode_plants(plants)


class JsonFileStorage:
	"""JSON document on local disk, replaced atomically on every save."""

	def __init__(self, path: str | Path):
		self.path = Path(path)

	def load(self) -> list[Plant] | None:
		if not self.path.exists():
			logger.info("storage_empty", backend="file", path=str(self.path))
			return None
		plants = decode_plants(self.path.read_bytes())
		logger.info("storage_loaded", backend="file", path=str(self.path), count=len(plants))
		return plants

	def save(self, plants: Sequence[Plant]) -> None:
		directory = self.path.parent
		directory.mkdir(parents=True, exist_ok=True)
		fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as handle:
				handle.write(encode_plants(plants))
			os.replace(tmp_name, self.path)
		except BaseException:
			Path(tmp_name).unlink(missing_ok=True)
			raise
		logger.debug("storage_saved", backend="file", path=str(self.path), count=len(plants))


class RedisStorage:
	"""JSON document under a single Redis key."""

	def __init__(self, client: Redis, key: str = "plants"):
		self.client = client
		self.key = key

	def load(self) -> list[Plant] | None:
		raw = self.client.get(self.key)
		if raw is None:
			logger.info("storage_empty", backend="redis", key=self.key)
			return None
		plants = decode_plants(raw)
		logger.info("storage_loaded", backend="redis", key=self.key, count=len(plants))
		return plants

	def save(self, plants: Sequence[Plant]) -> None:
		self.client.set(self.key, encode_plants(plants))
		logger.debug("storage_saved", backend="redis", key=self.key, count=len(plants))


def build_storage(settings: Settings) -> PlantStorage:
	if settings.storage_backend == StorageBackend.redis:
		# Saves run inside the store commit and must not await. Keep the
		# synchronous client; redis.asyncio would let requests interleave
		# between a mutation and its write.
		return RedisStorage(Redis.from_url(settings.redis_url), settings.storage_key)
	if settings.storage_backend == StorageBackend.memory:
		return InMemoryStorage()
	return JsonFileStorage(settings.storage_path)
