"""In-memory plant collection with change subscribers."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from plant_tracker.models.plant import Plant, clamp_percent

PlantCollection = tuple[Plant, ...]
StoreListener = Callable[[PlantCollection], None]


class PlantStore:
	"""Owns the working copy of the plant collection.

	Every mutation builds a new tuple, swaps it in and then calls each
	subscriber with the new value. A mutation that matches no plant
	returns the current collection unchanged and notifies nobody.
	"""

	def __init__(self, plants: Iterable[Plant] = ()):
		self._plants: PlantCollection = tuple(plants)
		self._listeners: list[StoreListener] = []
		self._require_unique_ids(self._plants)

	def get(self) -> PlantCollection:
		return self._plants

	def find(self, plant_id: str) -> Plant | None:
		for plant in self._plants:
			if plant.id == plant_id:
				return plant
		return None

	def subscribe(self, listener: StoreListener) -> Callable[[], None]:
		self._listeners.append(listener)

		def unsubscribe() -> None:
			if listener in self._listeners:
				self._listeners.remove(listener)

		return unsubscribe

	def add(self, plant: Plant) -> PlantCollection:
		if self.find(plant.id) is not None:
			raise ValueError(f"Plant id {plant.id} already exists")
		return self._commit((*self._plants, plant))

	def update(self, plant_id: str, edited: Plant) -> PlantCollection:
		if edited.id != plant_id:
			raise ValueError("edited plant id does not match the target plant")
		return self._transform(plant_id, lambda _plant: edited)

	def delete(self, plant_id: str) -> PlantCollection:
		if self.find(plant_id) is None:
			return self._plants
		return self._commit(tuple(plant for plant in self._plants if plant.id != plant_id))

	def water(self, plant_id: str, now: datetime) -> PlantCollection:
		return self._transform(
			plant_id,
			lambda plant: plant.model_copy(update={"last_watered": now}),
		)

	def set_moisture(self, plant_id: str, level: int, now: datetime) -> PlantCollection:
		clamped = clamp_percent(level, 0)
		return self._transform(
			plant_id,
			lambda plant: plant.model_copy(
				update={"moisture_level": clamped, "last_moisture_reading": now}
			),
		)

	def set_threshold(self, plant_id: str, value: int) -> PlantCollection:
		clamped = clamp_percent(value, 0)
		return self._transform(
			plant_id,
			lambda plant: plant.model_copy(update={"moisture_threshold": clamped}),
		)

	def _transform(self, plant_id: str, change: Callable[[Plant], Plant]) -> PlantCollection:
		if self.find(plant_id) is None:
			return self._plants
		return self._commit(
			tuple(change(plant) if plant.id == plant_id else plant for plant in self._plants)
		)

	def _commit(self, plants: PlantCollection) -> PlantCollection:
		self._plants = plants
		for listener in list(self._listeners):
			listener(plants)
		return plants

	@staticmethod
	def _require_unique_ids(plants: PlantCollection) -> None:
		seen: set[str] = set()
		for plant in plants:
			if plant.id in seen:
				raise ValueError(f"duplicate plant id in collection: {plant.id}")
			seen.add(plant.id)
