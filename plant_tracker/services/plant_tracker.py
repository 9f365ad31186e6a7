"""Top-level plant tracker: store, storage, draft and edit state, notifications."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog

from plant_tracker.models.plant import Plant, PlantValidationError, clamp_percent
from plant_tracker.schemas.notification import Notification
from plant_tracker.schemas.plant import PlantDraft, PlantPatch
from plant_tracker.services import status_engine
from plant_tracker.services.moisture_sensor import SimulatedMoistureSensor
from plant_tracker.services.notifications import Notifier
from plant_tracker.services.persistence import PlantStorage
from plant_tracker.services.plant_store import PlantCollection, PlantStore

logger = structlog.get_logger("plant_tracker.tracker")

DEFAULT_IMAGE = "/placeholder.svg?height=100&width=100"


def _utcnow() -> datetime:
	return datetime.now(UTC)


def _new_plant_id() -> str:
	return uuid.uuid4().hex


class PlantTracker:
	"""Owns the plant store plus the transient new-plant draft and edit state.

	Operations that target an unknown plant id are silent no-ops: they
	return ``None`` and emit no notification.
	"""

	def __init__(
		self,
		store: PlantStore,
		notifier: Notifier,
		sensor: SimulatedMoistureSensor,
		*,
		default_image: str = DEFAULT_IMAGE,
		clock: Callable[[], datetime] = _utcnow,
		id_factory: Callable[[], str] = _new_plant_id,
	):
		self.store = store
		self.notifier = notifier
		self.sensor = sensor
		self.default_image = default_image
		self.clock = clock
		self.id_factory = id_factory
		self.draft = PlantDraft()
		self.editing: Plant | None = None

	@classmethod
	def hydrate(
		cls,
		storage: PlantStorage,
		notifier: Notifier,
		sensor: SimulatedMoistureSensor,
		**kwargs: Any,
	) -> PlantTracker:
		"""Load the collection once and persist every later change."""
		store = PlantStore(storage.load() or ())
		store.subscribe(storage.save)
		tracker = cls(store, notifier, sensor, **kwargs)
		logger.info("tracker_hydrated", count=len(store.get()))
		return tracker

	# ── Reads ───────────────────────────────────────────────────────────────

	def plants(self) -> PlantCollection:
		return self.store.get()

	def get_plant(self, plant_id: str) -> Plant | None:
		return self.store.find(plant_id)

	def status(self, plant: Plant, now: datetime | None = None) -> status_engine.PlantStatus:
		now = now or self.clock()
		if plant.last_watered > now:
			logger.warning(
				"clock_behind_last_watered",
				plant_id=plant.id,
				last_watered=plant.last_watered.isoformat(),
				now=now.isoformat(),
			)
		return status_engine.status_of(plant, now)

	# ── Draft & edit state ──────────────────────────────────────────────────

	def set_draft(self, draft: PlantDraft) -> PlantDraft:
		self.draft = draft
		return draft

	def reset_draft(self) -> None:
		self.draft = PlantDraft()

	def begin_edit(self, plant_id: str) -> Plant | None:
		self.editing = self.store.find(plant_id)
		return self.editing

	def cancel_edit(self) -> None:
		self.editing = None

	# ── Mutations ───────────────────────────────────────────────────────────

	def add_plant(self, draft: PlantDraft | None = None) -> tuple[Plant, Notification]:
		if draft is not None:
			self.set_draft(draft)
		draft = self.draft

		try:
			self._require_text(draft.name, draft.type)
			frequency = draft.frequency_selection().resolve()
		except PlantValidationError as exc:
			self._reject(exc)
			raise

		now = self.clock()
		plant = Plant(
			id=self.id_factory(),
			name=draft.name,
			type=draft.type,
			last_watered=now,
			watering_frequency=frequency,
			image=draft.image or self.default_image,
			moisture_level=draft.moisture_level,
			moisture_threshold=draft.moisture_threshold,
			last_moisture_reading=now,
		)
		self.store.add(plant)
		self.reset_draft()
		logger.info("plant_added", plant_id=plant.id, name=plant.name, frequency=frequency)
		notification = self.notifier.notify(
			"Plant added",
			f"{plant.name} has been added to your collection",
		)
		return plant, notification

	def update_plant(self, plant_id: str, patch: PlantPatch) -> tuple[Plant, Notification] | None:
		current = self.store.find(plant_id)
		if self.editing is None or self.editing.id != plant_id or current is None:
			return None

		# Patch the stored record, not the snapshot taken at begin_edit, so
		# waterings and readings recorded mid-edit survive.
		try:
			edited = self._apply_patch(current, patch)
		except PlantValidationError as exc:
			self._reject(exc)
			raise

		self.store.update(plant_id, edited)
		self.editing = None
		logger.info("plant_updated", plant_id=plant_id, fields=sorted(patch.model_fields_set))
		notification = self.notifier.notify("Plant updated", f"{edited.name} has been updated")
		return edited, notification

	def delete_plant(self, plant_id: str) -> Notification | None:
		plant = self.store.find(plant_id)
		if plant is None:
			return None
		self.store.delete(plant_id)
		if self.editing is not None and self.editing.id == plant_id:
			self.editing = None
		logger.info("plant_deleted", plant_id=plant_id)
		return self.notifier.notify(
			"Plant removed",
			f"{plant.name} has been removed from your collection",
		)

	def water_plant(self, plant_id: str) -> tuple[Plant, Notification] | None:
		if self.store.find(plant_id) is None:
			return None
		self.store.water(plant_id, self.clock())
		plant = self._require(plant_id)
		logger.info("plant_watered", plant_id=plant_id)
		notification = self.notifier.notify("Plant watered", f"{plant.name} has been watered")
		return plant, notification

	def set_moisture(self, plant_id: str, level: Any) -> Plant | None:
		plant = self.store.find(plant_id)
		if plant is None:
			return None
		self.store.set_moisture(plant_id, clamp_percent(level, plant.moisture_level), self.clock())
		return self._require(plant_id)

	def set_threshold(self, plant_id: str, value: Any) -> Plant | None:
		if self.store.find(plant_id) is None:
			return None
		self.store.set_threshold(plant_id, clamp_percent(value, 0))
		return self._require(plant_id)

	def take_moisture_reading(self, plant_id: str) -> tuple[Plant, Notification] | None:
		if self.store.find(plant_id) is None:
			return None
		reading = self.sensor.read()
		plant = self.set_moisture(plant_id, reading)
		assert plant is not None
		logger.info("moisture_reading_simulated", plant_id=plant_id, reading=reading)
		notification = self.notifier.notify(
			"Moisture Reading Updated",
			f"New reading: {reading}%",
		)
		return plant, notification

	# ── Internals ───────────────────────────────────────────────────────────

	def _require(self, plant_id: str) -> Plant:
		plant = self.store.find(plant_id)
		if plant is None:
			raise LookupError(f"Plant {plant_id} not found")
		return plant

	def _reject(self, exc: PlantValidationError) -> None:
		logger.info("plant_rejected", title=exc.title, reason=exc.description)
		self.notifier.reject(exc.title, exc.description)

	def _apply_patch(self, plant: Plant, patch: PlantPatch) -> Plant:
		changes = patch.model_dump(
			exclude_unset=True,
			exclude_none=True,
			exclude={"watering_frequency", "custom_frequency_days"},
		)
		selection = patch.frequency_selection()
		if selection is not None:
			changes["watering_frequency"] = selection.resolve()

		self._require_text(changes.get("name", plant.name), changes.get("type", plant.type))
		if not changes.get("image", plant.image):
			changes["image"] = self.default_image
		return plant.model_copy(update=changes)

	@staticmethod
	def _require_text(name: str, plant_type: str) -> None:
		if not name.strip() or not plant_type.strip():
			raise PlantValidationError("Missing information", "Please fill in all the fields")
