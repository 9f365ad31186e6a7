from __future__ import annotations

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from plant_tracker.models.enums import NotificationVariantEnum
from plant_tracker.models.plant import Plant, PlantValidationError
from plant_tracker.schemas.plant import PlantDraft, PlantPatch
from plant_tracker.services import status_engine
from plant_tracker.services.moisture_sensor import SimulatedMoistureSensor
from plant_tracker.services.notifications import Notifier
from plant_tracker.services.persistence import InMemoryStorage, decode_plants, encode_plants
from plant_tracker.services.plant_tracker import PlantTracker


def _add(tracker: PlantTracker, name: str = "Monstera", **fields: object) -> Plant:
	plant, _ = tracker.add_plant(PlantDraft(name=name, type="Houseplant", **fields))
	return plant


def test_add_assigns_id_timestamps_and_persists(tracker: PlantTracker, storage: InMemoryStorage) -> None:
	plant, notification = tracker.add_plant(
		PlantDraft(name="Monstera", type="Houseplant", watering_frequency=10, moisture_threshold=40)
	)

	assert plant.id == "plant-1"
	assert plant.last_watered == tracker.clock()
	assert plant.last_moisture_reading == tracker.clock()
	assert plant.image == "/placeholder.svg?height=100&width=100"
	assert plant.moisture_level == 50
	assert notification.title == "Plant added"
	assert "Monstera" in notification.description
	assert storage.document is not None
	assert decode_plants(storage.document) == [plant]


def test_add_clears_the_draft(tracker: PlantTracker) -> None:
	_add(tracker, watering_frequency=3)

	assert tracker.draft == PlantDraft()


def test_add_with_empty_name_is_rejected(tracker: PlantTracker, storage: InMemoryStorage) -> None:
	with pytest.raises(PlantValidationError):
		tracker.add_plant(PlantDraft(name="", type="Fern"))

	assert tracker.plants() == ()
	assert storage.document is None
	rejection = tracker.notifier.recent()[0]
	assert rejection.title == "Missing information"
	assert rejection.variant == NotificationVariantEnum.destructive


def test_add_keeps_draft_after_rejection(tracker: PlantTracker) -> None:
	draft = PlantDraft(name="Fern", type="", watering_frequency=5)

	with pytest.raises(PlantValidationError):
		tracker.add_plant(draft)

	assert tracker.draft == draft


def test_add_with_pending_custom_frequency_is_rejected(tracker: PlantTracker) -> None:
	with pytest.raises(PlantValidationError) as excinfo:
		tracker.add_plant(PlantDraft(name="Fern", type="Fern", watering_frequency="custom"))

	assert excinfo.value.title == "Invalid watering frequency"
	assert tracker.plants() == ()


def test_add_with_resolved_custom_frequency(tracker: PlantTracker) -> None:
	plant = _add(tracker, watering_frequency="custom", custom_frequency_days=21)

	assert plant.watering_frequency == 21


def test_water_then_status_is_not_due(tracker: PlantTracker) -> None:
	plant = _add(tracker, moisture_level=0, moisture_threshold=100, watering_frequency=1)
	tracker.clock.advance(days=5)  # type: ignore[attr-defined]
	assert status_engine.needs_watering(tracker.get_plant(plant.id), tracker.clock()) is True  # type: ignore[arg-type]

	result = tracker.water_plant(plant.id)

	assert result is not None
	watered, notification = result
	assert watered.last_watered == tracker.clock()
	assert tracker.status(watered).needs_watering is False
	assert notification.description == "Monstera has been watered"


def test_update_requires_active_edit(tracker: PlantTracker) -> None:
	plant = _add(tracker)

	assert tracker.update_plant(plant.id, PlantPatch(name="Other")) is None
	assert tracker.get_plant(plant.id).name == "Monstera"  # type: ignore[union-attr]


def test_update_applies_patch_and_clears_edit_state(tracker: PlantTracker) -> None:
	plant = _add(tracker)
	tracker.begin_edit(plant.id)

	result = tracker.update_plant(plant.id, PlantPatch(name="Swiss Cheese", watering_frequency=14))

	assert result is not None
	edited, notification = result
	assert edited.name == "Swiss Cheese"
	assert edited.watering_frequency == 14
	assert edited.last_watered == plant.last_watered
	assert tracker.editing is None
	assert notification.title == "Plant updated"


def test_update_keeps_watering_recorded_during_edit(tracker: PlantTracker) -> None:
	plant = _add(tracker, name="Fern")
	tracker.begin_edit(plant.id)
	tracker.clock.advance(days=3)  # type: ignore[attr-defined]
	watered, _ = tracker.water_plant(plant.id)  # type: ignore[misc]

	result = tracker.update_plant(plant.id, PlantPatch(name="Fern 2"))

	assert result is not None
	edited, _ = result
	assert edited.name == "Fern 2"
	assert edited.last_watered == watered.last_watered == tracker.clock()
	assert tracker.get_plant(plant.id) == edited


def test_update_keeps_moisture_reading_taken_during_edit(tracker: PlantTracker) -> None:
	plant = _add(tracker)
	tracker.begin_edit(plant.id)
	tracker.clock.advance(hours=5)  # type: ignore[attr-defined]
	tracker.set_moisture(plant.id, 12)

	edited, _ = tracker.update_plant(plant.id, PlantPatch(watering_frequency=3))  # type: ignore[misc]

	assert edited.moisture_level == 12
	assert edited.last_moisture_reading == tracker.clock()


def test_patch_cannot_change_moisture_level() -> None:
	with pytest.raises(ValidationError):
		PlantPatch(moisture_level=10)


def test_update_rejects_blank_name(tracker: PlantTracker) -> None:
	plant = _add(tracker)
	tracker.begin_edit(plant.id)

	with pytest.raises(PlantValidationError):
		tracker.update_plant(plant.id, PlantPatch(name="  "))

	assert tracker.get_plant(plant.id).name == "Monstera"  # type: ignore[union-attr]
	assert tracker.editing is not None


def test_update_of_deleted_plant_is_no_op(tracker: PlantTracker) -> None:
	plant = _add(tracker)
	tracker.begin_edit(plant.id)
	tracker.delete_plant(plant.id)

	assert tracker.update_plant(plant.id, PlantPatch(name="Ghost")) is None
	assert tracker.plants() == ()


def test_delete_unknown_id_emits_nothing(tracker: PlantTracker) -> None:
	_add(tracker)
	before = tracker.plants()
	notifications_before = len(tracker.notifier.recent())

	assert tracker.delete_plant("missing") is None
	assert tracker.plants() == before
	assert len(tracker.notifier.recent()) == notifications_before


def test_set_moisture_and_threshold_clamp(tracker: PlantTracker) -> None:
	plant = _add(tracker)

	assert tracker.set_moisture(plant.id, 150).moisture_level == 100  # type: ignore[union-attr]
	assert tracker.set_moisture(plant.id, -5).moisture_level == 0  # type: ignore[union-attr]
	assert tracker.set_moisture(plant.id, "wet").moisture_level == 0  # type: ignore[union-attr]
	assert tracker.set_threshold(plant.id, "oops").moisture_threshold == 0  # type: ignore[union-attr]
	assert tracker.set_threshold(plant.id, 75).moisture_threshold == 75  # type: ignore[union-attr]


def test_simulated_reading_is_in_range_and_notifies(tracker: PlantTracker) -> None:
	plant = _add(tracker)

	result = tracker.take_moisture_reading(plant.id)

	assert result is not None
	updated, notification = result
	assert 0 <= updated.moisture_level <= 100
	assert notification.description == f"New reading: {updated.moisture_level}%"


def test_hydrate_reads_storage_once(
	clock: Callable[[], object],
	plant_factory: Callable[..., Plant],
) -> None:
	existing = plant_factory(id="kept")
	storage = InMemoryStorage(encode_plants([existing]))

	tracker = PlantTracker.hydrate(
		storage,
		Notifier(),
		SimulatedMoistureSensor(seed=3),
		clock=clock,  # type: ignore[arg-type]
	)

	assert tracker.plants() == (existing,)
	tracker.water_plant("kept")
	assert decode_plants(storage.document)[0].last_watered == clock()  # type: ignore[arg-type]
