"""Plant collection routes — listing, add/edit/delete, watering and moisture."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status

from plant_tracker.dependencies import get_tracker
from plant_tracker.models.enums import NotificationVariantEnum
from plant_tracker.models.plant import PRESET_FREQUENCIES, Plant, PlantValidationError
from plant_tracker.schemas.plant import (
	FrequencyOptionsRead,
	MoistureUpdate,
	PlantDeleteRead,
	PlantDraft,
	PlantListRead,
	PlantMutationRead,
	PlantPatch,
	PlantRead,
	PlantStatusRead,
	ThresholdUpdate,
)
from plant_tracker.services.plant_tracker import PlantTracker

router = APIRouter(prefix="/plants", tags=["plants"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, PlantValidationError):
		return HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail={
				"title": exc.title,
				"description": exc.description,
				"variant": NotificationVariantEnum.destructive.value,
			},
		)
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected plant tracker failure",
	)


def _not_found(plant_id: str) -> HTTPException:
	return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Plant {plant_id} not found")


def _to_plant_read(plant: Plant, tracker: PlantTracker, now: datetime | None = None) -> PlantRead:
	plant_status = tracker.status(plant, now)
	return PlantRead(
		id=plant.id,
		name=plant.name,
		type=plant.type,
		last_watered=plant.last_watered,
		watering_frequency=plant.watering_frequency,
		image=plant.image,
		moisture_level=plant.moisture_level,
		moisture_threshold=plant.moisture_threshold,
		last_moisture_reading=plant.last_moisture_reading,
		status=PlantStatusRead(
			days_since_watered=plant_status.days_since_watered,
			days_until_next_watering=plant_status.days_until_next_watering,
			needs_watering=plant_status.needs_watering,
			progress_percent=round(plant_status.progress_fraction * 100, 2),
			urgency=plant_status.urgency,
		),
	)


@router.get("", response_model=PlantListRead)
async def list_plants(tracker: PlantTracker = Depends(get_tracker)) -> PlantListRead:
	now = tracker.clock()
	return PlantListRead(
		generated_at=now,
		items=[_to_plant_read(plant, tracker, now) for plant in tracker.plants()],
	)


@router.get("/frequencies", response_model=FrequencyOptionsRead)
async def list_frequencies() -> FrequencyOptionsRead:
	return FrequencyOptionsRead(presets=list(PRESET_FREQUENCIES))


@router.get("/draft", response_model=PlantDraft)
async def get_draft(tracker: PlantTracker = Depends(get_tracker)) -> PlantDraft:
	return tracker.draft


@router.post("", response_model=PlantMutationRead, status_code=status.HTTP_201_CREATED)
async def add_plant(
	payload: PlantDraft,
	tracker: PlantTracker = Depends(get_tracker),
) -> PlantMutationRead:
	try:
		plant, notification = tracker.add_plant(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return PlantMutationRead(plant=_to_plant_read(plant, tracker), notification=notification)


@router.get("/edit", response_model=PlantRead)
async def get_editing(tracker: PlantTracker = Depends(get_tracker)) -> PlantRead:
	if tracker.editing is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No plant is being edited")
	return _to_plant_read(tracker.editing, tracker)


@router.delete("/edit", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_edit(tracker: PlantTracker = Depends(get_tracker)) -> Response:
	tracker.cancel_edit()
	return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{plant_id}", response_model=PlantRead)
async def get_plant(plant_id: str, tracker: PlantTracker = Depends(get_tracker)) -> PlantRead:
	plant = tracker.get_plant(plant_id)
	if plant is None:
		raise _not_found(plant_id)
	return _to_plant_read(plant, tracker)


@router.post("/{plant_id}/edit", response_model=PlantRead)
async def begin_edit(plant_id: str, tracker: PlantTracker = Depends(get_tracker)) -> PlantRead:
	plant = tracker.begin_edit(plant_id)
	if plant is None:
		raise _not_found(plant_id)
	return _to_plant_read(plant, tracker)


@router.patch("/{plant_id}", response_model=PlantMutationRead)
async def update_plant(
	plant_id: str,
	payload: PlantPatch,
	tracker: PlantTracker = Depends(get_tracker),
) -> PlantMutationRead:
	previous = tracker.editing
	if previous is None or previous.id != plant_id:
		tracker.begin_edit(plant_id)
	try:
		result = tracker.update_plant(plant_id, payload)
	except Exception as exc:
		tracker.editing = previous
		raise _map_error(exc) from exc
	if result is None:
		tracker.editing = previous
		raise _not_found(plant_id)
	plant, notification = result
	return PlantMutationRead(plant=_to_plant_read(plant, tracker), notification=notification)


@router.delete("/{plant_id}", response_model=PlantDeleteRead)
async def delete_plant(plant_id: str, tracker: PlantTracker = Depends(get_tracker)) -> PlantDeleteRead:
	notification = tracker.delete_plant(plant_id)
	return PlantDeleteRead(
		plant_id=plant_id,
		deleted=notification is not None,
		notification=notification,
	)


@router.post("/{plant_id}/water", response_model=PlantMutationRead)
async def water_plant(plant_id: str, tracker: PlantTracker = Depends(get_tracker)) -> PlantMutationRead:
	result = tracker.water_plant(plant_id)
	if result is None:
		raise _not_found(plant_id)
	plant, notification = result
	return PlantMutationRead(plant=_to_plant_read(plant, tracker), notification=notification)


@router.put("/{plant_id}/moisture", response_model=PlantMutationRead)
async def set_moisture(
	plant_id: str,
	payload: MoistureUpdate,
	tracker: PlantTracker = Depends(get_tracker),
) -> PlantMutationRead:
	plant = tracker.set_moisture(plant_id, payload.level)
	if plant is None:
		raise _not_found(plant_id)
	return PlantMutationRead(plant=_to_plant_read(plant, tracker))


@router.post("/{plant_id}/moisture/reading", response_model=PlantMutationRead)
async def take_moisture_reading(
	plant_id: str,
	tracker: PlantTracker = Depends(get_tracker),
) -> PlantMutationRead:
	result = tracker.take_moisture_reading(plant_id)
	if result is None:
		raise _not_found(plant_id)
	plant, notification = result
	return PlantMutationRead(plant=_to_plant_read(plant, tracker), notification=notification)


@router.put("/{plant_id}/threshold", response_model=PlantMutationRead)
async def set_threshold(
	plant_id: str,
	payload: ThresholdUpdate,
	tracker: PlantTracker = Depends(get_tracker),
) -> PlantMutationRead:
	plant = tracker.set_threshold(plant_id, payload.value)
	if plant is None:
		raise _not_found(plant_id)
	return PlantMutationRead(plant=_to_plant_read(plant, tracker))
