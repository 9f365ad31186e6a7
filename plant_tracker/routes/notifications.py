"""Recent user notification feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from plant_tracker.dependencies import get_tracker
from plant_tracker.schemas.notification import NotificationListRead
from plant_tracker.services.plant_tracker import PlantTracker

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListRead)
async def list_notifications(tracker: PlantTracker = Depends(get_tracker)) -> NotificationListRead:
	return NotificationListRead(items=tracker.notifier.recent())
