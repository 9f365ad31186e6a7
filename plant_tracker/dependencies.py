"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import Request

from plant_tracker.services.plant_tracker import PlantTracker


def get_tracker(request: Request) -> PlantTracker:
	"""Return the process-wide tracker built during application startup."""
	return request.app.state.tracker
