"""Watering status derivation from a plant record and a clock reading.

Urgency is the conjunction of two conditions: the schedule window has
elapsed *and* the last moisture reading is below the plant's threshold.
A plant that is overdue but still moist, or dry but still inside its
window, does not need water.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from plant_tracker.models.enums import WateringUrgencyEnum
from plant_tracker.models.plant import Plant

SECONDS_PER_DAY = 60 * 60 * 24


@dataclass(frozen=True, slots=True)
class PlantStatus:
	days_since_watered: int
	days_until_next_watering: int
	needs_watering: bool
	progress_fraction: float
	urgency: WateringUrgencyEnum


def days_since(timestamp: datetime, now: datetime) -> int:
	"""Whole days between ``timestamp`` and ``now``, rounded up.

	Uses the absolute difference, so a timestamp in the future still
	yields a positive count.
	"""
	elapsed = abs((now - timestamp).total_seconds())
	return math.ceil(elapsed / SECONDS_PER_DAY)


def is_moisture_low(plant: Plant) -> bool:
	return plant.moisture_level < plant.moisture_threshold


def needs_watering(plant: Plant, now: datetime) -> bool:
	schedule_due = days_since(plant.last_watered, now) >= plant.watering_frequency
	return schedule_due and is_moisture_low(plant)


def days_until_next_watering(plant: Plant, now: datetime) -> int:
	return max(0, plant.watering_frequency - days_since(plant.last_watered, now))


def progress_fraction(plant: Plant, now: datetime) -> float:
	return 1 - days_until_next_watering(plant, now) / plant.watering_frequency


def watering_urgency(plant: Plant, now: datetime) -> WateringUrgencyEnum:
	if needs_watering(plant, now):
		return WateringUrgencyEnum.due
	if days_until_next_watering(plant, now) <= math.ceil(plant.watering_frequency / 3):
		return WateringUrgencyEnum.soon
	return WateringUrgencyEnum.ok


def status_of(plant: Plant, now: datetime) -> PlantStatus:
	return PlantStatus(
		days_since_watered=days_since(plant.last_watered, now),
		days_until_next_watering=days_until_next_watering(plant, now),
		needs_watering=needs_watering(plant, now),
		progress_fraction=progress_fraction(plant, now),
		urgency=watering_urgency(plant, now),
	)
