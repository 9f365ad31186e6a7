"""Pydantic request/response schemas for plant objects."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from plant_tracker.models.enums import WateringUrgencyEnum
from plant_tracker.models.plant import FrequencySelection, clamp_percent
from plant_tracker.schemas.notification import Notification

CUSTOM_FREQUENCY = "custom"

DEFAULT_FREQUENCY_DAYS = 7
DEFAULT_MOISTURE_LEVEL = 50
DEFAULT_MOISTURE_THRESHOLD = 30


def _selection(frequency: int | str, custom_days: int | None) -> FrequencySelection:
	if frequency == CUSTOM_FREQUENCY:
		if custom_days is None:
			return FrequencySelection.pending()
		return FrequencySelection.of(custom_days)
	return FrequencySelection.of(int(frequency))


class PlantDraft(BaseModel):
	"""New-plant form state; ``watering_frequency`` may still be ``"custom"``."""

	name: str = Field(default="", max_length=255)
	type: str = Field(default="", max_length=255)
	watering_frequency: int | Literal["custom"] = DEFAULT_FREQUENCY_DAYS
	custom_frequency_days: int | None = Field(default=None, ge=1)
	image: str | None = None
	moisture_level: int = DEFAULT_MOISTURE_LEVEL
	moisture_threshold: int = DEFAULT_MOISTURE_THRESHOLD

	@field_validator("watering_frequency")
	@classmethod
	def _positive_frequency(cls, value: int | str) -> int | str:
		if isinstance(value, int) and value < 1:
			raise ValueError("watering_frequency must be at least 1 day")
		return value

	@field_validator("moisture_level", mode="before")
	@classmethod
	def _clamp_level(cls, value: Any) -> int:
		return clamp_percent(value, DEFAULT_MOISTURE_LEVEL)

	@field_validator("moisture_threshold", mode="before")
	@classmethod
	def _clamp_threshold(cls, value: Any) -> int:
		return clamp_percent(value, 0)

	def frequency_selection(self) -> FrequencySelection:
		return _selection(self.watering_frequency, self.custom_frequency_days)


class PlantPatch(BaseModel):
	"""Edit-form changes; unset fields keep the plant's current value.

	The moisture level is not editable here; it only changes through
	``PlantTracker.set_moisture``, which also stamps ``last_moisture_reading``.
	"""

	model_config = ConfigDict(extra="forbid")

	name: str | None = Field(default=None, max_length=255)
	type: str | None = Field(default=None, max_length=255)
	watering_frequency: int | Literal["custom"] | None = None
	custom_frequency_days: int | None = Field(default=None, ge=1)
	image: str | None = None
	moisture_threshold: int | None = None

	@field_validator("watering_frequency")
	@classmethod
	def _positive_frequency(cls, value: int | str | None) -> int | str | None:
		if isinstance(value, int) and value < 1:
			raise ValueError("watering_frequency must be at least 1 day")
		return value

	@field_validator("moisture_threshold", mode="before")
	@classmethod
	def _clamp_threshold(cls, value: Any) -> int | None:
		if value is None:
			return None
		return clamp_percent(value, 0)

	def frequency_selection(self) -> FrequencySelection | None:
		if self.watering_frequency is None:
			return None
		return _selection(self.watering_frequency, self.custom_frequency_days)


class MoistureUpdate(BaseModel):
	level: Any


class ThresholdUpdate(BaseModel):
	value: Any


class PlantStatusRead(BaseModel):
	days_since_watered: int
	days_until_next_watering: int
	needs_watering: bool
	progress_percent: float
	urgency: WateringUrgencyEnum


class PlantRead(BaseModel):
	id: str
	name: str
	type: str
	last_watered: datetime
	watering_frequency: int
	image: str
	moisture_level: int
	moisture_threshold: int
	last_moisture_reading: datetime
	status: PlantStatusRead


class PlantListRead(BaseModel):
	generated_at: datetime
	items: list[PlantRead]


class PlantMutationRead(BaseModel):
	plant: PlantRead
	notification: Notification | None = None


class PlantDeleteRead(BaseModel):
	plant_id: str
	deleted: bool
	notification: Notification | None = None


class FrequencyOptionsRead(BaseModel):
	presets: list[int]
	custom: str = CUSTOM_FREQUENCY
	default: int = DEFAULT_FREQUENCY_DAYS
