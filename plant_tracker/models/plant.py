"""Plant domain model — the single persisted entity.

The stored record uses the camelCase field names of the original browser
storage format::

    {
        "id": "5f0c...",
        "name": "Monstera",
        "type": "Houseplant",
        "lastWatered": "2024-05-01T08:30:00Z",
        "wateringFrequency": 7,
        "image": "/placeholder.svg?height=100&width=100",
        "moistureLevel": 50,
        "moistureThreshold": 30,
        "lastMoistureReading": "2024-05-01T08:30:00Z"
    }

Python code always uses the snake_case attribute names.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from plant_tracker.models.enums import FrequencyKindEnum

MOISTURE_MIN = 0
MOISTURE_MAX = 100

PRESET_FREQUENCIES: tuple[int, ...] = (1, 2, 3, 5, 7, 10, 14, 30)


@dataclass(slots=True, eq=False)
class PlantValidationError(ValueError):
    """Rejected add/edit input; carries the text of the rejection notification."""

    title: str
    description: str

    def __str__(self) -> str:
        return self.description


def clamp_percent(value: object, default: int) -> int:
    """Coerce ``value`` to an integer percentage in [0, 100].

    Non-numeric input falls back to ``default`` instead of raising.
    """
    if isinstance(value, bool):
        return default
    try:
        number = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default
    return max(MOISTURE_MIN, min(MOISTURE_MAX, number))


@dataclass(frozen=True, slots=True)
class FrequencySelection:
    """Watering interval as chosen in a form: resolved to days, or pending.

    A pending selection is the "Custom..." option before a number of days
    has been entered; it must be resolved before a plant is accepted.
    """

    kind: FrequencyKindEnum
    days: int | None = None

    @classmethod
    def of(cls, days: int) -> FrequencySelection:
        if days < 1:
            raise PlantValidationError(
                "Invalid watering frequency",
                "Please enter a valid number of days",
            )
        return cls(FrequencyKindEnum.resolved, days)

    @classmethod
    def pending(cls) -> FrequencySelection:
        return cls(FrequencyKindEnum.pending)

    @property
    def is_resolved(self) -> bool:
        return self.kind == FrequencyKindEnum.resolved

    def resolve(self) -> int:
        if not self.is_resolved or self.days is None:
            raise PlantValidationError(
                "Invalid watering frequency",
                "Please enter a valid number of days",
            )
        return self.days


class Plant(BaseModel):
    """Immutable plant record; mutations produce copies via ``model_copy``."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(min_length=1)
    name: str
    type: str
    last_watered: datetime
    watering_frequency: int = Field(ge=1)
    image: str
    moisture_level: int = Field(ge=MOISTURE_MIN, le=MOISTURE_MAX)
    moisture_threshold: int = Field(ge=MOISTURE_MIN, le=MOISTURE_MAX)
    last_moisture_reading: datetime

    @field_validator("last_watered", "last_moisture_reading")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def __repr__(self) -> str:
        return f"<Plant id={self.id!r} name={self.name!r} every={self.watering_frequency}d>"
