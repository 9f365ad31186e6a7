"""Enum types shared by the domain models and API schemas.

These are separate from the StrEnums in plant_tracker/config.py —
config enums validate settings, domain enums type plant state.
"""

from enum import StrEnum


class WateringUrgencyEnum(StrEnum):
    """Progress-bar state shown next to each plant."""

    ok = "ok"
    soon = "soon"
    due = "due"


class NotificationVariantEnum(StrEnum):
    """Presentation variant of a user notification."""

    default = "default"
    destructive = "destructive"


class FrequencyKindEnum(StrEnum):
    """Tag of a watering-frequency selection."""

    resolved = "resolved"
    pending = "pending"
