"""Domain model registry.

Application code can import every domain type from here::

    from plant_tracker.models import Plant, FrequencySelection, ...
"""

# ── Enums ───────────────────────────────────────────────────────────────────
from plant_tracker.models.enums import (
    FrequencyKindEnum,
    NotificationVariantEnum,
    WateringUrgencyEnum,
)

# ── Plant ───────────────────────────────────────────────────────────────────
from plant_tracker.models.plant import (
    MOISTURE_MAX,
    MOISTURE_MIN,
    PRESET_FREQUENCIES,
    FrequencySelection,
    Plant,
    PlantValidationError,
    clamp_percent,
)

__all__ = [
    "MOISTURE_MAX",
    "MOISTURE_MIN",
    "PRESET_FREQUENCIES",
    # Enums
    "FrequencyKindEnum",
    # Plant
    "FrequencySelection",
    "NotificationVariantEnum",
    "Plant",
    "PlantValidationError",
    "WateringUrgencyEnum",
    "clamp_percent",
]
