"""FastAPI application entrypoint — lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plant_tracker.config import Settings, get_settings
from plant_tracker.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from plant_tracker.routes import notifications, plants
from plant_tracker.services.moisture_sensor import SimulatedMoistureSensor
from plant_tracker.services.notifications import Notifier
from plant_tracker.services.persistence import build_storage
from plant_tracker.services.plant_tracker import PlantTracker

logger = structlog.get_logger("plant_tracker")

VERSION = "0.1.0"


def build_tracker(settings: Settings) -> PlantTracker:
    """Hydrate the tracker from the configured storage backend."""
    return PlantTracker.hydrate(
        build_storage(settings),
        Notifier(history_size=settings.notification_history_size),
        SimulatedMoistureSensor(seed=settings.moisture_sensor_seed),
        default_image=settings.default_image,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Load the plant collection from storage (once)

    Shutdown:
      1. Log only; every mutation has already been written to storage
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "Plant tracker starting",
        log_level=settings.log_level,
        storage_backend=settings.storage_backend.value,
    )

    try:
        app.state.tracker = build_tracker(settings)
    except Exception as exc:
        logger.exception("startup failure", error=str(exc))
        raise

    yield

    logger.info("Plant tracker shutting down")


app = FastAPI(
    title="Plant Tracker API",
    description=(
        "Houseplant watering tracker — schedules, simulated soil-moisture "
        "readings and derived watering status."
    ),
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "plant-tracker",
        "version": VERSION,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(plants.router, prefix="/api/v1")
app.include_router(notifications.router, prefix="/api/v1")
