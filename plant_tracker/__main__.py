"""Run the plant tracker API with uvicorn: ``python -m plant_tracker``."""

import uvicorn

from plant_tracker.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "plant_tracker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
