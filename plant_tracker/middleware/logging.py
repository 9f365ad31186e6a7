"""Structured logging for the tracker: request IDs plus the plant a request targets."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from plant_tracker.config import LogFormat, Settings, get_settings

_configured = False


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Route structlog through stdlib ``logging`` once per process.

	Events keep the name they were requested under (``plant_tracker.tracker``,
	``plant_tracker.persistence`` ...) in the ``logger`` key.
	"""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(level=log_level, format="%(message)s")

	renderer: Any
	if settings.log_format == LogFormat.json:
		renderer = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer()

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.stdlib.add_logger_name,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.stdlib.LoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def plant_context(request: Request) -> dict[str, str]:
	"""Resolve the ``plant_id`` path parameter before routing runs.

	Returns an empty dict for requests that do not address a single plant.
	"""
	for route in request.app.router.routes:
		match, child_scope = route.matches(request.scope)
		if match == Match.FULL:
			plant_id = child_scope.get("path_params", {}).get("plant_id")
			return {"plant_id": plant_id} if plant_id else {}
	return {}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind request and plant IDs into contextvars and log each request.

	The bindings are made before the handler runs, so tracker events such as
	``plant_watered`` or ``plant_rejected`` carry the same ``request_id`` and
	``plant_id`` as the ``http_request`` line.
	"""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id
		context = plant_context(request)

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id, **context)

		logger = structlog.get_logger("plant_tracker.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception:
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=request.url.path,
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
			)
			raise

		response.headers["x-request-id"] = request_id
		logger.info(
			"http_request",
			method=request.method,
			path=request.url.path,
			status_code=response.status_code,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
		)
		return response
