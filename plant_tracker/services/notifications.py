"""Fire-and-forget user notifications with a bounded recent-history buffer."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from plant_tracker.models.enums import NotificationVariantEnum
from plant_tracker.schemas.notification import Notification

logger = structlog.get_logger("plant_tracker.notifications")


def _utcnow() -> datetime:
	return datetime.now(UTC)


class Notifier:
	def __init__(self, history_size: int = 50, clock: Callable[[], datetime] = _utcnow):
		self._history: deque[Notification] = deque(maxlen=max(1, history_size))
		self._clock = clock

	def notify(
		self,
		title: str,
		description: str,
		variant: NotificationVariantEnum = NotificationVariantEnum.default,
	) -> Notification:
		notification = Notification(
			title=title,
			description=description,
			variant=variant,
			created_at=self._clock(),
		)
		self._history.append(notification)
		logger.info(
			"notification",
			title=title,
			description=description,
			variant=variant.value,
		)
		return notification

	def reject(self, title: str, description: str) -> Notification:
		return self.notify(title, description, NotificationVariantEnum.destructive)

	def recent(self) -> list[Notification]:
		return list(reversed(self._history))
