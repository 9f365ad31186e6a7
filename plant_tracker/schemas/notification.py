"""Pydantic schemas for user notifications."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from plant_tracker.models.enums import NotificationVariantEnum


class Notification(BaseModel):
	title: str
	description: str
	variant: NotificationVariantEnum = NotificationVariantEnum.default
	created_at: datetime


class NotificationListRead(BaseModel):
	items: list[Notification]
