"""Simulated soil-moisture sensor.

There is no device behind this: readings come from a pseudo-random
generator. Pass a seed for reproducible sequences.
"""

from __future__ import annotations

import random

from plant_tracker.models.plant import MOISTURE_MAX, MOISTURE_MIN


class SimulatedMoistureSensor:
	def __init__(self, seed: int | None = None):
		self._rng = random.Random(seed)

	def read(self) -> int:
		return self._rng.randint(MOISTURE_MIN, MOISTURE_MAX)
