"""Canned food detection for development and demos."""

from __future__ import annotations

import random

from . import DetectedFood, VisionBackend

SCENARIOS: list[list[DetectedFood]] = [
    [DetectedFood("Organic Spinach", "Produce", 5, 0.92)],
    [DetectedFood("Red Bell Pepper", "Produce", 7, 0.88)],
    [DetectedFood("Greek Yogurt", "Dairy", 14, 0.94)],
    [DetectedFood("Chicken Breast", "Meat", 5, 0.89)],
    [
        DetectedFood("Fresh Spinach", "Produce", 5, 0.92),
        DetectedFood("Cherry Tomatoes", "Produce", 7, 0.88),
    ],
    [
        DetectedFood("Milk", "Dairy", 10, 0.96),
        DetectedFood("Eggs", "Dairy", 21, 0.91),
        DetectedFood("Butter", "Dairy", 30, 0.87),
    ],
    [
        DetectedFood("Organic Bananas", "Produce", 7, 0.95),
        DetectedFood("Strawberries", "Produce", 5, 0.93),
    ],
    [
        DetectedFood("Apples", "Produce", 14, 0.78),
        DetectedFood("Unknown Item", "Other", 7, 0.45),
    ],
    [],
]


class MockVisionBackend(VisionBackend):
    """Return one of a fixed set of detection scenarios.

    Pass a seeded ``random.Random`` or a fixed ``scenario`` index to make
    the result deterministic.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        scenario: int | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._scenario = scenario

    async def detect_foods(self, image_paths: list[str]) -> list[DetectedFood]:
        if self._scenario is not None:
            chosen = SCENARIOS[self._scenario % len(SCENARIOS)]
        else:
            chosen = self._rng.choice(SCENARIOS)
        return [
            DetectedFood(
                name=d.name,
                category=d.category,
                shelf_life_days=d.shelf_life_days,
                confidence=d.confidence,
                storage=d.storage,
                location=d.location,
                quantity=d.quantity,
                unit=d.unit,
            )
            for d in chosen
        ]
