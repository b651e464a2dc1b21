"""Vision backend base class, data types, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from ..models import DEFAULT_STORAGE, FoodCategory, FoodItem, FoodUnit

if TYPE_CHECKING:
    from ..config import BellyConfig


@dataclass
class DetectedFood:
    name: str
    category: str  # FoodCategory value; unknown strings become Other on conversion
    shelf_life_days: int
    confidence: float  # 0.0 - 1.0
    storage: str = DEFAULT_STORAGE
    location: str = "Middle Shelf"
    quantity: float = 1.0
    unit: str = FoodUnit.PIECES.value

    def expiration_date(self, now: datetime | None = None) -> datetime:
        """Start of today plus the estimated shelf life."""
        today = (now or datetime.now()).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        return today + timedelta(days=self.shelf_life_days)

    @property
    def confidence_label(self) -> str:
        if self.confidence >= 0.8:
            return "High"
        if self.confidence >= 0.6:
            return "Medium"
        return "Low"

    def to_food_item(self, now: datetime | None = None) -> FoodItem:
        return FoodItem.create(
            self.name,
            self.expiration_date(now),
            category=FoodCategory.parse(self.category),
            quantity=self.quantity,
            unit=FoodUnit.parse(self.unit),
            storage=self.storage,
            zone_tag=self.location,
            now=now,
        )


class VisionBackend(ABC):
    """Abstract base for food detection from images."""

    @abstractmethod
    async def detect_foods(self, image_paths: list[str]) -> list[DetectedFood]:
        """Detect foods in one or more photos.

        Duplicates across images should be merged.
        """
        ...


def create_backend(config: BellyConfig) -> VisionBackend:
    """Create a vision backend based on configuration."""
    backend_name = config.vision.backend

    match backend_name:
        case "mock":
            from .mock import MockVisionBackend

            return MockVisionBackend()
        case "claude":
            from .claude import ClaudeVisionBackend

            return ClaudeVisionBackend(
                api_key=config.vision.claude.api_key,
                model=config.vision.claude.model,
            )
        case _:
            raise ValueError(
                f"Unknown vision backend: {backend_name!r} "
                f"(choose from mock / claude)"
            )
