"""Claude API vision backend for food detection."""

from __future__ import annotations

import base64
import json
import mimetypes
from pathlib import Path

from ..config import DEFAULT_CLAUDE_MODEL
from ..models import FoodCategory, StorageLocation
from . import DetectedFood, VisionBackend

_PROMPT = f"""\
These photos show the inside of a fridge or pantry.
List every food item you can see.

Reply with JSON only, in this format:
[
  {{"name": "food name", "category": "category", "shelf_life_days": 7,
    "storage": "storage", "confidence": 0.0-1.0}}
]

category must be one of: {", ".join(c.value for c in FoodCategory)}
storage must be one of: {", ".join(s.value for s in StorageLocation)}
shelf_life_days is your estimate of how many days the item stays good.

Use confidence 0.8-1.0 when the item is clearly visible,
0.5-0.8 when somewhat uncertain, and below 0.5 when barely visible.
"""


def _image_block(path: str) -> dict:
    media_type = mimetypes.guess_type(path)[0] or "image/jpeg"
    encoded = base64.standard_b64encode(Path(path).read_bytes()).decode()
    return {
        "type": "image",
        "source": {"type": "base64", "media_type": media_type, "data": encoded},
    }


class ClaudeVisionBackend(VisionBackend):
    """Detect foods using Claude's vision capability."""

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_CLAUDE_MODEL,
        max_tokens: int = 4096,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens

    def _client(self):
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None
        return anthropic.AsyncAnthropic(api_key=self._api_key)

    async def detect_foods(self, image_paths: list[str]) -> list[DetectedFood]:
        client = self._client()
        content = [_image_block(p) for p in image_paths]
        content.append({"type": "text", "text": _PROMPT})

        response = await client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            messages=[{"role": "user", "content": content}],
        )
        return _parse_response(response.content[0].text)


def _parse_response(text: str) -> list[DetectedFood]:
    """Parse the JSON array from Claude's response."""
    # Strip markdown fences if present
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [line for line in lines[1:] if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)

    items = json.loads(cleaned)
    seen: dict[str, DetectedFood] = {}
    for item in items:
        name = item["name"]
        detected = DetectedFood(
            name=name,
            category=FoodCategory.parse(item.get("category")).value,
            shelf_life_days=int(item.get("shelf_life_days", 7)),
            confidence=float(item["confidence"]),
            storage=item.get("storage") or StorageLocation.REFRIGERATOR.value,
        )
        # Keep the higher-confidence detection per name
        if name not in seen or detected.confidence > seen[name].confidence:
            seen[name] = detected
    return list(seen.values())
