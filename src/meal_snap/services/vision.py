"""Vision extraction service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError as SchemaValidationError

from meal_snap.domain.errors import (
    AnalysisError,
    EmptyAnalysisError,
    MalformedResponseError,
)
from meal_snap.domain.vision import VisionExtract

_logger = logging.getLogger(__name__)

_AMOUNT_SCHEMA: dict[str, object] = {"type": "number", "minimum": 0}

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodItems": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "portion": {"type": "string"},
                    "calories": _AMOUNT_SCHEMA,
                    "protein": _AMOUNT_SCHEMA,
                    "carbs": _AMOUNT_SCHEMA,
                    "fat": _AMOUNT_SCHEMA,
                },
                "required": ["name", "portion", "calories", "protein", "carbs", "fat"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foodItems"],
    "additionalProperties": False,
}

VISION_PROMPT = (
    "You are a nutrition expert that analyzes food images. "
    "Identify all visible food items and estimate for each one: "
    "the food name, the portion size (e.g. '1 cup', '100g', '1 medium'), "
    "calories, and protein, carbohydrates and fat in grams. "
    "Use realistic values based on standard food databases and provide them "
    "as numbers. If you can't identify a food with certainty, make your best guess."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(
        self,
        *,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: VisionClient

    async def extract(self, image_bytes: bytes) -> list[dict[str, object]]:
        """Return raw food item candidates identified in an image."""
        data_url = _to_data_url(image_bytes)
        try:
            raw = await self.client.extract(
                image_data_url=data_url,
                schema=VISION_SCHEMA,
                prompt=VISION_PROMPT,
            )
        except AnalysisError:
            raise
        except Exception as exc:
            _logger.exception("Vision request failed")
            raise AnalysisError("transport", details=str(exc)) from exc
        return decode_vision_payload(raw)


def decode_vision_payload(raw: object) -> list[dict[str, object]]:
    """Validate a vision payload and return its items as raw candidates.

    Raises MalformedResponseError when the payload lacks a `foodItems` list and
    EmptyAnalysisError when the list holds no named food.
    """
    try:
        extract = VisionExtract.model_validate(raw)
    except SchemaValidationError as exc:
        _logger.error("Unexpected vision response format: %s", raw)
        raise MalformedResponseError(details=str(exc)) from exc
    items = [item.to_raw() for item in extract.food_items]
    if not any(isinstance(item["name"], str) and item["name"].strip() for item in items):
        raise EmptyAnalysisError(details="No food items identified in the image")
    return items


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
