"""Capture analysis orchestration."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from meal_snap.domain.errors import AnalysisError, ConfigurationError
from meal_snap.domain.nutrition import NutritionRecord
from meal_snap.services.mock import MOCK_FOOD_POOL, build_mock_record
from meal_snap.services.nutrition import RawFoodItem, aggregate
from meal_snap.services.vision import VisionService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisConfig:
    """Explicit configuration for choosing the record producer."""

    use_mock_data: bool = False
    vision_api_key: str | None = None
    fallback_to_mock_on_error: bool = False

    def require_api_key(self) -> str:
        """Return the vision API key or raise ConfigurationError."""
        if not self.vision_api_key:
            raise ConfigurationError("Vision API key is not configured")
        return self.vision_api_key


@dataclass
class AnalysisService:
    """Turns a captured image into a nutrition record."""

    config: AnalysisConfig
    vision_service: VisionService | None = None
    mock_pool: Sequence[RawFoodItem] = MOCK_FOOD_POOL
    rng: random.Random = field(default_factory=random.Random)

    async def request_analysis(self, image: bytes) -> NutritionRecord:
        """Analyze an image with the vision collaborator or the mock producer."""
        if not image:
            raise AnalysisError("missing_image", message="Image data is required")
        if self.config.use_mock_data:
            _logger.info("Using mock data for food analysis")
            return self._mock_record()
        try:
            self.config.require_api_key()
        except ConfigurationError:
            _logger.warning("Vision API key not found, returning mock data")
            return self._mock_record()
        if self.vision_service is None:
            _logger.warning("Vision service is not wired, returning mock data")
            return self._mock_record()

        try:
            raw_items = await self.vision_service.extract(image)
        except AnalysisError as exc:
            if exc.reason == "transport" and self.config.fallback_to_mock_on_error:
                _logger.warning("Vision request failed, returning mock data")
                return self._mock_record()
            raise
        record = aggregate(raw_items)
        _logger.info("Food analysis complete. Identified: %s", ", ".join(record.foods))
        return record

    def _mock_record(self) -> NutritionRecord:
        return build_mock_record(self.mock_pool, rng=self.rng)
