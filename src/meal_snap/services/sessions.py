"""Session state for capture-based meal analysis."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from meal_snap.domain.errors import AnalysisError, ValidationError
from meal_snap.domain.nutrition import NutritionRecord
from meal_snap.services.analysis import AnalysisService
from meal_snap.services.manual_entry import ManualEntryService

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze the food image. Please try again or enter details manually."
)

_logger = logging.getLogger(__name__)


@dataclass
class MealSession:
    """View model for a single user session.

    Only the most recent capture may update the session: every capture or
    reset bumps `generation`, and results from older generations are dropped.
    """

    analysis_service: AnalysisService
    manual_entry_service: ManualEntryService
    captured_image: bytes | None = None
    record: NutritionRecord | None = None
    is_analyzing: bool = False
    show_manual_entry: bool = False
    error_message: str | None = None
    generation: int = 0

    async def capture(self, image: bytes) -> NutritionRecord | None:
        """Store a new image and analyze it, superseding any pending analysis."""
        self.captured_image = image
        return await self._analyze(image)

    async def retry(self) -> NutritionRecord | None:
        """Re-run analysis for the current image."""
        if self.captured_image is None:
            raise ValidationError("No captured image to analyze")
        return await self._analyze(self.captured_image)

    def open_manual_entry(self) -> None:
        self.show_manual_entry = True
        self.error_message = None

    def cancel_manual_entry(self) -> None:
        self.show_manual_entry = False

    def save_manual(self, entries: Sequence[Mapping[str, object]]) -> NutritionRecord:
        """Replace the record with one built from manual entries."""
        record = self.manual_entry_service.save(entries)
        self.record = record
        self.show_manual_entry = False
        self.error_message = None
        return record

    def reset(self) -> None:
        """Discard the image and record; pending results will be ignored."""
        self.generation += 1
        self.captured_image = None
        self.record = None
        self.is_analyzing = False
        self.show_manual_entry = False
        self.error_message = None

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    async def _analyze(self, image: bytes) -> NutritionRecord | None:
        self.generation += 1
        generation = self.generation
        self.is_analyzing = True
        self.error_message = None
        try:
            record = await self.analysis_service.request_analysis(image)
        except AnalysisError as exc:
            if not self.is_current(generation):
                _logger.info("Ignoring failure of superseded analysis: %s", exc.reason)
                return None
            self.error_message = ANALYSIS_FAILED_MESSAGE
            raise
        finally:
            if self.is_current(generation):
                self.is_analyzing = False
        if not self.is_current(generation):
            _logger.info("Ignoring result of superseded analysis")
            return None
        self.record = record
        return record
