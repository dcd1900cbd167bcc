"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_snap.adapters.openai_vision_client import OpenAIVisionClient
from meal_snap.config import Settings
from meal_snap.domain.errors import ConfigurationError
from meal_snap.services.analysis import AnalysisService
from meal_snap.services.manual_entry import ManualEntryService
from meal_snap.services.sessions import MealSession
from meal_snap.services.vision import VisionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    manual_entry_service: ManualEntryService
    close_resources: Callable[[], Awaitable[None]]

    def new_session(self) -> MealSession:
        """Create a fresh view model for one user session."""
        return MealSession(
            analysis_service=self.analysis_service,
            manual_entry_service=self.manual_entry_service,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    analysis_config = resolved_settings.analysis_config()
    openai_client: OpenAIVisionClient | None = None
    vision_service: VisionService | None = None
    if not analysis_config.use_mock_data:
        try:
            api_key = analysis_config.require_api_key()
        except ConfigurationError:
            _logger.warning("OPENAI_API_KEY is not set, food analysis uses mock data")
        else:
            openai_client = OpenAIVisionClient.create(
                api_key,
                model=resolved_settings.openai_model,
                max_output_tokens=resolved_settings.openai_max_output_tokens,
            )
            vision_service = VisionService(client=openai_client)

    analysis_service = AnalysisService(
        config=analysis_config,
        vision_service=vision_service,
    )

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        manual_entry_service=ManualEntryService(),
        close_resources=close_resources,
    )
