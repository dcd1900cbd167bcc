"""Shared test fixtures."""

import random
from dataclasses import dataclass, field

import pytest

from meal_snap.config import Settings
from meal_snap.containers import AppContainer
from meal_snap.services.analysis import AnalysisConfig, AnalysisService
from meal_snap.services.manual_entry import ManualEntryService
from meal_snap.services.vision import VisionClient, VisionService


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {
            "foodItems": [
                {
                    "name": "Chicken",
                    "portion": "100g",
                    "calories": 165,
                    "protein": 31,
                    "carbs": 0,
                    "fat": 3.6,
                },
                {
                    "name": "Rice",
                    "portion": "1 cup cooked",
                    "calories": 216,
                    "protein": 5,
                    "carbohydrates": 45,
                    "fat": 1.8,
                },
            ]
        }
    )
    calls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append(image_data_url)
        return self.payload


@dataclass
class FailingVisionClient(VisionClient):
    """Fake vision client that always fails at the transport level."""

    async def extract(
        self,
        *,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        raise ConnectionError("connection refused")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        use_mock_data=False,
        openai_api_key="openai-key",
        fallback_to_mock_on_error=False,
    )


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def analysis_service(
    settings: Settings, vision_client: FakeVisionClient
) -> AnalysisService:
    return AnalysisService(
        config=settings.analysis_config(),
        vision_service=VisionService(client=vision_client),
        rng=random.Random(7),
    )


@pytest.fixture
def mock_analysis_service() -> AnalysisService:
    return AnalysisService(
        config=AnalysisConfig(use_mock_data=True),
        rng=random.Random(7),
    )


@pytest.fixture
def container(settings: Settings, analysis_service: AnalysisService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        manual_entry_service=ManualEntryService(),
        close_resources=close_resources,
    )
