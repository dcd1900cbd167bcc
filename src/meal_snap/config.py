"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_snap.services.analysis import AnalysisConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    use_mock_data: bool = False
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_max_output_tokens: int = 1000
    fallback_to_mock_on_error: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def analysis_config(self) -> AnalysisConfig:
        """Build the explicit analysis configuration from settings."""
        return AnalysisConfig(
            use_mock_data=self.use_mock_data,
            vision_api_key=parse_api_key(self.openai_api_key),
            fallback_to_mock_on_error=self.fallback_to_mock_on_error,
        )


def parse_api_key(raw: str | None) -> str | None:
    """Treat blank API keys from env files as missing."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
