"""OpenAI Responses API client for vision extraction."""

import json
import logging
from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_snap.domain.errors import MalformedResponseError
from meal_snap.services.vision import VisionClient

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str = "gpt-4o"
    max_output_tokens: int = 1000

    @classmethod
    def create(
        cls, api_key: str, model: str = "gpt-4o", max_output_tokens: int = 1000
    ) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            max_output_tokens=max_output_tokens,
        )

    async def extract(
        self,
        *,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_items",
                    "strict": True,
                    "schema": schema,
                }
            },
            max_output_tokens=self.max_output_tokens,
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise MalformedResponseError(details="OpenAI returned an empty response")
        _logger.info("OpenAI response received: %s...", output_text[:100])
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(details=str(exc)) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
