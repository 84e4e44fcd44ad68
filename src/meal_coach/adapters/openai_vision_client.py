"""OpenAI Chat Completions client for food recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_coach.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_data_url: str | None,
        max_tokens: int,
        temperature: float,
    ) -> dict[str, object]:
        """Call the model in JSON mode and decode its answer."""
        user_content: list[dict[str, object]] = [{"type": "text", "text": user_prompt}]
        if image_data_url:
            user_content.append(
                {
                    "type": "image_url",
                    "image_url": {"url": image_data_url, "detail": "high"},
                }
            )

        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("OpenAI returned an empty response")
        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise RuntimeError("OpenAI returned a non-object JSON payload")
        return payload

    async def close(self) -> None:
        await self.client.close()
