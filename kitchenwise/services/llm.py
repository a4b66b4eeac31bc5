"""LLM service for an OpenAI-compatible chat and image API."""

import json
import logging
from typing import Any

import httpx

from kitchenwise.config import get_settings

logger = logging.getLogger(__name__)


def extract_json_text(raw: str) -> str:
    """Strip markdown fences and any prose around the outermost JSON value."""
    text = raw.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    starts = [i for i in (text.find("["), text.find("{")) if i >= 0]
    if not starts:
        return text
    start = min(starts)
    closer = "]" if text[start] == "[" else "}"
    end = text.rfind(closer)
    if end > start:
        return text[start : end + 1]
    return text


class LLMService:
    """Service for calling the text and image generation endpoints."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.base_url = self.settings.openai_base_url.rstrip("/")
        self.model = self.settings.recipe_model
        self.image_model = self.settings.image_model
        self.timeout = self.settings.llm_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.settings.openai_api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self.settings.openai_api_key or ''}"},
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        """Generate a chat completion and return the message text."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": max_tokens,
                },
            )
            response.raise_for_status()
            data = response.json()
            content = data["choices"][0]["message"]["content"]
            logger.info(f"LLM response received: {len(content)} characters")
            return content

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
    ) -> Any:
        """Generate a response and parse it as JSON."""
        result = None
        try:
            result = await self.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                temperature=temperature,
            )
            return json.loads(extract_json_text(result))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            logger.warning(f"Raw response: {result if result is not None else 'N/A'}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling text generation API: {e}")
            raise

    async def generate_image(
        self,
        prompt: str,
        size: str = "1024x1024",
        quality: str = "standard",
        style: str = "natural",
    ) -> str | None:
        """Generate an image and return its URL, or None when none was returned."""
        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/images/generations",
                json={
                    "model": self.image_model,
                    "prompt": prompt,
                    "n": 1,
                    "size": size,
                    "quality": quality,
                    "style": style,
                    "response_format": "url",
                },
            )
            response.raise_for_status()
            data = response.json().get("data") or []
            if not data:
                return None
            return data[0].get("url")
