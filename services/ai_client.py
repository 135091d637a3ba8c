"""Client for the generative text and image APIs.

Text goes to Gemini's ``generateContent`` REST endpoint; images go to a
configurable endpoint that returns a URL for a prompt. Any upstream
failure surfaces as `AIServiceError` so callers can fall back to static
content.
"""

from typing import Optional

import httpx

from core import config
from core.exceptions import AIServiceError
from core.logger import get_logger

logger = get_logger("services.ai_client")


class GenerativeAIClient:
    """Thin synchronous wrapper around the text and image generation APIs."""

    def __init__(
        self,
        api_key: str = config.GEMINI_API_KEY,
        model: str = config.GEMINI_MODEL,
        api_base: str = config.GEMINI_API_BASE,
        image_api_url: str = config.IMAGE_API_URL,
        image_api_key: str = config.IMAGE_API_KEY,
        timeout: float = config.AI_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.image_api_url = image_api_url
        self.image_api_key = image_api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)

    def generate_text(self, prompt: str) -> str:
        """Send `prompt` to the text model and return the raw text reply.

        Raises:
            AIServiceError: On missing credentials, HTTP errors or an
                unexpected response shape.
        """
        if not self.api_key:
            raise AIServiceError("Generative text API key is not configured", service="text")

        url = f"{self.api_base}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            with self._client() as client:
                r = client.post(url, params={"key": self.api_key}, json=payload)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Text generation request failed: %s", exc)
            raise AIServiceError(f"Text generation failed: {exc}", service="text") from exc

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError) as exc:
            raise AIServiceError("Unexpected text generation response", service="text") from exc
        logger.debug("Text generation returned %s chars", len(text))
        return text

    def generate_image(self, prompt: str, label: str) -> str:
        """Generate an image for `prompt` and return its URL.

        Raises:
            AIServiceError: If the endpoint is not configured, fails, or
                returns no URL.
        """
        if not self.image_api_url:
            raise AIServiceError("Image generation endpoint is not configured", service="image")

        headers = {"Authorization": f"Bearer {self.image_api_key}"} if self.image_api_key else {}
        try:
            with self._client() as client:
                r = client.post(self.image_api_url, headers=headers, json={"prompt": prompt, "label": label})
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Image generation for %s failed: %s", label, exc)
            raise AIServiceError(f"Image generation failed: {exc}", service="image") from exc

        url = None
        if isinstance(data, dict):
            url = data.get("url")
            items = data.get("data")
            # OpenAI-style {"data": [{"url": ...}]}
            if not url and isinstance(items, list) and items and isinstance(items[0], dict):
                url = items[0].get("url")
        if not url:
            raise AIServiceError("Image generation returned no URL", service="image")
        return url


_client: Optional[GenerativeAIClient] = None


def get_ai_client() -> GenerativeAIClient:
    """FastAPI dependency returning the process-wide AI client."""
    global _client
    if _client is None:
        _client = GenerativeAIClient()
    return _client
