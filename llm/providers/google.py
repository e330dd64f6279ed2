"""Google Gemini provider implementation over the generateContent REST API."""

from typing import Any, Optional

import httpx

from errors import TransportError
from llm.prompting import PROMPT_NAME
from llm.prompts.loader import get_prompt_manager
from llm.providers.base import SuggestionProvider
from logger import get_logger

logger = get_logger()

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GoogleProvider(SuggestionProvider):
    """Gemini implementation using plain HTTPS calls."""

    provider_id = "google"

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: Optional[float] = None,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key, model, temperature=temperature, timeout=timeout)
        self.http_client = http_client or httpx.AsyncClient(
            base_url=GEMINI_BASE_URL, timeout=timeout
        )
        parameters = get_prompt_manager().parameters(PROMPT_NAME)
        self.max_tokens = parameters.get("max_tokens", 1024)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            },
        }
        try:
            resp = await self.http_client.post(
                f"/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"Gemini connection error: {e}")
            raise TransportError(f"Gemini request failed: {e}") from e

        if resp.is_error:
            logger.error(f"Gemini API error: HTTP {resp.status_code}")
            raise TransportError(
                "Gemini request failed", status=resp.status_code, body=resp.text
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(
                "Gemini returned invalid JSON", status=resp.status_code, body=resp.text
            ) from e
        return _response_text(data)

    async def aclose(self) -> None:
        await self.http_client.aclose()


def _response_text(data: Any) -> str:
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates or not isinstance(candidates, list):
        logger.warning("Gemini returned no candidates")
        return ""
    candidate = candidates[0] if isinstance(candidates[0], dict) else {}
    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "\n".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )
