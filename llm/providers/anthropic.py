"""Anthropic provider implementation using the Messages API."""

from typing import Optional

import anthropic
from anthropic import AsyncAnthropic

from errors import TransportError
from llm.prompting import PROMPT_NAME
from llm.prompts.loader import get_prompt_manager
from llm.providers.base import SuggestionProvider
from logger import get_logger

logger = get_logger()


class AnthropicProvider(SuggestionProvider):
    """Anthropic implementation (Claude models)."""

    provider_id = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: Optional[float] = None,
        timeout: float = 60.0,
        client: Optional[AsyncAnthropic] = None,
    ):
        super().__init__(api_key, model, temperature=temperature, timeout=timeout)
        self.client = client or AsyncAnthropic(
            api_key=api_key, timeout=timeout, max_retries=0
        )
        parameters = get_prompt_manager().parameters(PROMPT_NAME)
        self.max_tokens = parameters.get("max_tokens", 1024)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        try:
            message = await self.client.messages.create(
                model=self.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error: {e}")
            raise TransportError(
                "Anthropic request failed", status=e.status_code, body=e.response.text
            ) from e
        except anthropic.APIConnectionError as e:
            logger.error(f"Anthropic connection error: {e}")
            raise TransportError(f"Anthropic request failed: {e}") from e

        # Only text blocks carry the answer
        parts = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        return "\n".join(parts)

    async def aclose(self) -> None:
        await self.client.close()
