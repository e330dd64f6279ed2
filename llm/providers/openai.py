"""OpenAI provider implementation using the chat completions API."""

from typing import Optional

import openai
from openai import AsyncOpenAI

from errors import TransportError
from llm.prompting import PROMPT_NAME
from llm.prompts.loader import get_prompt_manager
from llm.providers.base import SuggestionProvider
from logger import get_logger

logger = get_logger()


class OpenAIProvider(SuggestionProvider):
    """OpenAI implementation (gpt-* and o-series chat models)."""

    provider_id = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: Optional[float] = None,
        timeout: float = 60.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        super().__init__(api_key, model, temperature=temperature, timeout=timeout)
        # No automatic retries: a failed call surfaces as a TransportError
        self.client = client or AsyncOpenAI(
            api_key=api_key, timeout=timeout, max_retries=0
        )
        parameters = get_prompt_manager().parameters(PROMPT_NAME)
        self.max_tokens = parameters.get("max_tokens", 1024)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_completion_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: {e}")
            raise TransportError(
                "OpenAI request failed", status=e.status_code, body=e.response.text
            ) from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI connection error: {e}")
            raise TransportError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            logger.warning("OpenAI returned no choices")
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self.client.close()
