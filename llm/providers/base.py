"""Base provider interface for LLM implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from cancellation import CancellationToken
from llm.catalog import get_model_temperature
from llm.parsing import parse_suggestions
from models.suggestion import CategorySuggestion
from logger import get_logger

logger = get_logger()


class SuggestionProvider(ABC):
    """Abstract base class for model backends.

    A provider is bound to one model, its fixed temperature and a credential
    when it is created; it is selected once per run by the factory. Each
    backend only implements ``complete``; the shared ``generate`` wraps it
    with the cancellation checkpoints and response parsing.
    """

    provider_id: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: Optional[float] = None,
        timeout: float = 60.0,
    ):
        """Initialize the provider.

        Args:
            api_key: Credential for the backend.
            model: Model identifier.
            temperature: Override for the catalog temperature (mainly for tests).
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key
        self.model = model
        self.temperature = (
            temperature
            if temperature is not None
            else get_model_temperature(self.provider_id, model)
        )
        self.timeout = timeout

    async def generate(
        self,
        system_prompt: str,
        transaction_prompt: str,
        token: CancellationToken,
    ) -> List[CategorySuggestion]:
        """Ask the backend for suggestions for one transaction.

        Args:
            system_prompt: Prompt listing the canonical categories.
            transaction_prompt: Prompt describing the transaction.
            token: Run cancellation token, checked before and after the call.

        Returns:
            Parsed (not yet validated) suggestions, in model order.

        Raises:
            OperationCancelled: If the token is set at either checkpoint.
            TransportError: If the backend call fails.
        """
        token.raise_if_cancelled()

        logger.debug(f"Requesting suggestions from {self.provider_id}:{self.model}")
        text = await self.complete(system_prompt, transaction_prompt)

        token.raise_if_cancelled()

        suggestions = parse_suggestions(text)
        logger.debug(f"Parsed {len(suggestions)} suggestion(s) from model response")
        return suggestions

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one chat turn to the backend and return its text content.

        Multi-part content must be joined with newlines.

        Raises:
            TransportError: On non-success responses or transport failures.
        """
        pass

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""
        return None
