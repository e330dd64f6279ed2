"""Factory for creating suggestion provider instances."""

from typing import Optional

from config import Config
from errors import ConfigurationError
from llm.catalog import PROVIDER_IDS
from llm.providers.base import SuggestionProvider
from logger import get_logger

logger = get_logger()


def get_suggestion_provider(
    config: Config,
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> SuggestionProvider:
    """Create a provider instance based on configuration.

    Args:
        config: Application configuration.
        provider_name: Optional override for config.llm_provider.
        model: Optional override for config.llm_model.

    Returns:
        SuggestionProvider bound to the selected model and credential.

    Raises:
        ConfigurationError: If the credential or model is missing, or the
            provider is unknown. Raised before any network activity.
    """
    provider_name = (provider_name or config.llm_provider or "").strip()
    model = (model or config.llm_model or "").strip()
    api_key = (config.llm_api_key or "").strip()

    if provider_name not in PROVIDER_IDS:
        raise ConfigurationError(f"Unknown LLM provider: {provider_name or '(none)'}")
    if not api_key:
        raise ConfigurationError("Missing model API key.")
    if not model:
        raise ConfigurationError("Please select a model or enter a custom model name.")

    logger.info(f"Initializing {provider_name} provider (model: {model})")

    if provider_name == "openai":
        from llm.providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model, timeout=config.llm_timeout)

    elif provider_name == "anthropic":
        from llm.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=api_key, model=model, timeout=config.llm_timeout)

    else:
        from llm.providers.google import GoogleProvider

        return GoogleProvider(api_key=api_key, model=model, timeout=config.llm_timeout)
