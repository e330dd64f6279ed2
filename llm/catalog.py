"""Static catalog of supported providers and model presets."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ModelPreset:
    name: str
    temperature: float


@dataclass(frozen=True)
class ProviderPreset:
    id: str
    name: str
    key_hint: str
    models: Tuple[ModelPreset, ...]


PROVIDERS: List[ProviderPreset] = [
    ProviderPreset(
        id="openai",
        name="OpenAI",
        key_hint="sk-...",
        models=(
            ModelPreset("gpt-5-mini", 1),
            ModelPreset("gpt-4.1-mini", 0),
            ModelPreset("gpt-4o-mini", 0),
            ModelPreset("o4-mini", 0),
            ModelPreset("o3-mini", 0),
        ),
    ),
    ProviderPreset(
        id="anthropic",
        name="Anthropic",
        key_hint="anth-...",
        models=(
            ModelPreset("claude-3-5-haiku-latest", 0),
            ModelPreset("claude-4-sonnet-latest", 0),
        ),
    ),
    ProviderPreset(
        id="google",
        name="Google (Gemini)",
        key_hint="AIza...",
        models=(ModelPreset("gemini-2.5-flash", 0),),
    ),
]

PROVIDER_IDS = tuple(p.id for p in PROVIDERS)

_BY_ID: Dict[str, ProviderPreset] = {p.id: p for p in PROVIDERS}


def get_provider_preset(provider_id: str) -> Optional[ProviderPreset]:
    return _BY_ID.get(provider_id)


def get_model_temperature(provider_id: str, model_name: str) -> float:
    """Look up the fixed temperature for a model; unknown models use 0."""
    preset = _BY_ID.get(provider_id)
    if preset is None:
        return 0
    for model in preset.models:
        if model.name == model_name:
            return model.temperature
    return 0
