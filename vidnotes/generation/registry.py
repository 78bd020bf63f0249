"""Static model registry: model key -> provider and context-window profile."""

from __future__ import annotations

from dataclasses import dataclass

from vidnotes.errors import ConfigurationError


@dataclass(frozen=True)
class ModelProfile:
    """Provider, API model name, and input budget for one model key."""

    provider: str
    canonical_name: str
    context_window_tokens: int


MODELS: dict[str, ModelProfile] = {
    # Anthropic models
    "claude-3-opus": ModelProfile("anthropic", "claude-3-opus-20240229", 200_000),
    "claude-3.5-sonnet": ModelProfile("anthropic", "claude-3-5-sonnet-20240620", 200_000),
    "claude-3.7-sonnet": ModelProfile("anthropic", "claude-3-7-sonnet-20250219", 200_000),
    "claude-sonnet-4": ModelProfile("anthropic", "claude-sonnet-4-20250514", 200_000),
    # OpenAI models
    "gpt-4-turbo": ModelProfile("openai", "gpt-4-turbo", 128_000),
    "gpt-4o": ModelProfile("openai", "gpt-4o", 128_000),
}


def available_models() -> list[str]:
    """Registered model keys in registration order."""
    return list(MODELS)


def resolve_model(model_key: str) -> ModelProfile:
    """Look up *model_key* in the registry.

    Raises:
        ConfigurationError: If the key is not registered. The message lists
            every valid key.
    """
    profile = MODELS.get(model_key)
    if profile is None:
        raise ConfigurationError(
            f"Unsupported model: {model_key!r}. Available models: {', '.join(available_models())}"
        )
    return profile
