"""Provider-agnostic access to the LLM backends.

Providers are looked up by name in :data:`PROVIDERS`; supporting a new
backend means registering a :class:`ProviderSpec`, not adding a branch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from anthropic import Anthropic, APIError
from openai import OpenAI, OpenAIError

from vidnotes.config import Settings, get_settings
from vidnotes.errors import ConfigurationError, MissingCredentialError, ProviderError
from vidnotes.generation.registry import ModelProfile

logger = logging.getLogger(__name__)


class LLMProvider(Protocol):
    """A backend able to turn one prompt into text."""

    def generate(
        self,
        prompt: str,
        system_prompt: str,
        model_name: str,
        max_tokens: int,
        temperature: float,
    ) -> str: ...


class AnthropicProvider:
    """Claude via the Messages API."""

    def __init__(self, api_key: str, client: Anthropic | None = None) -> None:
        self.client = client or Anthropic(api_key=api_key)

    def generate(
        self,
        prompt: str,
        system_prompt: str,
        model_name: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        try:
            response = self.client.messages.create(
                model=model_name,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as exc:
            raise ProviderError(f"Anthropic request failed: {exc}", {"model": model_name}) from exc

        # We always request plain text; skip any non-text blocks.
        return "".join(block.text for block in response.content if block.type == "text")


class OpenAIProvider:
    """GPT models via Chat Completions."""

    def __init__(self, api_key: str, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(api_key=api_key)

    def generate(
        self,
        prompt: str,
        system_prompt: str,
        model_name: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model_name,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}", {"model": model_name}) from exc

        return response.choices[0].message.content or ""


@dataclass(frozen=True)
class ProviderSpec:
    """How to build a provider and which credential it needs."""

    credential_env: str  # name shown to the user
    credential_field: str  # attribute on Settings
    factory: Callable[[str], LLMProvider]


PROVIDERS: dict[str, ProviderSpec] = {
    "anthropic": ProviderSpec("ANTHROPIC_API_KEY", "anthropic_api_key", AnthropicProvider),
    "openai": ProviderSpec("OPENAI_API_KEY", "openai_api_key", OpenAIProvider),
}


class ModelGateway:
    """Route prompts to the provider named by a :class:`ModelProfile`.

    Every call is capped at ``settings.max_output_tokens`` regardless of the
    provider's own maximum.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        providers: dict[str, ProviderSpec] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.providers = PROVIDERS if providers is None else providers
        self._instances: dict[str, LLMProvider] = {}

    def _provider_for(self, profile: ModelProfile) -> LLMProvider:
        spec = self.providers.get(profile.provider)
        if spec is None:
            raise ConfigurationError(
                f"No provider registered for {profile.provider!r}. "
                f"Registered providers: {', '.join(self.providers)}"
            )

        if profile.provider not in self._instances:
            api_key = getattr(self.settings, spec.credential_field, "")
            if not api_key:
                raise MissingCredentialError(spec.credential_env, profile.provider)
            self._instances[profile.provider] = spec.factory(api_key)
        return self._instances[profile.provider]

    def generate(self, prompt: str, profile: ModelProfile, system_prompt: str) -> str:
        """Send *prompt* to the profile's provider and return the trimmed text.

        Raises:
            MissingCredentialError: The provider's credential is not configured.
            ProviderError: The backend call failed.
        """
        provider = self._provider_for(profile)
        logger.debug(
            "Generating with %s/%s (prompt %d chars)",
            profile.provider,
            profile.canonical_name,
            len(prompt),
        )
        text = provider.generate(
            prompt,
            system_prompt=system_prompt,
            model_name=profile.canonical_name,
            max_tokens=self.settings.max_output_tokens,
            temperature=self.settings.temperature,
        )
        text = text.strip()
        if not text:
            logger.warning("%s returned no content", profile.canonical_name)
        return text
