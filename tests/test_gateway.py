"""Tests for the model registry and provider gateway (no external API keys required)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from anthropic import APIConnectionError

from vidnotes.config import Settings
from vidnotes.errors import ConfigurationError, MissingCredentialError, ProviderError
from vidnotes.generation.gateway import (
    AnthropicProvider,
    ModelGateway,
    OpenAIProvider,
    ProviderSpec,
)
from vidnotes.generation.registry import MODELS, ModelProfile, available_models, resolve_model


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"anthropic_api_key": "test-key"}
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def _gateway(fake: MagicMock, settings: Settings | None = None) -> ModelGateway:
    spec = ProviderSpec("ANTHROPIC_API_KEY", "anthropic_api_key", lambda key: fake)
    return ModelGateway(settings or _settings(), providers={"anthropic": spec})


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_resolve_known_model(self) -> None:
        profile = resolve_model("claude-sonnet-4")
        assert profile.provider == "anthropic"
        assert profile.canonical_name == "claude-sonnet-4-20250514"
        assert profile.context_window_tokens == 200_000

    def test_openai_models_registered(self) -> None:
        assert resolve_model("gpt-4o").provider == "openai"
        assert resolve_model("gpt-4-turbo").context_window_tokens == 128_000

    def test_unknown_model_lists_every_key(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_model("unknown-model")
        message = str(exc_info.value)
        assert "unknown-model" in message
        for key in MODELS:
            assert key in message

    def test_available_models_in_registration_order(self) -> None:
        assert available_models() == list(MODELS)
        assert available_models()[0] == "claude-3-opus"


# ---------------------------------------------------------------------------
# Gateway routing
# ---------------------------------------------------------------------------


class TestModelGateway:
    def test_routes_to_provider_with_output_cap(self) -> None:
        fake = MagicMock()
        fake.generate.return_value = "  # Notes\n\nBody  \n"
        gateway = _gateway(fake, _settings(max_output_tokens=1234, temperature=0.1))

        text = gateway.generate("prompt", resolve_model("claude-sonnet-4"), "system")

        assert text == "# Notes\n\nBody"
        fake.generate.assert_called_once_with(
            "prompt",
            system_prompt="system",
            model_name="claude-sonnet-4-20250514",
            max_tokens=1234,
            temperature=0.1,
        )

    def test_provider_instance_cached(self) -> None:
        factory = MagicMock(return_value=MagicMock(generate=MagicMock(return_value="ok")))
        spec = ProviderSpec("ANTHROPIC_API_KEY", "anthropic_api_key", factory)
        gateway = ModelGateway(_settings(), providers={"anthropic": spec})
        profile = resolve_model("claude-3-opus")

        gateway.generate("a", profile, "s")
        gateway.generate("b", profile, "s")

        factory.assert_called_once_with("test-key")

    def test_missing_credential(self) -> None:
        fake = MagicMock()
        gateway = _gateway(fake, _settings(anthropic_api_key=""))
        with pytest.raises(MissingCredentialError, match="ANTHROPIC_API_KEY"):
            gateway.generate("prompt", resolve_model("claude-sonnet-4"), "system")
        fake.generate.assert_not_called()

    def test_openai_credential_checked_separately(self) -> None:
        gateway = ModelGateway(_settings(openai_api_key=""))
        with pytest.raises(MissingCredentialError) as exc_info:
            gateway.generate("prompt", resolve_model("gpt-4o"), "system")
        assert exc_info.value.credential == "OPENAI_API_KEY"
        assert exc_info.value.provider == "openai"

    def test_unregistered_provider(self) -> None:
        gateway = _gateway(MagicMock())
        with pytest.raises(ConfigurationError, match="No provider registered"):
            gateway.generate("prompt", ModelProfile("mistral", "mistral-large", 32_000), "system")

    def test_provider_error_propagates(self) -> None:
        fake = MagicMock()
        fake.generate.side_effect = ProviderError("boom")
        gateway = _gateway(fake)
        with pytest.raises(ProviderError, match="boom"):
            gateway.generate("prompt", resolve_model("claude-sonnet-4"), "system")


# ---------------------------------------------------------------------------
# Provider adapters (SDK clients mocked)
# ---------------------------------------------------------------------------


class TestAnthropicProvider:
    def test_joins_text_blocks(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="Hello "),
                SimpleNamespace(type="tool_use", text="ignored"),
                SimpleNamespace(type="text", text="world"),
            ]
        )
        provider = AnthropicProvider("key", client=client)

        result = provider.generate("p", "sys", "claude-sonnet-4-20250514", 4000, 0.3)

        assert result == "Hello world"
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == "sys"
        assert kwargs["max_tokens"] == 4000
        assert kwargs["messages"] == [{"role": "user", "content": "p"}]

    def test_api_error_wrapped(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = APIConnectionError(request=MagicMock())
        provider = AnthropicProvider("key", client=client)
        with pytest.raises(ProviderError, match="Anthropic request failed"):
            provider.generate("p", "sys", "claude-sonnet-4-20250514", 4000, 0.3)


class TestOpenAIProvider:
    def test_returns_message_content(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="notes"))]
        )
        provider = OpenAIProvider("key", client=client)

        assert provider.generate("p", "sys", "gpt-4o", 4000, 0.3) == "notes"
        messages = client.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "sys"}

    def test_none_content_becomes_empty(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None))]
        )
        assert OpenAIProvider("key", client=client).generate("p", "s", "gpt-4o", 10, 0.0) == ""
