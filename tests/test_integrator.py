"""Tests for merging segment notes into one document."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from vidnotes.config import Settings
from vidnotes.context import PipelineContext
from vidnotes.errors import IntegrationError, MissingCredentialError, ProviderError
from vidnotes.generation.integrator import Integrator
from vidnotes.generation.prompts import EDITOR_SYSTEM_PROMPT
from vidnotes.generation.registry import resolve_model
from vidnotes.pipeline_config import StyleOptions


def _integrator(gateway: MagicMock) -> Integrator:
    context = PipelineContext(
        settings=Settings(_env_file=None),  # type: ignore[call-arg]
        profile=resolve_model("gpt-4o"),
        gateway=gateway,
    )
    return Integrator(context)


class TestIntegrator:
    def test_single_note_returned_unchanged(self) -> None:
        gateway = MagicMock()
        assert _integrator(gateway).integrate(["only part"], StyleOptions()) == "only part"
        gateway.generate.assert_not_called()

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(IntegrationError, match="No segment notes"):
            _integrator(MagicMock()).integrate([], StyleOptions())

    def test_one_merge_call_with_editor_persona(self) -> None:
        gateway = MagicMock()
        gateway.generate.return_value = "merged"

        result = _integrator(gateway).integrate(["one", "two", "three"], StyleOptions())

        assert result == "merged"
        gateway.generate.assert_called_once()
        prompt, profile, system = gateway.generate.call_args.args
        assert "=== PART 3 OF 3 ===\nthree" in prompt
        assert profile.canonical_name == "gpt-4o"
        assert system == EDITOR_SYSTEM_PROMPT

    def test_provider_failure_becomes_integration_error(self) -> None:
        gateway = MagicMock()
        gateway.generate.side_effect = ProviderError("rate limited")

        with pytest.raises(IntegrationError) as exc_info:
            _integrator(gateway).integrate(["a", "b"], StyleOptions())

        assert exc_info.value.details == {"segments": 2}
        assert isinstance(exc_info.value.__cause__, ProviderError)

    def test_missing_credential_not_masked(self) -> None:
        gateway = MagicMock()
        gateway.generate.side_effect = MissingCredentialError("OPENAI_API_KEY", "openai")
        with pytest.raises(MissingCredentialError):
            _integrator(gateway).integrate(["a", "b"], StyleOptions())
