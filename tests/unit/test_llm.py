"""Unit tests for model providers."""

from types import SimpleNamespace
from unittest.mock import Mock

import httpx
import openai
import pytest

from prism_intelligence.core.config import LLMConfig
from prism_intelligence.errors import ProviderError
from prism_intelligence.llm.factory import LLMFactory
from prism_intelligence.llm.openai_provider import OpenAIProvider
from prism_intelligence.models.catalog import ModelCatalog
from prism_intelligence.retry import is_retryable_error


def _response(content: str | None = "Hello", usage: bool = True) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=(
            SimpleNamespace(prompt_tokens=12, completion_tokens=8, total_tokens=20)
            if usage
            else None
        ),
    )


@pytest.fixture
def client() -> Mock:
    mock = Mock()
    mock.chat.completions.create.return_value = _response()
    return mock


@pytest.fixture
def gateway_provider(llm_config: LLMConfig, catalog: ModelCatalog, client: Mock) -> OpenAIProvider:
    return OpenAIProvider(llm_config, catalog=catalog, client=client)


@pytest.fixture
def direct_provider(catalog: ModelCatalog, client: Mock) -> OpenAIProvider:
    config = LLMConfig(gateway_enabled=False, openai_api_key="test-key")
    return OpenAIProvider(config, catalog=catalog, client=client)


def test_gateway_passes_qualified_ids_through(gateway_provider: OpenAIProvider) -> None:
    assert gateway_provider.resolve_api_model("google/gemini-3-flash") == "google/gemini-3-flash"
    assert gateway_provider.resolve_api_model("acme/anything") == "acme/anything"


def test_gateway_qualifies_legacy_ids(gateway_provider: OpenAIProvider) -> None:
    assert gateway_provider.resolve_api_model("gpt-5-nano") == "openai/gpt-5-nano"
    assert gateway_provider.resolve_api_model("gemini-flash") == "google/gemini-3-flash"

    with pytest.raises(ValueError, match="Unknown model: mystery"):
        gateway_provider.resolve_api_model("mystery")


def test_direct_mode_only_serves_openai(direct_provider: OpenAIProvider) -> None:
    assert direct_provider.resolve_api_model("openai/gpt-5-mini") == "gpt-5-mini"
    assert direct_provider.resolve_api_model("gpt5-nano") == "gpt-5-nano"

    with pytest.raises(ValueError, match="Direct provider access for google is not supported"):
        direct_provider.resolve_api_model("google/gemini-3-flash")


def test_chat_sends_request_and_extracts_usage(
    gateway_provider: OpenAIProvider, client: Mock
) -> None:
    completion = gateway_provider.chat(
        [{"role": "user", "content": "Hi"}],
        model="openai/gpt-5-nano",
        max_tokens=50,
        temperature=0.2,
    )

    assert completion.text == "Hello"
    assert completion.model == "openai/gpt-5-nano"
    assert completion.usage is not None
    assert completion.usage.prompt_tokens == 12
    assert completion.usage.resolved_total == 20

    client.chat.completions.create.assert_called_once_with(
        model="openai/gpt-5-nano",
        messages=[{"role": "user", "content": "Hi"}],
        max_tokens=50,
        temperature=0.2,
    )


def test_chat_omits_unset_parameters(gateway_provider: OpenAIProvider, client: Mock) -> None:
    client.chat.completions.create.return_value = _response(content=None, usage=False)

    completion = gateway_provider.generate("Hi", model="google/gemini-3-flash")

    assert completion.text == ""
    assert completion.usage is None
    kwargs = client.chat.completions.create.call_args.kwargs
    assert "max_tokens" not in kwargs
    assert "temperature" not in kwargs


def test_connection_errors_become_retryable(gateway_provider: OpenAIProvider, client: Mock) -> None:
    request = httpx.Request("POST", "https://ai-gateway.vercel.sh/v1/chat/completions")
    client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(ProviderError) as exc_info:
        gateway_provider.generate("Hi", model="openai/gpt-5-nano")

    assert exc_info.value.is_retryable is True
    assert is_retryable_error(exc_info.value)


def test_status_errors_keep_their_status(gateway_provider: OpenAIProvider, client: Mock) -> None:
    request = httpx.Request("POST", "https://ai-gateway.vercel.sh/v1/chat/completions")
    rate_limited = openai.RateLimitError(
        "slow down", response=httpx.Response(429, request=request), body=None
    )
    unauthorized = openai.AuthenticationError(
        "bad key", response=httpx.Response(401, request=request), body=None
    )
    client.chat.completions.create.side_effect = rate_limited

    with pytest.raises(openai.RateLimitError) as exc_info:
        gateway_provider.generate("Hi", model="openai/gpt-5-nano")

    assert is_retryable_error(exc_info.value)
    assert not is_retryable_error(unauthorized)


def test_missing_credentials_are_rejected(catalog: ModelCatalog) -> None:
    with pytest.raises(ValueError, match="AI gateway API key is required"):
        OpenAIProvider(LLMConfig(gateway_enabled=True, gateway_api_key=None), catalog=catalog)

    with pytest.raises(ValueError, match="OpenAI API key is required"):
        OpenAIProvider(LLMConfig(gateway_enabled=False, openai_api_key=None), catalog=catalog)


def test_factory_builds_openai_provider(llm_config: LLMConfig, catalog: ModelCatalog) -> None:
    provider = LLMFactory.create(llm_config, catalog)

    assert isinstance(provider, OpenAIProvider)
    assert provider.client.max_retries == 0
