"""OpenAI-compatible provider implementation.

With the gateway enabled, requests go to an OpenAI-compatible AI gateway
that accepts ``provider/model`` ids for every provider. With the gateway
disabled, only OpenAI models can be called, directly against the OpenAI API.
"""

import logging
from typing import Any

import openai
from openai import OpenAI

from prism_intelligence.core.config import LLMConfig
from prism_intelligence.cost import TokenUsage
from prism_intelligence.errors import ProviderError
from prism_intelligence.llm.provider import Completion, LLMProvider
from prism_intelligence.models.catalog import ModelCatalog, default_catalog

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Provider backed by the `openai` SDK."""

    def __init__(
        self,
        config: LLMConfig,
        catalog: ModelCatalog | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Provider configuration.
            catalog: Model table used to map legacy ids to API identifiers.
            client: Preconfigured client (tests); built from `config` if None.

        Raises:
            ValueError: If the credentials for the selected mode are missing.
        """
        self.config = config
        self.catalog = catalog or default_catalog()

        if client is None:
            # Retries are owned by the task pipeline, so the SDK must not retry too.
            if config.gateway_enabled:
                if not config.gateway_api_key:
                    raise ValueError("AI gateway API key is required")
                client = OpenAI(
                    api_key=config.gateway_api_key,
                    base_url=config.gateway_base_url,
                    timeout=config.request_timeout_s,
                    max_retries=0,
                )
            else:
                if not config.openai_api_key:
                    raise ValueError("OpenAI API key is required")
                client = OpenAI(
                    api_key=config.openai_api_key,
                    base_url=config.openai_base_url,
                    timeout=config.request_timeout_s,
                    max_retries=0,
                )
        self.client = client

        mode = "gateway" if config.gateway_enabled else "direct"
        logger.info(f"OpenAI provider initialized ({mode} mode)")

    def resolve_api_model(self, model_id: str) -> str:
        """Map a model id to the identifier the endpoint expects.

        Raises:
            ValueError: For unknown legacy ids, or non-OpenAI models in direct mode.
        """
        if "/" in model_id:
            provider, api_identifier = model_id.split("/", 1)
            if self.config.gateway_enabled:
                return model_id
        else:
            resolved = self.catalog.get_model_config(model_id)
            if resolved is None:
                raise ValueError(f"Unknown model: {model_id}")
            provider, api_identifier = resolved.provider, resolved.api_identifier
            if self.config.gateway_enabled:
                return f"{provider}/{api_identifier}"

        if provider != "openai":
            raise ValueError(
                f"Direct provider access for {provider} is not supported. "
                "Enable the AI gateway or choose an OpenAI model."
            )
        return api_identifier

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> Completion:
        """Generate a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            model: Model id (canonical, alias or API identifier).
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.
            **kwargs: Additional OpenAI-specific parameters.

        Returns:
            Generated completion with usage.

        Raises:
            ProviderError: On connection failures (retryable).
            openai.APIStatusError: On HTTP errors; `status_code` drives retries.
        """
        api_model = self.resolve_api_model(model)
        params: dict[str, Any] = dict(kwargs)
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if temperature is not None:
            params["temperature"] = temperature

        logger.debug(f"Generating chat completion with {len(messages)} messages on {api_model}")

        try:
            response = self.client.chat.completions.create(
                model=api_model,
                messages=messages,  # type: ignore
                **params,
            )
        except openai.APIConnectionError as e:
            raise ProviderError(f"Connection to model provider failed: {e}", is_retryable=True) from e

        content = response.choices[0].message.content or ""
        logger.debug(f"Generated {len(content)} characters")

        usage = None
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        return Completion(text=content, model=model, usage=usage)
