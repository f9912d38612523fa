"""Abstract base class for model providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from prism_intelligence.cost import TokenUsage


@dataclass(frozen=True, slots=True)
class Completion:
    """Text returned by a provider together with its reported usage."""

    text: str
    model: str
    usage: TokenUsage | None = None


class LLMProvider(ABC):
    """Abstract base class for model providers.

    This interface allows pluggable backends (AI gateway, direct OpenAI, etc.)

    Implementations raise errors the retry policy can classify: HTTP errors
    keep their status code, connection failures surface as retryable
    `ProviderError`s.
    """

    @abstractmethod
    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> Completion:
        """Generate a chat completion from messages.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            model: Model id (canonical, alias or API identifier).
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.
            **kwargs: Additional provider-specific parameters.

        Returns:
            Generated completion with usage, when reported.
        """
        pass

    def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> Completion:
        """Generate a completion from a single user prompt."""
        return self.chat(
            [{"role": "user", "content": prompt}],
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )
