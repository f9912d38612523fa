"""Factory for creating model providers."""

import logging

from prism_intelligence.core.config import LLMConfig
from prism_intelligence.llm.openai_provider import OpenAIProvider
from prism_intelligence.llm.provider import LLMProvider
from prism_intelligence.models.catalog import ModelCatalog

logger = logging.getLogger(__name__)


class LLMFactory:
    """Factory for creating provider instances."""

    @staticmethod
    def create(config: LLMConfig, catalog: ModelCatalog | None = None) -> LLMProvider:
        """Create a provider based on configuration.

        Args:
            config: Provider configuration.
            catalog: Model table used for id resolution.

        Returns:
            Configured provider instance.

        Raises:
            ValueError: If the configuration lacks credentials.
        """
        mode = "gateway" if config.gateway_enabled else "direct"
        logger.info(f"Creating model provider in {mode} mode")
        return OpenAIProvider(config, catalog=catalog)
