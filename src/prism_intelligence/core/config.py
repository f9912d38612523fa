"""Core configuration for the task framework."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prism_intelligence.core.logging import configure_logging


class LLMConfig(BaseSettings):
    """Configuration for model providers."""

    # Gateway settings (OpenAI-compatible endpoint accepting "provider/model" ids)
    gateway_enabled: bool = Field(
        default=True,
        description="Route model calls through the AI gateway",
    )
    gateway_api_key: str | None = Field(
        default=None,
        description="AI gateway API key",
    )
    gateway_base_url: str = Field(
        default="https://ai-gateway.vercel.sh/v1",
        description="AI gateway base URL",
    )

    # Direct OpenAI settings (used when the gateway is disabled)
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Override for the OpenAI API base URL",
    )

    request_timeout_s: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single provider request",
    )

    model_config = SettingsConfigDict(
        env_prefix="INTELLIGENCE_LLM_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Whether credentials for the selected routing mode are present."""
        if self.gateway_enabled:
            return bool(self.gateway_api_key)
        return bool(self.openai_api_key)


class TaskDefaults(BaseSettings):
    """Framework-wide defaults applied to tasks that do not override them."""

    model: str = Field(
        default="google/gemini-3-flash",
        description="Default model id",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Default sampling temperature",
    )
    max_tokens: int = Field(
        default=500,
        gt=0,
        description="Default completion token limit",
    )
    retries: int = Field(
        default=3,
        ge=0,
        description="Default retry budget for transient failures",
    )
    retry_base_delay_ms: float = Field(
        default=100.0,
        ge=0.0,
        description="Base delay for exponential backoff",
    )
    timeout_s: float | None = Field(
        default=None,
        gt=0,
        description="Wall-clock budget for one task execution (None = unbounded)",
    )

    model_config = SettingsConfigDict(
        env_prefix="INTELLIGENCE_TASK_",
        env_file=".env",
        extra="ignore",
    )


class IntelligenceConfig(BaseSettings):
    """Main configuration for the task framework."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    pricing_table_path: Path | None = Field(
        default=None,
        description="Model/pricing table JSON (None = bundled table)",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="Provider configuration",
    )
    tasks: TaskDefaults = Field(
        default_factory=TaskDefaults,
        description="Task execution defaults",
    )

    model_config = SettingsConfigDict(
        env_prefix="INTELLIGENCE_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(self.log_level, self.log_format)

        if self.debug:
            logging.getLogger("prism_intelligence").setLevel(logging.DEBUG)
