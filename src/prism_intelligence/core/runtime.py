"""Runtime wiring for the task framework."""

import logging
import threading
from typing import Any

from prism_intelligence.core.config import IntelligenceConfig
from prism_intelligence.core.logging import LoggingSink, LogSink
from prism_intelligence.cost import CostMeter
from prism_intelligence.llm.factory import LLMFactory
from prism_intelligence.llm.provider import LLMProvider
from prism_intelligence.models.catalog import ModelCatalog, default_catalog, load_catalog
from prism_intelligence.tasks.base import BaseTask
from prism_intelligence.tasks.example import ExampleTask
from prism_intelligence.tasks.prompt import PromptTask
from prism_intelligence.tasks.registry import TaskRegistry
from prism_intelligence.tasks.types import ConfigOverride, TaskConfig, TaskResult

logger = logging.getLogger(__name__)


class IntelligenceRuntime:
    """Owns the catalog, cost meter, provider and task registry.

    Build one at process start, register tasks, then hand `execute` (or the
    registry) to callers.
    """

    def __init__(
        self,
        config: IntelligenceConfig | None = None,
        *,
        sink: LogSink | None = None,
        provider: LLMProvider | None = None,
        catalog: ModelCatalog | None = None,
        setup_logging: bool = True,
    ) -> None:
        """Initialize the runtime.

        Args:
            config: Configuration object. If None, loads from environment.
            sink: Log sink shared by all components.
            provider: Model provider; created from `config.llm` on first use if None.
            catalog: Model table; loaded from `config.pricing_table_path` if None.
            setup_logging: Configure root logging from `config`.
        """
        self.config = config or IntelligenceConfig()
        if setup_logging:
            self.config.setup_logging()

        logger.info("Initializing task runtime")

        self.sink: LogSink = sink or LoggingSink()
        if catalog is not None:
            self.catalog = catalog
        elif self.config.pricing_table_path is not None:
            self.catalog = load_catalog(self.config.pricing_table_path)
        else:
            self.catalog = default_catalog()
        self.cost_meter = CostMeter(self.catalog, self.sink)
        self.registry = TaskRegistry(self.sink)
        self._provider = provider
        self._provider_lock = threading.Lock()

        logger.info(f"Task runtime initialized with {len(self.catalog)} models")

    @property
    def provider(self) -> LLMProvider:
        with self._provider_lock:
            if self._provider is None:
                self._provider = LLMFactory.create(self.config.llm, self.catalog)
            return self._provider

    def default_task_config(self) -> TaskConfig:
        defaults = self.config.tasks
        return TaskConfig(
            model=defaults.model,
            temperature=defaults.temperature,
            max_tokens=defaults.max_tokens,
            retries=defaults.retries,
        )

    def task_options(self) -> dict[str, Any]:
        """Keyword arguments wiring a `BaseTask` into this runtime."""
        return {
            "cost_meter": self.cost_meter,
            "sink": self.sink,
            "retry_base_delay_ms": self.config.tasks.retry_base_delay_ms,
        }

    def register(self, task: BaseTask[Any, Any]) -> None:
        self.registry.register(task)

    def register_defaults(self) -> None:
        """Register the built-in tasks.

        The prompt task is only registered when a provider was injected or
        provider credentials are configured.
        """
        self.registry.register(ExampleTask(**self.task_options()))

        if self._provider is not None or self.config.llm.is_configured:
            self.registry.register(
                PromptTask(
                    self.provider,
                    default_config=self.default_task_config(),
                    **self.task_options(),
                )
            )
        else:
            logger.info("Provider credentials not configured; skipping prompt-completion task")

    def execute(
        self,
        name: str,
        input: object,
        config: ConfigOverride | None = None,
        *,
        cancel: threading.Event | None = None,
        timeout_s: float | None = None,
    ) -> TaskResult[Any]:
        """Execute a registered task, applying the configured default timeout."""
        return self.registry.execute(
            name,
            input,
            config,
            cancel=cancel,
            timeout_s=timeout_s if timeout_s is not None else self.config.tasks.timeout_s,
        )
