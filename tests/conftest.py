"""Test configuration and fixtures."""

from __future__ import annotations

import pytest

from prism_intelligence.core.config import IntelligenceConfig, LLMConfig, TaskDefaults
from prism_intelligence.core.logging import RecordingSink
from prism_intelligence.cost import CostMeter
from prism_intelligence.models.catalog import ModelCatalog, load_catalog
from prism_intelligence.tasks.registry import TaskRegistry


class FakeSleep:
    """Records backoff delays instead of sleeping."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


@pytest.fixture
def sink() -> RecordingSink:
    """Provide a sink that keeps log events in memory."""
    return RecordingSink()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def catalog() -> ModelCatalog:
    """Provide the bundled model table."""
    return load_catalog()


@pytest.fixture
def cost_meter(catalog: ModelCatalog, sink: RecordingSink) -> CostMeter:
    return CostMeter(catalog, sink)


@pytest.fixture
def registry(sink: RecordingSink) -> TaskRegistry:
    """Provide a fresh registry per test."""
    return TaskRegistry(sink)


@pytest.fixture
def llm_config() -> LLMConfig:
    """Provide a test provider configuration."""
    return LLMConfig(
        gateway_enabled=True,
        gateway_api_key="test-gateway-key",
        openai_api_key="test-key",
    )


@pytest.fixture
def intelligence_config(llm_config: LLMConfig) -> IntelligenceConfig:
    """Provide a test framework configuration."""
    return IntelligenceConfig(
        log_level="DEBUG",
        debug=True,
        llm=llm_config,
        tasks=TaskDefaults(retry_base_delay_ms=0),
    )
