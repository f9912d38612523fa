"""Unit tests for runtime wiring."""

import json
import threading
from pathlib import Path
from unittest.mock import Mock

import pytest

from prism_intelligence.core.config import IntelligenceConfig, LLMConfig, TaskDefaults
from prism_intelligence.core.logging import RecordingSink
from prism_intelligence.core.runtime import IntelligenceRuntime
from prism_intelligence.cost import TokenUsage
from prism_intelligence.llm.openai_provider import OpenAIProvider
from prism_intelligence.llm.provider import Completion, LLMProvider


@pytest.fixture
def provider() -> Mock:
    mock = Mock(spec=LLMProvider)
    mock.chat.return_value = Completion(
        text="ok", model="google/gemini-3-flash", usage=TokenUsage(prompt_tokens=1)
    )
    return mock


def test_register_defaults_with_injected_provider(
    intelligence_config: IntelligenceConfig, sink: RecordingSink, provider: Mock
) -> None:
    runtime = IntelligenceRuntime(
        intelligence_config, sink=sink, provider=provider, setup_logging=False
    )

    runtime.register_defaults()

    assert [t.name for t in runtime.registry.list_tasks()] == [
        "example-task",
        "prompt-completion",
    ]
    result = runtime.execute("prompt-completion", {"prompt": "ping"})
    assert result.success is True
    assert result.data is not None
    assert result.data.text == "ok"


def test_register_defaults_without_credentials(sink: RecordingSink) -> None:
    config = IntelligenceConfig(llm=LLMConfig(gateway_enabled=True, gateway_api_key=None))
    runtime = IntelligenceRuntime(config, sink=sink, setup_logging=False)

    runtime.register_defaults()

    assert runtime.registry.has("example-task")
    assert not runtime.registry.has("prompt-completion")


def test_provider_is_created_lazily_from_config(intelligence_config: IntelligenceConfig) -> None:
    runtime = IntelligenceRuntime(intelligence_config, setup_logging=False)

    assert runtime._provider is None
    provider = runtime.provider
    assert isinstance(provider, OpenAIProvider)
    assert runtime.provider is provider


def test_execute_example_task(intelligence_config: IntelligenceConfig, sink: RecordingSink) -> None:
    runtime = IntelligenceRuntime(intelligence_config, sink=sink, setup_logging=False)
    runtime.register_defaults()

    result = runtime.execute("example-task", {"prompt": "hello"})

    assert result.success is True
    assert result.to_json()["data"] == {"result": "Processed: hello"}
    assert any(m.startswith("AI generation") for m in sink.messages("info"))


def test_execute_unknown_task(intelligence_config: IntelligenceConfig) -> None:
    runtime = IntelligenceRuntime(intelligence_config, setup_logging=False)

    result = runtime.execute("nope", {})

    assert result.success is False
    assert result.error == 'Task "nope" not found'


def test_default_task_config_follows_settings(sink: RecordingSink) -> None:
    config = IntelligenceConfig(
        tasks=TaskDefaults(model="openai/gpt-5-nano", retries=1, max_tokens=32)
    )
    runtime = IntelligenceRuntime(config, sink=sink, setup_logging=False)

    task_config = runtime.default_task_config()

    assert task_config.model == "openai/gpt-5-nano"
    assert task_config.retries == 1
    assert task_config.max_tokens == 32


def test_cancel_is_forwarded(intelligence_config: IntelligenceConfig, sink: RecordingSink) -> None:
    runtime = IntelligenceRuntime(intelligence_config, sink=sink, setup_logging=False)
    runtime.register_defaults()
    cancel = threading.Event()
    cancel.set()

    result = runtime.execute("example-task", {"prompt": "hello"}, cancel=cancel)

    assert result.success is False
    assert result.error == "Task cancelled"


def test_pricing_table_path_is_loaded(tmp_path: Path, sink: RecordingSink) -> None:
    table = tmp_path / "models.json"
    table.write_text(
        json.dumps(
            {
                "models": {
                    "openai/house": {
                        "name": "House",
                        "provider": "openai",
                        "apiIdentifier": "house",
                        "pricing": {"inputCostPer1MTokens": 1.0, "outputCostPer1MTokens": 1.0},
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    config = IntelligenceConfig(pricing_table_path=table)

    runtime = IntelligenceRuntime(config, sink=sink, setup_logging=False)

    assert runtime.catalog.model_ids == ["openai/house"]
    assert runtime.cost_meter.catalog is runtime.catalog
