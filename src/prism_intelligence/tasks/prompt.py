"""Model-backed prompt completion task."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, Field

from prism_intelligence.core.logging import LogSink
from prism_intelligence.cost import CostMeter
from prism_intelligence.llm.provider import LLMProvider
from prism_intelligence.tasks.base import BaseTask
from prism_intelligence.tasks.types import ExecutionResult, TaskConfig


class PromptInput(BaseModel):
    prompt: str = Field(min_length=1)
    system: str | None = None


class PromptOutput(BaseModel):
    text: str


class PromptTask(BaseTask[PromptInput, PromptOutput]):
    """Send a prompt (and optional system message) to a model."""

    name = "prompt-completion"
    description = "Complete a free-form prompt with a language model"
    input_schema = PromptInput
    output_schema = PromptOutput

    def __init__(
        self,
        provider: LLMProvider,
        *,
        default_config: TaskConfig | None = None,
        cost_meter: CostMeter | None = None,
        sink: LogSink | None = None,
        retry_base_delay_ms: float = 100,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        super().__init__(
            default_config=default_config,
            cost_meter=cost_meter,
            sink=sink,
            retry_base_delay_ms=retry_base_delay_ms,
            sleep=sleep,
        )
        self.provider = provider

    def execute_task(self, input: PromptInput, config: TaskConfig) -> ExecutionResult[PromptOutput]:
        messages: list[dict[str, str]] = []
        if input.system:
            messages.append({"role": "system", "content": input.system})
        messages.append({"role": "user", "content": input.prompt})

        completion = self.provider.chat(
            messages,
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
        return ExecutionResult(data=PromptOutput(text=completion.text), usage=completion.usage)
