"""Example task.

A starter task demonstrating the pipeline without calling a model. Replace
`execute_task` with real work following the same pattern.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from prism_intelligence.cost import TokenUsage
from prism_intelligence.tasks.base import BaseTask
from prism_intelligence.tasks.types import ExecutionResult, TaskConfig


class ExampleInput(BaseModel):
    prompt: str = Field(min_length=1, description="Prompt is required")


class ExampleOutput(BaseModel):
    result: str


class ExampleTask(BaseTask[ExampleInput, ExampleOutput]):
    name = "example-task"
    description = "An example task that echoes its prompt"
    input_schema = ExampleInput
    output_schema = ExampleOutput

    default_config = TaskConfig(
        model="google/gemini-3-flash",
        temperature=0.7,
        max_tokens=500,
        retries=3,
    )

    def execute_task(
        self, input: ExampleInput, config: TaskConfig
    ) -> ExecutionResult[ExampleOutput]:
        return ExecutionResult(
            data=ExampleOutput(result=f"Processed: {input.prompt}"),
            usage=TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
        )
