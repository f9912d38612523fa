"""Base task with the execution pipeline.

Every task built on `BaseTask` gets, in order: config merge, input
validation, retried execution, output validation and cost metering, with a
uniform `TaskResult` on every exit path.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from prism_intelligence.core.logging import LoggingSink, LogSink
from prism_intelligence.cost import CostMeter
from prism_intelligence.errors import SchemaValidationError
from prism_intelligence.models.catalog import DEFAULT_MODEL_ID
from prism_intelligence.retry import RetryOptions, get_error_message, with_retry
from prism_intelligence.tasks.schemas import as_validator, describe_validation_error
from prism_intelligence.tasks.types import (
    ConfigOverride,
    ExecutionResult,
    ResultMetadata,
    TaskConfig,
    TaskResult,
)

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseTask(ABC, Generic[InputT, OutputT]):
    """Abstract base class for tasks.

    Subclasses set `name`, `description`, `input_schema` and `output_schema`
    (pydantic models or validators), optionally `default_config`, and
    implement `execute_task`.
    """

    name: str
    description: str
    input_schema: Any
    output_schema: Any
    default_config: TaskConfig = TaskConfig(model=DEFAULT_MODEL_ID)

    def __init__(
        self,
        *,
        default_config: TaskConfig | None = None,
        cost_meter: CostMeter | None = None,
        sink: LogSink | None = None,
        retry_base_delay_ms: float = 100,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the task.

        Args:
            default_config: Replaces the class-level default config.
            cost_meter: Meter used to price token usage.
            sink: Log sink for retry, cost and outcome events.
            retry_base_delay_ms: Base delay for exponential backoff.
            sleep: Replacement for the backoff sleep (tests).
        """
        for attr in ("name", "description", "input_schema", "output_schema"):
            if not hasattr(self, attr):
                raise TypeError(f"{type(self).__name__} must define '{attr}'")

        self.sink: LogSink = sink or LoggingSink(logger)
        self.cost_meter = cost_meter or CostMeter(sink=self.sink)
        self.retry_base_delay_ms = retry_base_delay_ms
        self._sleep = sleep
        if default_config is not None:
            self.default_config = default_config
        self._input_validator = as_validator(self.input_schema)
        self._output_validator = as_validator(self.output_schema)

    def execute(
        self,
        input: object,
        config: ConfigOverride | None = None,
        *,
        cancel: threading.Event | None = None,
        timeout_s: float | None = None,
    ) -> TaskResult[OutputT]:
        """Run the task with validation, retry and cost tracking.

        Args:
            input: Raw input, validated against `input_schema`.
            config: Overrides merged over `default_config`.
            cancel: Event that aborts pending retries when set.
            timeout_s: Wall-clock budget for the whole execution.

        Returns:
            A successful result with validated data and metadata, or a failed
            result carrying the error message. Never raises.
        """
        start = time.perf_counter()
        model = self.default_config.model
        retries_used = 0

        try:
            final_config = self._resolve_config(config)
            model = final_config.model

            # 1. Validate input
            validated_input = self.validate_input(input)

            # 2. Execute with retry
            def on_retry(attempt: int, error: BaseException) -> None:
                nonlocal retries_used
                retries_used = attempt
                self.sink.log(
                    "debug",
                    f"Retry attempt {attempt} for task: {self.name}",
                    {"task": self.name, "attempt": attempt, "error": get_error_message(error)},
                )

            deadline = time.monotonic() + timeout_s if timeout_s is not None else None
            result: ExecutionResult[OutputT] = with_retry(
                lambda: self.execute_task(validated_input, final_config),
                RetryOptions(
                    max_retries=final_config.retries,
                    base_delay_ms=self.retry_base_delay_ms,
                    on_retry=on_retry,
                ),
                cancel=cancel,
                deadline=deadline,
                sleep=self._sleep,
            )

            # 3. Validate output
            validated_output = self.validate_output(result.data)

            # 4. Track cost
            cost = 0.0
            tokens_used = 0
            cost_tracking_failed = False
            if result.usage is not None:
                tokens_used = result.usage.resolved_total
                outcome = self.cost_meter.measure(result.usage, final_config.model, self.name)
                if not outcome.tracked and result.usage.has_tokens:
                    cost_tracking_failed = True
                    self.sink.log(
                        "warning",
                        f"Cost tracking failed for task: {self.name}",
                        {"task": self.name, "model": final_config.model},
                    )
                else:
                    cost = outcome.cost_usd

            # 5. Return success result
            duration_ms = _elapsed_ms(start)
            self.sink.log(
                "info",
                f"Task completed: {self.name}",
                {
                    "task": self.name,
                    "durationMs": duration_ms,
                    "tokensUsed": tokens_used,
                    "costUsd": cost,
                    "model": final_config.model,
                    "retries": retries_used,
                },
            )
            return TaskResult.ok(
                validated_output,
                ResultMetadata(
                    duration_ms=duration_ms,
                    model=final_config.model,
                    tokens_used=tokens_used,
                    cost_usd=cost,
                    retries=retries_used,
                    cost_tracking_failed=cost_tracking_failed or None,
                ),
            )
        except Exception as error:
            duration_ms = _elapsed_ms(start)
            error_message = get_error_message(error)
            self.sink.log(
                "error",
                f"Task failed: {self.name}",
                {"task": self.name, "error": error_message, "durationMs": duration_ms},
            )
            return TaskResult.fail(
                error_message,
                ResultMetadata(duration_ms=duration_ms, model=model),
            )

    def _resolve_config(self, config: ConfigOverride | None) -> TaskConfig:
        try:
            return self.default_config.merged(config)
        except ValidationError as e:
            raise SchemaValidationError(
                f"Invalid task config: {describe_validation_error(e)}"
            ) from e

    def validate_input(self, input: object) -> InputT:
        try:
            validated: InputT = self._input_validator.validate(input)
        except Exception as e:
            raise SchemaValidationError(f"Input validation failed: {e}") from e
        return validated

    def validate_output(self, output: object) -> OutputT:
        try:
            validated: OutputT = self._output_validator.validate(output)
        except Exception as e:
            raise SchemaValidationError(f"Output validation failed: {e}") from e
        return validated

    @abstractmethod
    def execute_task(self, input: InputT, config: TaskConfig) -> ExecutionResult[OutputT]:
        """Perform the underlying call. Implemented by subclasses.

        Raise on failure; transient errors are retried by the pipeline.
        """


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
