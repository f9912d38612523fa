"""Task type definitions: configuration, results and the task protocol."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from prism_intelligence.cost import TokenUsage

T = TypeVar("T")

ConfigOverride = Mapping[str, Any] | BaseModel

_JSON: TypeAdapter[Any] = TypeAdapter(Any)


class TaskConfig(BaseModel):
    """Execution configuration for a task.

    Call-site overrides are shallow-merged over a task's default config with
    `merged`; only fields the caller actually sets win.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    model: str
    temperature: float | None = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=500, gt=0)
    retries: int = Field(default=3, ge=0)
    prompt_version: str | None = None

    def merged(self, overrides: ConfigOverride | None) -> TaskConfig:
        if overrides is None:
            return self
        if isinstance(overrides, BaseModel):
            updates = overrides.model_dump(exclude_unset=True)
        else:
            updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return TaskConfig.model_validate({**self.model_dump(), **updates})


@dataclass(frozen=True, slots=True)
class ExecutionResult(Generic[T]):
    """Raw outcome of one successful underlying call."""

    data: T
    usage: TokenUsage | None = None


@dataclass(frozen=True, slots=True)
class ResultMetadata:
    duration_ms: float
    model: str
    tokens_used: int | None = None
    cost_usd: float | None = None
    retries: int | None = None
    cost_tracking_failed: bool | None = None

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"durationMs": self.duration_ms, "model": self.model}
        if self.tokens_used is not None:
            out["tokensUsed"] = self.tokens_used
        if self.cost_usd is not None:
            out["costUsd"] = self.cost_usd
        if self.retries is not None:
            out["retries"] = self.retries
        if self.cost_tracking_failed:
            out["costTrackingFailed"] = True
        return out


@dataclass(frozen=True, slots=True)
class TaskResult(Generic[T]):
    """Uniform success/failure envelope returned to callers.

    `success` implies `data` passed output validation; a failure never
    carries `data`.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    metadata: ResultMetadata | None = None

    @classmethod
    def ok(cls, data: T, metadata: ResultMetadata) -> TaskResult[T]:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, metadata: ResultMetadata | None = None) -> TaskResult[T]:
        return cls(success=False, error=error, metadata=metadata)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"success": self.success}
        if self.success:
            out["data"] = _JSON.dump_python(self.data, mode="json")
        if self.error is not None:
            out["error"] = self.error
        if self.metadata is not None:
            out["metadata"] = self.metadata.to_json()
        return out


@dataclass(frozen=True, slots=True)
class TaskInfo:
    name: str
    description: str


@dataclass(frozen=True, slots=True)
class TaskMetadata:
    """Introspection view of a registered task."""

    name: str
    description: str
    input_schema: dict[str, Any] | None
    output_schema: dict[str, Any] | None
    default_config: TaskConfig


class Task(Protocol):
    """A named, schema-validated unit of work."""

    name: str
    description: str
    input_schema: Any
    output_schema: Any
    default_config: TaskConfig

    def execute(
        self,
        input: object,
        config: ConfigOverride | None = None,
        *,
        cancel: threading.Event | None = None,
        timeout_s: float | None = None,
    ) -> TaskResult[Any]: ...
