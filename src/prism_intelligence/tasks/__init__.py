"""Task package initialization."""

from prism_intelligence.tasks.base import BaseTask
from prism_intelligence.tasks.example import ExampleTask
from prism_intelligence.tasks.prompt import PromptTask
from prism_intelligence.tasks.registry import TaskRegistry
from prism_intelligence.tasks.schemas import SchemaValidator, Validator, as_validator
from prism_intelligence.tasks.types import (
    ExecutionResult,
    ResultMetadata,
    Task,
    TaskConfig,
    TaskInfo,
    TaskMetadata,
    TaskResult,
)

__all__ = [
    "BaseTask",
    "ExampleTask",
    "ExecutionResult",
    "PromptTask",
    "ResultMetadata",
    "SchemaValidator",
    "Task",
    "TaskConfig",
    "TaskInfo",
    "TaskMetadata",
    "TaskRegistry",
    "TaskResult",
    "Validator",
    "as_validator",
]
