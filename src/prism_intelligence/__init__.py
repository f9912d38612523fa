"""Prism Intelligence.

Task execution framework for model-backed operations:
- a registry of named tasks executed by name
- a pipeline that validates input, retries transient failures with
  exponential backoff, validates output and meters cost
- a model/pricing catalog used for cost accounting
"""

__version__ = "0.1.0"

from prism_intelligence.core.config import IntelligenceConfig
from prism_intelligence.core.runtime import IntelligenceRuntime
from prism_intelligence.cost import CostMeter, TokenUsage, format_cost, sum_costs
from prism_intelligence.errors import (
    DuplicateTaskError,
    IntelligenceError,
    ProviderError,
    UnknownModelError,
)
from prism_intelligence.models.catalog import ModelCatalog, default_catalog, load_catalog
from prism_intelligence.retry import RetryOptions, is_retryable_error, with_retry
from prism_intelligence.tasks import BaseTask, ExecutionResult, TaskConfig, TaskRegistry, TaskResult

__all__ = [
    "__version__",
    "BaseTask",
    "CostMeter",
    "DuplicateTaskError",
    "ExecutionResult",
    "IntelligenceConfig",
    "IntelligenceError",
    "IntelligenceRuntime",
    "ModelCatalog",
    "ProviderError",
    "RetryOptions",
    "TaskConfig",
    "TaskRegistry",
    "TaskResult",
    "TokenUsage",
    "UnknownModelError",
    "default_catalog",
    "format_cost",
    "is_retryable_error",
    "load_catalog",
    "sum_costs",
    "with_retry",
]
