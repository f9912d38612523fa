"""Exception hierarchy for the task framework.

Configuration problems (duplicate registration, unknown models, malformed
pricing tables) raise. Runtime failures inside a task execution are caught by
the pipeline and reported as failed `TaskResult` values.
"""

from __future__ import annotations


class IntelligenceError(Exception):
    """Base class for all framework errors."""


class DuplicateTaskError(IntelligenceError):
    """Raised when a task name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Task "{name}" is already registered')
        self.name = name


class UnknownModelError(IntelligenceError):
    """Raised when a model id cannot be resolved against the pricing table."""

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Unknown model: {model_id}")
        self.model_id = model_id


class CatalogError(IntelligenceError):
    """Raised when a model/pricing table cannot be loaded."""


class SchemaValidationError(IntelligenceError):
    """Raised by validators when a value does not match its schema."""


class ProviderError(IntelligenceError):
    """An error raised by a model provider.

    `is_retryable` is an explicit hint from the provider layer that the
    failure is transient.
    """

    def __init__(
        self,
        message: str,
        *,
        is_retryable: bool = False,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.is_retryable = is_retryable
        self.status = status


class TaskCancelledError(IntelligenceError):
    """Raised when a cancellation signal is observed between attempts."""


class TaskTimeoutError(IntelligenceError):
    """Raised when the execution deadline passes before the task completes."""
