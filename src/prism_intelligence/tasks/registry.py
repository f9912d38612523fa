"""Task registry: name-indexed dispatch for tasks.

The registry does no retrying, validation or metering. Its only behavioral
job is to turn "task not found" and "task implementation raised" into the
same failed `TaskResult` shape the pipeline produces.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any

from prism_intelligence.core.logging import LoggingSink, LogSink
from prism_intelligence.errors import DuplicateTaskError
from prism_intelligence.retry import get_error_message
from prism_intelligence.tasks.schemas import json_schema_of
from prism_intelligence.tasks.types import (
    ConfigOverride,
    Task,
    TaskInfo,
    TaskMetadata,
    TaskResult,
)

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Registry of tasks, executable by name.

    Registration is serialized by a lock and publishes a fresh read-only
    snapshot, so lookups and executions never lock.
    """

    def __init__(self, sink: LogSink | None = None) -> None:
        self.sink: LogSink = sink or LoggingSink(logger)
        self._lock = threading.Lock()
        self._tasks: MappingProxyType[str, Task] = MappingProxyType({})

    def register(self, task: Task) -> None:
        """Register a task under its name.

        Raises:
            DuplicateTaskError: If a task with the same name is registered.
        """
        with self._lock:
            if task.name in self._tasks:
                raise DuplicateTaskError(task.name)
            self._tasks = MappingProxyType({**self._tasks, task.name: task})
        self.sink.log("debug", f"Task registered: {task.name}", {"task": task.name})

    def get(self, name: str) -> Task | None:
        return self._tasks.get(name)

    def has(self, name: str) -> bool:
        return name in self._tasks

    def list_tasks(self) -> list[TaskInfo]:
        return [TaskInfo(name=t.name, description=t.description) for t in self._tasks.values()]

    def get_metadata(self, name: str) -> TaskMetadata | None:
        """Describe a task, including JSON schemas of its input and output."""
        task = self._tasks.get(name)
        if task is None:
            return None
        return TaskMetadata(
            name=task.name,
            description=task.description,
            input_schema=json_schema_of(task.input_schema),
            output_schema=json_schema_of(task.output_schema),
            default_config=task.default_config,
        )

    def execute(
        self,
        name: str,
        input: object,
        config: ConfigOverride | None = None,
        *,
        cancel: threading.Event | None = None,
        timeout_s: float | None = None,
    ) -> TaskResult[Any]:
        """Execute a task by name. Never raises.

        Returns:
            The task's result, or a failed result when the task is unknown or
            its implementation raised.
        """
        task = self._tasks.get(name)
        if task is None:
            return TaskResult.fail(f'Task "{name}" not found')

        # Tasks implementing the plain execute(input, config) contract never see these.
        options: dict[str, Any] = {}
        if cancel is not None:
            options["cancel"] = cancel
        if timeout_s is not None:
            options["timeout_s"] = timeout_s

        try:
            return task.execute(input, config, **options)
        except Exception as e:
            self.sink.log(
                "error",
                f"Task raised outside the pipeline: {name}",
                {"task": name, "error": get_error_message(e)},
            )
            return TaskResult.fail(get_error_message(e))

    def unregister(self, name: str) -> bool:
        with self._lock:
            if name not in self._tasks:
                return False
            remaining = dict(self._tasks)
            del remaining[name]
            self._tasks = MappingProxyType(remaining)
            return True

    def clear(self) -> None:
        with self._lock:
            self._tasks = MappingProxyType({})

    def count(self) -> int:
        return len(self._tasks)
