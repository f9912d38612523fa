"""Retry with exponential backoff for transient model-call failures.

Only transient classes of failure (rate limits, server errors, a fixed set of
transport faults, provider errors flagged retryable) consume retry budget.
Everything else propagates on first occurrence.
"""

from __future__ import annotations

import errno
import socket
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from prism_intelligence.errors import ProviderError, TaskCancelledError, TaskTimeoutError

T = TypeVar("T")

RETRYABLE_TRANSPORT_CODES: frozenset[str] = frozenset(
    {"ECONNRESET", "ETIMEDOUT", "ENOTFOUND", "ECONNREFUSED"}
)

@dataclass(frozen=True, slots=True)
class RetryOptions:
    """Per-invocation retry settings.

    `on_retry` is called with the 1-based retry number and the error that
    triggered it, before the backoff sleep.
    """

    max_retries: int = 3
    base_delay_ms: float = 100
    on_retry: Callable[[int, BaseException], None] | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")


def _status_of(error: object) -> int | None:
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _transport_code_of(error: object) -> str | None:
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code
    if isinstance(error, socket.gaierror):
        return "ENOTFOUND"
    os_errno = getattr(error, "errno", None)
    if isinstance(os_errno, int):
        return errno.errorcode.get(os_errno)
    return None


def is_retryable_error(error: object) -> bool:
    """Classify an error as transient (retryable) or terminal."""
    status = _status_of(error)
    if status == 429:
        return True
    if status is not None and 500 <= status < 600:
        return True

    if _transport_code_of(error) in RETRYABLE_TRANSPORT_CODES:
        return True

    if isinstance(error, ProviderError) and error.is_retryable:
        return True
    return False


def is_client_error(error: object) -> bool:
    """4xx: the request itself is wrong."""
    status = _status_of(error)
    return status is not None and 400 <= status < 500


def is_server_error(error: object) -> bool:
    status = _status_of(error)
    return status is not None and 500 <= status < 600


def get_error_message(error: object) -> str:
    """Best-effort human readable message for any raised or reported error."""
    if isinstance(error, str):
        return error
    if isinstance(error, BaseException):
        message = str(error)
        return message or type(error).__name__
    message = getattr(error, "message", None)
    if message is not None:
        return str(message)
    return "Unknown error"


def _check_budget(
    cancel: threading.Event | None,
    deadline: float | None,
    last_error: BaseException | None,
) -> None:
    if cancel is not None and cancel.is_set():
        raise TaskCancelledError("Task cancelled") from last_error
    if deadline is not None and time.monotonic() >= deadline:
        raise TaskTimeoutError("Task deadline exceeded") from last_error


def _pause(
    delay_s: float,
    cancel: threading.Event | None,
    sleep: Callable[[float], None] | None,
) -> None:
    if sleep is not None:
        sleep(delay_s)
        return
    if cancel is not None:
        # Event.wait returns True as soon as the event is set.
        cancel.wait(delay_s)
        return
    time.sleep(delay_s)


def with_retry(
    fn: Callable[[], T],
    options: RetryOptions | None = None,
    *,
    cancel: threading.Event | None = None,
    deadline: float | None = None,
    sleep: Callable[[float], None] | None = None,
) -> T:
    """Call `fn` with bounded exponential backoff.

    Attempts run `0..max_retries` inclusive. After a retryable failure on
    attempt `n` the delay is `base_delay_ms * 2**n`.

    Args:
        fn: Zero-argument callable to attempt.
        options: Retry settings; defaults to `RetryOptions()`.
        cancel: Event that aborts pending sleeps and further attempts.
        deadline: Absolute `time.monotonic()` value after which no further
            attempt starts.
        sleep: Replacement for the backoff sleep (seconds).

    Returns:
        The first successful result of `fn`.

    Raises:
        The last error from `fn` when it is terminal or the budget is spent,
        TaskCancelledError when `cancel` is set, TaskTimeoutError when the
        deadline passes.
    """
    opts = options or RetryOptions()
    last_error: BaseException | None = None

    for attempt in range(opts.max_retries + 1):
        _check_budget(cancel, deadline, last_error)
        try:
            return fn()
        except Exception as error:
            if attempt == opts.max_retries or not is_retryable_error(error):
                raise

            delay_s = opts.base_delay_ms * (2**attempt) / 1000
            if deadline is not None and time.monotonic() + delay_s > deadline:
                raise TaskTimeoutError(
                    f"Task deadline exceeded before retry {attempt + 1}: "
                    f"{get_error_message(error)}"
                ) from error

            if opts.on_retry is not None:
                opts.on_retry(attempt + 1, error)

            _pause(delay_s, cancel, sleep)
            last_error = error

    # Unreachable: the final attempt either returns or raises.
    raise AssertionError("retry loop exited without a result")
