"""Cost tracking for model calls.

Converts token usage into USD via the model catalog and reports each figure
through the log sink.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from pydantic import BaseModel, ConfigDict, Field

from prism_intelligence.core.logging import LoggingSink, LogSink
from prism_intelligence.models.catalog import ModelCatalog, default_catalog


class TokenUsage(BaseModel):
    """Token counts reported by a provider for one call."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int | None = Field(default=None, ge=0)

    @property
    def resolved_total(self) -> int:
        if self.total_tokens is not None:
            return self.total_tokens
        return self.prompt_tokens + self.completion_tokens

    @property
    def has_tokens(self) -> bool:
        return self.prompt_tokens > 0 or self.completion_tokens > 0


@dataclass(frozen=True, slots=True)
class CostOutcome:
    """Result of metering one call.

    `tracked` is False when pricing could not be applied, in which case
    `cost_usd` is 0.0 and must not be trusted.
    """

    cost_usd: float
    tracked: bool


@dataclass(frozen=True, slots=True)
class CostRecord:
    """Structured fields emitted with every tracked cost."""

    model: str
    model_name: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    cost_usd: float
    pricing_verified: str | None = None
    task_name: str | None = None


class CostMeter:
    """Prices token usage against a model catalog."""

    def __init__(self, catalog: ModelCatalog | None = None, sink: LogSink | None = None) -> None:
        self.catalog = catalog or default_catalog()
        self.sink = sink or LoggingSink()

    def calculate_cost(self, model_id: str, usage: TokenUsage) -> float:
        """Compute the USD cost of `usage` on `model_id`.

        Raises:
            UnknownModelError: If the model is not in the catalog.
        """
        return self.catalog.calculate_cost(
            model_id,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
        )

    def estimate_cost(
        self, model_id: str, estimated_prompt_tokens: int, estimated_completion_tokens: int
    ) -> float:
        """Estimate a call's cost before making it, e.g. for budget checks."""
        return self.calculate_cost(
            model_id,
            TokenUsage(
                prompt_tokens=estimated_prompt_tokens,
                completion_tokens=estimated_completion_tokens,
            ),
        )

    def measure(self, usage: TokenUsage, model_id: str, task_name: str | None = None) -> CostOutcome:
        """Calculate and report the cost of one call.

        Never raises: a pricing failure is reported through the sink and
        comes back as an untracked zero.
        """
        try:
            cost = self.calculate_cost(model_id, usage)
        except Exception as e:
            self.sink.log(
                "error",
                "Failed to track AI cost",
                {
                    "error": str(e),
                    "model_id": model_id,
                    "usage": usage.model_dump(),
                    "task_name": task_name,
                },
            )
            return CostOutcome(cost_usd=0.0, tracked=False)

        model = self.catalog.get_model_config(model_id)
        record = CostRecord(
            model=model_id,
            model_name=model.name if model is not None else model_id,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.resolved_total,
            cost_usd=cost,
            pricing_verified=model.pricing.last_verified if model is not None else None,
            task_name=task_name,
        )
        self.sink.log("info", f"AI generation: ${cost:.6f}", asdict(record))
        return CostOutcome(cost_usd=cost, tracked=True)

    def track_cost(self, usage: TokenUsage, model_id: str, task_name: str | None = None) -> float:
        """Like `measure`, returning only the figure (0.0 when untracked)."""
        return self.measure(usage, model_id, task_name).cost_usd


def format_cost(cost: float) -> str:
    """Format a USD amount, keeping sub-cent precision for small figures."""
    if cost < 0.01:
        return f"${cost:.6f}"
    return f"${cost:.4f}"


def sum_costs(costs: Iterable[float]) -> float:
    return sum(costs, 0.0)
