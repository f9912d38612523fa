"""Model catalog: provider, capability and pricing metadata per model id.

The table is loaded once (bundled JSON by default) and never mutated. Model ids
are canonical ``provider/model`` strings; legacy ids, API identifiers, display
names and aliases resolve to the canonical id in table order.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from prism_intelligence.errors import CatalogError, UnknownModelError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_ID = "google/gemini-3-flash"

Capability = Literal["streaming", "function_calling", "vision", "json", "web_search"]


class _TableModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ModelPricing(_TableModel):
    currency: str = "USD"
    input_cost_per_1m_tokens: float = Field(ge=0, alias="inputCostPer1MTokens")
    output_cost_per_1m_tokens: float = Field(ge=0, alias="outputCostPer1MTokens")
    cache_read_cost_per_1m_tokens: float | None = Field(
        default=None, ge=0, alias="cacheReadCostPer1MTokens"
    )
    cache_write_cost_per_1m_tokens: float | None = Field(
        default=None, ge=0, alias="cacheWriteCostPer1MTokens"
    )
    last_verified: str | None = None


class ModelCapabilities(_TableModel):
    streaming: bool = False
    function_calling: bool = False
    vision: bool = False
    json_mode: bool = Field(default=False, alias="json")
    web_search: bool = False
    max_context_tokens: int = Field(default=0, ge=0)


class ModelDefaults(_TableModel):
    temperature: float = 0.7
    max_tokens: int = 500
    top_p: float = 1.0


class ModelLimits(_TableModel):
    requests_per_minute: int = 0
    tokens_per_minute: int = 0


class ModelConfig(_TableModel):
    """One pricing-table entry."""

    name: str
    provider: str
    api_identifier: str
    description: str = ""
    status: Literal["active", "deprecated", "experimental"] = "active"
    pricing: ModelPricing
    capabilities: ModelCapabilities = Field(default_factory=ModelCapabilities)
    default_settings: ModelDefaults = Field(default_factory=ModelDefaults)
    limits: ModelLimits = Field(default_factory=ModelLimits)
    recommended: bool = False
    aliases: tuple[str, ...] = ()


class ProviderConfig(_TableModel):
    name: str
    api_key_env_var: str
    sdk_package: str
    docs_url: str
    pricing_url: str


class _CatalogFile(_TableModel):
    models: dict[str, ModelConfig]
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolvedModel:
    """A model entry together with its canonical id."""

    id: str
    config: ModelConfig


class ModelCatalog:
    """Read-only lookup of model ids to pricing and capability metadata."""

    def __init__(
        self,
        models: dict[str, ModelConfig],
        providers: dict[str, ProviderConfig] | None = None,
    ) -> None:
        self._models = dict(models)
        self._providers = dict(providers or {})

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, model_id: object) -> bool:
        return isinstance(model_id, str) and self.resolve_model(model_id) is not None

    @property
    def model_ids(self) -> list[str]:
        return list(self._models)

    def resolve_model(self, model_id: str) -> ResolvedModel | None:
        """Resolve a canonical id, alias, API identifier or display name.

        Returns:
            The canonical id and its entry, or None when nothing matches.
        """
        direct = self._models.get(model_id)
        if direct is not None:
            return ResolvedModel(id=model_id, config=direct)

        for canonical_id, config in self._models.items():
            if (
                model_id in config.aliases
                or config.api_identifier == model_id
                or config.name == model_id
            ):
                return ResolvedModel(id=canonical_id, config=config)
        return None

    def get_model_config(self, model_id: str) -> ModelConfig | None:
        resolved = self.resolve_model(model_id)
        return resolved.config if resolved is not None else None

    def active_models(self) -> list[ModelConfig]:
        return [m for m in self._models.values() if m.status == "active"]

    def recommended_model(self) -> ModelConfig | None:
        """First entry flagged `recommended`, else the default model."""
        for config in self._models.values():
            if config.recommended:
                return config
        return self._models.get(DEFAULT_MODEL_ID)

    def supports_capability(self, model_id: str, capability: Capability) -> bool:
        config = self.get_model_config(model_id)
        if config is None:
            return False
        value = getattr(config.capabilities, _capability_field(capability), None)
        return value if isinstance(value, bool) else False

    def models_by_capability(self, capability: Capability) -> list[ModelConfig]:
        field_name = _capability_field(capability)
        return [
            m
            for m in self._models.values()
            if m.status == "active" and getattr(m.capabilities, field_name, False) is True
        ]

    def provider_config(self, provider_id: str) -> ProviderConfig | None:
        return self._providers.get(provider_id)

    def providers(self) -> list[ProviderConfig]:
        return list(self._providers.values())

    def calculate_cost(self, model_id: str, *, prompt_tokens: int, completion_tokens: int) -> float:
        """Price token usage in USD.

        Raises:
            UnknownModelError: If the model id does not resolve.
        """
        resolved = self.resolve_model(model_id)
        if resolved is None:
            raise UnknownModelError(model_id)

        pricing = resolved.config.pricing
        input_cost = prompt_tokens * (pricing.input_cost_per_1m_tokens / 1_000_000)
        output_cost = completion_tokens * (pricing.output_cost_per_1m_tokens / 1_000_000)
        return input_cost + output_cost


def _capability_field(capability: str) -> str:
    return "json_mode" if capability == "json" else capability


def parse_catalog(raw: object) -> ModelCatalog:
    """Build a catalog from an already-decoded JSON table."""
    try:
        table = _CatalogFile.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid model table: {e}") from e
    return ModelCatalog(models=table.models, providers=table.providers)


def load_catalog(path: Path | None = None) -> ModelCatalog:
    """Load a model table from `path`, or the table bundled with the package.

    Raises:
        CatalogError: If the file is missing, not JSON, or fails validation.
    """
    try:
        if path is None:
            text = resources.files("prism_intelligence.models").joinpath("models.json").read_text(
                encoding="utf-8"
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read model table: {e}") from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Model table is not valid JSON: {e}") from e

    catalog = parse_catalog(raw)
    logger.debug(f"Loaded model table with {len(catalog)} models from {path or 'package data'}")
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> ModelCatalog:
    """The bundled table, loaded once per process."""
    return load_catalog()
