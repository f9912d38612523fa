"""Model catalog package initialization."""

from prism_intelligence.models.catalog import (
    DEFAULT_MODEL_ID,
    ModelCatalog,
    ModelConfig,
    ProviderConfig,
    ResolvedModel,
    default_catalog,
    load_catalog,
)

__all__ = [
    "DEFAULT_MODEL_ID",
    "ModelCatalog",
    "ModelConfig",
    "ProviderConfig",
    "ResolvedModel",
    "default_catalog",
    "load_catalog",
]
