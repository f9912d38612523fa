"""Model provider package initialization."""

from prism_intelligence.llm.factory import LLMFactory
from prism_intelligence.llm.provider import Completion, LLMProvider

__all__ = [
    "Completion",
    "LLMFactory",
    "LLMProvider",
]
