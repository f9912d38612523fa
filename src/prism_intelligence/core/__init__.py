"""Core package initialization.

`IntelligenceRuntime` lives in `prism_intelligence.core.runtime`; it is
re-exported from the top-level package rather than here because it depends
on modules that import `prism_intelligence.core.logging`.
"""

from prism_intelligence.core.config import IntelligenceConfig, LLMConfig, TaskDefaults

__all__ = [
    "IntelligenceConfig",
    "LLMConfig",
    "TaskDefaults",
]
