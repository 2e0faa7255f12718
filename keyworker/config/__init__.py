"""Configuration module for the allocation engine.

Available Configurations:
- EngineConfig: Prison defaults and actor limits
"""

from keyworker.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    TEST_ENGINE_CONFIG,
    EngineConfig,
)

__all__ = [
    "DEFAULT_ENGINE_CONFIG",
    "TEST_ENGINE_CONFIG",
    "EngineConfig",
]
