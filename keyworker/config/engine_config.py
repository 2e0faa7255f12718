"""Allocation engine configuration.

This module defines the defaults the engine falls back on when a prison
has no stored configuration, with environment variable overrides for
deployment tuning.

Environment Variables:
- KEYWORKER_DEFAULT_CAPACITY: Nominal caseload per staff member (default: 6)
- KEYWORKER_DEFAULT_MAXIMUM_CAPACITY: Caseload used for auto allocation when
  a staff member has no own capacity (default: 9)
- KEYWORKER_DEFAULT_FREQUENCY_WEEKS: Session frequency in weeks (default: 1)
- KEYWORKER_DEFAULT_AUTO_ALLOCATION: Whether auto allocation is allowed by
  default (default: true)
- KEYWORKER_MAX_USERNAME_LENGTH: Longest actor username that can be recorded
  (default: 64)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.prison_configuration import PrisonConfiguration

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or not a recognised boolean.

    Returns:
        Parsed boolean value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class EngineConfig:
    """Defaults and limits for the allocation engine.

    Attributes:
        default_capacity: Nominal caseload for an unconfigured prison.
        default_maximum_capacity: Auto-allocation caseload for an unconfigured
            prison, used when a staff member has no own capacity.
        default_frequency_in_weeks: Session frequency for an unconfigured prison.
        default_allow_auto_allocation: Auto-allocation flag for an unconfigured
            prison.
        max_username_length: Longest actor username that can be recorded.
    """

    default_capacity: int = 6
    default_maximum_capacity: int = 9
    default_frequency_in_weeks: int = 1
    default_allow_auto_allocation: bool = True
    max_username_length: int = 64

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.default_capacity < 0:
            raise ValueError(
                f"default_capacity must be non-negative, got {self.default_capacity}"
            )
        if self.default_maximum_capacity < self.default_capacity:
            raise ValueError(
                f"default_maximum_capacity ({self.default_maximum_capacity}) must be "
                f"at least default_capacity ({self.default_capacity})"
            )
        if self.default_frequency_in_weeks < 1:
            raise ValueError(
                "default_frequency_in_weeks must be at least 1, "
                f"got {self.default_frequency_in_weeks}"
            )
        if self.max_username_length < 1:
            raise ValueError(
                f"max_username_length must be positive, got {self.max_username_length}"
            )

    @classmethod
    def from_environment(cls) -> EngineConfig:
        """Create config from environment variables with defaults.

        Returns:
            EngineConfig with values from environment or defaults.
        """
        return cls(
            default_capacity=_get_int_env("KEYWORKER_DEFAULT_CAPACITY", 6),
            default_maximum_capacity=_get_int_env(
                "KEYWORKER_DEFAULT_MAXIMUM_CAPACITY", 9
            ),
            default_frequency_in_weeks=_get_int_env(
                "KEYWORKER_DEFAULT_FREQUENCY_WEEKS", 1
            ),
            default_allow_auto_allocation=_get_bool_env(
                "KEYWORKER_DEFAULT_AUTO_ALLOCATION", True
            ),
            max_username_length=_get_int_env("KEYWORKER_MAX_USERNAME_LENGTH", 64),
        )

    def default_prison_configuration(
        self, prison_code: str, policy: AllocationPolicy
    ) -> PrisonConfiguration:
        """Configuration assumed for a prison with none stored."""
        return PrisonConfiguration.default(
            prison_code,
            policy,
            allow_auto_allocation=self.default_allow_auto_allocation,
            capacity=self.default_capacity,
            maximum_capacity=self.default_maximum_capacity,
            frequency_in_weeks=self.default_frequency_in_weeks,
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_ENGINE_CONFIG = EngineConfig()

# Testing config with small capacities so scenarios stay readable
TEST_ENGINE_CONFIG = EngineConfig(
    default_capacity=2,
    default_maximum_capacity=3,
    default_frequency_in_weeks=1,
    default_allow_auto_allocation=True,
    max_username_length=64,
)
