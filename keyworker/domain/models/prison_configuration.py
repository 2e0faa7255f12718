"""Per-prison, per-policy allocation settings."""

from __future__ import annotations

from dataclasses import dataclass

from keyworker.domain.models.policy import AllocationPolicy

DEFAULT_CAPACITY = 6
DEFAULT_MAXIMUM_CAPACITY = 9
DEFAULT_FREQUENCY_IN_WEEKS = 1


@dataclass(frozen=True)
class PrisonConfiguration:
    """Allocation settings for one prison under one policy.

    Attributes:
        code: Prison code.
        policy: Policy the settings apply to.
        enabled: Whether allocations are accepted at all.
        allow_auto_allocation: Default auto-allocation flag for staff.
        capacity: Nominal caseload per staff member.
        maximum_capacity: Caseload used when a staff member has no own capacity.
        frequency_in_weeks: Expected session frequency.
        has_prisoners_with_high_complexity_needs: Whether the prison holds
            people excluded from recommendation.
    """

    code: str
    policy: AllocationPolicy
    enabled: bool
    allow_auto_allocation: bool
    capacity: int
    maximum_capacity: int
    frequency_in_weeks: int
    has_prisoners_with_high_complexity_needs: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {self.capacity}")
        if self.maximum_capacity < 0:
            raise ValueError(
                f"maximum_capacity must be non-negative, got {self.maximum_capacity}"
            )
        if self.frequency_in_weeks < 1:
            raise ValueError(
                f"frequency_in_weeks must be at least 1, got {self.frequency_in_weeks}"
            )

    @classmethod
    def default(
        cls,
        code: str,
        policy: AllocationPolicy,
        *,
        enabled: bool = True,
        allow_auto_allocation: bool = True,
        capacity: int = DEFAULT_CAPACITY,
        maximum_capacity: int = DEFAULT_MAXIMUM_CAPACITY,
        frequency_in_weeks: int = DEFAULT_FREQUENCY_IN_WEEKS,
    ) -> PrisonConfiguration:
        """Settings assumed for a prison that has none stored."""
        return cls(
            code=code,
            policy=policy,
            enabled=enabled,
            allow_auto_allocation=allow_auto_allocation,
            capacity=capacity,
            maximum_capacity=maximum_capacity,
            frequency_in_weeks=frequency_in_weeks,
        )
