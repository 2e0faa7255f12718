"""Actor context passed explicitly to every engine operation.

The context identifies who is acting, under which policy and at what
instant. It is an immutable value: nothing in the engine stores it
between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from keyworker.domain.models.policy import AllocationPolicy

SYSTEM_USERNAME = "SYS"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AllocationContext:
    """Who is acting, for which policy, and when.

    Attributes:
        username: Actor recorded on allocations and deallocations.
        policy: The policy every lookup and write is scoped to.
        requested_at: Instant stamped on new and closed assignments.
        active_caseload_id: Prison the actor is currently working in, if known.
    """

    username: str
    policy: AllocationPolicy
    requested_at: datetime = field(default_factory=_utc_now)
    active_caseload_id: str | None = None

    def __post_init__(self) -> None:
        """Validate context invariants."""
        if not self.username:
            raise ValueError("username must not be empty")
        if self.requested_at.tzinfo is None:
            raise ValueError("requested_at must be timezone-aware")

    @classmethod
    def system(
        cls,
        policy: AllocationPolicy,
        requested_at: datetime | None = None,
    ) -> AllocationContext:
        """Context for engine-initiated changes such as event triggers."""
        return cls(
            username=SYSTEM_USERNAME,
            policy=policy,
            requested_at=requested_at or _utc_now(),
        )

    def with_policy(self, policy: AllocationPolicy) -> AllocationContext:
        return replace(self, policy=policy)

    def at(self, requested_at: datetime) -> AllocationContext:
        return replace(self, requested_at=requested_at)
