"""Assignment domain models.

This module defines the record that binds a person to an accountable
staff member under a policy:
- AllocationType: How an assignment came about (auto, manual, provisional)
- AssignmentState: Lifecycle of a person under one policy
- Assignment: The assignment record itself

Invariant: at most one active assignment exists per (person, policy).
The engine keeps it by closing the existing assignment before creating
a new one inside the same transaction; persistence enforces it too.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from keyworker.domain.errors.assignment import InvalidAssignmentTransitionError
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import (
    AllocationReason,
    ReferenceData,
    ReferenceDataDomain,
)

if TYPE_CHECKING:
    from keyworker.domain.models.allocation_context import AllocationContext

MAX_ACTOR_LENGTH = 64


class AllocationType(str, Enum):
    """How an assignment was made.

    The stored value is the single-letter code used by downstream systems.
    """

    AUTO = "A"
    MANUAL = "M"
    PROVISIONAL = "P"

    @classmethod
    def for_reason(cls, reason_code: str) -> AllocationType:
        """Derive the allocation type from an allocation reason code."""
        if reason_code == AllocationReason.AUTO.value:
            return cls.AUTO
        if reason_code == AllocationReason.PROVISIONAL.value:
            return cls.PROVISIONAL
        return cls.MANUAL


class AssignmentState(str, Enum):
    """Lifecycle of a person under one policy.

    State Transition Matrix:
    - PENDING -> ACTIVE
    - ACTIVE -> INACTIVE
    - INACTIVE -> (terminal)

    PENDING is implicit: a person with no active assignment, or only a
    provisional one, is pending.
    """

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def can_transition_to(self, target: AssignmentState) -> bool:
        return (self, target) in _TRANSITIONS


_TRANSITIONS = frozenset(
    {
        (AssignmentState.PENDING, AssignmentState.ACTIVE),
        (AssignmentState.ACTIVE, AssignmentState.INACTIVE),
    }
)


@dataclass(frozen=True)
class Assignment:
    """A person bound to a staff member under a policy at a prison.

    Assignments are immutable. ``deallocate`` and ``with_person_identifier``
    return new instances that must be saved through the repository.

    Attributes:
        person_identifier: The prisoner's identifier.
        prison_code: Prison at which the assignment was made.
        staff_id: The accountable staff member.
        policy: Key worker or personal officer.
        allocated_at: When the assignment became active (UTC).
        allocated_by: Username of the actor who allocated.
        allocation_reason: Resolved ALLOCATION_REASON reference data.
        allocation_type: Auto, manual or provisional.
        active: Whether the assignment is current.
        deallocated_at: When the assignment was closed, if closed.
        deallocated_by: Username of the actor who closed it, if closed.
        deallocation_reason: Resolved DEALLOCATION_REASON, if closed.
        id: Unique assignment identifier.
    """

    person_identifier: str
    prison_code: str
    staff_id: int
    policy: AllocationPolicy
    allocated_at: datetime
    allocated_by: str
    allocation_reason: ReferenceData
    allocation_type: AllocationType
    active: bool = True
    deallocated_at: datetime | None = None
    deallocated_by: str | None = None
    deallocation_reason: ReferenceData | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Validate assignment invariants."""
        if self.allocated_at.tzinfo is None:
            raise ValueError("allocated_at must be timezone-aware")
        if self.allocation_reason.domain is not ReferenceDataDomain.ALLOCATION_REASON:
            raise ValueError("allocation_reason must be an ALLOCATION_REASON")
        if len(self.allocated_by) > MAX_ACTOR_LENGTH:
            raise ValueError(
                f"allocated_by must be at most {MAX_ACTOR_LENGTH} characters"
            )
        if self.active:
            if self.deallocated_at or self.deallocated_by or self.deallocation_reason:
                raise ValueError("active assignment must not carry deallocation details")
            return
        if (
            self.deallocated_at is None
            or self.deallocated_by is None
            or self.deallocation_reason is None
        ):
            raise ValueError("inactive assignment must carry deallocation details")
        if self.deallocated_at.tzinfo is None:
            raise ValueError("deallocated_at must be timezone-aware")
        if self.deallocation_reason.domain is not ReferenceDataDomain.DEALLOCATION_REASON:
            raise ValueError("deallocation_reason must be a DEALLOCATION_REASON")
        if len(self.deallocated_by) > MAX_ACTOR_LENGTH:
            raise ValueError(
                f"deallocated_by must be at most {MAX_ACTOR_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        person_identifier: str,
        prison_code: str,
        staff_id: int,
        reason: ReferenceData,
        context: AllocationContext,
    ) -> Assignment:
        """Create a new active assignment stamped from the context.

        Args:
            person_identifier: The prisoner being allocated.
            prison_code: Prison at which the allocation is made.
            staff_id: The staff member taking responsibility.
            reason: Resolved allocation reason.
            context: Actor, policy and instant of the allocation.

        Returns:
            A new active Assignment.
        """
        return cls(
            person_identifier=person_identifier,
            prison_code=prison_code,
            staff_id=staff_id,
            policy=context.policy,
            allocated_at=context.requested_at,
            allocated_by=context.username,
            allocation_reason=reason,
            allocation_type=AllocationType.for_reason(reason.code),
        )

    @property
    def state(self) -> AssignmentState:
        if not self.active:
            return AssignmentState.INACTIVE
        if self.allocation_type is AllocationType.PROVISIONAL:
            return AssignmentState.PENDING
        return AssignmentState.ACTIVE

    @property
    def is_provisional(self) -> bool:
        return self.allocation_type is AllocationType.PROVISIONAL

    def deallocate(
        self,
        reason: ReferenceData,
        context: AllocationContext,
    ) -> Assignment:
        """Close this assignment.

        Args:
            reason: Resolved deallocation reason.
            context: Actor and instant of the deallocation.

        Returns:
            New inactive Assignment carrying the deallocation details.

        Raises:
            InvalidAssignmentTransitionError: If already inactive.
        """
        if not self.active:
            raise InvalidAssignmentTransitionError(
                assignment_id=self.id,
                from_state=self.state,
                to_state=AssignmentState.INACTIVE,
            )
        return replace(
            self,
            active=False,
            deallocated_at=context.requested_at,
            deallocated_by=context.username,
            deallocation_reason=reason,
        )

    def with_person_identifier(self, person_identifier: str) -> Assignment:
        """Re-point this assignment to another identifier of the same person."""
        return replace(self, person_identifier=person_identifier)
