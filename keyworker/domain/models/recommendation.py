"""Recommendation output models.

Recommendations are advisory. Nothing here is persisted; a caller that
accepts them submits them back as allocations with reason AUTO.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AllocationStaff:
    """A staff member as seen by the recommender.

    Attributes:
        staff_id: The staff member.
        first_name: First name from the roster.
        last_name: Last name from the roster.
        status_code: STAFF_STATUS code.
        status_description: STAFF_STATUS description.
        allow_auto_allocation: Whether auto allocation may pick this member.
        capacity: Auto-allocation capacity.
        allocated: Active allocation count before this recommendation pass.
    """

    staff_id: int
    first_name: str
    last_name: str
    status_code: str
    status_description: str
    allow_auto_allocation: bool
    capacity: int
    allocated: int


@dataclass(frozen=True)
class RecommendedAllocation:
    """One proposed (person, staff) pairing."""

    person_identifier: str
    staff: AllocationStaff


@dataclass(frozen=True)
class RecommendationResult:
    """Outcome of a recommendation pass over one prison.

    Attributes:
        allocations: Proposed pairings, in person order.
        no_available_staff_for: People nobody could take, in person order.
        staff: The capacity snapshot used, in final queue order.
    """

    allocations: list[RecommendedAllocation] = field(default_factory=list)
    no_available_staff_for: list[str] = field(default_factory=list)
    staff: list[AllocationStaff] = field(default_factory=list)

    def staff_for(self, person_identifier: str) -> int | None:
        for allocation in self.allocations:
            if allocation.person_identifier == person_identifier:
                return allocation.staff.staff_id
        return None
