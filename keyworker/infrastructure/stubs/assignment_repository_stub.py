"""In-memory stub implementation of AssignmentRepositoryProtocol.

This module provides an in-memory implementation for testing purposes.
Not intended for production use.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from keyworker.domain.errors.assignment import DuplicateActiveAssignmentError
from keyworker.domain.models.assignment import AllocationType, Assignment
from keyworker.domain.models.policy import AllocationPolicy


class AssignmentRepositoryStub:
    """In-memory implementation of AssignmentRepositoryProtocol.

    Enforces the single-active-assignment invariant the way a unique
    index would, so tests catch any service that breaks it. Supports
    ``snapshot``/``restore`` for InMemoryTransactionManager.

    Example:
        >>> repo = AssignmentRepositoryStub()
        >>> repo.save(assignment)
        >>> repo.count_active()
        1
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._assignments: dict[UUID, Assignment] = {}
        self.save_calls = 0

    # Test helpers

    def clear(self) -> None:
        self._assignments.clear()
        self.save_calls = 0

    def all(self) -> list[Assignment]:
        return list(self._assignments.values())

    def get(self, assignment_id: UUID) -> Assignment | None:
        return self._assignments.get(assignment_id)

    def count_active(self, policy: AllocationPolicy | None = None) -> int:
        return sum(
            1
            for a in self._assignments.values()
            if a.active and (policy is None or a.policy is policy)
        )

    def snapshot(self) -> dict[UUID, Assignment]:
        return dict(self._assignments)

    def restore(self, state: dict[UUID, Assignment]) -> None:
        self._assignments = dict(state)

    def _confirmed(self) -> Iterable[Assignment]:
        return (
            a
            for a in self._assignments.values()
            if a.allocation_type is not AllocationType.PROVISIONAL
        )

    # Protocol implementation

    def find_active_for_people(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> dict[str, Assignment]:
        wanted = set(person_identifiers)
        return {
            a.person_identifier: a
            for a in self._confirmed()
            if a.active and a.policy is policy and a.person_identifier in wanted
        }

    def find_active_for_person_all_policies(
        self,
        person_identifier: str,
    ) -> list[Assignment]:
        return [
            a
            for a in self._confirmed()
            if a.active and a.person_identifier == person_identifier
        ]

    def find_active_for_staff(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_id: int,
    ) -> list[Assignment]:
        return [
            a
            for a in self._confirmed()
            if a.active
            and a.policy is policy
            and a.prison_code == prison_code
            and a.staff_id == staff_id
        ]

    def find_all_for_person(
        self,
        policy: AllocationPolicy,
        person_identifier: str,
    ) -> list[Assignment]:
        return sorted(
            (
                a
                for a in self._assignments.values()
                if a.policy is policy and a.person_identifier == person_identifier
            ),
            key=lambda a: a.allocated_at,
        )

    def count_active_for_staff(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int],
    ) -> dict[int, int]:
        wanted = set(staff_ids)
        counts: dict[int, int] = {}
        for a in self._confirmed():
            if (
                a.active
                and a.policy is policy
                and a.prison_code == prison_code
                and a.staff_id in wanted
            ):
                counts[a.staff_id] = counts.get(a.staff_id, 0) + 1
        return counts

    def find_latest_auto_allocations(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int],
    ) -> dict[int, datetime]:
        wanted = set(staff_ids)
        latest: dict[int, datetime] = {}
        for a in self._confirmed():
            if (
                a.active
                and a.allocation_type is AllocationType.AUTO
                and a.policy is policy
                and a.prison_code == prison_code
                and a.staff_id in wanted
            ):
                current = latest.get(a.staff_id)
                if current is None or a.allocated_at > current:
                    latest[a.staff_id] = a.allocated_at
        return latest

    def find_previous_staff_ids(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> dict[str, set[int]]:
        wanted = set(person_identifiers)
        previous: dict[str, set[int]] = {}
        for a in self._confirmed():
            if a.policy is policy and a.person_identifier in wanted:
                previous.setdefault(a.person_identifier, set()).add(a.staff_id)
        return previous

    def save(self, assignment: Assignment) -> Assignment:
        if assignment.active and not assignment.is_provisional:
            for other in self._confirmed():
                if (
                    other.active
                    and other.id != assignment.id
                    and other.policy is assignment.policy
                    and other.person_identifier == assignment.person_identifier
                ):
                    raise DuplicateActiveAssignmentError(
                        person_identifier=assignment.person_identifier,
                        policy=assignment.policy.value,
                    )
        self._assignments[assignment.id] = assignment
        self.save_calls += 1
        return assignment

    def save_all(self, assignments: Iterable[Assignment]) -> list[Assignment]:
        return [self.save(a) for a in assignments]

    def delete_provisional(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> int:
        wanted = set(person_identifiers)
        doomed = [
            a.id
            for a in self._assignments.values()
            if a.is_provisional
            and a.policy is policy
            and a.person_identifier in wanted
        ]
        for assignment_id in doomed:
            del self._assignments[assignment_id]
        return len(doomed)
