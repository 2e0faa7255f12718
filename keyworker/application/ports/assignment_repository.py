"""Assignment repository protocol.

Storage for assignment records. Provisional assignments are placeholders
awaiting confirmation; every query here except ``find_all_for_person``
and ``delete_provisional`` ignores them.

Implementations must refuse to store a second active assignment for the
same (person, policy) by raising DuplicateActiveAssignmentError.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime

    from keyworker.domain.models.assignment import Assignment
    from keyworker.domain.models.policy import AllocationPolicy


class AssignmentRepositoryProtocol(Protocol):
    """Protocol for assignment storage and the queries allocation needs."""

    @abstractmethod
    def find_active_for_people(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> dict[str, Assignment]:
        """Return the active assignment of each person, keyed by identifier.

        People with no active assignment are absent from the map.
        """
        ...

    @abstractmethod
    def find_active_for_person_all_policies(
        self,
        person_identifier: str,
    ) -> list[Assignment]:
        """Return every active assignment of a person across all policies."""
        ...

    @abstractmethod
    def find_active_for_staff(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_id: int,
    ) -> list[Assignment]:
        """Return active assignments held by a staff member at a prison."""
        ...

    @abstractmethod
    def find_all_for_person(
        self,
        policy: AllocationPolicy,
        person_identifier: str,
    ) -> list[Assignment]:
        """Return a person's full assignment history under a policy.

        Provisional assignments are included, oldest first.
        """
        ...

    @abstractmethod
    def count_active_for_staff(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int],
    ) -> dict[int, int]:
        """Count active assignments per staff member at a prison.

        Staff with no active assignments may be absent from the map.
        """
        ...

    @abstractmethod
    def find_latest_auto_allocations(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int],
    ) -> dict[int, datetime]:
        """Return the most recent active AUTO allocation time per staff member."""
        ...

    @abstractmethod
    def find_previous_staff_ids(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> dict[str, set[int]]:
        """Return every staff member who has ever held each person.

        History spans all prisons and includes closed assignments.
        """
        ...

    @abstractmethod
    def save(self, assignment: Assignment) -> Assignment:
        """Insert or replace an assignment by id.

        Raises:
            DuplicateActiveAssignmentError: If another active assignment
                exists for the same person and policy.
        """
        ...

    @abstractmethod
    def save_all(self, assignments: Iterable[Assignment]) -> list[Assignment]:
        """Save assignments in order; see ``save``."""
        ...

    @abstractmethod
    def delete_provisional(
        self,
        policy: AllocationPolicy,
        person_identifiers: Iterable[str],
    ) -> int:
        """Delete provisional assignments for the given people.

        Returns:
            Number of rows removed.
        """
        ...
