"""Staff roster protocols.

Which staff hold the policy's role at a prison comes from two places:

- key workers: the national user-role system, reached through
  NomisStaffRoleProtocol
- personal officers: role grants owned by this engine, stored through
  StaffRoleRepositoryProtocol

Services never choose between them directly; see policy_rules.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keyworker.domain.models.policy import AllocationPolicy
    from keyworker.domain.models.staff import (
        JobClassification,
        StaffRole,
        StaffSummary,
    )


class NomisStaffRoleProtocol(Protocol):
    """Protocol for the national user-role system."""

    @abstractmethod
    def find_staff_with_role(
        self,
        prison_code: str,
        role_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffSummary]:
        """List staff currently holding ``role_code`` at the prison.

        Args:
            prison_code: Prison to search.
            role_code: Role held, e.g. ``"KW"``.
            staff_ids: Restrict the result to these staff, if given.

        Returns:
            Staff summaries for the matching staff.
        """
        ...

    @abstractmethod
    def find_staff(self, staff_id: int) -> StaffSummary | None:
        """Look up a staff member by id, whatever roles they hold."""
        ...

    @abstractmethod
    def set_staff_role(
        self,
        prison_code: str,
        staff_id: int,
        role_code: str,
        job: JobClassification,
    ) -> None:
        """Grant or update a staff member's role at the prison.

        A ``job.to_date`` ends the role as of that date.
        """
        ...

    @abstractmethod
    def end_staff_role(
        self,
        prison_code: str,
        staff_id: int,
        role_code: str,
        to_date: date,
    ) -> None:
        """End a staff member's role at the prison as of ``to_date``."""
        ...


class StaffRoleRepositoryProtocol(Protocol):
    """Protocol for locally owned staff role grants."""

    @abstractmethod
    def find_current(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffRole]:
        """List current (not ended) role grants at the prison."""
        ...

    @abstractmethod
    def find_role(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_id: int,
    ) -> StaffRole | None:
        """Return the role grant for a staff member, ended or not."""
        ...

    @abstractmethod
    def save(self, role: StaffRole) -> StaffRole:
        """Insert or replace the role grant for (policy, prison, staff)."""
        ...
