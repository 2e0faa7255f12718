"""In-memory stubs for the staff roster protocols.

- NomisStaffRoleStub: the national user-role system (key workers)
- StaffRoleRepositoryStub: locally owned role grants (personal officers)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.staff import JobClassification, StaffRole, StaffSummary


@dataclass(frozen=True)
class EndedRole:
    """Record of an ``end_staff_role`` call, for assertions."""

    prison_code: str
    staff_id: int
    role_code: str
    to_date: date


@dataclass(frozen=True)
class GrantedRole:
    """Record of a ``set_staff_role`` call, for assertions."""

    prison_code: str
    staff_id: int
    role_code: str
    job: JobClassification


class NomisStaffRoleStub:
    """In-memory implementation of NomisStaffRoleProtocol.

    Example:
        >>> roles = NomisStaffRoleStub()
        >>> roles.add_staff("LEI", StaffSummary(1, "Ann", "Able"))
        >>> [s.staff_id for s in roles.find_staff_with_role("LEI", "KW")]
        [1]
    """

    def __init__(self) -> None:
        self._staff: dict[int, StaffSummary] = {}
        self._holders: dict[tuple[str, str], dict[int, StaffSummary]] = {}
        self.granted_roles: list[GrantedRole] = []
        self.ended_roles: list[EndedRole] = []

    def add_known_staff(self, staff: StaffSummary) -> None:
        """Make a staff member known without giving them any role."""
        self._staff[staff.staff_id] = staff

    def add_staff(
        self, prison_code: str, staff: StaffSummary, role_code: str = "KW"
    ) -> None:
        self.add_known_staff(staff)
        self._holders.setdefault((prison_code, role_code), {})[staff.staff_id] = staff

    def clear(self) -> None:
        self._staff.clear()
        self._holders.clear()
        self.granted_roles.clear()
        self.ended_roles.clear()

    def find_staff(self, staff_id: int) -> StaffSummary | None:
        return self._staff.get(staff_id)

    def find_staff_with_role(
        self,
        prison_code: str,
        role_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffSummary]:
        holders = self._holders.get((prison_code, role_code), {})
        if staff_ids is None:
            return list(holders.values())
        return [holders[s] for s in set(staff_ids) if s in holders]

    def set_staff_role(
        self,
        prison_code: str,
        staff_id: int,
        role_code: str,
        job: JobClassification,
    ) -> None:
        staff = self._staff.get(staff_id)
        if staff is None:
            raise ValueError(f"unknown staff {staff_id}")
        holders = self._holders.setdefault((prison_code, role_code), {})
        if job.to_date is None:
            holders[staff_id] = staff
        else:
            holders.pop(staff_id, None)
        self.granted_roles.append(
            GrantedRole(
                prison_code=prison_code,
                staff_id=staff_id,
                role_code=role_code,
                job=job,
            )
        )

    def end_staff_role(
        self,
        prison_code: str,
        staff_id: int,
        role_code: str,
        to_date: date,
    ) -> None:
        self._holders.get((prison_code, role_code), {}).pop(staff_id, None)
        self.ended_roles.append(
            EndedRole(
                prison_code=prison_code,
                staff_id=staff_id,
                role_code=role_code,
                to_date=to_date,
            )
        )


class StaffRoleRepositoryStub:
    """In-memory implementation of StaffRoleRepositoryProtocol."""

    def __init__(self) -> None:
        self._roles: dict[tuple[AllocationPolicy, str, int], StaffRole] = {}

    def clear(self) -> None:
        self._roles.clear()

    def all(self) -> list[StaffRole]:
        return list(self._roles.values())

    def snapshot(self) -> dict[tuple[AllocationPolicy, str, int], StaffRole]:
        return dict(self._roles)

    def restore(self, state: dict[tuple[AllocationPolicy, str, int], StaffRole]) -> None:
        self._roles = dict(state)

    def find_current(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffRole]:
        wanted = None if staff_ids is None else set(staff_ids)
        return [
            role
            for (role_policy, role_prison, staff_id), role in self._roles.items()
            if role_policy is policy
            and role_prison == prison_code
            and role.is_current
            and (wanted is None or staff_id in wanted)
        ]

    def find_role(
        self,
        policy: AllocationPolicy,
        prison_code: str,
        staff_id: int,
    ) -> StaffRole | None:
        return self._roles.get((policy, prison_code, staff_id))

    def save(self, role: StaffRole) -> StaffRole:
        self._roles[(role.policy, role.prison_code, role.staff_id)] = role
        return role
