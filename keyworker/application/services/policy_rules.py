"""Policy-specific rules.

Key workers and personal officers differ only in where their roster
lives and how a role is granted or ended:

- KeyWorkerPolicyRules: national user-role system, role code ``KW``
- PersonalOfficerPolicyRules: role grants owned by this engine

A rules object is chosen once per request with ``policy_rules_for``;
services call it instead of branching on the policy themselves.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from datetime import date
from typing import Protocol

from keyworker.application.ports.staff_roster import (
    NomisStaffRoleProtocol,
    StaffRoleRepositoryProtocol,
)
from keyworker.domain.errors.staff_config import StaffNotFoundError
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.staff import JobClassification, StaffRole, StaffSummary


class PolicyRules(Protocol):
    """What varies between policies."""

    policy: AllocationPolicy

    @abstractmethod
    def find_eligible_staff(
        self,
        prison_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffSummary]:
        """Staff holding the policy's role at the prison."""
        ...

    @abstractmethod
    def set_staff_role(
        self, prison_code: str, staff_id: int, job: JobClassification
    ) -> None:
        """Grant or update the policy's role for the staff member at the prison.

        A ``job.to_date`` ends the role from that date.
        """
        ...

    @abstractmethod
    def end_staff_role(self, prison_code: str, staff_id: int, on: date) -> None:
        """Stop the staff member holding the policy's role at the prison."""
        ...


class KeyWorkerPolicyRules:
    """Roster and role changes through the national user-role system."""

    policy = AllocationPolicy.KEY_WORKER

    def __init__(self, nomis_roles: NomisStaffRoleProtocol) -> None:
        self._nomis_roles = nomis_roles

    @property
    def role_code(self) -> str:
        role_code = self.policy.nomis_user_role_code
        assert role_code is not None
        return role_code

    def find_eligible_staff(
        self,
        prison_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffSummary]:
        return self._nomis_roles.find_staff_with_role(
            prison_code, self.role_code, staff_ids
        )

    def set_staff_role(
        self, prison_code: str, staff_id: int, job: JobClassification
    ) -> None:
        if self._nomis_roles.find_staff(staff_id) is None:
            raise StaffNotFoundError(staff_id)
        self._nomis_roles.set_staff_role(prison_code, staff_id, self.role_code, job)

    def end_staff_role(self, prison_code: str, staff_id: int, on: date) -> None:
        self._nomis_roles.end_staff_role(prison_code, staff_id, self.role_code, on)


class PersonalOfficerPolicyRules:
    """Roster and role changes through locally owned role grants."""

    policy = AllocationPolicy.PERSONAL_OFFICER

    def __init__(
        self,
        staff_roles: StaffRoleRepositoryProtocol,
        nomis_roles: NomisStaffRoleProtocol,
    ) -> None:
        self._staff_roles = staff_roles
        self._nomis_roles = nomis_roles

    def find_eligible_staff(
        self,
        prison_code: str,
        staff_ids: Iterable[int] | None = None,
    ) -> list[StaffSummary]:
        return [
            role.summary()
            for role in self._staff_roles.find_current(self.policy, prison_code, staff_ids)
        ]

    def set_staff_role(
        self, prison_code: str, staff_id: int, job: JobClassification
    ) -> None:
        existing = self._staff_roles.find_role(self.policy, prison_code, staff_id)
        if existing is not None:
            self._staff_roles.save(existing.with_job(job))
            return
        # names come from the national directory
        staff = self._nomis_roles.find_staff(staff_id)
        if staff is None:
            raise StaffNotFoundError(staff_id)
        self._staff_roles.save(StaffRole.granted(prison_code, staff, self.policy, job))

    def end_staff_role(self, prison_code: str, staff_id: int, on: date) -> None:
        for role in self._staff_roles.find_current(self.policy, prison_code, [staff_id]):
            self._staff_roles.save(role.ended(on))


class PolicyRulesFactory:
    """Builds the rules object for a policy from the roster ports."""

    def __init__(
        self,
        nomis_roles: NomisStaffRoleProtocol,
        staff_roles: StaffRoleRepositoryProtocol,
    ) -> None:
        self._rules: dict[AllocationPolicy, PolicyRules] = {
            AllocationPolicy.KEY_WORKER: KeyWorkerPolicyRules(nomis_roles),
            AllocationPolicy.PERSONAL_OFFICER: PersonalOfficerPolicyRules(
                staff_roles, nomis_roles
            ),
        }

    def policy_rules_for(self, policy: AllocationPolicy) -> PolicyRules:
        return self._rules[policy]
