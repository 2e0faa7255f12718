"""Staff and person value objects used by allocation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import ReferenceData, StaffStatus


@dataclass(frozen=True)
class StaffSummary:
    """A staff member as returned by a roster lookup."""

    staff_id: int
    first_name: str
    last_name: str


@dataclass(frozen=True)
class StaffConfiguration:
    """A staff member's own allocation settings under a policy.

    Attributes:
        staff_id: The staff member.
        policy: Policy the settings apply to.
        status: Resolved STAFF_STATUS reference data.
        capacity: Own caseload capacity, overriding the prison's maximum.
        allow_auto_allocation: Whether auto allocation may pick this member.
        reactivate_on: Date the member is expected back, if away.
    """

    staff_id: int
    policy: AllocationPolicy
    status: ReferenceData
    capacity: int
    allow_auto_allocation: bool
    reactivate_on: date | None = None

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {self.capacity}")

    def is_active(self) -> bool:
        return self.status.code == StaffStatus.ACTIVE.value

    def with_changes(self, **changes: object) -> StaffConfiguration:
        return replace(self, **changes)


@dataclass(frozen=True)
class JobClassification:
    """How a staff member holds a role at a prison.

    Attributes:
        position: Resolved STAFF_POSITION reference data.
        schedule_type: Resolved STAFF_SCHEDULE_TYPE reference data.
        hours_per_week: Contracted hours.
        from_date: Date the role starts.
        to_date: Date the role ends, if it has.
    """

    position: ReferenceData
    schedule_type: ReferenceData
    hours_per_week: Decimal
    from_date: date
    to_date: date | None = None

    def __post_init__(self) -> None:
        if self.hours_per_week < 0:
            raise ValueError(
                f"hours_per_week must be non-negative, got {self.hours_per_week}"
            )


@dataclass(frozen=True)
class StaffRole:
    """A locally owned role grant for a staff member at a prison.

    Personal officer rosters are built from these. ``to_date`` set means
    the role has ended.
    """

    prison_code: str
    staff_id: int
    policy: AllocationPolicy
    first_name: str
    last_name: str
    from_date: date
    to_date: date | None = None
    position: ReferenceData | None = None
    schedule_type: ReferenceData | None = None
    hours_per_week: Decimal | None = None

    @classmethod
    def granted(
        cls,
        prison_code: str,
        staff: StaffSummary,
        policy: AllocationPolicy,
        job: JobClassification,
    ) -> StaffRole:
        return cls(
            prison_code=prison_code,
            staff_id=staff.staff_id,
            policy=policy,
            first_name=staff.first_name,
            last_name=staff.last_name,
            from_date=job.from_date,
        ).with_job(job)

    def with_job(self, job: JobClassification) -> StaffRole:
        return replace(
            self,
            position=job.position,
            schedule_type=job.schedule_type,
            hours_per_week=job.hours_per_week,
            from_date=job.from_date,
            to_date=job.to_date,
        )

    @property
    def is_current(self) -> bool:
        return self.to_date is None

    def ended(self, on: date) -> StaffRole:
        return replace(self, to_date=on)

    def summary(self) -> StaffSummary:
        return StaffSummary(
            staff_id=self.staff_id,
            first_name=self.first_name,
            last_name=self.last_name,
        )


@dataclass(frozen=True)
class PersonSummary:
    """A person resident at a prison, as returned by person search."""

    person_identifier: str
    first_name: str
    last_name: str
    has_high_complexity_of_needs: bool = False

    def sort_key(self) -> tuple[str, str, str]:
        return (self.last_name, self.first_name, self.person_identifier)
