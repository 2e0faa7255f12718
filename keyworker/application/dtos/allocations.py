"""Allocation request models.

Pydantic models for the batches submitted to the allocation manager and
the staff detail changes submitted to the staff config manager. Field
names accept the camelCase aliases used by callers on the wire.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from keyworker.domain.models.reference_data import AllocationReason, DeallocationReason

MAX_PERSON_IDENTIFIER_LENGTH = 10


class _RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PersonStaffAllocation(_RequestModel):
    """Proposal that a person be allocated to a staff member.

    Attributes:
        person_identifier: The prisoner to allocate.
        staff_id: The staff member to allocate them to.
        allocation_reason: ALLOCATION_REASON code (default MANUAL).
    """

    person_identifier: str = Field(
        ...,
        alias="personIdentifier",
        min_length=1,
        max_length=MAX_PERSON_IDENTIFIER_LENGTH,
    )
    staff_id: int = Field(..., alias="staffId", gt=0)
    allocation_reason: str = Field(
        default=AllocationReason.MANUAL.value,
        alias="allocationReason",
        min_length=1,
    )


class PersonStaffDeallocation(_RequestModel):
    """Proposal that a person's assignment to a staff member be closed.

    Only applied when the person's current active assignment is with
    this staff member; otherwise it is stale and ignored.
    """

    person_identifier: str = Field(
        ...,
        alias="personIdentifier",
        min_length=1,
        max_length=MAX_PERSON_IDENTIFIER_LENGTH,
    )
    staff_id: int = Field(..., alias="staffId", gt=0)
    deallocation_reason: str = Field(
        default=DeallocationReason.MANUAL.value,
        alias="deallocationReason",
        min_length=1,
    )


class PersonStaffAllocations(_RequestModel):
    """A batch of allocations and deallocations applied atomically."""

    allocations: list[PersonStaffAllocation] = Field(default_factory=list)
    deallocations: list[PersonStaffDeallocation] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.allocations and not self.deallocations

    @property
    def person_identifiers_to_allocate(self) -> set[str]:
        return {a.person_identifier for a in self.allocations}

    @property
    def staff_ids_to_allocate(self) -> set[int]:
        return {a.staff_id for a in self.allocations}

    @property
    def person_identifiers_to_deallocate(self) -> set[str]:
        return {d.person_identifier for d in self.deallocations}

    @property
    def allocation_reason_codes(self) -> set[str]:
        return {a.allocation_reason for a in self.allocations}

    @property
    def deallocation_reason_codes(self) -> set[str]:
        return {d.deallocation_reason for d in self.deallocations}


class StaffRoleRequest(_RequestModel):
    """The role a staff member should hold at a prison.

    Attributes:
        position: STAFF_POSITION code.
        schedule_type: STAFF_SCHEDULE_TYPE code.
        hours_per_week: Contracted hours.
        from_date: Date the role starts.
        to_date: Date the role ends, if it should.
    """

    position: str = Field(..., min_length=1)
    schedule_type: str = Field(..., min_length=1, alias="scheduleType")
    hours_per_week: Decimal = Field(..., ge=0, alias="hoursPerWeek")
    from_date: date = Field(..., alias="fromDate")
    to_date: date | None = Field(default=None, alias="toDate")


class StaffDetailsRequest(_RequestModel):
    """Changes to a staff member's configuration at a prison.

    Attributes:
        status: STAFF_STATUS code.
        capacity: Own caseload capacity.
        allow_auto_allocation: Whether auto allocation may pick this member.
        reactivate_on: Date the member is expected back, if away.
        deactivate_active_allocations: Close every active assignment held
            by this member at the prison.
        staff_role: Role to grant or update under the policy, if any.
    """

    status: str = Field(..., min_length=1)
    capacity: int = Field(..., ge=0)
    allow_auto_allocation: bool = Field(..., alias="allowAutoAllocation")
    reactivate_on: date | None = Field(default=None, alias="reactivateOn")
    deactivate_active_allocations: bool = Field(
        default=False, alias="deactivateActiveAllocations"
    )
    staff_role: StaffRoleRequest | None = Field(default=None, alias="staffRole")


class StaffConfigPatch(_RequestModel):
    """Partial change to an existing staff configuration.

    Unset fields keep their stored value.
    """

    status: str | None = Field(default=None, min_length=1)
    capacity: int | None = Field(default=None, ge=0)
    allow_auto_allocation: bool | None = Field(
        default=None, alias="allowAutoAllocation"
    )
    reactivate_on: date | None = Field(default=None, alias="reactivateOn")
