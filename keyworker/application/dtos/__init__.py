"""Application DTOs: request and event payload models."""

from keyworker.application.dtos.allocations import (
    PersonStaffAllocation,
    PersonStaffAllocations,
    PersonStaffDeallocation,
    StaffConfigPatch,
    StaffDetailsRequest,
    StaffRoleRequest,
)
from keyworker.application.dtos.events import (
    ComplexityOfNeedChangedEvent,
    ComplexityOfNeedLevel,
    ExternalMovementEvent,
    MovementDirection,
    MovementType,
    PrisonerMergedEvent,
)

__all__ = [
    "ComplexityOfNeedChangedEvent",
    "ComplexityOfNeedLevel",
    "ExternalMovementEvent",
    "MovementDirection",
    "MovementType",
    "PersonStaffAllocation",
    "PersonStaffAllocations",
    "PersonStaffDeallocation",
    "PrisonerMergedEvent",
    "StaffConfigPatch",
    "StaffDetailsRequest",
    "StaffRoleRequest",
]
