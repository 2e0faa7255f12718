"""Domain models for the allocation engine."""

from keyworker.domain.models.allocation_context import (
    SYSTEM_USERNAME,
    AllocationContext,
)
from keyworker.domain.models.assignment import (
    AllocationType,
    Assignment,
    AssignmentState,
)
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.prison_configuration import PrisonConfiguration
from keyworker.domain.models.recommendation import (
    AllocationStaff,
    RecommendationResult,
    RecommendedAllocation,
)
from keyworker.domain.models.reference_data import (
    AllocationReason,
    DeallocationReason,
    ReferenceData,
    ReferenceDataDomain,
    ReferenceDataKey,
    StaffPosition,
    StaffScheduleType,
    StaffStatus,
)
from keyworker.domain.models.staff import (
    JobClassification,
    PersonSummary,
    StaffConfiguration,
    StaffRole,
    StaffSummary,
)

__all__ = [
    "SYSTEM_USERNAME",
    "AllocationContext",
    "AllocationPolicy",
    "AllocationReason",
    "AllocationStaff",
    "AllocationType",
    "Assignment",
    "AssignmentState",
    "DeallocationReason",
    "JobClassification",
    "PersonSummary",
    "PrisonConfiguration",
    "RecommendationResult",
    "RecommendedAllocation",
    "ReferenceData",
    "ReferenceDataDomain",
    "ReferenceDataKey",
    "StaffConfiguration",
    "StaffPosition",
    "StaffRole",
    "StaffScheduleType",
    "StaffStatus",
    "StaffSummary",
]
