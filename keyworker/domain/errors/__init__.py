"""Domain errors for the allocation engine.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AllocationEngineError.
"""

from keyworker.domain.errors.allocation import (
    AllocationValidationError,
    EmptyAllocationRequestError,
    PersonNotAtPrisonError,
    PrisonNotEnabledError,
    ProvisionalAllocationReasonError,
    StaffNotActiveError,
    StaffNotEligibleError,
    UsernameTooLongError,
)
from keyworker.domain.errors.assignment import (
    DuplicateActiveAssignmentError,
    InvalidAssignmentTransitionError,
)
from keyworker.domain.errors.reference_data import ReferenceDataNotFoundError
from keyworker.domain.errors.staff_config import (
    StaffConfigNotFoundError,
    StaffNotFoundError,
)

__all__: list[str] = [
    "AllocationValidationError",
    "DuplicateActiveAssignmentError",
    "EmptyAllocationRequestError",
    "InvalidAssignmentTransitionError",
    "PersonNotAtPrisonError",
    "PrisonNotEnabledError",
    "ProvisionalAllocationReasonError",
    "ReferenceDataNotFoundError",
    "StaffConfigNotFoundError",
    "StaffNotActiveError",
    "StaffNotEligibleError",
    "StaffNotFoundError",
    "UsernameTooLongError",
]
