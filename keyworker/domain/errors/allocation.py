"""Allocation request errors.

This module defines the errors raised while validating a batch of
allocations and deallocations. Every validation error is raised before
any assignment is touched, so a caller receiving one can assume nothing
changed.
"""

from __future__ import annotations

from collections.abc import Iterable

from keyworker.domain.exceptions import FailedPreconditionError, InvalidRequestError


class EmptyAllocationRequestError(InvalidRequestError):
    """Raised when a request carries neither allocations nor deallocations."""

    def __init__(self) -> None:
        super().__init__("At least one allocation or deallocation must be provided")


class UsernameTooLongError(InvalidRequestError):
    """Raised when the acting username cannot be recorded on an assignment.

    Attributes:
        username: The rejected username.
        max_length: The longest username that can be stored.
    """

    def __init__(self, username: str, max_length: int) -> None:
        self.username = username
        self.max_length = max_length
        super().__init__(
            f"Username must be at most {max_length} characters, got {len(username)}"
        )


class ProvisionalAllocationReasonError(InvalidRequestError):
    """Raised when a batch asks to allocate with the PROVISIONAL reason.

    Provisional assignments are placeholders that a confirmed allocation
    replaces; a batch can only confirm.

    Attributes:
        person_identifiers: People the batch tried to allocate provisionally.
    """

    def __init__(self, person_identifiers: Iterable[str]) -> None:
        self.person_identifiers = sorted(set(person_identifiers))
        super().__init__("Allocation reason PROVISIONAL cannot be used to allocate")


class AllocationValidationError(FailedPreconditionError):
    """Base for user-caused validation failures on an allocation request."""


class PrisonNotEnabledError(AllocationValidationError):
    """Raised when the prison has no enabled configuration for the policy.

    Attributes:
        prison_code: The prison the request targeted.
        policy: The policy name the request was made under.
    """

    def __init__(self, prison_code: str, policy: str) -> None:
        self.prison_code = prison_code
        self.policy = policy
        super().__init__("Prison not enabled")


class PersonNotAtPrisonError(AllocationValidationError):
    """Raised when an allocated person is not resident at the prison.

    Attributes:
        prison_code: The prison the request targeted.
        person_identifiers: Offending person identifiers, sorted.
    """

    def __init__(self, prison_code: str, person_identifiers: Iterable[str]) -> None:
        self.prison_code = prison_code
        self.person_identifiers = sorted(set(person_identifiers))
        super().__init__(
            "A provided person identifier is not currently at the provided prison"
        )


class StaffNotEligibleError(AllocationValidationError):
    """Raised when a staff member is not on the policy roster for the prison.

    Attributes:
        prison_code: The prison the request targeted.
        staff_ids: Offending staff ids, sorted.
    """

    def __init__(self, prison_code: str, staff_ids: Iterable[int]) -> None:
        self.prison_code = prison_code
        self.staff_ids = sorted(set(staff_ids))
        super().__init__("A provided staff id is not allocatable for the provided prison")


class StaffNotActiveError(AllocationValidationError):
    """Raised when a staff member's configured status is not ACTIVE.

    Attributes:
        staff_ids: Offending staff ids, sorted.
    """

    def __init__(self, staff_ids: Iterable[int]) -> None:
        self.staff_ids = sorted(set(staff_ids))
        super().__init__("A provided staff id is not an active staff member")
