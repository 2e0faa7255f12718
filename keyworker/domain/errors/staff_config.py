"""Staff configuration errors."""

from __future__ import annotations

from keyworker.domain.exceptions import NotFoundError


class StaffConfigNotFoundError(NotFoundError):
    """Raised when a staff member has no configuration under a policy.

    Attributes:
        staff_id: The staff member looked up.
        policy: The policy name looked up under.
    """

    def __init__(self, staff_id: int, policy: str) -> None:
        self.staff_id = staff_id
        self.policy = policy
        super().__init__(f"Staff configuration not found: {staff_id} ({policy})")


class StaffNotFoundError(NotFoundError):
    """Raised when a staff member is unknown to the national user-role system.

    Attributes:
        staff_id: The staff member looked up.
    """

    def __init__(self, staff_id: int) -> None:
        self.staff_id = staff_id
        super().__init__(f"Staff not found: {staff_id}")
