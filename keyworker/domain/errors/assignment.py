"""Assignment lifecycle and persistence errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyworker.domain.exceptions import AllocationEngineError, ConflictError

if TYPE_CHECKING:
    from uuid import UUID

    from keyworker.domain.models.assignment import AssignmentState


class InvalidAssignmentTransitionError(AllocationEngineError):
    """Raised when an assignment is moved out of a terminal state.

    Attributes:
        assignment_id: The assignment that was targeted.
        from_state: Current state of the assignment.
        to_state: Attempted target state.
    """

    def __init__(
        self,
        assignment_id: UUID,
        from_state: AssignmentState,
        to_state: AssignmentState,
    ) -> None:
        self.assignment_id = assignment_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid assignment transition for {assignment_id}: "
            f"{from_state.value} -> {to_state.value}"
        )


class DuplicateActiveAssignmentError(ConflictError):
    """Raised when a second active assignment would exist for a person.

    Attributes:
        person_identifier: The person already holding an active assignment.
        policy: The policy name the assignment belongs to.
    """

    def __init__(self, person_identifier: str, policy: str) -> None:
        self.person_identifier = person_identifier
        self.policy = policy
        super().__init__(
            f"Person {person_identifier} already has an active {policy} assignment"
        )
