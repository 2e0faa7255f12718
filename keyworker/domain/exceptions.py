"""Base exception classes for the allocation engine domain layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of an engine error, used by callers to pick a response.

    INVALID_REQUEST: The request itself is malformed.
    FAILED_PRECONDITION: The request is well formed but the world disagrees.
    NOT_FOUND: A named resource does not exist.
    CONFLICT: Persistence refused a write that would break an invariant.
    """

    INVALID_REQUEST = "INVALID_REQUEST"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


class AllocationEngineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    Subclasses set ``kind`` so a caller can map any engine error
    without knowing every concrete type.
    """

    kind: ErrorKind = ErrorKind.FAILED_PRECONDITION

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message


class InvalidRequestError(AllocationEngineError):
    """Raised when a request is malformed before any lookup is made."""

    kind = ErrorKind.INVALID_REQUEST


class FailedPreconditionError(AllocationEngineError):
    """Raised when a well formed request cannot be applied."""

    kind = ErrorKind.FAILED_PRECONDITION


class NotFoundError(AllocationEngineError):
    """Raised when a named resource does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(AllocationEngineError):
    """Raised when a write would violate a persistence invariant."""

    kind = ErrorKind.CONFLICT
