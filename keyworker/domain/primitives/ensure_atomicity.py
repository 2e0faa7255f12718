"""Primitive: ensure atomic operations.

This module provides a context manager that ensures atomic operations
with rollback capability. If an exception occurs within the context,
all registered rollback handlers are executed before the exception is
re-raised.

Allocation batches are all-or-nothing: either every deallocation and
allocation in a request is recorded or none is.

Usage:
    with AtomicOperationContext() as ctx:
        ctx.add_rollback(restore_function)
        do_operation()
        # On exception: restore_function called, exception re-raised
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

import structlog

log = structlog.get_logger()

RollbackHandler = Callable[[], None]


class AtomicOperationContext:
    """Context manager ensuring atomic operations with rollback.

    Rollback handlers are called in reverse order (LIFO) if an exception
    occurs. After all handlers have run, the original exception is
    re-raised.

    Example:
        >>> with AtomicOperationContext() as ctx:
        ...     ctx.add_rollback(lambda: print("Rolling back"))
        ...     raise ValueError("Something went wrong")
        Rolling back
        Traceback (most recent call last):
        ...
        ValueError: Something went wrong

    Attributes:
        _rollback_handlers: List of registered rollback handlers (LIFO order)
    """

    def __init__(self) -> None:
        self._rollback_handlers: list[RollbackHandler] = []

    def add_rollback(self, handler: RollbackHandler) -> None:
        """Register a rollback handler to be called on failure.

        Args:
            handler: A callable that undoes part of the operation.
                     Must take no arguments.
        """
        self._rollback_handlers.append(handler)

    def __enter__(self) -> AtomicOperationContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Exit the context, executing rollbacks on exception.

        Exceptions from rollback handlers are logged but do not prevent
        other handlers from running.

        Returns:
            False - always re-raises the original exception if one occurred.
        """
        if exc_val is None:
            return False

        log.info(
            "atomic_operation_failed",
            error=str(exc_val),
            error_type=exc_type.__name__ if exc_type else "Unknown",
            rollback_count=len(self._rollback_handlers),
        )
        for handler in reversed(self._rollback_handlers):
            try:
                handler()
            except Exception as rollback_error:
                log.error(
                    "rollback_handler_failed",
                    rollback_error=str(rollback_error),
                    rollback_error_type=type(rollback_error).__name__,
                )
        return False
