"""Deallocation triggers for person events.

Closes assignments when something happens to the person rather than to
the staff member:

- release: every active assignment, reason RELEASED
- transfer: active assignments made at a prison other than the
  destination, reason TRANSFER
- complexity of need becoming high: every active assignment, reason
  CHANGE_IN_COMPLEXITY_OF_NEED

Triggers span all policies. They only ever look at active assignments,
so replaying an event finds nothing to do.
"""

from __future__ import annotations

from collections.abc import Callable

from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.transaction import TransactionManagerProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.application.services.reference_data_resolver import (
    ReferenceDataResolver,
)
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.assignment import Assignment
from keyworker.domain.models.reference_data import DeallocationReason
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)


class DeallocationService(LoggingMixin):
    """Closes a person's assignments in response to person events."""

    def __init__(
        self,
        assignments: AssignmentRepositoryProtocol,
        reference_data: ReferenceDataResolver,
        transactions: TransactionManagerProtocol,
        metrics: AllocationMetricsCollector | None = None,
    ) -> None:
        self._assignments = assignments
        self._reference_data = reference_data
        self._transactions = transactions
        self._metrics = metrics or get_allocation_metrics_collector()
        self._init_logger(component="triggers")

    def on_release(
        self, person_identifier: str, context: AllocationContext
    ) -> list[Assignment]:
        """Close every active assignment of a released person."""
        return self._deallocate(
            "on_release",
            person_identifier,
            DeallocationReason.RELEASED,
            context,
        )

    def on_transfer(
        self,
        person_identifier: str,
        destination_prison_code: str,
        context: AllocationContext,
    ) -> list[Assignment]:
        """Close active assignments not made at the destination prison.

        A transfer into the prison the assignment was made at changes
        nothing.
        """
        return self._deallocate(
            "on_transfer",
            person_identifier,
            DeallocationReason.TRANSFER,
            context,
            keep=lambda a: a.prison_code == destination_prison_code,
        )

    def on_complexity_of_need_high(
        self, person_identifier: str, context: AllocationContext
    ) -> list[Assignment]:
        """Close every active assignment of a person now assessed as high need."""
        return self._deallocate(
            "on_complexity_of_need_high",
            person_identifier,
            DeallocationReason.CHANGE_IN_COMPLEXITY_OF_NEED,
            context,
        )

    def _deallocate(
        self,
        operation: str,
        person_identifier: str,
        reason_code: DeallocationReason,
        context: AllocationContext,
        keep: Callable[[Assignment], bool] = lambda _: False,
    ) -> list[Assignment]:
        log = self._log_operation(
            operation,
            person_identifier=person_identifier,
            reason=reason_code.value,
        )
        with self._transactions.transaction():
            targets = [
                a
                for a in self._assignments.find_active_for_person_all_policies(
                    person_identifier
                )
                if not keep(a)
            ]
            if not targets:
                log.debug("no_active_assignments")
                return []
            reason = self._reference_data.resolve(reason_code.key)
            closed = self._assignments.save_all(
                a.deallocate(reason, context.with_policy(a.policy)) for a in targets
            )

        for assignment in closed:
            self._metrics.record_deallocated(assignment.policy.value, reason_code.value)
        log.info(
            "assignments_deallocated",
            count=len(closed),
            policies=sorted({a.policy.value for a in closed}),
        )
        return closed
