"""Merge service: two person identifiers turned out to be one person.

For every policy, each assignment held under the removed identifier is
moved to the surviving identifier so history follows the person. If both
identifiers had an active assignment, the removed identifier's one is
closed with reason MERGED first so the survivor keeps a single active
assignment. Provisional assignments move unchanged.
"""

from __future__ import annotations

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
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import DeallocationReason
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)


class MergeService(LoggingMixin):
    """Re-points assignments from a removed identifier to the survivor."""

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

    def merge(
        self,
        person_identifier: str,
        removed_person_identifier: str,
        context: AllocationContext,
    ) -> list[Assignment]:
        """Move every assignment of ``removed_person_identifier`` to the survivor.

        Args:
            person_identifier: The identifier that survives.
            removed_person_identifier: The identifier being retired.
            context: Actor and instant; the policy is ignored since all
                policies are merged.

        Returns:
            The re-pointed assignments.
        """
        log = self._log_operation(
            "merge",
            person_identifier=person_identifier,
            removed_person_identifier=removed_person_identifier,
        )
        if person_identifier == removed_person_identifier:
            log.warning("merge_into_self_ignored")
            return []

        moved: list[Assignment] = []
        closed: list[AllocationPolicy] = []
        with self._transactions.transaction():
            for policy in AllocationPolicy:
                history = self._assignments.find_all_for_person(
                    policy, removed_person_identifier
                )
                if not history:
                    continue
                survivor_active = self._assignments.find_active_for_people(
                    policy, [person_identifier]
                ).get(person_identifier)
                for assignment in history:
                    if (
                        assignment.active
                        and not assignment.is_provisional
                        and survivor_active is not None
                    ):
                        reason = self._reference_data.resolve(
                            DeallocationReason.MERGED.key
                        )
                        assignment = assignment.deallocate(
                            reason, context.with_policy(policy)
                        )
                        closed.append(policy)
                    moved.append(
                        self._assignments.save(
                            assignment.with_person_identifier(person_identifier)
                        )
                    )

        for policy in closed:
            self._metrics.record_deallocated(
                policy.value, DeallocationReason.MERGED.value
            )
        log.info("assignments_merged", moved=len(moved), deallocated=len(closed))
        return moved
