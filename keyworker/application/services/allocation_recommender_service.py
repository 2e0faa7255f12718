"""Allocation recommender service.

Proposes a staff member for every unallocated person at a prison using
greedy best-fit over the capacity queue:

1. People are taken in (last name, first name, identifier) order.
2. A person who has had any of the queued staff before goes back to the
   first of them in queue order, regardless of capacity (continuity).
3. Otherwise the first queued staff member below capacity is chosen.
   The allow-auto-allocation flag is reported with each staff member but
   does not exclude them.
4. The chosen staff member's count goes up and the queue reorders
   before the next person.

Nothing is written. The same inputs always give the same result.
"""

from __future__ import annotations

from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.person_search import PersonSearchProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.application.services.capacity_snapshot_service import (
    CapacitySnapshotService,
)
from keyworker.domain.exceptions import InvalidRequestError
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.recommendation import (
    RecommendationResult,
    RecommendedAllocation,
)
from keyworker.domain.models.staff import PersonSummary
from keyworker.domain.services.capacity_queue import CapacityQueue, StaffCapacity
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)


class AllocationRecommenderService(LoggingMixin):
    """Recommends staff for people with no active assignment."""

    def __init__(
        self,
        person_search: PersonSearchProtocol,
        assignments: AssignmentRepositoryProtocol,
        snapshots: CapacitySnapshotService,
        metrics: AllocationMetricsCollector | None = None,
    ) -> None:
        self._person_search = person_search
        self._assignments = assignments
        self._snapshots = snapshots
        self._metrics = metrics or get_allocation_metrics_collector()
        self._init_logger()

    def recommend(
        self, prison_code: str, context: AllocationContext
    ) -> RecommendationResult:
        """Recommend allocations for every unallocated person at a prison.

        Args:
            prison_code: Prison to recommend for.
            context: Supplies the policy.

        Returns:
            Proposed allocations, people nobody could take, and the staff
            snapshot used.

        Raises:
            InvalidRequestError: If prison_code is empty.
        """
        if not prison_code:
            raise InvalidRequestError("prison code must not be empty")

        policy = context.policy
        log = self._log_operation(
            "recommend", prison_code=prison_code, policy=policy.value
        )

        people = self._unallocated_people(prison_code, context)
        queue = self._snapshots.build(prison_code, context)
        previous = self._assignments.find_previous_staff_ids(
            policy, [p.person_identifier for p in people]
        )
        queued_ids = queue.staff_ids()

        allocations: list[RecommendedAllocation] = []
        no_available_staff_for: list[str] = []
        for person in people:
            known_staff = previous.get(person.person_identifier, set()) & queued_ids
            chosen = self._choose(queue, known_staff)
            if chosen is None:
                no_available_staff_for.append(person.person_identifier)
                continue
            queue.increment(chosen.staff_id)
            allocations.append(
                RecommendedAllocation(
                    person_identifier=person.person_identifier,
                    staff=chosen.to_allocation_staff(),
                )
            )

        self._metrics.record_recommendations(
            policy.value, "RECOMMENDED", len(allocations)
        )
        self._metrics.record_recommendations(
            policy.value, "NO_AVAILABLE_STAFF", len(no_available_staff_for)
        )
        log.info(
            "recommendation_completed",
            people=len(people),
            recommended=len(allocations),
            no_available_staff=len(no_available_staff_for),
            staff=len(queue),
        )
        return RecommendationResult(
            allocations=allocations,
            no_available_staff_for=no_available_staff_for,
            staff=queue.to_allocation_staff(),
        )

    def _unallocated_people(
        self, prison_code: str, context: AllocationContext
    ) -> list[PersonSummary]:
        candidates = [
            p
            for p in self._person_search.find_people(prison_code)
            if not p.has_high_complexity_of_needs
        ]
        allocated = self._assignments.find_active_for_people(
            context.policy, [p.person_identifier for p in candidates]
        )
        return sorted(
            (p for p in candidates if p.person_identifier not in allocated),
            key=PersonSummary.sort_key,
        )

    @staticmethod
    def _choose(queue: CapacityQueue, known_staff: set[int]) -> StaffCapacity | None:
        if known_staff:
            return queue.first_matching(lambda s: s.staff_id in known_staff)
        return queue.first_matching(lambda s: s.below_capacity)
