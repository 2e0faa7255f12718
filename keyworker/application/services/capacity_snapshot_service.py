"""Capacity snapshot service.

Builds the capacity-ordered staff queue for one prison under one policy
from the roster, staff configuration and live assignment counts. The
snapshot is read-only input to the recommender and is rebuilt on every
call.
"""

from __future__ import annotations

from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.prison_configuration import (
    PrisonConfigurationRepositoryProtocol,
)
from keyworker.application.ports.staff_config import StaffConfigRepositoryProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.application.services.policy_rules import PolicyRulesFactory
from keyworker.application.services.reference_data_resolver import (
    ReferenceDataResolver,
)
from keyworker.config.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from keyworker.domain.exceptions import InvalidRequestError
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.prison_configuration import PrisonConfiguration
from keyworker.domain.models.reference_data import StaffStatus
from keyworker.domain.services.capacity_queue import CapacityQueue, StaffCapacity


class CapacitySnapshotService(LoggingMixin):
    """Builds CapacityQueue snapshots.

    For each staff member on the policy roster at the prison:

    - capacity is the staff member's own, else the prison's maximum
    - auto allocation is the staff member's flag, else the prison's
    - status is the staff member's, else ACTIVE

    Only ACTIVE staff are queued.
    """

    def __init__(
        self,
        policy_rules: PolicyRulesFactory,
        staff_configs: StaffConfigRepositoryProtocol,
        assignments: AssignmentRepositoryProtocol,
        prison_configurations: PrisonConfigurationRepositoryProtocol,
        reference_data: ReferenceDataResolver,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        self._policy_rules = policy_rules
        self._staff_configs = staff_configs
        self._assignments = assignments
        self._prison_configurations = prison_configurations
        self._reference_data = reference_data
        self._config = config
        self._init_logger()

    def prison_configuration(
        self, prison_code: str, context: AllocationContext
    ) -> PrisonConfiguration:
        """Stored prison configuration, or the configured defaults."""
        stored = self._prison_configurations.find_by_code(context.policy, prison_code)
        if stored is not None:
            return stored
        return self._config.default_prison_configuration(prison_code, context.policy)

    def build(self, prison_code: str, context: AllocationContext) -> CapacityQueue:
        """Build the capacity queue for a prison.

        Args:
            prison_code: Prison to snapshot.
            context: Supplies the policy.

        Returns:
            Queue of ACTIVE staff in allocation order.

        Raises:
            InvalidRequestError: If prison_code is empty.
            ReferenceDataNotFoundError: If the ACTIVE status is not configured.
        """
        if not prison_code:
            raise InvalidRequestError("prison code must not be empty")

        policy = context.policy
        log = self._log_operation(
            "build_snapshot", prison_code=prison_code, policy=policy.value
        )

        prison = self.prison_configuration(prison_code, context)
        roster = self._policy_rules.policy_rules_for(policy).find_eligible_staff(
            prison_code
        )
        staff_ids = [s.staff_id for s in roster]
        configs = self._staff_configs.find_for_staff(policy, staff_ids)
        counts = self._assignments.count_active_for_staff(policy, prison_code, staff_ids)
        latest_auto = self._assignments.find_latest_auto_allocations(
            policy, prison_code, staff_ids
        )
        active_status = self._reference_data.resolve(StaffStatus.ACTIVE.key)

        queue = CapacityQueue()
        for staff in roster:
            config = configs.get(staff.staff_id)
            if staff.staff_id in queue:
                continue
            if config is not None and not config.is_active():
                continue
            count = counts.get(staff.staff_id, 0)
            queue.add(
                StaffCapacity(
                    staff=staff,
                    status=config.status if config else active_status,
                    allow_auto_allocation=(
                        config.allow_auto_allocation
                        if config
                        else prison.allow_auto_allocation
                    ),
                    auto_allocation_capacity=(
                        config.capacity if config else prison.maximum_capacity
                    ),
                    initial_allocation_count=count,
                    allocation_count=count,
                    last_auto_allocation_at=latest_auto.get(staff.staff_id),
                )
            )

        log.info(
            "snapshot_built",
            roster_size=len(roster),
            queued=len(queue),
        )
        return queue
