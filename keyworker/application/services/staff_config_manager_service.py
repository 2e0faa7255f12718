"""Staff configuration manager service.

Maintains per-policy staff configuration and the deallocations that a
staff status change implies. Deactivating a staff member's allocations
or removing their role closes every active assignment they hold at the
prison with reason STAFF_STATUS_CHANGE.

A role section in the request grants or updates the staff member's role
through the policy's roster.
"""

from __future__ import annotations

from keyworker.application.dtos.allocations import (
    StaffConfigPatch,
    StaffDetailsRequest,
    StaffRoleRequest,
)
from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.prison_configuration import (
    PrisonConfigurationRepositoryProtocol,
)
from keyworker.application.ports.staff_config import StaffConfigRepositoryProtocol
from keyworker.application.ports.transaction import TransactionManagerProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.application.services.policy_rules import PolicyRulesFactory
from keyworker.application.services.reference_data_resolver import (
    ReferenceDataResolver,
)
from keyworker.config.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from keyworker.domain.errors.staff_config import StaffConfigNotFoundError
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.assignment import Assignment
from keyworker.domain.models.prison_configuration import PrisonConfiguration
from keyworker.domain.models.reference_data import (
    DeallocationReason,
    ReferenceDataDomain,
    StaffStatus,
)
from keyworker.domain.models.staff import JobClassification, StaffConfiguration
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)


class StaffConfigManagerService(LoggingMixin):
    """Updates staff configuration and applies staff status changes."""

    def __init__(
        self,
        staff_configs: StaffConfigRepositoryProtocol,
        prison_configurations: PrisonConfigurationRepositoryProtocol,
        assignments: AssignmentRepositoryProtocol,
        policy_rules: PolicyRulesFactory,
        reference_data: ReferenceDataResolver,
        transactions: TransactionManagerProtocol,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        metrics: AllocationMetricsCollector | None = None,
    ) -> None:
        self._staff_configs = staff_configs
        self._prison_configurations = prison_configurations
        self._assignments = assignments
        self._policy_rules = policy_rules
        self._reference_data = reference_data
        self._transactions = transactions
        self._config = config
        self._metrics = metrics or get_allocation_metrics_collector()
        self._init_logger(component="staff")

    def update_staff_details(
        self,
        prison_code: str,
        staff_id: int,
        request: StaffDetailsRequest,
        context: AllocationContext,
    ) -> StaffConfiguration | None:
        """Create or update a staff member's configuration.

        An existing configuration is always updated. A new one is only
        stored when it differs from what the prison defaults would give.
        With ``deactivate_active_allocations`` set, every active assignment
        the staff member holds at the prison is closed.
        With ``staff_role`` set, the role is granted or updated under the
        policy in the same transaction.

        Returns:
            The stored configuration, or None when none was needed.

        Raises:
            ReferenceDataNotFoundError: If the status or a role code is not
                configured.
            StaffNotFoundError: If the role names a staff member unknown to
                the national user-role system.
        """
        log = self._log_operation(
            "update_staff_details",
            prison_code=prison_code,
            staff_id=staff_id,
            policy=context.policy.value,
            status=request.status,
        )
        status = self._reference_data.resolve_code(
            ReferenceDataDomain.STAFF_STATUS, request.status
        )
        job = (
            self._job_classification(request.staff_role)
            if request.staff_role is not None
            else None
        )
        with self._transactions.transaction():
            existing = self._staff_configs.find_by_staff_id(context.policy, staff_id)
            stored: StaffConfiguration | None
            if existing is not None:
                stored = self._staff_configs.save(
                    existing.with_changes(
                        status=status,
                        capacity=request.capacity,
                        allow_auto_allocation=request.allow_auto_allocation,
                        reactivate_on=request.reactivate_on,
                    )
                )
            elif self._differs_from_defaults(
                request, self._prison_configuration(prison_code, context)
            ):
                stored = self._staff_configs.save(
                    StaffConfiguration(
                        staff_id=staff_id,
                        policy=context.policy,
                        status=status,
                        capacity=request.capacity,
                        allow_auto_allocation=request.allow_auto_allocation,
                        reactivate_on=request.reactivate_on,
                    )
                )
            else:
                stored = None

            closed: list[Assignment] = []
            if request.deactivate_active_allocations:
                closed = self._deallocate_staff(prison_code, staff_id, context)

            if job is not None:
                self._policy_rules.policy_rules_for(context.policy).set_staff_role(
                    prison_code, staff_id, job
                )

        self._record_deallocations(closed, context)
        log.info(
            "staff_details_updated",
            created=existing is None and stored is not None,
            deallocated=len(closed),
            role_set=job is not None,
        )
        return stored

    def remove_staff_role(
        self,
        prison_code: str,
        staff_id: int,
        context: AllocationContext,
    ) -> list[Assignment]:
        """Take a staff member out of the policy at a prison.

        Closes their active assignments there, deletes their configuration
        and ends their role through the policy's roster.

        Returns:
            The assignments closed.
        """
        log = self._log_operation(
            "remove_staff_role",
            prison_code=prison_code,
            staff_id=staff_id,
            policy=context.policy.value,
        )
        with self._transactions.transaction():
            closed = self._deallocate_staff(prison_code, staff_id, context)
            self._staff_configs.delete(context.policy, staff_id)
            self._policy_rules.policy_rules_for(context.policy).end_staff_role(
                prison_code, staff_id, context.requested_at.date()
            )
        self._record_deallocations(closed, context)
        log.info("staff_role_removed", deallocated=len(closed))
        return closed

    def patch_staff_config(
        self,
        staff_id: int,
        patch: StaffConfigPatch,
        context: AllocationContext,
    ) -> StaffConfiguration:
        """Apply a partial change to an existing staff configuration.

        Raises:
            StaffConfigNotFoundError: If the staff member has no configuration.
            ReferenceDataNotFoundError: If a new status code is not configured.
        """
        existing = self._staff_configs.find_by_staff_id(context.policy, staff_id)
        if existing is None:
            raise StaffConfigNotFoundError(staff_id, context.policy.value)

        changes: dict[str, object] = {}
        fields = patch.model_fields_set
        if "status" in fields and patch.status is not None:
            changes["status"] = self._reference_data.resolve_code(
                ReferenceDataDomain.STAFF_STATUS, patch.status
            )
        if "capacity" in fields and patch.capacity is not None:
            changes["capacity"] = patch.capacity
        if "allow_auto_allocation" in fields and patch.allow_auto_allocation is not None:
            changes["allow_auto_allocation"] = patch.allow_auto_allocation
        if "reactivate_on" in fields:
            changes["reactivate_on"] = patch.reactivate_on

        updated = self._staff_configs.save(existing.with_changes(**changes))
        self._log_operation(
            "patch_staff_config",
            staff_id=staff_id,
            policy=context.policy.value,
            fields=sorted(changes),
        ).info("staff_config_patched")
        return updated

    def _prison_configuration(
        self, prison_code: str, context: AllocationContext
    ) -> PrisonConfiguration:
        stored = self._prison_configurations.find_by_code(context.policy, prison_code)
        return stored or self._config.default_prison_configuration(
            prison_code, context.policy
        )

    def _job_classification(self, role: StaffRoleRequest) -> JobClassification:
        position_key = ReferenceDataDomain.STAFF_POSITION.key(role.position)
        schedule_key = ReferenceDataDomain.STAFF_SCHEDULE_TYPE.key(role.schedule_type)
        resolved = self._reference_data.resolve_all([position_key, schedule_key])
        return JobClassification(
            position=resolved[position_key],
            schedule_type=resolved[schedule_key],
            hours_per_week=role.hours_per_week,
            from_date=role.from_date,
            to_date=role.to_date,
        )

    @staticmethod
    def _differs_from_defaults(
        request: StaffDetailsRequest, prison: PrisonConfiguration
    ) -> bool:
        return (
            request.status != StaffStatus.ACTIVE.value
            or request.capacity != prison.capacity
            or request.allow_auto_allocation != prison.allow_auto_allocation
            or request.reactivate_on is not None
        )

    def _deallocate_staff(
        self,
        prison_code: str,
        staff_id: int,
        context: AllocationContext,
    ) -> list[Assignment]:
        targets = self._assignments.find_active_for_staff(
            context.policy, prison_code, staff_id
        )
        if not targets:
            return []
        reason = self._reference_data.resolve(
            DeallocationReason.STAFF_STATUS_CHANGE.key
        )
        return self._assignments.save_all(
            a.deallocate(reason, context) for a in targets
        )

    def _record_deallocations(
        self, closed: list[Assignment], context: AllocationContext
    ) -> None:
        for _ in closed:
            self._metrics.record_deallocated(
                context.policy.value, DeallocationReason.STAFF_STATUS_CHANGE.value
            )
