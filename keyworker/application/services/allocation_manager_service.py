"""Allocation manager service.

Applies a batch of allocations and deallocations for one prison:

Validation (nothing is written if any check fails):
1. the batch is not empty, allocates with a confirmed reason (never
   PROVISIONAL) and the actor's username can be recorded
2. the prison is configured and enabled for the policy
3. every person being allocated is at the prison
4. every staff member being allocated is on the policy roster there and
   is not configured with a non-ACTIVE status
5. every reason code, plus OVERRIDE, resolves to reference data

Application (one transaction):
1. deallocations close the person's active assignment only when it is
   with the named staff member; anything else is stale and ignored
2. allocations then read the post-deallocation state: the same staff
   member is a no-op, a different one is closed with OVERRIDE and
   replaced, no assignment means a new one
3. provisional assignments for the allocated people are removed

Overriding to a different staff member does not check their capacity.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from keyworker.application.dtos.allocations import PersonStaffAllocations
from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.person_location import PersonLocationProtocol
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
from keyworker.domain.errors.allocation import (
    EmptyAllocationRequestError,
    PersonNotAtPrisonError,
    PrisonNotEnabledError,
    ProvisionalAllocationReasonError,
    StaffNotActiveError,
    StaffNotEligibleError,
    UsernameTooLongError,
)
from keyworker.domain.exceptions import InvalidRequestError
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.assignment import Assignment
from keyworker.domain.models.reference_data import (
    AllocationReason,
    DeallocationReason,
    ReferenceData,
    ReferenceDataDomain,
    ReferenceDataKey,
)
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)


@dataclass(frozen=True)
class ManageResult:
    """What a batch changed.

    Attributes:
        created: Assignments created and still active after the batch.
        deallocated: Assignments closed by the batch, in order.
        unchanged: People whose allocation already matched the request.
        stale_deallocations: People whose deallocation did not match their
            current assignment and was ignored.
    """

    created: list[Assignment] = field(default_factory=list)
    deallocated: list[Assignment] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    stale_deallocations: list[str] = field(default_factory=list)


class AllocationManagerService(LoggingMixin):
    """Validates and applies allocation batches."""

    def __init__(
        self,
        prison_configurations: PrisonConfigurationRepositoryProtocol,
        person_locations: PersonLocationProtocol,
        policy_rules: PolicyRulesFactory,
        staff_configs: StaffConfigRepositoryProtocol,
        reference_data: ReferenceDataResolver,
        assignments: AssignmentRepositoryProtocol,
        transactions: TransactionManagerProtocol,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        metrics: AllocationMetricsCollector | None = None,
    ) -> None:
        self._prison_configurations = prison_configurations
        self._person_locations = person_locations
        self._policy_rules = policy_rules
        self._staff_configs = staff_configs
        self._reference_data = reference_data
        self._assignments = assignments
        self._transactions = transactions
        self._config = config
        self._metrics = metrics or get_allocation_metrics_collector()
        self._init_logger()

    def manage(
        self,
        prison_code: str,
        request: PersonStaffAllocations,
        context: AllocationContext,
    ) -> ManageResult:
        """Validate and apply a batch of allocations and deallocations.

        Args:
            prison_code: Prison the batch applies to.
            request: Allocations and deallocations to apply.
            context: Actor, policy and instant.

        Returns:
            ManageResult describing every change made.

        Raises:
            InvalidRequestError: Empty batch, a PROVISIONAL allocation
                reason, empty prison code or an unrecordable username.
            AllocationValidationError: A person, staff member or the prison
                failed validation.
            ReferenceDataNotFoundError: A reason code is not configured.
        """
        log = self._log_operation(
            "manage",
            prison_code=prison_code,
            policy=context.policy.value,
            username=context.username,
            allocations=len(request.allocations),
            deallocations=len(request.deallocations),
        )
        log.info("manage_started")

        reasons = self._validate(prison_code, request, context)

        with self._transactions.transaction():
            result = ManageResult()
            self._deallocate(request, reasons, context, result)
            self._allocate(prison_code, request, reasons, context, result)
            if request.allocations:
                removed = self._assignments.delete_provisional(
                    context.policy, request.person_identifiers_to_allocate
                )
                if removed:
                    log.info("provisional_assignments_removed", count=removed)

        for assignment in result.created:
            self._metrics.record_created(
                context.policy.value, assignment.allocation_type.name
            )
        for assignment in result.deallocated:
            assert assignment.deallocation_reason is not None
            self._metrics.record_deallocated(
                context.policy.value, assignment.deallocation_reason.code
            )

        log.info(
            "manage_completed",
            created=len(result.created),
            deallocated=len(result.deallocated),
            unchanged=len(result.unchanged),
            stale=len(result.stale_deallocations),
        )
        return result

    # Validation

    def _validate(
        self,
        prison_code: str,
        request: PersonStaffAllocations,
        context: AllocationContext,
    ) -> dict[ReferenceDataKey, ReferenceData]:
        if request.is_empty():
            raise EmptyAllocationRequestError()
        provisional = [
            a.person_identifier
            for a in request.allocations
            if a.allocation_reason == AllocationReason.PROVISIONAL.value
        ]
        if provisional:
            raise ProvisionalAllocationReasonError(provisional)
        if not prison_code:
            raise InvalidRequestError("prison code must not be empty")
        if len(context.username) > self._config.max_username_length:
            raise UsernameTooLongError(
                context.username, self._config.max_username_length
            )

        prison = self._prison_configurations.find_by_code(context.policy, prison_code)
        if prison is None or not prison.enabled:
            raise PrisonNotEnabledError(prison_code, context.policy.value)

        self._check_people(prison_code, request.person_identifiers_to_allocate)
        self._check_staff(prison_code, request.staff_ids_to_allocate, context)
        return self._resolve_reasons(request)

    def _check_people(self, prison_code: str, person_identifiers: set[str]) -> None:
        if not person_identifiers:
            return
        locations = self._person_locations.find_locations(person_identifiers)
        elsewhere = [
            p for p in person_identifiers if locations.get(p) != prison_code
        ]
        if elsewhere:
            raise PersonNotAtPrisonError(prison_code, elsewhere)

    def _check_staff(
        self,
        prison_code: str,
        staff_ids: set[int],
        context: AllocationContext,
    ) -> None:
        if not staff_ids:
            return
        rules = self._policy_rules.policy_rules_for(context.policy)
        on_roster = {
            s.staff_id for s in rules.find_eligible_staff(prison_code, staff_ids)
        }
        if not staff_ids <= on_roster:
            raise StaffNotEligibleError(prison_code, staff_ids - on_roster)

        configs = self._staff_configs.find_for_staff(context.policy, staff_ids)
        not_active = [sid for sid, c in configs.items() if not c.is_active()]
        if not_active:
            raise StaffNotActiveError(not_active)

    def _resolve_reasons(
        self, request: PersonStaffAllocations
    ) -> dict[ReferenceDataKey, ReferenceData]:
        keys = {
            ReferenceDataDomain.ALLOCATION_REASON.key(code)
            for code in request.allocation_reason_codes
        }
        keys |= {
            ReferenceDataDomain.DEALLOCATION_REASON.key(code)
            for code in request.deallocation_reason_codes
        }
        keys.add(DeallocationReason.OVERRIDE.key)
        return self._reference_data.resolve_all(keys)

    # Application

    def _deallocate(
        self,
        request: PersonStaffAllocations,
        reasons: dict[ReferenceDataKey, ReferenceData],
        context: AllocationContext,
        result: ManageResult,
    ) -> None:
        if not request.deallocations:
            return
        active = self._assignments.find_active_for_people(
            context.policy, request.person_identifiers_to_deallocate
        )
        for proposal in request.deallocations:
            current = active.get(proposal.person_identifier)
            if current is None or current.staff_id != proposal.staff_id:
                result.stale_deallocations.append(proposal.person_identifier)
                self._log_operation(
                    "manage",
                    person_identifier=proposal.person_identifier,
                    staff_id=proposal.staff_id,
                ).info("stale_deallocation_ignored")
                continue
            reason = reasons[
                ReferenceDataDomain.DEALLOCATION_REASON.key(
                    proposal.deallocation_reason
                )
            ]
            closed = self._assignments.save(current.deallocate(reason, context))
            del active[proposal.person_identifier]
            result.deallocated.append(closed)

    def _allocate(
        self,
        prison_code: str,
        request: PersonStaffAllocations,
        reasons: dict[ReferenceDataKey, ReferenceData],
        context: AllocationContext,
        result: ManageResult,
    ) -> None:
        if not request.allocations:
            return
        active = self._assignments.find_active_for_people(
            context.policy, request.person_identifiers_to_allocate
        )
        override = reasons[DeallocationReason.OVERRIDE.key]
        created: dict[str, Assignment] = {}

        for proposal in request.allocations:
            person = proposal.person_identifier
            current = active.get(person)
            if current is not None and current.staff_id == proposal.staff_id:
                result.unchanged.append(person)
                continue
            if current is not None:
                closed = self._assignments.save(current.deallocate(override, context))
                if created.get(person) is current:
                    del created[person]
                result.deallocated.append(closed)
                self._log_operation(
                    "manage",
                    person_identifier=person,
                    from_staff_id=current.staff_id,
                    to_staff_id=proposal.staff_id,
                ).info("allocation_overridden")

            reason = reasons[
                ReferenceDataDomain.ALLOCATION_REASON.key(proposal.allocation_reason)
            ]
            assignment = self._assignments.save(
                Assignment.create(
                    person_identifier=person,
                    prison_code=prison_code,
                    staff_id=proposal.staff_id,
                    reason=reason,
                    context=context,
                )
            )
            active[person] = assignment
            created[person] = assignment

        result.created.extend(created.values())
