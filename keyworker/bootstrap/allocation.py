"""Bootstrap wiring for the allocation engine.

Wires every service over the in-memory stubs. A persistence-backed
deployment replaces the stubs here and nowhere else.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from keyworker.application.services.allocation_event_handler import (
    AllocationEventHandler,
)
from keyworker.application.services.allocation_manager_service import (
    AllocationManagerService,
)
from keyworker.application.services.allocation_recommender_service import (
    AllocationRecommenderService,
)
from keyworker.application.services.capacity_snapshot_service import (
    CapacitySnapshotService,
)
from keyworker.application.services.deallocation_service import DeallocationService
from keyworker.application.services.merge_service import MergeService
from keyworker.application.services.policy_rules import PolicyRulesFactory
from keyworker.application.services.reference_data_resolver import (
    ReferenceDataResolver,
)
from keyworker.application.services.staff_config_manager_service import (
    StaffConfigManagerService,
)
from keyworker.bootstrap.logging import configure_logging
from keyworker.config.engine_config import EngineConfig
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
)
from keyworker.infrastructure.stubs import (
    AssignmentRepositoryStub,
    InMemoryTransactionManager,
    NomisStaffRoleStub,
    PersonDirectoryStub,
    PrisonConfigurationRepositoryStub,
    PrisonRegisterStub,
    ReferenceDataRepositoryStub,
    StaffConfigRepositoryStub,
    StaffRoleRepositoryStub,
)

_engine_lock = threading.Lock()


@dataclass(frozen=True)
class AllocationEngine:
    """Every wired service together with the stores behind it."""

    config: EngineConfig
    metrics: AllocationMetricsCollector
    assignments: AssignmentRepositoryStub
    reference_data: ReferenceDataRepositoryStub
    staff_configs: StaffConfigRepositoryStub
    nomis_roles: NomisStaffRoleStub
    staff_roles: StaffRoleRepositoryStub
    people: PersonDirectoryStub
    prison_configurations: PrisonConfigurationRepositoryStub
    prison_register: PrisonRegisterStub
    transactions: InMemoryTransactionManager
    snapshots: CapacitySnapshotService
    recommender: AllocationRecommenderService
    manager: AllocationManagerService
    deallocations: DeallocationService
    staff_config_manager: StaffConfigManagerService
    merges: MergeService
    events: AllocationEventHandler


def build_in_memory_engine(
    config: EngineConfig | None = None,
    metrics: AllocationMetricsCollector | None = None,
) -> AllocationEngine:
    """Wire a complete engine over fresh in-memory stubs.

    Reference data is seeded with every code the engine knows about.
    """
    config = config or EngineConfig.from_environment()
    metrics = metrics or get_allocation_metrics_collector()

    assignments = AssignmentRepositoryStub()
    reference_data = ReferenceDataRepositoryStub.with_defaults()
    staff_configs = StaffConfigRepositoryStub()
    nomis_roles = NomisStaffRoleStub()
    staff_roles = StaffRoleRepositoryStub()
    people = PersonDirectoryStub()
    prison_configurations = PrisonConfigurationRepositoryStub()
    prison_register = PrisonRegisterStub()
    transactions = InMemoryTransactionManager(assignments, staff_configs, staff_roles)

    resolver = ReferenceDataResolver(reference_data)
    policy_rules = PolicyRulesFactory(nomis_roles, staff_roles)
    snapshots = CapacitySnapshotService(
        policy_rules=policy_rules,
        staff_configs=staff_configs,
        assignments=assignments,
        prison_configurations=prison_configurations,
        reference_data=resolver,
        config=config,
    )
    deallocations = DeallocationService(
        assignments=assignments,
        reference_data=resolver,
        transactions=transactions,
        metrics=metrics,
    )
    merges = MergeService(
        assignments=assignments,
        reference_data=resolver,
        transactions=transactions,
        metrics=metrics,
    )
    return AllocationEngine(
        config=config,
        metrics=metrics,
        assignments=assignments,
        reference_data=reference_data,
        staff_configs=staff_configs,
        nomis_roles=nomis_roles,
        staff_roles=staff_roles,
        people=people,
        prison_configurations=prison_configurations,
        prison_register=prison_register,
        transactions=transactions,
        snapshots=snapshots,
        recommender=AllocationRecommenderService(
            person_search=people,
            assignments=assignments,
            snapshots=snapshots,
            metrics=metrics,
        ),
        manager=AllocationManagerService(
            prison_configurations=prison_configurations,
            person_locations=people,
            policy_rules=policy_rules,
            staff_configs=staff_configs,
            reference_data=resolver,
            assignments=assignments,
            transactions=transactions,
            config=config,
            metrics=metrics,
        ),
        deallocations=deallocations,
        staff_config_manager=StaffConfigManagerService(
            staff_configs=staff_configs,
            prison_configurations=prison_configurations,
            assignments=assignments,
            policy_rules=policy_rules,
            reference_data=resolver,
            transactions=transactions,
            config=config,
            metrics=metrics,
        ),
        merges=merges,
        events=AllocationEventHandler(
            deallocations=deallocations,
            merges=merges,
            prison_register=prison_register,
        ),
    )


_allocation_engine: AllocationEngine | None = None


def get_allocation_engine() -> AllocationEngine:
    """Get the process-wide engine instance (thread-safe lazy init).

    The first call configures logging before any service is built.
    """
    global _allocation_engine
    if _allocation_engine is None:
        with _engine_lock:
            if _allocation_engine is None:
                configure_logging()
                _allocation_engine = build_in_memory_engine()
    return _allocation_engine


def reset_allocation_engine() -> None:
    """Reset the singleton engine (for testing only)."""
    global _allocation_engine
    with _engine_lock:
        _allocation_engine = None
