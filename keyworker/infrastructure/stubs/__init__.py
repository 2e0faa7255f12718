"""Infrastructure stubs for development and testing.

This module provides in-memory implementations of the application ports.

Available stubs:
- AssignmentRepositoryStub: Assignment storage enforcing one active per person
- ReferenceDataRepositoryStub: Reference data, optionally seeded with defaults
- StaffConfigRepositoryStub: Per-policy staff configuration
- NomisStaffRoleStub: National user-role system (key worker roster)
- StaffRoleRepositoryStub: Local role grants (personal officer roster)
- PersonDirectoryStub: Person location and person search
- PrisonConfigurationRepositoryStub: Per-prison settings
- PrisonRegisterStub: Known prison codes
- InMemoryTransactionManager: Snapshot/restore unit of work
"""

from keyworker.infrastructure.stubs.assignment_repository_stub import (
    AssignmentRepositoryStub,
)
from keyworker.infrastructure.stubs.person_directory_stub import PersonDirectoryStub
from keyworker.infrastructure.stubs.prison_configuration_stub import (
    PrisonConfigurationRepositoryStub,
)
from keyworker.infrastructure.stubs.prison_register_stub import PrisonRegisterStub
from keyworker.infrastructure.stubs.reference_data_stub import (
    ReferenceDataRepositoryStub,
)
from keyworker.infrastructure.stubs.staff_config_stub import (
    StaffConfigRepositoryStub,
)
from keyworker.infrastructure.stubs.staff_roster_stub import (
    EndedRole,
    GrantedRole,
    NomisStaffRoleStub,
    StaffRoleRepositoryStub,
)
from keyworker.infrastructure.stubs.transaction_stub import (
    InMemoryTransactionManager,
)

__all__ = [
    "AssignmentRepositoryStub",
    "EndedRole",
    "GrantedRole",
    "InMemoryTransactionManager",
    "NomisStaffRoleStub",
    "PersonDirectoryStub",
    "PrisonConfigurationRepositoryStub",
    "PrisonRegisterStub",
    "ReferenceDataRepositoryStub",
    "StaffConfigRepositoryStub",
    "StaffRoleRepositoryStub",
]
