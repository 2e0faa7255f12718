"""Application ports: the boundaries the engine talks through.

Every port is a ``typing.Protocol``. In-memory implementations live in
``keyworker.infrastructure.stubs``.
"""

from keyworker.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from keyworker.application.ports.person_location import PersonLocationProtocol
from keyworker.application.ports.person_search import PersonSearchProtocol
from keyworker.application.ports.prison_configuration import (
    PrisonConfigurationRepositoryProtocol,
)
from keyworker.application.ports.prison_register import PrisonRegisterProtocol
from keyworker.application.ports.reference_data import (
    ReferenceDataRepositoryProtocol,
)
from keyworker.application.ports.staff_config import StaffConfigRepositoryProtocol
from keyworker.application.ports.staff_roster import (
    NomisStaffRoleProtocol,
    StaffRoleRepositoryProtocol,
)
from keyworker.application.ports.transaction import TransactionManagerProtocol

__all__ = [
    "AssignmentRepositoryProtocol",
    "NomisStaffRoleProtocol",
    "PersonLocationProtocol",
    "PersonSearchProtocol",
    "PrisonConfigurationRepositoryProtocol",
    "PrisonRegisterProtocol",
    "ReferenceDataRepositoryProtocol",
    "StaffConfigRepositoryProtocol",
    "StaffRoleRepositoryProtocol",
    "TransactionManagerProtocol",
]
