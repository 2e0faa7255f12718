"""Application services - allocation use case orchestration.

Available services:
- ReferenceDataResolver: Resolves reason and status codes, failing on gaps
- CapacitySnapshotService: Capacity-ordered staff queue for a prison
- AllocationRecommenderService: Greedy best-fit recommendations
- AllocationManagerService: Validated, atomic allocation batches
- DeallocationService: Release, transfer and complexity-of-need triggers
- StaffConfigManagerService: Staff configuration and status changes
- MergeService: Person identifier merges
- AllocationEventHandler: Routes inbound events to the triggers
"""

from keyworker.application.services.allocation_event_handler import (
    AllocationEventHandler,
)
from keyworker.application.services.allocation_manager_service import (
    AllocationManagerService,
    ManageResult,
)
from keyworker.application.services.allocation_recommender_service import (
    AllocationRecommenderService,
)
from keyworker.application.services.capacity_snapshot_service import (
    CapacitySnapshotService,
)
from keyworker.application.services.deallocation_service import DeallocationService
from keyworker.application.services.merge_service import MergeService
from keyworker.application.services.policy_rules import (
    KeyWorkerPolicyRules,
    PersonalOfficerPolicyRules,
    PolicyRules,
    PolicyRulesFactory,
)
from keyworker.application.services.reference_data_resolver import (
    ReferenceDataResolver,
)
from keyworker.application.services.staff_config_manager_service import (
    StaffConfigManagerService,
)

__all__ = [
    "AllocationEventHandler",
    "AllocationManagerService",
    "AllocationRecommenderService",
    "CapacitySnapshotService",
    "DeallocationService",
    "KeyWorkerPolicyRules",
    "ManageResult",
    "MergeService",
    "PersonalOfficerPolicyRules",
    "PolicyRules",
    "PolicyRulesFactory",
    "ReferenceDataResolver",
    "StaffConfigManagerService",
]
