"""Reference data: coded reasons and statuses with descriptions.

Reason and status codes are configuration owned by each deployment.
The engine never invents descriptions; it resolves codes through the
reference data repository and fails when a code is not configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReferenceDataDomain(str, Enum):
    """Namespaces for reference data codes."""

    ALLOCATION_REASON = "ALLOCATION_REASON"
    DEALLOCATION_REASON = "DEALLOCATION_REASON"
    STAFF_STATUS = "STAFF_STATUS"
    STAFF_POSITION = "STAFF_POSITION"
    STAFF_SCHEDULE_TYPE = "STAFF_SCHEDULE_TYPE"

    def key(self, code: str) -> ReferenceDataKey:
        return ReferenceDataKey(domain=self, code=code)


@dataclass(frozen=True)
class ReferenceDataKey:
    """Lookup key for one reference data entry."""

    domain: ReferenceDataDomain
    code: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("reference data code must not be empty")


@dataclass(frozen=True)
class ReferenceData:
    """A resolved reference data entry.

    Attributes:
        key: Domain and code.
        description: Default human-readable description.
        sequence_number: Display ordering within the domain.
        description_override: Deployment-specific description, if set.
    """

    key: ReferenceDataKey
    description: str
    sequence_number: int = 0
    description_override: str | None = None

    @property
    def code(self) -> str:
        return self.key.code

    @property
    def domain(self) -> ReferenceDataDomain:
        return self.key.domain

    def display_description(self) -> str:
        return self.description_override or self.description


class AllocationReason(str, Enum):
    """Allocation reason codes known to the engine."""

    AUTO = "AUTO"
    MANUAL = "MANUAL"
    PROVISIONAL = "PROVISIONAL"

    @property
    def key(self) -> ReferenceDataKey:
        return ReferenceDataDomain.ALLOCATION_REASON.key(self.value)


class DeallocationReason(str, Enum):
    """Deallocation reason codes known to the engine."""

    OVERRIDE = "OVERRIDE"
    RELEASED = "RELEASED"
    TRANSFER = "TRANSFER"
    MERGED = "MERGED"
    STAFF_STATUS_CHANGE = "STAFF_STATUS_CHANGE"
    CHANGE_IN_COMPLEXITY_OF_NEED = "CHANGE_IN_COMPLEXITY_OF_NEED"
    MANUAL = "MANUAL"
    MISSING = "MISSING"
    DUP = "DUP"

    @property
    def key(self) -> ReferenceDataKey:
        return ReferenceDataDomain.DEALLOCATION_REASON.key(self.value)


class StaffStatus(str, Enum):
    """Staff status codes known to the engine."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    UNAVAILABLE_ANNUAL_LEAVE = "UNAVAILABLE_ANNUAL_LEAVE"
    UNAVAILABLE_LONG_TERM_ABSENCE = "UNAVAILABLE_LONG_TERM_ABSENCE"
    UNAVAILABLE_NO_PRISONER_CONTACT = "UNAVAILABLE_NO_PRISONER_CONTACT"

    @property
    def key(self) -> ReferenceDataKey:
        return ReferenceDataDomain.STAFF_STATUS.key(self.value)


class StaffPosition(str, Enum):
    """Staff position codes known to the engine."""

    PRO = "PRO"
    PPO = "PPO"
    AO = "AO"

    @property
    def key(self) -> ReferenceDataKey:
        return ReferenceDataDomain.STAFF_POSITION.key(self.value)


class StaffScheduleType(str, Enum):
    """Staff schedule type codes known to the engine."""

    FT = "FT"
    PT = "PT"
    SESS = "SESS"
    VOL = "VOL"

    @property
    def key(self) -> ReferenceDataKey:
        return ReferenceDataDomain.STAFF_SCHEDULE_TYPE.key(self.value)
