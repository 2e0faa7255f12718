"""In-memory stub implementation of ReferenceDataRepositoryProtocol."""

from __future__ import annotations

from collections.abc import Iterable

from keyworker.domain.models.reference_data import (
    AllocationReason,
    DeallocationReason,
    ReferenceData,
    ReferenceDataKey,
    StaffPosition,
    StaffScheduleType,
    StaffStatus,
)

_DESCRIPTIONS: dict[ReferenceDataKey, str] = {
    AllocationReason.AUTO.key: "Automatic",
    AllocationReason.MANUAL.key: "Manual",
    AllocationReason.PROVISIONAL.key: "Provisional",
    DeallocationReason.OVERRIDE.key: "Overridden",
    DeallocationReason.RELEASED.key: "Released",
    DeallocationReason.TRANSFER.key: "Transferred",
    DeallocationReason.MERGED.key: "Merged",
    DeallocationReason.STAFF_STATUS_CHANGE.key: "Staff status change",
    DeallocationReason.CHANGE_IN_COMPLEXITY_OF_NEED.key: "Change in complexity of need",
    DeallocationReason.MANUAL.key: "Manual",
    DeallocationReason.MISSING.key: "Missing",
    DeallocationReason.DUP.key: "Duplicate",
    StaffStatus.ACTIVE.key: "Active",
    StaffStatus.INACTIVE.key: "Inactive",
    StaffStatus.UNAVAILABLE_ANNUAL_LEAVE.key: "Unavailable - annual leave",
    StaffStatus.UNAVAILABLE_LONG_TERM_ABSENCE.key: "Unavailable - long term absence",
    StaffStatus.UNAVAILABLE_NO_PRISONER_CONTACT.key: "Unavailable - no prisoner contact",
    StaffPosition.PRO.key: "Prison Officer",
    StaffPosition.PPO.key: "Principal Prison Officer",
    StaffPosition.AO.key: "Admin Officer",
    StaffScheduleType.FT.key: "Full Time",
    StaffScheduleType.PT.key: "Part Time",
    StaffScheduleType.SESS.key: "Sessional",
    StaffScheduleType.VOL.key: "Volunteer",
}


class ReferenceDataRepositoryStub:
    """In-memory implementation of ReferenceDataRepositoryProtocol.

    Starts empty; use ``with_defaults`` for a store holding every code
    the engine knows about.
    """

    def __init__(self, entries: Iterable[ReferenceData] = ()) -> None:
        self._entries: dict[ReferenceDataKey, ReferenceData] = {}
        for entry in entries:
            self.add(entry)

    @classmethod
    def with_defaults(cls) -> ReferenceDataRepositoryStub:
        return cls(
            ReferenceData(key=key, description=description, sequence_number=index)
            for index, (key, description) in enumerate(_DESCRIPTIONS.items(), start=1)
        )

    def add(self, entry: ReferenceData) -> None:
        self._entries[entry.key] = entry

    def remove(self, key: ReferenceDataKey) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def find_by_keys(
        self, keys: Iterable[ReferenceDataKey]
    ) -> dict[ReferenceDataKey, ReferenceData]:
        return {key: self._entries[key] for key in set(keys) if key in self._entries}
