"""Capacity-ordered queue of staff for best-fit allocation.

The queue keeps staff in the order the recommender must consider them:

1. availability ascending (allocation count / capacity, exact fraction)
2. last auto allocation: most recent first, never auto-allocated last
3. staff id ascending

The order is total, so two queues built from the same records always
iterate identically. Changing a record's count goes through
``increment`` which removes, updates and reinserts it; records must not
be mutated any other way while queued.
"""

from __future__ import annotations

from bisect import bisect_left, insort
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from fractions import Fraction

from keyworker.domain.models.recommendation import AllocationStaff
from keyworker.domain.models.reference_data import ReferenceData
from keyworker.domain.models.staff import StaffSummary

SortKey = tuple[Fraction, tuple[int, int], int]


@dataclass(eq=False)
class StaffCapacity:
    """A staff member's current load, derived at query time.

    Attributes:
        staff: Roster summary.
        status: Resolved STAFF_STATUS.
        allow_auto_allocation: Whether auto allocation may pick this member.
        auto_allocation_capacity: Soft caseload target.
        initial_allocation_count: Active assignments when the snapshot was built.
        allocation_count: Running count, including recommendations so far.
        last_auto_allocation_at: Most recent active AUTO assignment, if any.
    """

    staff: StaffSummary
    status: ReferenceData
    allow_auto_allocation: bool
    auto_allocation_capacity: int
    initial_allocation_count: int
    allocation_count: int
    last_auto_allocation_at: datetime | None = None

    @property
    def staff_id(self) -> int:
        return self.staff.staff_id

    @property
    def availability(self) -> Fraction:
        """Fraction of capacity in use; zero when either side is zero."""
        if self.allocation_count == 0 or self.auto_allocation_capacity == 0:
            return Fraction(0)
        return Fraction(self.allocation_count, self.auto_allocation_capacity)

    @property
    def below_capacity(self) -> bool:
        return self.allocation_count < self.auto_allocation_capacity

    def sort_key(self) -> SortKey:
        if self.last_auto_allocation_at is None:
            recency = (1, 0)
        else:
            micros = round(self.last_auto_allocation_at.timestamp() * 1_000_000)
            recency = (0, -micros)
        return (self.availability, recency, self.staff_id)

    def to_allocation_staff(self) -> AllocationStaff:
        return AllocationStaff(
            staff_id=self.staff_id,
            first_name=self.staff.first_name,
            last_name=self.staff.last_name,
            status_code=self.status.code,
            status_description=self.status.display_description(),
            allow_auto_allocation=self.allow_auto_allocation,
            capacity=self.auto_allocation_capacity,
            allocated=self.initial_allocation_count,
        )


def _key(record: StaffCapacity) -> SortKey:
    return record.sort_key()


class CapacityQueue:
    """Sorted, staff-id indexed collection of StaffCapacity records."""

    def __init__(self, records: Iterable[StaffCapacity] = ()) -> None:
        self._items: list[StaffCapacity] = []
        self._by_id: dict[int, StaffCapacity] = {}
        for record in records:
            self.add(record)

    def add(self, record: StaffCapacity) -> None:
        if record.staff_id in self._by_id:
            raise ValueError(f"staff {record.staff_id} is already queued")
        self._by_id[record.staff_id] = record
        insort(self._items, record, key=_key)

    def get(self, staff_id: int) -> StaffCapacity | None:
        return self._by_id.get(staff_id)

    def first_matching(
        self, predicate: Callable[[StaffCapacity], bool]
    ) -> StaffCapacity | None:
        """Return the first record in queue order satisfying ``predicate``."""
        for record in self._items:
            if predicate(record):
                return record
        return None

    def increment(self, staff_id: int) -> StaffCapacity:
        """Count one more allocation for ``staff_id`` and reposition it.

        Raises:
            KeyError: If the staff member is not queued.
        """
        record = self._by_id[staff_id]
        index = bisect_left(self._items, record.sort_key(), key=_key)
        if index >= len(self._items) or self._items[index] is not record:
            raise RuntimeError(f"capacity queue out of order at staff {staff_id}")
        del self._items[index]
        record.allocation_count += 1
        insort(self._items, record, key=_key)
        return record

    def staff_ids(self) -> set[int]:
        return set(self._by_id)

    def to_allocation_staff(self) -> list[AllocationStaff]:
        return [record.to_allocation_staff() for record in self._items]

    def __iter__(self) -> Iterator[StaffCapacity]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, staff_id: object) -> bool:
        return staff_id in self._by_id
