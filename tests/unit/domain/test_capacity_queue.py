"""Tests for CapacityQueue ordering and repositioning."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from fractions import Fraction

import pytest

from keyworker.domain.models.reference_data import StaffStatus
from keyworker.domain.models.staff import StaffSummary
from keyworker.domain.services.capacity_queue import CapacityQueue, StaffCapacity
from tests.helpers.allocation_builders import reference

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def record(
    staff_id: int,
    count: int = 0,
    capacity: int = 6,
    last_auto: datetime | None = None,
    allow_auto: bool = True,
) -> StaffCapacity:
    return StaffCapacity(
        staff=StaffSummary(staff_id=staff_id, first_name="F", last_name="L"),
        status=reference(StaffStatus.ACTIVE.key),
        allow_auto_allocation=allow_auto,
        auto_allocation_capacity=capacity,
        initial_allocation_count=count,
        allocation_count=count,
        last_auto_allocation_at=last_auto,
    )


def ids(queue: CapacityQueue) -> list[int]:
    return [r.staff_id for r in queue]


class TestAvailability:
    """Tests for StaffCapacity.availability."""

    def test_exact_fraction(self) -> None:
        assert record(1, count=2, capacity=6).availability == Fraction(1, 3)

    def test_zero_capacity_counts_as_empty(self) -> None:
        assert record(1, count=3, capacity=0).availability == 0

    def test_zero_count_is_empty(self) -> None:
        assert record(1, count=0, capacity=0).availability == 0

    def test_fractions_compare_exactly(self) -> None:
        """2/12 and 1/6 tie rather than differing by rounding."""
        assert record(1, count=2, capacity=12).availability == record(
            2, count=1, capacity=6
        ).availability

    def test_below_capacity_needs_room(self) -> None:
        assert record(1, count=5, capacity=6).below_capacity
        assert not record(1, count=6, capacity=6).below_capacity

    def test_below_capacity_ignores_auto_allocation_flag(self) -> None:
        assert record(1, count=0, allow_auto=False).below_capacity


class TestOrdering:
    """Tests for queue order."""

    def test_lowest_availability_first(self) -> None:
        queue = CapacityQueue([record(1, count=3), record(2, count=1), record(3, count=2)])
        assert ids(queue) == [2, 3, 1]

    def test_never_auto_allocated_after_any_timestamp(self) -> None:
        queue = CapacityQueue([record(1), record(2, last_auto=T0)])
        assert ids(queue) == [2, 1]

    def test_newer_auto_allocation_before_older(self) -> None:
        queue = CapacityQueue(
            [
                record(1, last_auto=T0 + timedelta(days=2)),
                record(2, last_auto=T0),
                record(3, last_auto=T0 + timedelta(days=1)),
            ]
        )
        assert ids(queue) == [1, 3, 2]

    def test_staff_id_breaks_remaining_ties(self) -> None:
        queue = CapacityQueue([record(9), record(3), record(5)])
        assert ids(queue) == [3, 5, 9]

    def test_insertion_order_does_not_matter(self) -> None:
        records = [record(i, count=i % 3, last_auto=T0 if i % 2 else None) for i in range(1, 9)]
        forward = ids(CapacityQueue(records))
        backward = ids(
            CapacityQueue(
                record(r.staff_id, r.allocation_count, last_auto=r.last_auto_allocation_at)
                for r in reversed(records)
            )
        )
        assert forward == backward

    def test_duplicate_staff_rejected(self) -> None:
        queue = CapacityQueue([record(1)])
        with pytest.raises(ValueError):
            queue.add(record(1))


class TestIncrement:
    """Tests for CapacityQueue.increment."""

    def test_increment_repositions(self) -> None:
        queue = CapacityQueue([record(1), record(2)])
        queue.increment(1)
        assert ids(queue) == [2, 1]
        assert queue.get(1).allocation_count == 1

    def test_increment_keeps_initial_count(self) -> None:
        queue = CapacityQueue([record(1, count=2)])
        queue.increment(1)
        assert queue.get(1).initial_allocation_count == 2
        assert queue.to_allocation_staff()[0].allocated == 2

    def test_increment_unknown_staff_raises(self) -> None:
        with pytest.raises(KeyError):
            CapacityQueue().increment(42)

    def test_first_matching_follows_order(self) -> None:
        queue = CapacityQueue([record(1, count=6), record(2, count=1), record(3, count=2)])
        chosen = queue.first_matching(lambda r: r.staff_id != 2)
        assert chosen is not None and chosen.staff_id == 3

    def test_first_matching_none(self) -> None:
        queue = CapacityQueue([record(1, count=6, capacity=6)])
        assert queue.first_matching(lambda r: r.below_capacity) is None
