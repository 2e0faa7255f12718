"""Tests for CapacitySnapshotService."""

from __future__ import annotations

from datetime import timedelta
from fractions import Fraction

import pytest

from keyworker.bootstrap.allocation import AllocationEngine, build_in_memory_engine
from keyworker.config.engine_config import TEST_ENGINE_CONFIG
from keyworker.domain.errors.reference_data import ReferenceDataNotFoundError
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import AllocationReason, StaffStatus
from tests.helpers.allocation_builders import (
    NOW,
    OTHER_PRISON,
    PRISON,
    add_staff,
    enable_prison,
    make_assignment,
    make_context,
)


class TestBuild:
    """Tests for CapacitySnapshotService.build."""

    def test_derives_each_record(self, engine: AllocationEngine) -> None:
        enable_prison(engine, maximum_capacity=8, allow_auto_allocation=False)
        add_staff(engine, 1)
        add_staff(engine, 2, capacity=4, allow_auto_allocation=True)
        engine.assignments.save(
            make_assignment("A0001AA", 2, reason=AllocationReason.AUTO)
        )
        engine.assignments.save(
            make_assignment("A0002AA", 2, allocated_at=NOW + timedelta(hours=1))
        )

        queue = engine.snapshots.build(PRISON, make_context())

        unconfigured = queue.get(1)
        assert unconfigured.auto_allocation_capacity == 8
        assert unconfigured.allow_auto_allocation is False
        assert unconfigured.status.code == StaffStatus.ACTIVE.value
        assert unconfigured.allocation_count == 0
        assert unconfigured.last_auto_allocation_at is None

        configured = queue.get(2)
        assert configured.auto_allocation_capacity == 4
        assert configured.allow_auto_allocation is True
        assert configured.allocation_count == 2
        assert configured.initial_allocation_count == 2
        assert configured.availability == Fraction(1, 2)
        assert configured.last_auto_allocation_at == NOW

    def test_counts_only_this_prison_and_policy(self, engine: AllocationEngine) -> None:
        add_staff(engine, 1)
        engine.assignments.save(make_assignment("A0001AA", 1, prison_code=OTHER_PRISON))
        engine.assignments.save(
            make_assignment("A0002AA", 1, policy=AllocationPolicy.PERSONAL_OFFICER)
        )
        engine.assignments.save(make_assignment("A0003AA", 1, active=False))

        assert engine.snapshots.build(PRISON, make_context()).get(1).allocation_count == 0

    @pytest.mark.parametrize(
        "status",
        [
            StaffStatus.INACTIVE,
            StaffStatus.UNAVAILABLE_ANNUAL_LEAVE,
            StaffStatus.UNAVAILABLE_LONG_TERM_ABSENCE,
            StaffStatus.UNAVAILABLE_NO_PRISONER_CONTACT,
        ],
    )
    def test_non_active_staff_excluded(
        self, engine: AllocationEngine, status: StaffStatus
    ) -> None:
        add_staff(engine, 1, status=status)
        add_staff(engine, 2)

        assert engine.snapshots.build(PRISON, make_context()).staff_ids() == {2}

    def test_queue_ordered(self, engine: AllocationEngine) -> None:
        for staff_id in (3, 1, 2):
            add_staff(engine, staff_id, capacity=4)
        engine.assignments.save(make_assignment("A0001AA", 1))

        queue = engine.snapshots.build(PRISON, make_context())

        assert [s.staff_id for s in queue] == [2, 3, 1]

    def test_unconfigured_prison_uses_engine_config(self, metrics) -> None:
        engine = build_in_memory_engine(TEST_ENGINE_CONFIG, metrics)
        add_staff(engine, 1)

        prison = engine.snapshots.prison_configuration(PRISON, make_context())
        queue = engine.snapshots.build(PRISON, make_context())

        assert prison.maximum_capacity == TEST_ENGINE_CONFIG.default_maximum_capacity
        assert queue.get(1).auto_allocation_capacity == 3

    def test_active_status_must_be_configured(self, engine: AllocationEngine) -> None:
        engine.reference_data.remove(StaffStatus.ACTIVE.key)
        add_staff(engine, 1)

        with pytest.raises(ReferenceDataNotFoundError):
            engine.snapshots.build(PRISON, make_context())
