"""Tests for MergeService."""

from __future__ import annotations

from datetime import timedelta

from keyworker.bootstrap.allocation import AllocationEngine
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import AllocationReason
from tests.helpers.allocation_builders import (
    NOW,
    counter_total,
    make_assignment,
    make_context,
)

KEPT = "A1111AA"
REMOVED = "A2222BB"
KW = AllocationPolicy.KEY_WORKER
PO = AllocationPolicy.PERSONAL_OFFICER


class TestMerge:
    """Tests for merging two identifiers of one person."""

    def test_history_follows_survivor(self, engine: AllocationEngine) -> None:
        old = engine.assignments.save(
            make_assignment(REMOVED, 1, allocated_at=NOW - timedelta(days=30), active=False)
        )
        current = engine.assignments.save(make_assignment(REMOVED, 2))

        moved = engine.merges.merge(KEPT, REMOVED, make_context())

        assert {a.id for a in moved} == {old.id, current.id}
        assert all(a.person_identifier == KEPT for a in engine.assignments.all())
        assert engine.assignments.get(current.id).active
        assert engine.assignments.find_all_for_person(KW, REMOVED) == []

    def test_both_active_closes_removed(self, engine: AllocationEngine) -> None:
        kept = engine.assignments.save(make_assignment(KEPT, 1))
        removed = engine.assignments.save(make_assignment(REMOVED, 2))

        engine.merges.merge(KEPT, REMOVED, make_context(username="MERGER"))

        merged = engine.assignments.get(removed.id)
        assert merged.person_identifier == KEPT
        assert not merged.active
        assert merged.deallocation_reason.code == "MERGED"
        assert merged.deallocated_by == "MERGER"
        assert engine.assignments.get(kept.id).active
        assert engine.assignments.count_active() == 1

    def test_each_policy_merged_independently(self, engine: AllocationEngine) -> None:
        engine.assignments.save(make_assignment(KEPT, 1))
        engine.assignments.save(make_assignment(REMOVED, 2))
        po = engine.assignments.save(make_assignment(REMOVED, 3, policy=PO))

        engine.merges.merge(KEPT, REMOVED, make_context())

        moved_po = engine.assignments.get(po.id)
        assert moved_po.active
        assert moved_po.person_identifier == KEPT
        assert engine.assignments.count_active(KW) == 1
        assert engine.assignments.count_active(PO) == 1

    def test_metrics_for_merged_deallocations(self, engine: AllocationEngine) -> None:
        engine.assignments.save(make_assignment(KEPT, 1))
        engine.assignments.save(make_assignment(REMOVED, 2))

        engine.merges.merge(KEPT, REMOVED, make_context())

        assert counter_total(
            engine.metrics.get_registry(),
            "assignments_deallocated_total",
            reason="MERGED",
        ) == 1

    def test_nothing_to_merge(self, engine: AllocationEngine) -> None:
        kept = engine.assignments.save(make_assignment(KEPT, 1))

        assert engine.merges.merge(KEPT, REMOVED, make_context()) == []
        assert engine.assignments.get(kept.id).active

    def test_merge_into_self_ignored(self, engine: AllocationEngine) -> None:
        engine.assignments.save(make_assignment(KEPT, 1))

        assert engine.merges.merge(KEPT, KEPT, make_context()) == []
        assert engine.transactions.committed == 0

    def test_replay_is_noop(self, engine: AllocationEngine) -> None:
        engine.assignments.save(make_assignment(KEPT, 1))
        engine.assignments.save(make_assignment(REMOVED, 2))
        engine.merges.merge(KEPT, REMOVED, make_context())

        assert engine.merges.merge(KEPT, REMOVED, make_context()) == []

    def test_provisional_rows_follow_survivor(self, engine: AllocationEngine) -> None:
        engine.assignments.save(make_assignment(KEPT, 1))
        provisional = engine.assignments.save(
            make_assignment(REMOVED, 2, reason=AllocationReason.PROVISIONAL)
        )

        engine.merges.merge(KEPT, REMOVED, make_context())

        moved = engine.assignments.get(provisional.id)
        assert moved.person_identifier == KEPT
        assert moved.active
        assert moved.deallocation_reason is None
        assert all(a.person_identifier == KEPT for a in engine.assignments.all())
