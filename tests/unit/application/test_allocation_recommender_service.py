"""Tests for AllocationRecommenderService."""

from __future__ import annotations

from datetime import timedelta

import pytest

from keyworker.bootstrap.allocation import AllocationEngine
from keyworker.domain.exceptions import InvalidRequestError
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.reference_data import AllocationReason, StaffStatus
from keyworker.domain.models.staff import PersonSummary
from tests.helpers.allocation_builders import (
    NOW,
    OTHER_PRISON,
    PRISON,
    add_people,
    add_staff,
    counter_total,
    enable_prison,
    make_assignment,
    make_context,
    make_person,
    person_id,
)


def sorted_ids(people: list[PersonSummary]) -> list[str]:
    return [p.person_identifier for p in sorted(people, key=PersonSummary.sort_key)]


def allocations_by_staff(result) -> dict[int, list[str]]:
    grouped: dict[int, list[str]] = {}
    for allocation in result.allocations:
        grouped.setdefault(allocation.staff.staff_id, []).append(
            allocation.person_identifier
        )
    return grouped


# ═══════════════════════════════════════════════════════════════════════════════
# BALANCING
# ═══════════════════════════════════════════════════════════════════════════════


class TestBalancing:
    """Tests for best-fit balancing across staff."""

    def test_balances_against_existing_load(self, engine: AllocationEngine) -> None:
        """Five staff at 5,4,3,2,1 of 6 absorb 15 of 16 people."""
        enable_prison(engine, maximum_capacity=6)
        for staff_id in range(1, 6):
            add_staff(engine, staff_id)
        existing = 900
        for staff_id, count in zip(range(1, 6), [5, 4, 3, 2, 1]):
            for _ in range(count):
                engine.assignments.save(
                    make_assignment(
                        person_id(existing),
                        staff_id,
                        reason=AllocationReason.AUTO,
                        allocated_at=NOW + timedelta(minutes=existing - 900),
                    )
                )
                existing += 1
        sp = sorted_ids(add_people(engine, range(16)))

        result = engine.recommender.recommend(PRISON, make_context())

        by_staff = allocations_by_staff(result)
        assert by_staff[1] == [sp[14]]
        assert by_staff[2] == [sp[9], sp[13]]
        assert by_staff[3] == [sp[5], sp[8], sp[12]]
        assert by_staff[4] == [sp[2], sp[4], sp[7], sp[11]]
        assert by_staff[5] == [sp[0], sp[1], sp[3], sp[6], sp[10]]
        assert result.no_available_staff_for == [sp[15]]

    def test_proportional_to_capacity(self, engine: AllocationEngine) -> None:
        """Capacities 6 and 12 split 18 people 6/12."""
        enable_prison(engine)
        add_staff(engine, 1, capacity=6)
        add_staff(engine, 2, capacity=12)
        sp = sorted_ids(add_people(engine, range(18)))

        result = engine.recommender.recommend(PRISON, make_context())

        by_staff = allocations_by_staff(result)
        assert by_staff[1] == [sp[i] for i in (0, 3, 6, 9, 12, 15)]
        assert by_staff[2] == [sp[i] for i in range(18) if i % 3 != 0]
        assert result.no_available_staff_for == []

    def test_never_exceeds_capacity(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1, capacity=2)
        add_staff(engine, 2, capacity=1)
        sp = sorted_ids(add_people(engine, range(5)))

        result = engine.recommender.recommend(PRISON, make_context())

        by_staff = allocations_by_staff(result)
        assert len(by_staff[1]) == 2
        assert len(by_staff[2]) == 1
        assert result.no_available_staff_for == sp[3:]

    def test_auto_allocation_flag_does_not_exclude_staff(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1, allow_auto_allocation=False)
        add_staff(engine, 2)
        sp = sorted_ids(add_people(engine, range(3)))

        result = engine.recommender.recommend(PRISON, make_context())

        assert allocations_by_staff(result) == {1: [sp[0], sp[2]], 2: [sp[1]]}
        flags = {s.staff_id: s.allow_auto_allocation for s in result.staff}
        assert flags == {1: False, 2: True}

    def test_only_staff_with_auto_allocation_disabled(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1, capacity=6, allow_auto_allocation=False)
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 1
        assert result.no_available_staff_for == []

    def test_prison_maximum_capacity_used_without_staff_config(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine, maximum_capacity=2)
        add_staff(engine, 1)
        add_people(engine, range(3))

        result = engine.recommender.recommend(PRISON, make_context())

        assert len(result.allocations) == 2
        assert result.staff[0].capacity == 2


# ═══════════════════════════════════════════════════════════════════════════════
# TIE-BREAKING AND DETERMINISM
# ═══════════════════════════════════════════════════════════════════════════════


class TestTieBreaking:
    """Tests for deterministic ordering among equally loaded staff."""

    def test_staff_never_auto_allocated_come_last(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_staff(engine, 2)
        engine.assignments.save(make_assignment(person_id(900), 1))
        engine.assignments.save(
            make_assignment(person_id(901), 2, reason=AllocationReason.AUTO)
        )
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 2

    def test_most_recent_auto_allocation_preferred(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_staff(engine, 2)
        engine.assignments.save(
            make_assignment(
                person_id(900),
                1,
                reason=AllocationReason.AUTO,
                allocated_at=NOW - timedelta(days=7),
            )
        )
        engine.assignments.save(
            make_assignment(person_id(901), 2, reason=AllocationReason.AUTO)
        )
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 2

    def test_lowest_staff_id_when_all_else_equal(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        for staff_id in (30, 10, 20):
            add_staff(engine, staff_id)
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 10

    def test_same_inputs_same_result(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        for staff_id in (5, 3, 8):
            add_staff(engine, staff_id, capacity=4)
        add_people(engine, range(10))

        first = engine.recommender.recommend(PRISON, make_context())
        second = engine.recommender.recommend(PRISON, make_context())

        assert first == second

    def test_recommendation_writes_nothing(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_people(engine, range(3))

        engine.recommender.recommend(PRISON, make_context())

        assert engine.assignments.all() == []


# ═══════════════════════════════════════════════════════════════════════════════
# CONTINUITY
# ═══════════════════════════════════════════════════════════════════════════════


class TestContinuity:
    """Tests for returning people to staff who have held them before."""

    def test_previous_staff_chosen_even_when_full(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1, capacity=1)
        add_staff(engine, 2)
        engine.assignments.save(make_assignment(person_id(900), 1))
        engine.assignments.save(
            make_assignment(person_id(0), 1, prison_code=OTHER_PRISON, active=False)
        )
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 1
        assert result.no_available_staff_for == []

    def test_previous_staff_chosen_without_auto_allocation(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1, allow_auto_allocation=False)
        add_staff(engine, 2)
        engine.assignments.save(make_assignment(person_id(0), 1, active=False))
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 1

    def test_first_previous_staff_in_queue_order(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_staff(engine, 2)
        engine.assignments.save(make_assignment(person_id(900), 1))
        for staff_id in (1, 2):
            engine.assignments.save(make_assignment(person_id(0), staff_id, active=False))
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 2

    def test_previous_staff_not_in_snapshot_ignored(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 2)
        add_staff(engine, 3, status=StaffStatus.INACTIVE)
        engine.assignments.save(make_assignment(person_id(0), 3, active=False))
        engine.assignments.save(make_assignment(person_id(0), 99, active=False))
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 2

    def test_history_is_per_policy(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_staff(engine, 2)
        engine.assignments.save(make_assignment(person_id(900), 1))
        engine.assignments.save(
            make_assignment(
                person_id(0),
                1,
                policy=AllocationPolicy.PERSONAL_OFFICER,
                active=False,
            )
        )
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 2


# ═══════════════════════════════════════════════════════════════════════════════
# CANDIDATES AND SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════════


class TestCandidates:
    """Tests for who is considered and which staff are queued."""

    def test_high_complexity_excluded(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        engine.people.add_person(PRISON, make_person(0, high_complexity=True))
        add_people(engine, [1])

        result = engine.recommender.recommend(PRISON, make_context())

        assert [a.person_identifier for a in result.allocations] == [person_id(1)]
        assert result.no_available_staff_for == []

    def test_already_allocated_excluded(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_people(engine, range(2))
        engine.assignments.save(make_assignment(person_id(0), 1))

        result = engine.recommender.recommend(PRISON, make_context())

        assert [a.person_identifier for a in result.allocations] == [person_id(1)]

    def test_allocation_under_other_policy_not_excluded(
        self, engine: AllocationEngine
    ) -> None:
        enable_prison(engine)
        add_staff(engine, 1)
        add_people(engine, [0])
        engine.assignments.save(
            make_assignment(person_id(0), 5, policy=AllocationPolicy.PERSONAL_OFFICER)
        )

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff_for(person_id(0)) == 1

    def test_inactive_staff_not_queued(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1, status=StaffStatus.UNAVAILABLE_ANNUAL_LEAVE)
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff == []
        assert result.no_available_staff_for == [person_id(0)]

    def test_staff_view_reports_initial_count(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1, capacity=6)
        engine.assignments.save(make_assignment(person_id(900), 1))
        add_people(engine, range(2))

        result = engine.recommender.recommend(PRISON, make_context())

        assert result.staff[0].allocated == 1
        assert result.staff[0].status_code == "ACTIVE"

    def test_personal_officer_roster(self, engine: AllocationEngine) -> None:
        policy = AllocationPolicy.PERSONAL_OFFICER
        enable_prison(engine, policy=policy)
        add_staff(engine, 1)
        add_staff(engine, 7, policy=policy)
        add_people(engine, [0])

        result = engine.recommender.recommend(PRISON, make_context(policy=policy))

        assert result.staff_for(person_id(0)) == 7

    def test_unconfigured_prison_uses_defaults(self, engine: AllocationEngine) -> None:
        add_staff(engine, 1)
        add_people(engine, range(10))

        result = engine.recommender.recommend(PRISON, make_context())

        assert len(result.allocations) == engine.config.default_maximum_capacity

    def test_empty_prison_code_rejected(self, engine: AllocationEngine) -> None:
        with pytest.raises(InvalidRequestError):
            engine.recommender.recommend("", make_context())

    def test_metrics_recorded(self, engine: AllocationEngine) -> None:
        enable_prison(engine)
        add_staff(engine, 1, capacity=1)
        add_people(engine, range(3))

        engine.recommender.recommend(PRISON, make_context())

        registry = engine.metrics.get_registry()
        assert counter_total(
            registry,
            "allocation_recommendations_total",
            policy="KEY_WORKER",
            outcome="RECOMMENDED",
        ) == 1
        assert counter_total(
            registry,
            "allocation_recommendations_total",
            policy="KEY_WORKER",
            outcome="NO_AVAILABLE_STAFF",
        ) == 2
