"""Tests for AllocationPolicy parsing and AllocationContext."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from keyworker.domain.models.allocation_context import (
    SYSTEM_USERNAME,
    AllocationContext,
)
from keyworker.domain.models.policy import AllocationPolicy


class TestAllocationPolicy:
    """Tests for AllocationPolicy."""

    @pytest.mark.parametrize(
        "name", ["KEY_WORKER", "key_worker", "key-worker", "KeyWorker", "keyworker"]
    )
    def test_of_tolerates_case_and_separators(self, name: str) -> None:
        assert AllocationPolicy.of(name) is AllocationPolicy.KEY_WORKER

    def test_of_personal_officer(self) -> None:
        assert AllocationPolicy.of("personal-officer") is AllocationPolicy.PERSONAL_OFFICER

    @pytest.mark.parametrize("name", [None, "", "governor"])
    def test_of_unknown(self, name: str | None) -> None:
        assert AllocationPolicy.of(name) is None

    def test_role_codes(self) -> None:
        assert AllocationPolicy.KEY_WORKER.nomis_user_role_code == "KW"
        assert AllocationPolicy.PERSONAL_OFFICER.nomis_user_role_code is None


class TestAllocationContext:
    """Tests for AllocationContext."""

    def test_defaults_to_aware_now(self) -> None:
        context = AllocationContext(username="U", policy=AllocationPolicy.KEY_WORKER)
        assert context.requested_at.tzinfo is not None

    def test_naive_time_rejected(self) -> None:
        with pytest.raises(ValueError):
            AllocationContext(
                username="U",
                policy=AllocationPolicy.KEY_WORKER,
                requested_at=datetime(2025, 1, 1),
            )

    def test_empty_username_rejected(self) -> None:
        with pytest.raises(ValueError):
            AllocationContext(username="", policy=AllocationPolicy.KEY_WORKER)

    def test_system_context(self) -> None:
        at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        context = AllocationContext.system(AllocationPolicy.PERSONAL_OFFICER, at)
        assert context.username == SYSTEM_USERNAME
        assert context.requested_at == at

    def test_copies_do_not_mutate(self) -> None:
        context = AllocationContext(username="U", policy=AllocationPolicy.KEY_WORKER)
        other = context.with_policy(AllocationPolicy.PERSONAL_OFFICER)
        assert context.policy is AllocationPolicy.KEY_WORKER
        assert other.policy is AllocationPolicy.PERSONAL_OFFICER
        assert other.username == "U"
