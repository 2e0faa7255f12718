"""In-memory stub implementation of StaffConfigRepositoryProtocol."""

from __future__ import annotations

from collections.abc import Iterable

from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.staff import StaffConfiguration


class StaffConfigRepositoryStub:
    """In-memory implementation of StaffConfigRepositoryProtocol."""

    def __init__(self) -> None:
        self._configs: dict[tuple[AllocationPolicy, int], StaffConfiguration] = {}

    def clear(self) -> None:
        self._configs.clear()

    def snapshot(self) -> dict[tuple[AllocationPolicy, int], StaffConfiguration]:
        return dict(self._configs)

    def restore(
        self, state: dict[tuple[AllocationPolicy, int], StaffConfiguration]
    ) -> None:
        self._configs = dict(state)

    def find_for_staff(
        self,
        policy: AllocationPolicy,
        staff_ids: Iterable[int],
    ) -> dict[int, StaffConfiguration]:
        return {
            staff_id: self._configs[(policy, staff_id)]
            for staff_id in set(staff_ids)
            if (policy, staff_id) in self._configs
        }

    def find_by_staff_id(
        self,
        policy: AllocationPolicy,
        staff_id: int,
    ) -> StaffConfiguration | None:
        return self._configs.get((policy, staff_id))

    def save(self, config: StaffConfiguration) -> StaffConfiguration:
        self._configs[(config.policy, config.staff_id)] = config
        return config

    def delete(self, policy: AllocationPolicy, staff_id: int) -> None:
        self._configs.pop((policy, staff_id), None)
