"""Staff configuration repository protocol."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keyworker.domain.models.policy import AllocationPolicy
    from keyworker.domain.models.staff import StaffConfiguration


class StaffConfigRepositoryProtocol(Protocol):
    """Protocol for per-policy staff configuration storage."""

    @abstractmethod
    def find_for_staff(
        self,
        policy: AllocationPolicy,
        staff_ids: Iterable[int],
    ) -> dict[int, StaffConfiguration]:
        """Return stored configuration keyed by staff id.

        Staff without configuration are absent from the map.
        """
        ...

    @abstractmethod
    def find_by_staff_id(
        self,
        policy: AllocationPolicy,
        staff_id: int,
    ) -> StaffConfiguration | None:
        """Return one staff member's configuration, or None."""
        ...

    @abstractmethod
    def save(self, config: StaffConfiguration) -> StaffConfiguration:
        """Insert or replace the configuration for (policy, staff)."""
        ...

    @abstractmethod
    def delete(self, policy: AllocationPolicy, staff_id: int) -> None:
        """Remove configuration for (policy, staff). Missing rows are ignored."""
        ...
