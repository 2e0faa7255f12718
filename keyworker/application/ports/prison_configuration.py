"""Prison configuration repository protocol."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keyworker.domain.models.policy import AllocationPolicy
    from keyworker.domain.models.prison_configuration import PrisonConfiguration


class PrisonConfigurationRepositoryProtocol(Protocol):
    """Protocol for per-prison, per-policy settings."""

    @abstractmethod
    def find_by_code(
        self,
        policy: AllocationPolicy,
        prison_code: str,
    ) -> PrisonConfiguration | None:
        """Return stored settings, or None when the prison is unconfigured."""
        ...
