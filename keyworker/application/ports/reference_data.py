"""Reference data repository protocol."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keyworker.domain.models.reference_data import ReferenceData, ReferenceDataKey


class ReferenceDataRepositoryProtocol(Protocol):
    """Protocol for looking up configured reference data."""

    @abstractmethod
    def find_by_keys(
        self, keys: Iterable[ReferenceDataKey]
    ) -> dict[ReferenceDataKey, ReferenceData]:
        """Resolve keys; unknown keys are absent from the result."""
        ...
