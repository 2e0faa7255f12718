"""In-memory stub implementation of PrisonConfigurationRepositoryProtocol."""

from __future__ import annotations

from keyworker.domain.models.policy import AllocationPolicy
from keyworker.domain.models.prison_configuration import PrisonConfiguration


class PrisonConfigurationRepositoryStub:
    """In-memory implementation of PrisonConfigurationRepositoryProtocol."""

    def __init__(self) -> None:
        self._configs: dict[tuple[AllocationPolicy, str], PrisonConfiguration] = {}

    def add(self, config: PrisonConfiguration) -> None:
        self._configs[(config.policy, config.code)] = config

    def clear(self) -> None:
        self._configs.clear()

    def find_by_code(
        self,
        policy: AllocationPolicy,
        prison_code: str,
    ) -> PrisonConfiguration | None:
        return self._configs.get((policy, prison_code))
