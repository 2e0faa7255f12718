"""Reference data resolver.

Turns reason and status codes into resolved reference data, failing
loudly when a code is not configured. Resolution is batched so a
request naming several codes reports every missing one at once.
"""

from __future__ import annotations

from collections.abc import Iterable

from keyworker.application.ports.reference_data import ReferenceDataRepositoryProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.domain.errors.reference_data import ReferenceDataNotFoundError
from keyworker.domain.models.reference_data import (
    ReferenceData,
    ReferenceDataDomain,
    ReferenceDataKey,
)


class ReferenceDataResolver(LoggingMixin):
    """Resolves reference data keys through the repository."""

    def __init__(self, repository: ReferenceDataRepositoryProtocol) -> None:
        self._repository = repository
        self._init_logger(component="reference_data")

    def resolve_all(
        self, keys: Iterable[ReferenceDataKey]
    ) -> dict[ReferenceDataKey, ReferenceData]:
        """Resolve every key or fail.

        Raises:
            ReferenceDataNotFoundError: Naming every unresolved key.
        """
        wanted = set(keys)
        found = self._repository.find_by_keys(wanted)
        missing = wanted - found.keys()
        if missing:
            self._log_operation("resolve_all").error(
                "reference_data_missing",
                keys=sorted(f"{k.domain.value}:{k.code}" for k in missing),
            )
            raise ReferenceDataNotFoundError(missing)
        return found

    def resolve(self, key: ReferenceDataKey) -> ReferenceData:
        return self.resolve_all([key])[key]

    def resolve_code(self, domain: ReferenceDataDomain, code: str) -> ReferenceData:
        return self.resolve(domain.key(code))
