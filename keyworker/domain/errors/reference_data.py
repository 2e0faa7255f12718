"""Reference data errors.

A missing reference data entry is a deployment problem rather than a
bad request, so it sits on its own branch of the precondition errors.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from keyworker.domain.exceptions import FailedPreconditionError

if TYPE_CHECKING:
    from keyworker.domain.models.reference_data import ReferenceDataKey


class ReferenceDataNotFoundError(FailedPreconditionError):
    """Raised when one or more reference data keys cannot be resolved.

    Attributes:
        keys: The unresolved keys.
    """

    def __init__(self, keys: Iterable[ReferenceDataKey]) -> None:
        self.keys = sorted(set(keys), key=lambda k: (k.domain.value, k.code))
        rendered = ", ".join(f"{k.domain.value}:{k.code}" for k in self.keys)
        super().__init__(f"Reference data not configured: {rendered}")
