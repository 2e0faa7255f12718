"""Prison register protocol.

Movement events name locations that may or may not be prisons; only
movements into a prison count as transfers.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol


class PrisonRegisterProtocol(Protocol):
    """Protocol for checking whether a location code is a prison."""

    @abstractmethod
    def is_prison(self, code: str) -> bool:
        """Return True when ``code`` identifies a prison."""
        ...
