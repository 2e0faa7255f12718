"""Transaction manager protocol.

Every assignment write made by the engine happens inside
``transaction()``. Leaving the block normally commits; leaving it with
an exception discards every write made inside it.
"""

from __future__ import annotations

from abc import abstractmethod
from contextlib import AbstractContextManager
from typing import Protocol


class TransactionManagerProtocol(Protocol):
    """Protocol for the persistence transaction boundary."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open an all-or-nothing unit of work."""
        ...
