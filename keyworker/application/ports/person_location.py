"""Person location protocol.

Answers where people currently are. The engine uses it to refuse
allocating someone to staff at a prison they are not in.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import Protocol


class PersonLocationProtocol(Protocol):
    """Protocol for resolving the current prison of people."""

    @abstractmethod
    def find_locations(self, person_identifiers: Iterable[str]) -> dict[str, str]:
        """Look up the current prison of each person.

        Args:
            person_identifiers: People to locate.

        Returns:
            Map of person identifier to prison code. People who cannot be
            found are absent from the map.
        """
        ...
