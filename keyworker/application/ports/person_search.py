"""Person search protocol: who is resident at a prison."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keyworker.domain.models.staff import PersonSummary


class PersonSearchProtocol(Protocol):
    """Protocol for listing the people resident at a prison."""

    @abstractmethod
    def find_people(self, prison_code: str) -> list[PersonSummary]:
        """List every person currently at ``prison_code``.

        Returns:
            Person summaries in no particular order, including each
            person's complexity-of-need flag.
        """
        ...
