"""In-memory stub for PersonLocationProtocol and PersonSearchProtocol.

One directory answers both questions so the two can never disagree in
a test about where someone is.
"""

from __future__ import annotations

from collections.abc import Iterable

from keyworker.domain.models.staff import PersonSummary


class PersonDirectoryStub:
    """In-memory implementation of person location and person search.

    Example:
        >>> people = PersonDirectoryStub()
        >>> people.add_person("LEI", PersonSummary("A1234BC", "Ann", "Able"))
        >>> people.find_locations(["A1234BC", "Z9999ZZ"])
        {'A1234BC': 'LEI'}
    """

    def __init__(self) -> None:
        self._people: dict[str, tuple[str, PersonSummary]] = {}

    def add_person(self, prison_code: str, person: PersonSummary) -> None:
        self._people[person.person_identifier] = (prison_code, person)

    def move_person(self, person_identifier: str, prison_code: str) -> None:
        _, person = self._people[person_identifier]
        self._people[person_identifier] = (prison_code, person)

    def remove_person(self, person_identifier: str) -> None:
        self._people.pop(person_identifier, None)

    def clear(self) -> None:
        self._people.clear()

    def find_locations(self, person_identifiers: Iterable[str]) -> dict[str, str]:
        return {
            identifier: self._people[identifier][0]
            for identifier in set(person_identifiers)
            if identifier in self._people
        }

    def find_people(self, prison_code: str) -> list[PersonSummary]:
        return [
            person
            for location, person in self._people.values()
            if location == prison_code
        ]
