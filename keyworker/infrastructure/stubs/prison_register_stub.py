"""In-memory stub implementation of PrisonRegisterProtocol."""

from __future__ import annotations

from collections.abc import Iterable


class PrisonRegisterStub:
    """Knows a fixed set of prison codes."""

    def __init__(self, prison_codes: Iterable[str] = ()) -> None:
        self._codes = set(prison_codes)

    def add_prison(self, code: str) -> None:
        self._codes.add(code)

    def is_prison(self, code: str) -> bool:
        return code in self._codes
