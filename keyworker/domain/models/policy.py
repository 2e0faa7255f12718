"""Allocation policy: which kind of accountable staff member is assigned."""

from __future__ import annotations

import re
from enum import Enum

_SEPARATORS = re.compile(r"[\s_\-]+")


class AllocationPolicy(str, Enum):
    """The responsibility an assignment confers.

    KEY_WORKER: Staff roster comes from the national user-role system.
    PERSONAL_OFFICER: Staff roster is owned locally by this engine.
    """

    KEY_WORKER = "KEY_WORKER"
    PERSONAL_OFFICER = "PERSONAL_OFFICER"

    @property
    def nomis_user_role_code(self) -> str | None:
        """Role code held in the national user-role system, if any."""
        return "KW" if self is AllocationPolicy.KEY_WORKER else None

    @classmethod
    def of(cls, name: str | None) -> AllocationPolicy | None:
        """Parse a policy name ignoring case and separators.

        ``"key-worker"``, ``"KEY_WORKER"`` and ``"keyworker"`` all map to
        KEY_WORKER. Unknown or empty names return None.
        """
        if not name:
            return None
        wanted = _SEPARATORS.sub("", name).upper()
        for policy in cls:
            if policy.value.replace("_", "") == wanted:
                return policy
        return None
