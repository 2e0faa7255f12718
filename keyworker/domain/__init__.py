"""
Domain layer - Pure allocation rules for key workers and personal officers.

This layer contains:
- Domain models (assignments, prison and staff configuration, reference data)
- Value objects (allocation context, policy)
- Domain services (capacity queue ordering)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or config.
Only stdlib and typing imports are allowed.
"""

from keyworker.domain.exceptions import AllocationEngineError, ErrorKind

__all__: list[str] = ["AllocationEngineError", "ErrorKind"]
