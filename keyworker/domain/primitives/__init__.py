"""Domain primitives shared by services and adapters."""

from keyworker.domain.primitives.ensure_atomicity import AtomicOperationContext

__all__ = ["AtomicOperationContext"]
