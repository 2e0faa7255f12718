"""In-memory stub implementation of TransactionManagerProtocol.

Snapshots every registered store on entry and restores them when the
block raises, using AtomicOperationContext rollback handlers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from keyworker.domain.primitives.ensure_atomicity import AtomicOperationContext


class SnapshotStore(Protocol):
    """A store whose whole state can be captured and put back."""

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...


class InMemoryTransactionManager:
    """All-or-nothing unit of work over in-memory stores.

    Example:
        >>> tx = InMemoryTransactionManager(assignment_repository)
        >>> with tx.transaction():
        ...     assignment_repository.save(assignment)
    """

    def __init__(self, *stores: SnapshotStore) -> None:
        self._stores = list(stores)
        self.committed = 0
        self.rolled_back = 0

    def register(self, store: SnapshotStore) -> None:
        self._stores.append(store)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with AtomicOperationContext() as ctx:
            for store in self._stores:
                ctx.add_rollback(_restorer(store, store.snapshot()))
            ctx.add_rollback(self._count_rollback)
            yield
        self.committed += 1

    def _count_rollback(self) -> None:
        self.rolled_back += 1


def _restorer(store: SnapshotStore, state: Any) -> Callable[[], None]:
    def restore() -> None:
        store.restore(state)

    return restore
