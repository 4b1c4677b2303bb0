"""In-memory transaction manager for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from forum.domain.repository.transaction import TransactionManager
from forum.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryTransactionManager(TransactionManager):
    """Snapshots every table on entry and restores them if the block raises."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        snapshot = self._db.snapshot()
        try:
            yield
        except BaseException:
            self._db.restore(snapshot)
            raise
