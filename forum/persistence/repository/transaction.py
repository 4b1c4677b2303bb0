"""PostgreSQL transaction manager."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Runs each unit of work in a SAVEPOINT of the request session.

    The outer transaction is committed or rolled back by the session
    provider at the end of the request; a failed unit only rolls back
    to its own savepoint so it can be retried.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
