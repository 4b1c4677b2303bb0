"""Optimistic save shared by the PostgreSQL votable repositories."""

from typing import Any, Callable, Dict, Generic, Optional, TypeVar
from uuid import UUID

import logfire
from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConcurrencyConflictError
from forum.domain.model.votable import Votable

T = TypeVar("T", bound=Votable)


class PostgresVotableStore(Generic[T]):
    """Row access for one votable table.

    Updates are issued as ``UPDATE ... WHERE id = :id AND version = :v``;
    zero affected rows means another writer got there first.
    """

    def __init__(
        self,
        session: AsyncSession,
        table: Table,
        resource: str,
        to_model: Callable[[Dict[str, Any]], T],
        to_dict: Callable[[T], Dict[str, Any]],
    ) -> None:
        self.session = session
        self.table = table
        self.resource = resource
        self.to_model = to_model
        self.to_dict = to_dict

    async def find_by_id(self, entity_id: UUID) -> Optional[T]:
        stmt = select(self.table).where(self.table.c.id == entity_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return self.to_model(row._asdict()) if row else None

    async def save(self, entity: T) -> T:
        with logfire.span(
            f"{self.resource}_repository.save",
            entity_id=str(entity.id),
            version=entity.version,
        ):
            stmt = select(self.table.c.version).where(self.table.c.id == entity.id)
            stored_version = (await self.session.execute(stmt)).scalar_one_or_none()

            if stored_version is None:
                stmt = self.table.insert().values(**self.to_dict(entity))
                await self.session.execute(stmt)
                await self.session.flush()
                return entity

            if stored_version != entity.version:
                raise self._conflict(entity, stored_version)

            saved = entity.model_copy(update={"version": entity.version + 1})
            stmt = (
                self.table.update()
                .where(
                    self.table.c.id == entity.id,
                    self.table.c.version == entity.version,
                )
                .values(**self.to_dict(saved))
            )
            result = await self.session.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise self._conflict(entity, None)
            await self.session.flush()
            return saved

    def _conflict(
        self, entity: T, stored_version: Optional[int]
    ) -> ConcurrencyConflictError:
        logfire.warn(
            "Optimistic version check failed",
            resource=self.resource,
            entity_id=str(entity.id),
            expected_version=entity.version,
            stored_version=stored_version,
        )
        return ConcurrencyConflictError(
            self.resource, str(entity.id), expected_version=entity.version
        )
