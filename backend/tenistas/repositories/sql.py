"""
Tenistas API — SQL Raquetas Repository
========================================

What:  RaquetasRepository backed by the `raquetas` table through SQLAlchemy.
Why:   Durable storage with the database's own transaction discipline.
How:   Works on the request-scoped AsyncSession yielded by tenistas.deps; it
       flushes but never commits (commit/rollback belong to the dependency).

Differences from the in-memory backend:
    - Ids come from the database's autoincrement, not max(id) + 1.
    - find_all() is ordered by id.
    - SQLAlchemy errors are wrapped in DatabaseError and never retried.

Query plans:
    find_by_id           → primary key lookup (session.get, identity map first)
    find_by_external_id  → unique index on external_id
    find_all_by_brand    → lower(brand) LIKE '%needle%' with % and _ escaped
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenistas.exceptions import DatabaseError, NotFoundError
from tenistas.models.raqueta import Raqueta, utcnow
from tenistas.repositories.base import RaquetasRepository

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into DatabaseError for the error handler."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            message="Could not complete the racket operation. Please try again.",
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


class SqlRaquetasRepository(RaquetasRepository):
    """
    SQLAlchemy-backed RaquetasRepository.

    Args:
        session: Request-scoped AsyncSession; the caller owns commit/rollback.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_all(self) -> List[Raqueta]:
        with _database_errors("find_all"):
            result = await self._session.execute(select(Raqueta).order_by(Raqueta.id))
            return list(result.scalars().all())

    async def find_by_id(self, raqueta_id: int) -> Optional[Raqueta]:
        with _database_errors("find_by_id"):
            return await self._session.get(Raqueta, raqueta_id)

    async def find_by_external_id(self, external_id: UUID) -> Optional[Raqueta]:
        with _database_errors("find_by_external_id"):
            result = await self._session.execute(
                select(Raqueta).where(Raqueta.external_id == external_id).limit(1)
            )
            return result.scalars().first()

    async def exists_by_id(self, raqueta_id: int) -> bool:
        with _database_errors("exists_by_id"):
            result = await self._session.execute(
                select(Raqueta.id).where(Raqueta.id == raqueta_id)
            )
            return result.scalar_one_or_none() is not None

    async def find_all_by_brand(self, brand: str) -> List[Raqueta]:
        with _database_errors("find_all_by_brand"):
            query = (
                select(Raqueta)
                .where(func.lower(Raqueta.brand).contains(brand.lower(), autoescape=True))
                .order_by(Raqueta.id)
            )
            result = await self._session.execute(query)
            return list(result.scalars().all())

    async def count(self) -> int:
        with _database_errors("count"):
            result = await self._session.execute(
                select(func.count()).select_from(Raqueta)
            )
            return result.scalar_one()

    # ── Mutations ─────────────────────────────────────────────────────────

    async def save(self, raqueta: Raqueta) -> Raqueta:
        if raqueta.id is not None:
            with _database_errors("save"):
                stored = await self._session.get(Raqueta, raqueta.id)
            if stored is not None:
                return await self._apply_update(stored, raqueta)
        return await self._create(raqueta)

    async def update(self, raqueta: Raqueta) -> Raqueta:
        stored = None
        if raqueta.id is not None:
            with _database_errors("update"):
                stored = await self._session.get(Raqueta, raqueta.id)
        if stored is None:
            raise NotFoundError(resource="raqueta", resource_id=str(raqueta.id))
        return await self._apply_update(stored, raqueta)

    async def delete_by_id(self, raqueta_id: int) -> None:
        with _database_errors("delete_by_id"):
            await self._session.execute(delete(Raqueta).where(Raqueta.id == raqueta_id))
            await self._session.flush()

    async def delete_all(self) -> None:
        with _database_errors("delete_all"):
            await self._session.execute(delete(Raqueta))
            await self._session.flush()

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _create(self, raqueta: Raqueta) -> Raqueta:
        now = utcnow()
        created = Raqueta(
            external_id=uuid.uuid4(),
            brand=raqueta.brand,
            model=raqueta.model,
            price=raqueta.price,
            image_ref=raqueta.image_ref,
            created_at=now,
            updated_at=now,
            deleted=False,
        )
        with _database_errors("create"):
            self._session.add(created)
            # Flush assigns the autoincrement id without committing
            await self._session.flush()
        logger.debug("create id=%s external_id=%s", created.id, created.external_id)
        return created

    async def _apply_update(self, stored: Raqueta, raqueta: Raqueta) -> Raqueta:
        stored.model = raqueta.model
        stored.price = raqueta.price
        stored.image_ref = raqueta.image_ref
        stored.updated_at = utcnow()
        with _database_errors("update"):
            await self._session.flush()
        logger.debug("update id=%s", stored.id)
        return stored
