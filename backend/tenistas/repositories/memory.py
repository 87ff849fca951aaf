"""
Tenistas API — In-Memory Raquetas Repository
==============================================

What:  A process-local racket table keyed by id.
Why:   Zero-setup backend for development and tests; also the reference
       behaviour for id allocation.
How:   A plain dict guarded by an asyncio.Lock for every mutation.

Id allocation:
    next_id = max(existing ids, or 0) + 1

    This is NOT a monotonic counter. Deleting the racket with the highest id
    and creating a new one hands the freed id out again, which can collide
    with ids clients still hold. The behaviour is kept on purpose for
    compatibility; the database backend uses autoincrement instead.

Concurrency:
    Mutations (save, update, delete_by_id, delete_all) run under the lock,
    so id assignment and insertion are one step. Reads take a snapshot of
    the values without the lock; no mutation awaits halfway through changing
    the table, so a read never sees a partial write.

Ownership:
    Callers only ever receive copies. Mutating a returned Raqueta never
    touches the canonical table.
"""

import asyncio
import logging
import uuid
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from tenistas.exceptions import NotFoundError
from tenistas.models.raqueta import Raqueta, utcnow
from tenistas.repositories.base import RaquetasRepository

logger = logging.getLogger(__name__)


class InMemoryRaquetasRepository(RaquetasRepository):
    """
    Dict-backed RaquetasRepository.

    Args:
        initial: Optional rackets to preload as-is (ids and timestamps kept).
                 Used by tests to build a known starting state.
    """

    def __init__(self, initial: Optional[Iterable[Raqueta]] = None):
        self._raquetas: Dict[int, Raqueta] = {}
        self._lock = asyncio.Lock()
        for raqueta in initial or []:
            self._raquetas[raqueta.id] = raqueta.copy()

    def _snapshot(self) -> List[Raqueta]:
        return [raqueta.copy() for raqueta in list(self._raquetas.values())]

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_all(self) -> List[Raqueta]:
        logger.debug("find_all")
        return self._snapshot()

    async def find_by_id(self, raqueta_id: int) -> Optional[Raqueta]:
        logger.debug("find_by_id %s", raqueta_id)
        raqueta = self._raquetas.get(raqueta_id)
        return raqueta.copy() if raqueta is not None else None

    async def find_by_external_id(self, external_id: UUID) -> Optional[Raqueta]:
        logger.debug("find_by_external_id %s", external_id)
        return next(
            (r for r in self._snapshot() if r.external_id == external_id),
            None,
        )

    async def exists_by_id(self, raqueta_id: int) -> bool:
        logger.debug("exists_by_id %s", raqueta_id)
        return raqueta_id in self._raquetas

    async def find_all_by_brand(self, brand: str) -> List[Raqueta]:
        logger.debug("find_all_by_brand '%s'", brand)
        needle = brand.lower()
        return [r for r in self._snapshot() if needle in r.brand.lower()]

    async def count(self) -> int:
        return len(self._raquetas)

    # ── Mutations ─────────────────────────────────────────────────────────

    async def save(self, raqueta: Raqueta) -> Raqueta:
        async with self._lock:
            if raqueta.id is not None and raqueta.id in self._raquetas:
                return self._update_locked(raqueta)
            return self._create_locked(raqueta)

    async def update(self, raqueta: Raqueta) -> Raqueta:
        async with self._lock:
            if raqueta.id is None or raqueta.id not in self._raquetas:
                raise NotFoundError(resource="raqueta", resource_id=str(raqueta.id))
            return self._update_locked(raqueta)

    async def delete_by_id(self, raqueta_id: int) -> None:
        async with self._lock:
            logger.debug("delete_by_id %s", raqueta_id)
            self._raquetas.pop(raqueta_id, None)

    async def delete_all(self) -> None:
        async with self._lock:
            logger.debug("delete_all")
            self._raquetas.clear()

    # ── Lock-held helpers ─────────────────────────────────────────────────

    def _create_locked(self, raqueta: Raqueta) -> Raqueta:
        next_id = max(self._raquetas.keys(), default=0) + 1
        now = utcnow()
        created = Raqueta(
            id=next_id,
            external_id=uuid.uuid4(),
            brand=raqueta.brand,
            model=raqueta.model,
            price=raqueta.price,
            image_ref=raqueta.image_ref,
            created_at=now,
            updated_at=now,
            deleted=False,
        )
        self._raquetas[next_id] = created
        logger.debug("create id=%d external_id=%s", next_id, created.external_id)
        return created.copy()

    def _update_locked(self, raqueta: Raqueta) -> Raqueta:
        stored = self._raquetas[raqueta.id]
        stored.model = raqueta.model
        stored.price = raqueta.price
        stored.image_ref = raqueta.image_ref
        stored.updated_at = utcnow()
        logger.debug("update id=%d", stored.id)
        return stored.copy()
