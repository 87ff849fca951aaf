"""
Tenistas API — Raquetas Service
=================================

What:  Thin orchestration layer between the routes and a RaquetasRepository.
Why:   Repositories report absence as None; the HTTP layer needs NotFoundError
       for id-addressed operations. This is where one becomes the other.
How:   Every operation delegates to the repository it was built with.
Who:   Called by route handlers; built per request by deps.get_raquetas_service().

Operation map:
    find_all              → repository.find_all
    find_by_id            → repository.find_by_id, None → NotFoundError
    find_all_by_brand     → repository.find_all_by_brand
    find_by_external_id   → repository.find_by_external_id, None → NotFoundError
    save                  → repository.save (always a create: incoming id cleared)
    update                → existence check, then repository.update
    delete_by_id          → existence check, then repository.delete_by_id
"""

import logging
from typing import List
from uuid import UUID

from tenistas.exceptions import NotFoundError
from tenistas.models.raqueta import Raqueta
from tenistas.repositories.base import RaquetasRepository

logger = logging.getLogger(__name__)


class RaquetasService:
    """
    Business layer for racket operations.

    Stateless apart from the repository it wraps, so a fresh instance per
    request costs nothing and tests can hand it a mocked repository.
    """

    def __init__(self, repository: RaquetasRepository):
        self.repository = repository

    async def find_all(self) -> List[Raqueta]:
        logger.info("find_all")
        return await self.repository.find_all()

    async def find_by_id(self, raqueta_id: int) -> Raqueta:
        """
        Raises:
            NotFoundError: No racket with this id (→ 404)
        """
        logger.info("find_by_id %s", raqueta_id)
        raqueta = await self.repository.find_by_id(raqueta_id)
        if raqueta is None:
            raise NotFoundError(resource="raqueta", resource_id=str(raqueta_id))
        return raqueta

    async def find_all_by_brand(self, brand: str) -> List[Raqueta]:
        logger.info("find_all_by_brand '%s'", brand)
        return await self.repository.find_all_by_brand(brand)

    async def find_by_external_id(self, external_id: UUID) -> Raqueta:
        """
        Raises:
            NotFoundError: No racket with this external id (→ 404)
        """
        logger.info("find_by_external_id %s", external_id)
        raqueta = await self.repository.find_by_external_id(external_id)
        if raqueta is None:
            raise NotFoundError(resource="raqueta", resource_id=str(external_id))
        return raqueta

    async def save(self, raqueta: Raqueta) -> Raqueta:
        """
        Create a new racket.

        The id on the argument is cleared first so that a client can never
        turn a create into an update of somebody else's record.
        """
        logger.info("save %r", raqueta)
        raqueta.id = None
        return await self.repository.save(raqueta)

    async def update(self, raqueta_id: int, raqueta: Raqueta) -> Raqueta:
        """
        Update model, price and image_ref of an existing racket.

        Raises:
            NotFoundError: No racket with this id (→ 404)
        """
        logger.info("update %s", raqueta_id)
        if not await self.repository.exists_by_id(raqueta_id):
            raise NotFoundError(resource="raqueta", resource_id=str(raqueta_id))
        raqueta.id = raqueta_id
        return await self.repository.update(raqueta)

    async def delete_by_id(self, raqueta_id: int) -> None:
        """
        Raises:
            NotFoundError: No racket with this id (→ 404)
        """
        logger.info("delete_by_id %s", raqueta_id)
        if not await self.repository.exists_by_id(raqueta_id):
            raise NotFoundError(resource="raqueta", resource_id=str(raqueta_id))
        await self.repository.delete_by_id(raqueta_id)
