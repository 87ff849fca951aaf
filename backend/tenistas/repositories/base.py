"""
Tenistas API — Abstract Raquetas Repository
=============================================

What:  Abstract base class defining the contract every racket store fulfils.
Why:   The service and routes stay identical whether records live in a
       process-local table or in a relational database.
How:   Concrete implementations inherit from RaquetasRepository and implement
       every abstract coroutine.
Who:   Called by RaquetasService; selected in deps.py from settings.

Contract summary:
    Lookups (find_*, exists_by_id, count) never raise for missing records.
    save() is an upsert: existing id → update path, otherwise create path.
    update() is the explicit update path and raises NotFoundError on a
    missing id. delete_by_id() on a missing id is a no-op.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from tenistas.models.raqueta import Raqueta


class RaquetasRepository(ABC):
    """
    Abstract interface for racket persistence.

    Update semantics (shared by all implementations):
        Only model, price and image_ref are copied from the argument, and
        updated_at is refreshed. id, external_id, brand, created_at and
        deleted always come from the stored record, whatever the argument
        carries.
    """

    @abstractmethod
    async def find_all(self) -> List[Raqueta]:
        """All stored rackets, in insertion/id order. No pagination."""
        ...

    @abstractmethod
    async def find_by_id(self, raqueta_id: int) -> Optional[Raqueta]:
        """The racket with this id, or None."""
        ...

    @abstractmethod
    async def find_by_external_id(self, external_id: UUID) -> Optional[Raqueta]:
        """The first racket whose external_id matches, or None."""
        ...

    @abstractmethod
    async def exists_by_id(self, raqueta_id: int) -> bool:
        ...

    @abstractmethod
    async def find_all_by_brand(self, brand: str) -> List[Raqueta]:
        """
        Rackets whose brand contains `brand`, compared case-insensitively.

        An empty string matches every racket.
        """
        ...

    @abstractmethod
    async def save(self, raqueta: Raqueta) -> Raqueta:
        """
        Upsert a racket.

        Create path:
            Assigns id, a fresh external_id, created_at == updated_at == now
            and deleted = False. Any id/external_id/timestamps on the
            argument are ignored.
        Update path:
            Taken when raqueta.id names a stored record.

        Returns:
            The stored racket after the operation.
        """
        ...

    @abstractmethod
    async def update(self, raqueta: Raqueta) -> Raqueta:
        """
        Apply the update path to the record named by raqueta.id.

        Raises:
            NotFoundError: No record with that id is stored.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, raqueta_id: int) -> None:
        """Remove the racket if present; no-op otherwise."""
        ...

    async def delete(self, raqueta: Raqueta) -> None:
        """Remove by the racket's id, same as delete_by_id(raqueta.id)."""
        await self.delete_by_id(raqueta.id)

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def delete_all(self) -> None:
        ...
