"""
Tenistas API — Repositories Layer
===================================

What:  The single ownership point for racket records.
Why:   The service layer works against one contract regardless of where the
       records live.

Repository Inventory:
    - RaquetasRepository (abstract): the find/save/delete/count contract
    - InMemoryRaquetasRepository: dict keyed by id, guarded by an asyncio.Lock
    - SqlRaquetasRepository: SQLAlchemy AsyncSession against the raquetas table

Lookups never raise on a missing record; they return None or an empty list.
"""

from tenistas.repositories.base import RaquetasRepository
from tenistas.repositories.memory import InMemoryRaquetasRepository
from tenistas.repositories.sql import SqlRaquetasRepository

__all__ = [
    "RaquetasRepository",
    "InMemoryRaquetasRepository",
    "SqlRaquetasRepository",
]
