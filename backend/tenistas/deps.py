"""
Tenistas API — FastAPI Dependencies
=====================================

What:  Builds the repository and service each request works with.
How:   The backend is read from app.state (set by create_app from settings):
         memory   → the app's single InMemoryRaquetasRepository
         database → SqlRaquetasRepository on a request-scoped session
Why:   Routes depend on RaquetasService only; swapping the backend, or
       overriding it in tests via app.dependency_overrides, touches nothing else.

Transactions:
    The repository dependency is declared with scope="function", so the
    session commits as soon as the route function returns and BEFORE the
    response is sent. A failed commit therefore reaches the exception
    handlers as DatabaseError (→ 500) instead of arriving after the client
    already got its 201/200/204.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request

from tenistas.database import session_scope
from tenistas.repositories.base import RaquetasRepository
from tenistas.repositories.sql import SqlRaquetasRepository
from tenistas.services.raqueta_service import RaquetasService


async def get_raquetas_repository(
    request: Request,
) -> AsyncGenerator[RaquetasRepository, None]:
    """Yield the repository for the configured backend."""
    if request.app.state.repository_backend == "database":
        async with session_scope() as session:
            yield SqlRaquetasRepository(session)
    else:
        yield request.app.state.memory_repository


def get_raquetas_service(
    repository: RaquetasRepository = Depends(get_raquetas_repository, scope="function"),
) -> RaquetasService:
    """RaquetasService bound to this request's repository."""
    return RaquetasService(repository)
