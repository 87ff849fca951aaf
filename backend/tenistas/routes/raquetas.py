"""
Tenistas API — Raquetas Route Handlers
========================================

What:  CRUD endpoints for rackets under /api/raquetas.
Why:   The HTTP face of RaquetasService.
How:   Parse path/query/body → validate → map → service → map → response.
       No business logic lives here; errors are raised as application
       exceptions and turned into responses by the handlers in main.py.

Route Inventory:
    GET    /api/raquetas/                     list (optional ?brand= substring)
    GET    /api/raquetas/{id}                 detail by internal id
    GET    /api/raquetas/find/{external_id}   detail by external UUID
    POST   /api/raquetas/                     create → 201
    PUT    /api/raquetas/{id}                 update model/price/imageRef
    DELETE /api/raquetas/{id}                 delete → 204
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from tenistas.deps import get_raquetas_service
from tenistas.exceptions import ValidationError
from tenistas.mappers.raqueta_mapper import raqueta_mapper, validate_raqueta_request
from tenistas.models.raqueta import Raqueta
from tenistas.schemas.raqueta import ErrorResponse, RaquetaRequest, RaquetaResponse
from tenistas.services.raqueta_service import RaquetasService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/raquetas", tags=["Raquetas"])


def _validated_model(request: RaquetaRequest) -> Raqueta:
    """Run the request rules and convert; raises ValidationError (→ 400)."""
    errors = validate_raqueta_request(request)
    if errors:
        raise ValidationError(errors=errors)
    return raqueta_mapper.to_model(request)


@router.get(
    "/",
    response_model=List[RaquetaResponse],
    summary="List rackets",
    description=(
        "Returns every racket, or only those whose brand contains `brand` "
        "(case-insensitive) when the query parameter is given and non-empty."
    ),
)
async def get_all_raquetas(
    brand: Optional[str] = Query(
        default=None,
        description="Case-insensitive brand substring, e.g. ?brand=wil",
    ),
    service: RaquetasService = Depends(get_raquetas_service),
) -> List[RaquetaResponse]:
    if brand:
        raquetas = await service.find_all_by_brand(brand)
    else:
        raquetas = await service.find_all()
    return raqueta_mapper.to_response_list(raquetas)


@router.get(
    "/{raqueta_id}",
    response_model=RaquetaResponse,
    responses={404: {"description": "Racket not found", "model": ErrorResponse}},
    summary="Get a racket by id",
)
async def get_raqueta_by_id(
    raqueta_id: int,
    service: RaquetasService = Depends(get_raquetas_service),
) -> RaquetaResponse:
    raqueta = await service.find_by_id(raqueta_id)
    return raqueta_mapper.to_response(raqueta)


@router.get(
    "/find/{external_id}",
    response_model=RaquetaResponse,
    responses={
        400: {"description": "Malformed external id", "model": ErrorResponse},
        404: {"description": "Racket not found", "model": ErrorResponse},
    },
    summary="Get a racket by external id",
)
async def get_raqueta_by_external_id(
    external_id: UUID,
    service: RaquetasService = Depends(get_raquetas_service),
) -> RaquetaResponse:
    raqueta = await service.find_by_external_id(external_id)
    return raqueta_mapper.to_response(raqueta)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=RaquetaResponse,
    responses={400: {"description": "Validation failed", "model": ErrorResponse}},
    summary="Create a racket",
)
async def post_raqueta(
    request: RaquetaRequest,
    service: RaquetasService = Depends(get_raquetas_service),
) -> RaquetaResponse:
    """
    Create a racket from brand, model, price and optional imageRef.

    The server assigns id, externalId and timestamps; createdAt == updatedAt.
    """
    created = await service.save(_validated_model(request))
    logger.info("Racket created: id=%s external_id=%s", created.id, created.external_id)
    return raqueta_mapper.to_response(created)


@router.put(
    "/{raqueta_id}",
    response_model=RaquetaResponse,
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        404: {"description": "Racket not found", "model": ErrorResponse},
    },
    summary="Update a racket",
)
async def put_raqueta(
    raqueta_id: int,
    request: RaquetaRequest,
    service: RaquetasService = Depends(get_raquetas_service),
) -> RaquetaResponse:
    """
    Update model, price and imageRef.

    The full body is validated like a create, but brand is ignored: the
    stored brand is kept.
    """
    updated = await service.update(raqueta_id, _validated_model(request))
    return raqueta_mapper.to_response(updated)


@router.delete(
    "/{raqueta_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Racket not found", "model": ErrorResponse}},
    summary="Delete a racket",
)
async def delete_raqueta(
    raqueta_id: int,
    service: RaquetasService = Depends(get_raquetas_service),
) -> Response:
    await service.delete_by_id(raqueta_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
