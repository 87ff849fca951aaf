"""
Tenistas API — Raqueta Mapper and Request Validation
======================================================

What:  Pure conversions between wire DTOs and the Raqueta entity, plus the
       explicit validation rules for RaquetaRequest.
Why:   Keeps routes free of field-by-field copying and keeps the validation
       rules in one testable function.
How:   Stateless functions; the RaquetaMapper class groups them for routes.

Validation rules (validate_raqueta_request):
    brand    required, not blank, at most 100 characters
    model    required, not blank, at most 100 characters
    price    required, finite, >= 0
    imageRef optional, at most 255 characters, content unchecked
"""

import math
from typing import Iterable, List, Optional

from tenistas.models.raqueta import (
    BRAND_MAX_LENGTH,
    IMAGE_REF_MAX_LENGTH,
    MODEL_MAX_LENGTH,
    Raqueta,
)
from tenistas.schemas.raqueta import FieldError, RaquetaRequest, RaquetaResponse


def _check_text(
    errors: List[FieldError], field: str, label: str, value: Optional[str], max_length: int,
    required: bool = True,
) -> None:
    if value is None or not value.strip():
        if required:
            errors.append(FieldError(field=field, message=f"{label} cannot be blank"))
        return
    if len(value) > max_length:
        errors.append(
            FieldError(field=field, message=f"{label} must be at most {max_length} characters")
        )


def validate_raqueta_request(request: RaquetaRequest) -> List[FieldError]:
    """
    Check a request against the racket rules.

    Returns:
        One FieldError per failed rule, using wire field names.
        An empty list means the request is valid.
    """
    errors: List[FieldError] = []

    _check_text(errors, "brand", "Brand", request.brand, BRAND_MAX_LENGTH)
    _check_text(errors, "model", "Model", request.model, MODEL_MAX_LENGTH)

    if request.price is None:
        errors.append(FieldError(field="price", message="Price is required"))
    elif not math.isfinite(request.price):
        # NaN slips past "< 0" and serialises as null
        errors.append(FieldError(field="price", message="Price must be a finite number"))
    elif request.price < 0:
        errors.append(FieldError(field="price", message="Price cannot be negative"))

    _check_text(
        errors, "imageRef", "Image reference", request.image_ref, IMAGE_REF_MAX_LENGTH,
        required=False,
    )

    return errors


class RaquetaMapper:
    """DTO ↔ entity conversions. No state, no side effects."""

    @staticmethod
    def to_model(request: RaquetaRequest) -> Raqueta:
        """
        Build a transient Raqueta from a validated request.

        id, external_id, timestamps and deleted stay unset; the repository
        create path assigns them.
        """
        return Raqueta(
            brand=request.brand,
            model=request.model,
            price=request.price,
            image_ref=request.image_ref,
        )

    @staticmethod
    def to_response(raqueta: Raqueta) -> RaquetaResponse:
        return RaquetaResponse(
            id=raqueta.id,
            external_id=raqueta.external_id,
            brand=raqueta.brand,
            model=raqueta.model,
            price=raqueta.price,
            image_ref=raqueta.image_ref,
            created_at=raqueta.created_at,
            updated_at=raqueta.updated_at,
        )

    @staticmethod
    def to_response_list(raquetas: Iterable[Raqueta]) -> List[RaquetaResponse]:
        return [RaquetaMapper.to_response(raqueta) for raqueta in raquetas]


raqueta_mapper = RaquetaMapper()
