"""
Tenistas API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the wire contract of /api/raquetas.
Why:   Automatic JSON parsing/serialization and OpenAPI doc generation.
How:   FastAPI parses request bodies into RaquetaRequest and serializes
       RaquetaResponse. Field names are snake_case in Python and camelCase
       on the wire (imageRef, externalId, createdAt, updatedAt).

Design Decision:
    RaquetaRequest is deliberately lenient: every field is optional at the
    schema level so a missing brand or a negative price reaches
    validate_raqueta_request() and comes back as a 400 with a field-error
    list, instead of FastAPI's generic 422.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    protected_namespaces=(),
)


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class RaquetaRequest(BaseModel):
    """
    What:  Body of POST /api/raquetas and PUT /api/raquetas/{id}.
    Rules: brand and model non-blank (max 100), price finite and >= 0,
           imageRef optional (max 255).
           Enforced by validate_raqueta_request(), not by the schema.
    """
    brand: Optional[str] = Field(default=None, description="Racket brand (required)")
    model: Optional[str] = Field(default=None, description="Racket model (required)")
    price: Optional[float] = Field(default=None, description="Price, zero or positive (required)")
    image_ref: Optional[str] = Field(default=None, description="Image URL or path")

    model_config = _WIRE_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class RaquetaResponse(BaseModel):
    """
    What:  Full representation of a stored racket.
    Who:   Returned by every /api/raquetas endpoint except DELETE.
    Note:  The soft-delete flag is internal and never exposed.
    """
    id: int = Field(description="Server-assigned identifier")
    external_id: uuid.UUID = Field(description="Client-facing unique identifier")
    brand: str
    model: str
    price: float
    image_ref: Optional[str] = None
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")

    model_config = _WIRE_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    """One failed validation rule: which field and why."""
    field: str
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "details": {"errors": [{"field": "brand", "message": "Brand cannot be blank"}]},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for monitoring and container probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    repository_backend: str = Field(description="Active repository: memory or database")
    storage: str = Field(description="Backing store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


__all__ = [
    "RaquetaRequest",
    "RaquetaResponse",
    "FieldError",
    "ErrorResponse",
    "HealthResponse",
]
