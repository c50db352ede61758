"""
Property Registry — FastAPI Server
===================================

RESTful API over the permissioned property verification registry.
The acting principal is taken from the ``X-Caller`` header.

Endpoints:
    POST   /verifiers                      Add a verifier (owner only)
    DELETE /verifiers/{principal}          Remove a verifier (owner only)
    POST   /properties                     Register a property (anyone)
    POST   /properties/{id}/verify         Verify a property (verifiers)
    POST   /properties/{id}/reject         Reject a property (verifiers)
    GET    /properties/{id}                Full property record
    GET    /properties/{id}/verified       Boolean verified check
    GET    /health                         Health check / readiness probe

Run:
    REGISTRY_OWNER=deployer uvicorn api:app --reload

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from property_registry import __version__
from property_registry.config import configure_logging, load_settings
from property_registry.ledger import InMemoryLedger
from property_registry.models import Err, ErrorCode, PropertyRecord, Result
from property_registry.registry import PropertyRegistry


# ─── Application Lifespan ────────────────────────────────────────────

_registry: PropertyRegistry | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the registry from environment settings on startup."""
    global _registry  # noqa: PLW0603
    settings = load_settings()
    configure_logging(settings)
    _registry = PropertyRegistry(InMemoryLedger(settings.start_height), owner=settings.owner)
    yield
    _registry = None


app = FastAPI(
    title="Property Registry API",
    description=(
        "Permissioned registry for real-world property records. "
        "Owners register claims, authorized verifiers approve or reject them, "
        "anyone can query the result."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class AddVerifierRequest(BaseModel):
    verifier: str = Field(..., min_length=1, description="Principal to authorize.")


class RegisterPropertyRequest(BaseModel):
    """Request body for property registration."""

    property_id: str = Field(
        ...,
        min_length=1,
        json_schema_extra={"example": "123e4567-e89b-12d3-a456-426614174000"},
    )
    address: str = Field(..., json_schema_extra={"example": "123 Main St, New York, NY 10001"})


class RejectPropertyRequest(BaseModel):
    reason: str = Field(..., json_schema_extra={"example": "Property documents are incomplete"})


class OkResponse(BaseModel):
    type: str = "ok"
    value: bool = True


class PropertyOut(PropertyRecord):
    """API-facing record: the stored fields plus the status name."""

    status_label: str


class VerifiedResponse(BaseModel):
    property_id: str
    verified: bool


class HealthResponse(BaseModel):
    status: str
    version: str
    block_height: int
    owner: Optional[str] = None


# ─── Helpers ─────────────────────────────────────────────────────────

_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.INVALID_TRANSITION: 409,
    ErrorCode.NOT_FOUND: 404,
}

_ERROR_RESPONSES = {
    403: {"description": "Caller lacks the required role"},
    404: {"description": "Property not registered"},
    409: {"description": "Property already exists or is already in a terminal state"},
    503: {"description": "Registry not yet initialised"},
}


def _get_registry() -> PropertyRegistry:
    if _registry is None:
        raise HTTPException(status_code=503, detail="Registry not initialised")
    return _registry


def _unwrap(result: Result) -> OkResponse:
    """Raise the HTTP error matching an ``Err``; pass ``Ok`` through."""
    if isinstance(result, Err):
        raise HTTPException(
            status_code=_HTTP_STATUS[result.value],
            detail={"type": "err", "value": int(result.value), "error": result.value.name},
        )
    return OkResponse()


def _property_out(record: PropertyRecord) -> PropertyOut:
    return PropertyOut(**record.model_dump(), status_label=record.status.name)


# ─── Verifier Endpoints ──────────────────────────────────────────────


@app.post(
    "/verifiers",
    summary="Authorize a verifier",
    tags=["Verifiers"],
    responses={k: _ERROR_RESPONSES[k] for k in (403, 503)},
)
def add_verifier(request: AddVerifierRequest, x_caller: str = Header(...)) -> OkResponse:
    """Add a principal to the verifier set. Only the contract owner may call this."""
    return _unwrap(_get_registry().add_verifier(x_caller, request.verifier))


@app.delete(
    "/verifiers/{principal}",
    summary="Revoke a verifier",
    tags=["Verifiers"],
    responses={k: _ERROR_RESPONSES[k] for k in (403, 503)},
)
def remove_verifier(principal: str, x_caller: str = Header(...)) -> OkResponse:
    """Remove a principal from the verifier set. Removing a non-member succeeds."""
    return _unwrap(_get_registry().remove_verifier(x_caller, principal))


# ─── Property Endpoints ──────────────────────────────────────────────


@app.post(
    "/properties",
    status_code=201,
    summary="Register a property",
    tags=["Properties"],
    responses={k: _ERROR_RESPONSES[k] for k in (409, 503)},
)
def register_property(request: RegisterPropertyRequest, x_caller: str = Header(...)) -> OkResponse:
    """Register a property claim. The caller becomes its legal owner."""
    return _unwrap(
        _get_registry().register_property(x_caller, request.property_id, request.address)
    )


@app.post(
    "/properties/{property_id}/verify",
    summary="Verify a property",
    tags=["Properties"],
    responses=_ERROR_RESPONSES,
)
def verify_property(property_id: str, x_caller: str = Header(...)) -> OkResponse:
    return _unwrap(_get_registry().verify_property(x_caller, property_id))


@app.post(
    "/properties/{property_id}/reject",
    summary="Reject a property",
    tags=["Properties"],
    responses=_ERROR_RESPONSES,
)
def reject_property(
    property_id: str, request: RejectPropertyRequest, x_caller: str = Header(...)
) -> OkResponse:
    return _unwrap(_get_registry().reject_property(x_caller, property_id, request.reason))


@app.get(
    "/properties/{property_id}",
    summary="Get property details",
    tags=["Properties"],
    responses={k: _ERROR_RESPONSES[k] for k in (404, 503)},
)
def get_property_details(property_id: str) -> PropertyOut:
    result = _get_registry().get_property_details(property_id)
    _unwrap(result)
    return _property_out(result.value)


@app.get(
    "/properties/{property_id}/verified",
    summary="Check whether a property is verified",
    tags=["Properties"],
    responses={503: _ERROR_RESPONSES[503]},
)
def is_property_verified(property_id: str) -> VerifiedResponse:
    """Unknown ids report ``verified: false`` rather than 404."""
    return VerifiedResponse(
        property_id=property_id,
        verified=_get_registry().is_property_verified(property_id),
    )


# ─── System ──────────────────────────────────────────────────────────


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: _ERROR_RESPONSES[503]},
)
def health_check() -> HealthResponse:
    registry = _get_registry()
    return HealthResponse(
        status="healthy",
        version=__version__,
        block_height=registry.block_height,
        owner=registry.owner,
    )
