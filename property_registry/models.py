"""
Pydantic models for registry state: strict typing at every boundary.

Records are frozen: a transition builds a new record instead of editing the
stored one, so a failed call can never leave a half-updated value behind.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Opaque caller identity. Only equality is ever used.
Principal = str


# ─── Codes ──────────────────────────────────────────────────────────


class ErrorCode(IntEnum):
    """Stable, caller-visible failure codes."""

    UNAUTHORIZED = 101
    ALREADY_EXISTS = 102
    INVALID_TRANSITION = 103
    NOT_FOUND = 104


class PropertyStatus(IntEnum):
    """Verification status of a property record."""

    UNVERIFIED = 0  # Initial
    VERIFIED = 1  # Terminal
    REJECTED = 2  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self is not PropertyStatus.UNVERIFIED


# ─── Property Record ────────────────────────────────────────────────


class PropertyRecord(BaseModel):
    """The stored unit of state for one property identifier."""

    model_config = ConfigDict(frozen=True)

    property_id: str
    status: PropertyStatus = PropertyStatus.UNVERIFIED
    legal_owner: Principal  # The registrant, fixed at creation
    address: str
    last_inspection_date: int = Field(ge=0)  # Ledger block height
    verified_by: Optional[Principal] = None
    rejection_reason: Optional[str] = None

    @model_validator(mode="after")
    def _check_status_fields(self) -> PropertyRecord:
        if (self.verified_by is None) != (self.status == PropertyStatus.UNVERIFIED):
            raise ValueError("verified_by must be set exactly when the status is terminal")
        if self.rejection_reason is not None and self.status != PropertyStatus.REJECTED:
            raise ValueError("rejection_reason is only allowed on rejected records")
        return self


# ─── Call Results ───────────────────────────────────────────────────


class Ok(BaseModel):
    """Successful call outcome."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ok"] = "ok"
    value: Union[bool, PropertyRecord] = True

    @property
    def is_ok(self) -> bool:
        return True


class Err(BaseModel):
    """Failed call outcome carrying exactly one error code."""

    model_config = ConfigDict(frozen=True)

    type: Literal["err"] = "err"
    value: ErrorCode

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok, Err]
