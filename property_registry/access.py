"""
Access control predicates.

Pure functions of the current contract state. Every mutating operation
calls one of the ``require_*`` guards before touching storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import Unauthorized
from .models import Principal

if TYPE_CHECKING:
    from .verifiers import ContractState


def is_owner(state: ContractState, caller: Principal) -> bool:
    """True iff ``caller`` is the contract owner."""
    owner = state.owner
    return owner is not None and caller == owner


def is_verifier(state: ContractState, caller: Principal) -> bool:
    """True iff ``caller`` is currently in the verifier set."""
    return state.has_verifier(caller)


def require_owner(state: ContractState, caller: Principal) -> None:
    if not is_owner(state, caller):
        raise Unauthorized(
            f"'{caller}' is not the contract owner.",
            details={"caller": caller, "required_role": "owner"},
        )


def require_verifier(state: ContractState, caller: Principal) -> None:
    if not is_verifier(state, caller):
        raise Unauthorized(
            f"'{caller}' is not an active verifier.",
            details={"caller": caller, "required_role": "verifier"},
        )
