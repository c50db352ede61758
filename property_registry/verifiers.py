"""
Authorization state and verifier allow-list management.

``ContractState`` holds the contract owner (stored exactly once) and the
verifier set, both kept in the ledger so they roll back with everything else.
``VerifierRegistry`` is the only writer of the verifier set, and every write
passes the owner guard first.
"""

from __future__ import annotations

import logging
from typing import Optional

from .access import require_owner
from .ledger import LedgerStorage
from .models import Principal

logger = logging.getLogger(__name__)

OWNER_KEY = ("contract-owner",)


def _verifier_key(principal: Principal) -> tuple[str, Principal]:
    return ("verifier", principal)


class ContractState:
    """Owner and verifier membership, passed to every guarded operation."""

    def __init__(self, ledger: LedgerStorage):
        self.ledger = ledger

    @property
    def owner(self) -> Optional[Principal]:
        return self.ledger.get(OWNER_KEY)

    @property
    def initialized(self) -> bool:
        return self.ledger.exists(OWNER_KEY)

    def initialize(self, owner: Principal) -> bool:
        """Store the owner if none is set yet.

        Returns True when this call set the owner, False when an owner was
        already in place (it is left untouched).
        """
        if self.initialized:
            return False
        self.ledger.set(OWNER_KEY, owner)
        return True

    def has_verifier(self, principal: Principal) -> bool:
        return bool(self.ledger.get(_verifier_key(principal)))


class VerifierRegistry:
    """Owner-gated insert/remove over the verifier set."""

    def __init__(self, state: ContractState):
        self.state = state

    def add_verifier(self, caller: Principal, target: Principal) -> None:
        require_owner(self.state, caller)
        if self.state.has_verifier(target):
            logger.debug("%s is already a verifier", target)
            return
        self.state.ledger.set(_verifier_key(target), True)
        logger.info("Verifier added: %s", target)

    def remove_verifier(self, caller: Principal, target: Principal) -> None:
        require_owner(self.state, caller)
        if not self.state.has_verifier(target):
            logger.debug("%s is not a verifier, nothing to remove", target)
            return
        self.state.ledger.delete(_verifier_key(target))
        logger.info("Verifier removed: %s", target)

    def is_verifier(self, principal: Principal) -> bool:
        return self.state.has_verifier(principal)
