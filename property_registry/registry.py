"""
Public contract surface composing the registry components.

Flow of every mutating call:
  ┌──────────────┐
  │  Write lock  │   ← one call at a time, in submission order
  └──────┬───────┘
  ┌──────▼───────┐
  │ Ledger txn   │   ← undo journal opened
  └──────┬───────┘
  ┌──────▼───────┐
  │ Guard checks │   ← owner / verifier / existence / state
  └──────┬───────┘
  ┌──────▼───────┐
  │   Mutation   │
  └──────┬───────┘
  ┌──────▼───────┐
  │  Ok / Err    │   ← commit seals a block; RegistryError rolls back, becomes Err(code)
  └──────────────┘

Queries take the same lock but never open a transaction.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Optional

from .exceptions import RegistryError
from .ledger import InMemoryLedger, LedgerStorage
from .models import Err, Ok, Principal, Result
from .queries import QueryFacade
from .state_machine import VerificationStateMachine
from .store import PropertyStore
from .verifiers import ContractState, VerifierRegistry

logger = logging.getLogger(__name__)


class PropertyRegistry:
    """Permissioned property verification registry.

    Usage:
        registry = PropertyRegistry(InMemoryLedger(), owner="deployer")
        registry.add_verifier("deployer", "inspector")
        registry.register_property("alice", "p1", "123 Main St")
        result = registry.verify_property("inspector", "p1")
        if not result.is_ok:
            print(result.value.name)
    """

    def __init__(self, ledger: LedgerStorage | None = None, owner: Optional[Principal] = None):
        self.ledger: LedgerStorage = ledger if ledger is not None else InMemoryLedger()
        self.state = ContractState(self.ledger)
        self.store = PropertyStore(self.ledger)
        self.verifiers = VerifierRegistry(self.state)
        self.machine = VerificationStateMachine(self.state, self.store, self.ledger)
        self.queries = QueryFacade(self.store)
        self._lock = threading.RLock()

        if owner is not None:
            self.initialize_contract(owner)

    @property
    def owner(self) -> Optional[Principal]:
        with self._lock:
            return self.state.owner

    @property
    def block_height(self) -> int:
        return self.ledger.block_height

    # ─── Mutating Operations ────────────────────────────────────────

    def initialize_contract(self, caller: Principal) -> Result:
        """Record ``caller`` as owner on first call. The owner never changes afterwards."""
        with self._lock:
            if self.state.initialize(caller):
                logger.info("Contract initialized with owner %s", caller)
            else:
                logger.debug("Contract already initialized; owner stays %s", self.state.owner)
        return Ok()

    def add_verifier(self, caller: Principal, verifier: Principal) -> Result:
        return self._execute(
            "add_verifier", caller, lambda: self.verifiers.add_verifier(caller, verifier)
        )

    def remove_verifier(self, caller: Principal, verifier: Principal) -> Result:
        return self._execute(
            "remove_verifier", caller, lambda: self.verifiers.remove_verifier(caller, verifier)
        )

    def register_property(self, caller: Principal, property_id: str, address: str) -> Result:
        return self._execute(
            "register_property",
            caller,
            lambda: self.machine.register_property(caller, property_id, address),
        )

    def verify_property(self, caller: Principal, property_id: str) -> Result:
        return self._execute(
            "verify_property", caller, lambda: self.machine.verify_property(caller, property_id)
        )

    def reject_property(self, caller: Principal, property_id: str, reason: str) -> Result:
        return self._execute(
            "reject_property",
            caller,
            lambda: self.machine.reject_property(caller, property_id, reason),
        )

    # ─── Read-only Operations ───────────────────────────────────────

    def get_property_details(self, property_id: str) -> Result:
        with self._lock:
            return self.queries.get_property_details(property_id)

    def is_property_verified(self, property_id: str) -> bool:
        with self._lock:
            return self.queries.is_property_verified(property_id)

    def is_verifier(self, principal: Principal) -> bool:
        with self._lock:
            return self.verifiers.is_verifier(principal)

    # ─── Execution ──────────────────────────────────────────────────

    def _execute(self, operation: str, caller: Principal, action: Callable[[], object]) -> Result:
        """Run ``action`` atomically, translating rule violations into ``Err``."""
        with self._lock:
            try:
                with self.ledger.transaction():
                    action()
            except RegistryError as exc:
                logger.warning(
                    "%s rejected for %s: %s (%s)", operation, caller, exc.code.name, exc
                )
                return Err(value=exc.code)
        return Ok()
