"""
Property verification lifecycle.

States:
  ┌────────────┐   verify   ┌──────────┐
  │ UNVERIFIED ├───────────►│ VERIFIED │
  └─────┬──────┘            └──────────┘
        │ reject            ┌──────────┐
        └──────────────────►│ REJECTED │
                            └──────────┘

Rules:
  - Registration is self-service; the registrant becomes the legal owner.
  - Only active verifiers may verify or reject.
  - VERIFIED and REJECTED are terminal.
  - Checks run in a fixed order (role, existence, state) and the record is
    written only after all of them pass.
"""

from __future__ import annotations

import logging
from typing import Optional

from .access import require_verifier
from .exceptions import AlreadyExists, InvalidTransition, NotFound
from .ledger import LedgerStorage
from .models import Principal, PropertyRecord, PropertyStatus
from .store import PropertyStore
from .verifiers import ContractState

logger = logging.getLogger(__name__)


class VerificationStateMachine:
    """Registers property records and moves them to a terminal status."""

    def __init__(self, state: ContractState, store: PropertyStore, ledger: LedgerStorage):
        self.state = state
        self.store = store
        self.ledger = ledger

    def register_property(self, caller: Principal, property_id: str, address: str) -> PropertyRecord:
        if self.store.contains(property_id):
            raise AlreadyExists(
                f"Property '{property_id}' is already registered.",
                details={"property_id": property_id},
            )

        record = PropertyRecord(
            property_id=property_id,
            status=PropertyStatus.UNVERIFIED,
            legal_owner=caller,
            address=address,
            last_inspection_date=self.ledger.block_height,
        )
        self.store.put(record)
        logger.info("Property %s registered by %s", property_id, caller)
        return record

    def verify_property(self, caller: Principal, property_id: str) -> PropertyRecord:
        return self._transition(caller, property_id, PropertyStatus.VERIFIED)

    def reject_property(self, caller: Principal, property_id: str, reason: str) -> PropertyRecord:
        return self._transition(caller, property_id, PropertyStatus.REJECTED, reason=reason)

    # ─── Transition ─────────────────────────────────────────────────

    def _transition(
        self,
        caller: Principal,
        property_id: str,
        target: PropertyStatus,
        reason: Optional[str] = None,
    ) -> PropertyRecord:
        require_verifier(self.state, caller)

        current = self.store.get(property_id)
        if current is None:
            raise NotFound(
                f"Property '{property_id}' is not registered.",
                details={"property_id": property_id},
            )

        if current.status.is_terminal:
            raise InvalidTransition(
                f"Property '{property_id}' is already {current.status.name} "
                f"and cannot become {target.name}.",
                details={
                    "property_id": property_id,
                    "current_status": current.status.name,
                    "requested_status": target.name,
                },
            )

        updated = PropertyRecord(
            property_id=current.property_id,
            status=target,
            legal_owner=current.legal_owner,
            address=current.address,
            last_inspection_date=self.ledger.block_height,
            verified_by=caller,
            rejection_reason=reason,
        )
        self.store.put(updated)
        logger.info("Property %s marked %s by %s", property_id, target.name, caller)
        return updated
