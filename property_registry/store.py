"""Property id → record mapping over the ledger. Internal to the state machine."""

from __future__ import annotations

from typing import Optional

from .ledger import LedgerStorage
from .models import PropertyRecord


def _property_key(property_id: str) -> tuple[str, str]:
    return ("property", property_id)


class PropertyStore:
    def __init__(self, ledger: LedgerStorage):
        self.ledger = ledger

    def get(self, property_id: str) -> Optional[PropertyRecord]:
        return self.ledger.get(_property_key(property_id))

    def contains(self, property_id: str) -> bool:
        return self.ledger.exists(_property_key(property_id))

    def put(self, record: PropertyRecord) -> None:
        self.ledger.set(_property_key(record.property_id), record)
