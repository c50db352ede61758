"""Read-only projections over the property store. No authorization required."""

from __future__ import annotations

from .models import Err, ErrorCode, Ok, PropertyStatus, Result
from .store import PropertyStore


class QueryFacade:
    def __init__(self, store: PropertyStore):
        self.store = store

    def get_property_details(self, property_id: str) -> Result:
        """Full record, or ``Err(NOT_FOUND)`` if the id was never registered."""
        record = self.store.get(property_id)
        if record is None:
            return Err(value=ErrorCode.NOT_FOUND)
        return Ok(value=record)

    def is_property_verified(self, property_id: str) -> bool:
        """Whether the record is VERIFIED. An unknown id reads as not verified."""
        record = self.store.get(property_id)
        return record is not None and record.status == PropertyStatus.VERIFIED
