"""
Key/value ledger storage the registry runs on.

The registry only needs get/set/exists/delete over opaque keys, a logical
clock (block height) and an all-or-nothing transaction scope. Real ledger
backends plug in by satisfying ``LedgerStorage``; ``InMemoryLedger`` is the
reference implementation used by the API, the demo and the tests.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

_MISSING = object()


class LedgerStorage(Protocol):
    """Storage contract consumed by the registry.

    A transaction that exits cleanly commits one block and advances ``block_height``.
    """

    @property
    def block_height(self) -> int: ...

    def get(self, key: Hashable) -> Optional[Any]: ...

    def set(self, key: Hashable, value: Any) -> None: ...

    def exists(self, key: Hashable) -> bool: ...

    def delete(self, key: Hashable) -> None: ...

    def transaction(self) -> Any: ...


class InMemoryLedger:
    """Dict-backed ledger with a block-height clock and rollback on failure.

    Usage:
        ledger = InMemoryLedger(block_height=100)
        with ledger.transaction():
            ledger.set(("property", "p1"), record)
            raise SomeError  # ("property", "p1") is gone again, height still 100

    Each committed transaction seals one block: the clock moves forward by
    one after the outermost scope exits cleanly.
    """

    def __init__(self, block_height: int = 0):
        if block_height < 0:
            raise ValueError(f"block height cannot be negative: {block_height}")
        self._data: dict[Hashable, Any] = {}
        self._block_height = block_height
        # Pre-transaction value of every key touched in the open transaction
        self._journal: dict[Hashable, Any] | None = None

    @property
    def block_height(self) -> int:
        return self._block_height

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height."""
        if blocks < 1:
            raise ValueError(f"can only advance by a positive number of blocks, got {blocks}")
        self._block_height += blocks
        return self._block_height

    # ─── Key/Value Contract ─────────────────────────────────────────

    def get(self, key: Hashable) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        self._record(key)
        self._data[key] = value

    def exists(self, key: Hashable) -> bool:
        return key in self._data

    def delete(self, key: Hashable) -> None:
        self._record(key)
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)

    # ─── Atomicity ──────────────────────────────────────────────────

    def _record(self, key: Hashable) -> None:
        if self._journal is not None and key not in self._journal:
            self._journal[key] = self._data.get(key, _MISSING)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Undo every write made inside the block if it raises.

        Nested scopes join the outermost one. Only touched keys are journaled;
        stored values are expected to be immutable.
        """
        if self._journal is not None:
            yield
            return

        self._journal = {}
        try:
            yield
        except BaseException:
            logger.debug(
                "Rolling back %d key(s) at height %d", len(self._journal), self._block_height
            )
            for key, previous in self._journal.items():
                if previous is _MISSING:
                    self._data.pop(key, None)
                else:
                    self._data[key] = previous
            raise
        else:
            self._block_height += 1
        finally:
            self._journal = None
