"""Pytest configuration: project root on sys.path, fresh registry fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from property_registry.ledger import InMemoryLedger  # noqa: E402
from property_registry.registry import PropertyRegistry  # noqa: E402

DEPLOYER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger(block_height=100)


@pytest.fixture
def registry(ledger: InMemoryLedger) -> PropertyRegistry:
    """Registry owned by the deployer, no verifiers yet."""
    return PropertyRegistry(ledger, owner=DEPLOYER)
