#!/usr/bin/env python3
"""
Property Registry — Entry Point
================================

Walks the registry through a verification and a rejection on an in-memory
ledger, then prints the resulting records.

Usage:
    python main.py
    REGISTRY_LOG_LEVEL=DEBUG python main.py
"""

from __future__ import annotations

import os
import sys

from property_registry.config import configure_logging, load_settings
from property_registry.ledger import InMemoryLedger
from property_registry.models import Err, PropertyStatus, Result
from property_registry.registry import PropertyRegistry

# ─── Sample Principals ──────────────────────────────────────────────

DEPLOYER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
VERIFIER_1 = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
OWNER_1 = "ST2JHG361ZXG51QTHN86ICQE9SQB3SMNTX5JCHPD"
OWNER_2 = "ST2REHHS5J3CERCRBEPMGH7921Q6PYKAADT7JP2VB"


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72

_STATUS_COLORS = {
    PropertyStatus.UNVERIFIED: _YELLOW,
    PropertyStatus.VERIFIED: _GREEN,
    PropertyStatus.REJECTED: _RED,
}


# ─── Pretty Printer Helpers ─────────────────────────────────────────


def _print_step(label: str, result: Result) -> bool:
    """Print one call outcome. Returns True on success."""
    if isinstance(result, Err):
        print(f"  {_RED}✗{_RESET} {label}  {_DIM}err {int(result.value)} ({result.value.name}){_RESET}")
        return False
    print(f"  {_GREEN}✓{_RESET} {label}")
    return True


def _print_record(registry: PropertyRegistry, property_id: str) -> None:
    result = registry.get_property_details(property_id)
    if isinstance(result, Err):
        print(f"  {_RED}{property_id}: not found{_RESET}")
        return
    record = result.value
    color = _STATUS_COLORS[record.status]
    print(f"  Property:    {_BOLD}{record.property_id}{_RESET}")
    print(f"  Status:      {color}{record.status.name}{_RESET} ({int(record.status)})")
    print(f"  Owner:       {record.legal_owner}")
    print(f"  Address:     {record.address}")
    print(f"  Inspected:   block {record.last_inspection_date}")
    print(f"  Verified by: {record.verified_by or '-'}")
    if record.rejection_reason:
        print(f"  Reason:      {record.rejection_reason}")
    print(f"  Verified?    {registry.is_property_verified(property_id)}")


# ─── Scenarios ───────────────────────────────────────────────────────


def run_demo(registry: PropertyRegistry) -> int:
    """Run both scenarios. Returns the number of unexpected failures."""
    failures = 0

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  PROPERTY REGISTRY DEMO{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Owner:       {registry.owner}")
    print(f"  Height:      {registry.block_height}")
    print(f"{'─' * _WIDTH}")

    steps = [
        ("owner adds verifier1", lambda: registry.add_verifier(registry.owner, VERIFIER_1)),
        ("owner1 registers p1", lambda: registry.register_property(OWNER_1, "p1", "123 Main St")),
        ("owner2 registers p2", lambda: registry.register_property(OWNER_2, "p2", "456 Oak St")),
    ]
    for label, call in steps:
        failures += not _print_step(label, call())

    failures += not _print_step("verifier1 verifies p1", registry.verify_property(VERIFIER_1, "p1"))
    failures += not _print_step(
        "verifier1 rejects p2", registry.reject_property(VERIFIER_1, "p2", "incomplete docs")
    )

    # Expected rejections
    print(f"\n  {_DIM}Expected to fail:{_RESET}")
    _print_step("owner1 verifies p2", registry.verify_property(OWNER_1, "p2"))
    _print_step("owner2 re-registers p1", registry.register_property(OWNER_2, "p1", "elsewhere"))
    _print_step("verifier1 verifies ghost", registry.verify_property(VERIFIER_1, "ghost"))

    for property_id in ("p1", "p2"):
        print(f"{'─' * _WIDTH}")
        _print_record(registry, property_id)

    print(f"{'=' * _WIDTH}\n")
    return failures


# ─── Main ────────────────────────────────────────────────────────────


def main():
    """Build a registry owned by the demo deployer and run the scenarios."""
    os.environ.setdefault("REGISTRY_OWNER", DEPLOYER)
    settings = load_settings()
    configure_logging(settings)

    ledger = InMemoryLedger(settings.start_height)
    registry = PropertyRegistry(ledger, owner=settings.owner)
    failures = run_demo(registry)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
