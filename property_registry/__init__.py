"""
Property Registry — permissioned verification of real-world property records.

Architecture: Access guard → Verifier allow-list → Verification state machine → Queries
Philosophy:  Check every rule first. Write once. Never leave half a change behind.
"""

__version__ = "1.0.0"
