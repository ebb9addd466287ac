"""Core Layer: pure domain logic with no IO.

Invariants:
    - Nothing in core/ imports from infrastructure/, services/ or api/
    - Persistence is reached only through the protocols in repository_protocols.py
"""
