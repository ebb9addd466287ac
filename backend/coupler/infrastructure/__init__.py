"""Infrastructure Layer: database access, repositories, security and logging.

Invariants:
    - Repository implementations satisfy the protocols in core/repository_protocols.py
    - Driver exceptions never escape: they are mapped to core/errors.py types
"""
