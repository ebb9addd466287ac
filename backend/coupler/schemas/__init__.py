"""Pydantic Schemas: request/response contracts for the HTTP API.

Invariants:
    - Schemas validate shape at the boundary; domain rules live in core/entities.py
"""
