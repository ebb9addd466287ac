"""Coupler Application Package: student and company matching backend.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
