"""API Layer: FastAPI routers, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py
    - Routes translate HTTP to service calls and never hold business rules
"""
