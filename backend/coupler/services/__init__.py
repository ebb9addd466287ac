"""Services Layer: one service per entity plus authentication and wiring.

Invariants:
    - Every public service method runs inside exactly one unit of work
    - Dependencies point one way: representative -> company lookup, never back
"""
