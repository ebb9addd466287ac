"""Database Infrastructure: declarative Base and engine helpers.

Invariants:
    - All sessions are async (AsyncSession)
    - asyncpg in production, aiosqlite in tests
"""
