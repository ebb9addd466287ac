"""Root conftest: shared test configuration and builders.

Invariants:
    - Environment defaults are set before any coupler module reads settings
    - `uow_factory` runs each dependent test once per store (memory, sqlite)
    - Every sqlite test gets a fresh in-memory database with foreign keys on
"""

import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from coupler.config import Settings
from coupler.core.domain_types import Role
from coupler.core.entities import (
    new_address, new_company, new_representative, new_student, new_user,
)
from coupler.db.base import Base
from coupler.db.session import enable_sqlite_foreign_keys
from coupler.infrastructure.database import DatabaseSessionManager
from coupler.infrastructure.memory_store import MemoryStore, memory_unit_of_work_factory
from coupler.infrastructure.security import PasswordHasher
from coupler.infrastructure.sql_store import sql_unit_of_work_factory
from coupler.services.container import build_services
import coupler.models  # noqa: F401


class FakeClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock(datetime.now(timezone.utc).replace(microsecond=0))


@pytest.fixture
def test_settings():
    return Settings(
        storage_backend="memory",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        public_base_url="https://coupler.test",
        log_format="text",
    )


@pytest.fixture
async def sqlite_manager():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield DatabaseSessionManager.from_engine(engine)
    await engine.dispose()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture(params=["memory", "sqlite"])
def uow_factory(request, memory_store, sqlite_manager):
    if request.param == "memory":
        return memory_unit_of_work_factory(memory_store)
    return sql_unit_of_work_factory(sqlite_manager)


@pytest.fixture
def services(uow_factory, test_settings, clock):
    return build_services(uow_factory, test_settings, clock=clock)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def make_user(hasher):
    def _make(
        email="ann@example.com", role=Role.STUDENT, password="secret-pw",
        first_name="Ann", last_name="de Vries",
    ):
        return new_user(email, hasher.hash(password), first_name, last_name, role)
    return _make


@pytest.fixture
def make_company(make_user):
    def _make(name="Acme", rep_email="boss@acme.nl", locations=1):
        company = new_company(name, "We build bridges", "Civil engineering firm")
        company.locations = [
            new_address("Main street", "1234 AB", "Utrecht", str(i + 1))
            for i in range(locations)
        ]
        user = make_user(rep_email, Role.REPRESENTATIVE, first_name="Bob")
        company.representatives = [new_representative("CEO", company.id, user)]
        return company
    return _make


@pytest.fixture
def make_student(make_user):
    def _make(email="student@uni.nl"):
        return new_student(
            "Utrecht University", ["python", "sql"], ["teaching assistant"],
            make_user(email, Role.STUDENT),
        )
    return _make
