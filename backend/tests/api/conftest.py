"""API test fixtures: an app over a fresh memory store + httpx client.

Invariants:
    - Every test gets its own app, store and clock
    - `sign_in` returns Bearer headers and clears the cookie jar so several
      accounts can act in one test without the last cookie winning
"""

import pytest
from httpx import ASGITransport, AsyncClient

from coupler.infrastructure.memory_store import MemoryStore, memory_unit_of_work_factory
from coupler.main import create_app
from coupler.services.container import build_services


@pytest.fixture
def app(test_settings, clock):
    app = create_app(test_settings)
    app.state.services = build_services(
        memory_unit_of_work_factory(MemoryStore()), test_settings, clock=clock,
    )
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sign_in(client):
    async def _sign_in(email, password="secret-pw"):
        res = await client.post(
            "/api/v1/auth/signin", json={"email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        token = res.cookies["token"]
        client.cookies.clear()
        return {"Authorization": f"Bearer {token}"}, res.json()
    return _sign_in


def _company_payload(name="Acme", email="boss@acme.nl"):
    return {
        "name": name,
        "information": "We build bridges",
        "description": "Civil engineering firm",
        "locations": [
            {"street": "Main street", "zipcode": "1234 AB", "city": "Utrecht", "number": "1"},
        ],
        "representative": {
            "job_title": "CEO",
            "email": email,
            "password": "secret-pw",
            "first_name": "Bob",
            "last_name": "Bouwer",
        },
    }


def _student_payload(email="student@uni.nl"):
    return {
        "email": email,
        "password": "secret-pw",
        "first_name": "Ann",
        "last_name": "de Vries",
        "university": "Utrecht University",
        "skills": ["python"],
        "experience": [],
    }


@pytest.fixture
def signup_company(client):
    async def _signup(name="Acme", email="boss@acme.nl"):
        res = await client.post("/api/v1/signup/companies", json=_company_payload(name, email))
        assert res.status_code == 201, res.text
        return res.json()
    return _signup


@pytest.fixture
def signup_student(client):
    async def _signup(email="student@uni.nl"):
        res = await client.post("/api/v1/signup/students", json=_student_payload(email))
        assert res.status_code == 201, res.text
        return res.json()
    return _signup


@pytest.fixture
def company_body():
    return _company_payload


@pytest.fixture
def student_body():
    return _student_payload
