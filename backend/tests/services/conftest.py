"""Service test fixtures: a registered company to hang invites and projects on."""

import pytest


@pytest.fixture
async def acme(services, make_company):
    return await services.companies.register(make_company("Acme", "boss@acme.nl"))


@pytest.fixture
def acme_rep(acme):
    return acme.representatives[0]
