"""Invite link service tests (memory and sqlite stores).

Tests cover:
    - Link creation: default and custom templates, 24h window from the injected clock
    - Redemption: creates a representative of the company and marks the link used
    - Single use, expiry, wrong company, unknown invite
    - A failed redemption leaves the link unused and creates nobody
"""

import asyncio
from datetime import timedelta

import pytest

from coupler.core.domain_types import Role
from coupler.core.errors import (
    EmailAlreadyUsedError, EntityNotFoundError, InviteAlreadyUsedError,
    InviteExpiredError, InviteNotFoundError, ValidationError,
)
from coupler.infrastructure.memory_store import memory_unit_of_work_factory
from coupler.services.container import build_services


def _signup(**overrides):
    fields = {
        "job_title": "Recruiter",
        "email": "new.rep@acme.nl",
        "password": "s3cret",
        "first_name": "Carla",
        "last_name": "Jansen",
    }
    fields.update(overrides)
    return fields


async def test_create_uses_default_template(services, acme, acme_rep, clock):
    link = await services.invite_links.create_representative_invite(acme_rep.id)

    assert link.url == (
        f"https://coupler.test/signup/representatives/invite/{acme.id}/{link.id}"
    )
    assert link.created_at == clock.now
    assert link.expiry_date == clock.now + timedelta(hours=24)
    assert link.created_by == acme_rep.id
    assert not link.used


async def test_create_with_custom_template(services, acme, acme_rep):
    link = await services.invite_links.create_representative_invite(
        acme_rep.id, "https://x.test/join?c=<[companyID]>&i=<[inviteID]>",
    )
    assert link.url == f"https://x.test/join?c={acme.id}&i={link.id}"


async def test_create_for_unknown_representative(services):
    with pytest.raises(EntityNotFoundError):
        await services.invite_links.create_representative_invite("nobody")


async def test_redeem_creates_representative_and_uses_link(services, acme, acme_rep):
    link = await services.invite_links.create_representative_invite(acme_rep.id)

    rep = await services.invite_links.redeem(acme.id, link.id, **_signup())

    assert rep.company_id == acme.id
    assert rep.user.role is Role.REPRESENTATIVE
    assert (await services.invite_links.find_by_id(link.id)).used
    company = await services.companies.find_by_id(acme.id)
    assert {r.user.email for r in company.representatives} == {"boss@acme.nl", "new.rep@acme.nl"}
    user = await services.users.find_by_email("new.rep@acme.nl")
    assert services.users.validate_password(user.hashed_password, "s3cret")


async def test_link_redeems_only_once(services, acme, acme_rep):
    link = await services.invite_links.create_representative_invite(acme_rep.id)
    await services.invite_links.redeem(acme.id, link.id, **_signup())

    with pytest.raises(InviteAlreadyUsedError):
        await services.invite_links.redeem(acme.id, link.id, **_signup(email="second@acme.nl"))
    assert not await services.users.email_already_used("second@acme.nl")


async def test_link_expires_after_window(services, acme, acme_rep, clock):
    link = await services.invite_links.create_representative_invite(acme_rep.id)
    clock.advance(timedelta(hours=24, seconds=1))

    with pytest.raises(InviteExpiredError):
        await services.invite_links.redeem(acme.id, link.id, **_signup())
    assert not (await services.invite_links.find_by_id(link.id)).used


async def test_link_still_valid_at_expiry_instant(services, acme, acme_rep, clock):
    link = await services.invite_links.create_representative_invite(acme_rep.id)
    clock.advance(timedelta(hours=24))
    await services.invite_links.redeem(acme.id, link.id, **_signup())


async def test_redeem_against_other_company_is_not_found(
    services, acme, acme_rep, make_company,
):
    other = await services.companies.register(make_company("Other", "o@other.nl"))
    link = await services.invite_links.create_representative_invite(acme_rep.id)

    with pytest.raises(InviteNotFoundError):
        await services.invite_links.redeem(other.id, link.id, **_signup())
    assert not (await services.invite_links.find_by_id(link.id)).used


async def test_redeem_for_unknown_company(services, acme, acme_rep):
    link = await services.invite_links.create_representative_invite(acme_rep.id)

    with pytest.raises(EntityNotFoundError) as exc:
        await services.invite_links.redeem("no-such-company", link.id, **_signup())
    assert exc.value.code == "ENTITY_NOT_FOUND"
    assert not (await services.invite_links.find_by_id(link.id)).used


async def test_redeem_unknown_invite(services, acme):
    with pytest.raises(InviteNotFoundError):
        await services.invite_links.redeem(acme.id, "missing", **_signup())


async def test_failed_redemption_keeps_link_unused(services, acme, acme_rep):
    link = await services.invite_links.create_representative_invite(acme_rep.id)

    with pytest.raises(EmailAlreadyUsedError):
        await services.invite_links.redeem(acme.id, link.id, **_signup(email="boss@acme.nl"))
    with pytest.raises(ValidationError):
        await services.invite_links.redeem(acme.id, link.id, **_signup(job_title=" "))

    assert not (await services.invite_links.find_by_id(link.id)).used
    rep = await services.invite_links.redeem(acme.id, link.id, **_signup())
    assert rep.user.email == "new.rep@acme.nl"


async def test_find_by_creator(services, acme_rep):
    first = await services.invite_links.create_representative_invite(acme_rep.id)
    second = await services.invite_links.create_representative_invite(acme_rep.id)
    links = await services.invite_links.find_by_creator(acme_rep.id)
    assert {link.id for link in links} == {first.id, second.id}
    assert await services.invite_links.find_by_creator("someone-else") == []


async def test_concurrent_redemptions_admit_one(memory_store, test_settings, clock, make_company):
    services = build_services(memory_unit_of_work_factory(memory_store), test_settings, clock)
    acme = await services.companies.register(make_company())
    link = await services.invite_links.create_representative_invite(acme.representatives[0].id)

    results = await asyncio.gather(
        services.invite_links.redeem(acme.id, link.id, **_signup(email="a@acme.nl")),
        services.invite_links.redeem(acme.id, link.id, **_signup(email="b@acme.nl")),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, Exception)]
    assert len(errors) == 1
    assert isinstance(errors[0], InviteAlreadyUsedError)
    company = await services.companies.find_by_id(acme.id)
    assert len(company.representatives) == 2
