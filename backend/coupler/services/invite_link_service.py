"""Invite Link Service: issue and redeem single-use representative invites.

Invariants:
    - redeem() runs in ONE unit of work: representative + user insert and the
      used flag flip commit together or not at all
    - A link is redeemed at most once: the flip is conditional (used = false)
      and a lost race surfaces as InviteAlreadyUsedError
    - An invite only redeems against the company of the representative who issued it
    - The clock is injected; nothing here calls datetime.now() directly

Design Decisions:
    - The default URL template is built from settings.public_base_url at wiring time
    - Expired links are never deleted; state is computed from expiry_date on read
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from coupler.core import entities
from coupler.core.domain_types import INVITE_VALIDITY, Role
from coupler.core.errors import (
    EmailAlreadyUsedError, EntityNotFoundError, InviteAlreadyUsedError,
    InviteExpiredError, InviteNotFoundError,
)
from coupler.core.invite_links import ensure_redeemable, generate_invite_link
from coupler.core.repository_protocols import UnitOfWorkFactory
from coupler.services.user_service import UserService

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InviteLinkService:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        users: UserService,
        default_url_template: str,
        valid_for: timedelta = INVITE_VALIDITY,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._uow = uow_factory
        self._users = users
        self._default_url_template = default_url_template
        self._valid_for = valid_for
        self._clock = clock

    async def create_representative_invite(
        self, representative_id: str, url_template: str | None = None,
    ) -> entities.InviteLink:
        async with self._uow() as uow:
            representative = await uow.representatives.find_by_id(representative_id)
            if representative is None:
                raise EntityNotFoundError("Representative", representative_id)
            link = generate_invite_link(
                representative,
                entities.new_id(),
                url_template or self._default_url_template,
                self._clock(),
                self._valid_for,
            )
            await uow.invite_links.add(link)
            await uow.commit()

        logger.info(
            "Invite link created",
            extra={
                "invite_id": link.id,
                "representative_id": representative_id,
                "company_id": representative.company_id,
            },
        )
        return link

    async def redeem(
        self,
        company_id: str,
        invite_id: str,
        job_title: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> entities.Representative:
        """Turn an active invite into a new representative of `company_id`."""
        async with self._uow() as uow:
            link = await uow.invite_links.find_by_id(invite_id)
            if link is None:
                raise InviteNotFoundError(invite_id)
            try:
                ensure_redeemable(link, self._clock())
            except (InviteExpiredError, InviteAlreadyUsedError) as e:
                logger.warning(
                    f"Invite redemption rejected: {e.code}",
                    extra={"invite_id": invite_id, "company_id": company_id},
                )
                raise

            if not await uow.companies.exists(company_id):
                raise EntityNotFoundError("Company", company_id)
            issuer = await uow.representatives.find_by_id(link.created_by)
            if issuer is None or issuer.company_id != company_id:
                raise InviteNotFoundError(invite_id)

            user = self._users.new_account(
                email, password, first_name, last_name, Role.REPRESENTATIVE,
            )
            representative = entities.new_representative(job_title, company_id, user)

            if await uow.users.find_by_email(user.email) is not None:
                raise EmailAlreadyUsedError(user.email)

            await uow.representatives.add(representative)
            if not await uow.invite_links.mark_used(invite_id):
                raise InviteAlreadyUsedError(invite_id)
            await uow.commit()

        logger.info(
            "Invite redeemed",
            extra={
                "invite_id": invite_id,
                "company_id": company_id,
                "representative_id": representative.id,
            },
        )
        return representative

    def now(self) -> datetime:
        return self._clock()

    async def find_by_creator(self, representative_id: str) -> list[entities.InviteLink]:
        async with self._uow() as uow:
            return await uow.invite_links.find_by_creator(representative_id)

    async def find_by_id(self, invite_id: str) -> entities.InviteLink:
        async with self._uow() as uow:
            link = await uow.invite_links.find_by_id(invite_id)
        if link is None:
            raise InviteNotFoundError(invite_id)
        return link
