"""Invite Link Rules: pure functions for issuing and checking single-use invites.

Invariants:
    - A link is EXPIRED when now is strictly after expiry_date, whatever `used` says
    - A link is USED once its flag flipped; the flag never flips back
    - ensure_redeemable raises for any state other than ACTIVE
    - `now` is always passed in; nothing here reads the clock
"""

from datetime import datetime, timedelta

from coupler.core.domain_types import (
    COMPANY_PLACEHOLDER, INVITE_PLACEHOLDER, INVITE_VALIDITY, InviteState,
)
from coupler.core.entities import InviteLink, Representative
from coupler.core.errors import (
    InviteAlreadyUsedError, InviteExpiredError, ValidationError,
)


def render_invite_url(url_template: str, company_id: str, invite_id: str) -> str:
    """Substitute both placeholders (every occurrence) into the template."""
    if not url_template or not url_template.strip():
        raise ValidationError("url_template", "can't be empty")
    url = url_template.strip().replace(COMPANY_PLACEHOLDER, company_id)
    return url.replace(INVITE_PLACEHOLDER, invite_id)


def generate_invite_link(
    representative: Representative,
    invite_id: str,
    url_template: str,
    now: datetime,
    valid_for: timedelta = INVITE_VALIDITY,
) -> InviteLink:
    """Build a fresh, unused link issued by `representative`."""
    return InviteLink(
        id=invite_id,
        url=render_invite_url(url_template, representative.company_id, invite_id),
        created_at=now,
        expiry_date=now + valid_for,
        created_by=representative.id,
        used=False,
    )


def has_expired(link: InviteLink, now: datetime) -> bool:
    return now > link.expiry_date


def invite_state(link: InviteLink, now: datetime) -> InviteState:
    if has_expired(link, now):
        return InviteState.EXPIRED
    if link.used:
        return InviteState.USED
    return InviteState.ACTIVE


def ensure_redeemable(link: InviteLink, now: datetime) -> None:
    """Raise unless the link is ACTIVE."""
    match invite_state(link, now):
        case InviteState.EXPIRED:
            raise InviteExpiredError(link.id)
        case InviteState.USED:
            raise InviteAlreadyUsedError(link.id)
        case InviteState.ACTIVE:
            return
