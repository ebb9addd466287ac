"""Invite Link Schemas."""

from datetime import datetime

from pydantic import BaseModel

from coupler.core.domain_types import InviteState
from coupler.core.entities import InviteLink
from coupler.core.invite_links import invite_state


class InviteLinkCreate(BaseModel):
    """Optional URL template; both placeholders are substituted when present."""
    url_template: str | None = None


class InviteLinkResponse(BaseModel):
    id: str
    url: str
    created_at: datetime
    expiry_date: datetime
    created_by: str
    used: bool
    state: InviteState

    @classmethod
    def from_entity(cls, link: InviteLink, now: datetime) -> "InviteLinkResponse":
        return cls(
            id=link.id,
            url=link.url,
            created_at=link.created_at,
            expiry_date=link.expiry_date,
            created_by=link.created_by,
            used=link.used,
            state=invite_state(link, now),
        )
