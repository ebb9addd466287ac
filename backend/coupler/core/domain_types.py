"""Domain Types: closed enums and lifecycle constants.

Invariants:
    - Ids are UUID4 strings (entities.new_id)
    - Role and StudentStatus are closed enums; no free-form string comparison
    - InviteState.EXPIRED is computed from time, never persisted

Design Decisions:
    - str Enums: serialize to JSON and to DB String columns without converters
"""

from datetime import timedelta
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account roles. The role decides which profile owns the user."""
    STUDENT = "student"
    REPRESENTATIVE = "representative"


class StudentStatus(str, Enum):
    """Availability of a student for new projects."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class InviteState(str, Enum):
    """Invite link lifecycle. Only ACTIVE can be redeemed."""
    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


# ─── Constants ───────────────────────────────────────────────────

INVITE_VALIDITY = timedelta(hours=24)
COMPANY_PLACEHOLDER = "<[companyID]>"
INVITE_PLACEHOLDER = "<[inviteID]>"
REPRESENTATIVE_INVITE_PATH = (
    f"/signup/representatives/invite/{COMPANY_PLACEHOLDER}/{INVITE_PLACEHOLDER}"
)
ZIPCODE_PATTERN = r"^\d{4}\s[A-Z]{2}$"
