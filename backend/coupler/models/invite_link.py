"""InviteLink ORM: single-use, time-bounded representative invitation.

Invariants:
    - used only ever goes false -> true (enforced by the conditional UPDATE in sql_store)
    - expiry is not a column state: it is computed from expiry_date on read
"""

from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from coupler.db.base import Base


class InviteLink(Base):
    __tablename__ = "invite_links"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expiry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str] = mapped_column(
        String(36), ForeignKey("representatives.id"), nullable=False, index=True,
    )
