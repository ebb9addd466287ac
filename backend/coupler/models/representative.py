"""Representative ORM: employee acting for a company, owns one user row."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from coupler.db.base import Base


class Representative(Base):
    __tablename__ = "representatives"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, unique=True,
    )
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id"), nullable=False,
    )
    job_title: Mapped[str] = mapped_column(String(200), nullable=False)
