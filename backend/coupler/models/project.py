"""Project ORM: a listing owned by one company."""

from sqlalchemy import String, Text, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from coupler.db.base import Base


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    compensation: Mapped[str] = mapped_column(String(200), nullable=False)
    duration: Mapped[str] = mapped_column(String(200), nullable=False)
    recommendations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
