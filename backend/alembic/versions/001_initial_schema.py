"""Initial schema: users, students, companies, addresses, projects, representatives, invite_links.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "companies",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("information", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_companies"),
        sa.UniqueConstraint("name", name="uq_companies_name"),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("university", sa.String(200), nullable=False),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("experience", sa.JSON, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("resume", sa.Text, nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("id", name="pk_students"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_students_user_id_users", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", name="uq_students_user_id"),
    )

    op.create_table(
        "addresses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("company_id", sa.String(36), nullable=False),
        sa.Column("street", sa.String(200), nullable=False),
        sa.Column("zipcode", sa.String(7), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("number", sa.String(20), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name="pk_addresses"),
        sa.ForeignKeyConstraint(
            ["company_id"], ["companies.id"],
            name="fk_addresses_company_id_companies", ondelete="CASCADE",
        ),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("company_id", sa.String(36), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("compensation", sa.String(200), nullable=False),
        sa.Column("duration", sa.String(200), nullable=False),
        sa.Column("recommendations", sa.JSON, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_projects"),
        sa.ForeignKeyConstraint(
            ["company_id"], ["companies.id"],
            name="fk_projects_company_id_companies", ondelete="CASCADE",
        ),
    )

    op.create_table(
        "representatives",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("company_id", sa.String(36), nullable=False),
        sa.Column("job_title", sa.String(200), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_representatives"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_representatives_user_id_users"),
        sa.ForeignKeyConstraint(
            ["company_id"], ["companies.id"], name="fk_representatives_company_id_companies",
        ),
        sa.UniqueConstraint("user_id", name="uq_representatives_user_id"),
    )

    op.create_table(
        "invite_links",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_invite_links"),
        sa.ForeignKeyConstraint(
            ["created_by"], ["representatives.id"],
            name="fk_invite_links_created_by_representatives",
        ),
    )
    op.create_index("ix_invite_links_created_by", "invite_links", ["created_by"])


def downgrade() -> None:
    op.drop_index("ix_invite_links_created_by", table_name="invite_links")
    op.drop_table("invite_links")
    op.drop_table("representatives")
    op.drop_table("projects")
    op.drop_table("addresses")
    op.drop_table("students")
    op.drop_table("companies")
    op.drop_table("users")
