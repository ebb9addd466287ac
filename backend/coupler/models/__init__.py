"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Company and Student are aggregate roots; addresses, projects and
      representatives hang off companies.id, students and representatives off users.id

Design Decisions:
    - One file per table group for locality
    - All models imported here so Base.metadata is complete for alembic and create_all
    - No relationship(): repositories load related rows with explicit selects
"""

from coupler.models.user import User  # noqa: F401
from coupler.models.student import Student  # noqa: F401
from coupler.models.company import Company, Address  # noqa: F401
from coupler.models.project import Project  # noqa: F401
from coupler.models.representative import Representative  # noqa: F401
from coupler.models.invite_link import InviteLink  # noqa: F401
