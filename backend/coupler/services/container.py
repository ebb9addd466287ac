"""Service Wiring: build every service from one unit-of-work factory.

Invariants:
    - Construction order follows dependencies: users -> companies -> representatives,
      invites -> auth; nothing refers back up the chain
    - The same factory (one store) backs every service of a container
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from coupler.config import Settings
from coupler.core.domain_types import REPRESENTATIVE_INVITE_PATH
from coupler.core.repository_protocols import UnitOfWorkFactory
from coupler.infrastructure.security import PasswordHasher, TokenService
from coupler.services.auth_service import AuthService
from coupler.services.company_service import CompanyService
from coupler.services.invite_link_service import InviteLinkService, utc_now
from coupler.services.project_service import ProjectService
from coupler.services.representative_service import RepresentativeService
from coupler.services.student_service import StudentService
from coupler.services.user_service import UserService


@dataclass
class Services:
    users: UserService
    companies: CompanyService
    representatives: RepresentativeService
    students: StudentService
    projects: ProjectService
    invite_links: InviteLinkService
    auth: AuthService


def default_invite_template(public_base_url: str) -> str:
    return public_base_url.rstrip("/") + REPRESENTATIVE_INVITE_PATH


def build_services(
    uow_factory: UnitOfWorkFactory,
    settings: Settings,
    clock: Callable[[], datetime] = utc_now,
) -> Services:
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.session_ttl_hours),
        clock=clock,
    )

    users = UserService(uow_factory, hasher)
    companies = CompanyService(uow_factory)
    representatives = RepresentativeService(uow_factory, companies)
    invite_links = InviteLinkService(
        uow_factory,
        users,
        default_url_template=default_invite_template(settings.public_base_url),
        valid_for=timedelta(hours=settings.invite_validity_hours),
        clock=clock,
    )

    return Services(
        users=users,
        companies=companies,
        representatives=representatives,
        students=StudentService(uow_factory),
        projects=ProjectService(uow_factory),
        invite_links=invite_links,
        auth=AuthService(users, tokens),
    )
