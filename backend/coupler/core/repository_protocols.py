"""Boundary Protocols: contracts between the services and the stores.

Invariants:
    - Services never import an implementation; they receive a UnitOfWorkFactory
    - Finders return None for a missing row; services decide whether that is an error
    - Every repository of one UnitOfWork shares its transaction: a write made
      through one is visible to the others and is discarded with them on rollback
    - Leaving a UnitOfWork without commit() rolls it back
    - add() raises EmailAlreadyUsedError / CompanyNameAlreadyUsedError when a
      uniqueness constraint rejects the write

Design Decisions:
    - Protocol over ABC: memory and SQL stores satisfy it structurally
    - Aggregate writes compose through the protocol (companies.add calls
      representatives.add on the same unit) so no implementation is downcast
"""

from types import TracebackType
from typing import Callable, Protocol

from coupler.core.entities import (
    Company, InviteLink, Project, Representative, Student, User,
)


class UserRepository(Protocol):
    async def add(self, user: User) -> None: ...
    async def find_by_id(self, user_id: str) -> User | None: ...
    async def find_by_email(self, email: str) -> User | None: ...
    async def update(self, user: User) -> None: ...
    async def delete(self, user_id: str) -> None: ...
    async def find_role_id(self, user: User) -> str | None: ...


class StudentRepository(Protocol):
    """Student aggregate: add/update/delete also write the owned user."""
    async def add(self, student: Student) -> None: ...
    async def find_by_id(self, student_id: str) -> Student | None: ...
    async def find_all(self) -> list[Student]: ...
    async def update(self, student: Student) -> None: ...
    async def delete(self, student_id: str) -> None: ...


class RepresentativeRepository(Protocol):
    """add() writes the owned user first, then the representative row."""
    async def add(self, representative: Representative) -> None: ...
    async def find_by_id(self, representative_id: str) -> Representative | None: ...
    async def find_by_company(self, company_id: str) -> list[Representative]: ...


class CompanyRepository(Protocol):
    """Company aggregate: company, addresses, representatives, projects."""
    async def add(self, company: Company) -> None: ...
    async def find_by_id(self, company_id: str) -> Company | None: ...
    async def find_by_name(self, name: str) -> Company | None: ...
    async def find_all(self) -> list[Company]: ...
    async def update(self, company: Company) -> None: ...
    async def exists(self, company_id: str) -> bool: ...


class ProjectRepository(Protocol):
    async def add(self, project: Project) -> None: ...
    async def find_by_id(self, project_id: str) -> Project | None: ...
    async def find_all(self) -> list[Project]: ...
    async def delete(self, project_id: str) -> None: ...


class InviteLinkRepository(Protocol):
    async def add(self, link: InviteLink) -> None: ...
    async def find_by_id(self, invite_id: str) -> InviteLink | None: ...
    async def find_by_creator(self, representative_id: str) -> list[InviteLink]: ...
    async def mark_used(self, invite_id: str) -> bool:
        """Flip used false->true. Returns False if it was already used."""
        ...


class UnitOfWork(Protocol):
    users: UserRepository
    students: StudentRepository
    companies: CompanyRepository
    representatives: RepresentativeRepository
    projects: ProjectRepository
    invite_links: InviteLinkRepository

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def __aenter__(self) -> "UnitOfWork": ...
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


UnitOfWorkFactory = Callable[[], UnitOfWork]


class CompanyLookup(Protocol):
    """Read-only existence probe handed to the representative service."""
    async def exists(self, company_id: str) -> bool: ...
