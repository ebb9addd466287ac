"""Memory Store: in-process repositories with the same transactional contract as SQL.

Invariants:
    - One MemoryUnitOfWork at a time holds the store lock (units are serialised)
    - Writes go to a private copy of the tables; commit() swaps it in, anything else discards it
    - Email and company name uniqueness is checked on every write, mirroring
      uq_users_email / uq_companies_name
    - Entities handed out are copies: mutating them never touches stored state

Design Decisions:
    - copy-on-begin / swap-on-commit: rollback is "forget the copy", no undo log
    - Aggregates are stored by table (users, students, companies, addresses,
      projects, representatives, invite_links) and assembled on read like the SQL store
"""

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from types import TracebackType

from coupler.core import entities
from coupler.core.domain_types import Role
from coupler.core.errors import (
    CompanyNameAlreadyUsedError, EmailAlreadyUsedError, EntityNotFoundError,
)
from coupler.core.repository_protocols import (
    RepresentativeRepository, UnitOfWorkFactory, UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class _Tables:
    users: dict[str, entities.User] = field(default_factory=dict)
    students: dict[str, entities.Student] = field(default_factory=dict)
    companies: dict[str, entities.Company] = field(default_factory=dict)
    addresses: dict[str, list[entities.Address]] = field(default_factory=dict)
    projects: dict[str, entities.Project] = field(default_factory=dict)
    representatives: dict[str, entities.Representative] = field(default_factory=dict)
    invite_links: dict[str, entities.InviteLink] = field(default_factory=dict)


class MemoryStore:
    """Committed state shared by every unit of work created from it."""

    def __init__(self):
        self.tables = _Tables()
        self.lock = asyncio.Lock()

    def unit_of_work(self) -> "MemoryUnitOfWork":
        return MemoryUnitOfWork(self)


# ─── Repositories ────────────────────────────────────────────────

class MemoryUserRepository:
    def __init__(self, tables: _Tables):
        self.tables = tables

    def _email_owner(self, email: str) -> str | None:
        email = entities.normalize_email(email)
        for user in self.tables.users.values():
            if user.email == email:
                return user.id
        return None

    async def add(self, user: entities.User) -> None:
        if self._email_owner(user.email) is not None:
            raise EmailAlreadyUsedError(user.email)
        stored = copy.deepcopy(user)
        stored.email = entities.normalize_email(user.email)
        self.tables.users[user.id] = stored

    async def find_by_id(self, user_id: str) -> entities.User | None:
        user = self.tables.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_by_email(self, email: str) -> entities.User | None:
        owner = self._email_owner(email)
        return await self.find_by_id(owner) if owner else None

    async def update(self, user: entities.User) -> None:
        if user.id not in self.tables.users:
            raise EntityNotFoundError("User", user.id)
        owner = self._email_owner(user.email)
        if owner is not None and owner != user.id:
            raise EmailAlreadyUsedError(user.email)
        stored = copy.deepcopy(user)
        stored.email = entities.normalize_email(user.email)
        self.tables.users[user.id] = stored

    async def delete(self, user_id: str) -> None:
        self.tables.users.pop(user_id, None)

    async def find_role_id(self, user: entities.User) -> str | None:
        match user.role:
            case Role.STUDENT:
                profiles = self.tables.students.values()
            case Role.REPRESENTATIVE:
                profiles = self.tables.representatives.values()
        return next((p.id for p in profiles if p.user.id == user.id), None)


class MemoryStudentRepository:
    def __init__(self, tables: _Tables, users: UserRepository):
        self.tables = tables
        self.users = users

    async def _assemble(self, student: entities.Student) -> entities.Student:
        result = copy.deepcopy(student)
        result.user = await self.users.find_by_id(student.user.id)
        return result

    async def add(self, student: entities.Student) -> None:
        await self.users.add(student.user)
        self.tables.students[student.id] = copy.deepcopy(student)

    async def find_by_id(self, student_id: str) -> entities.Student | None:
        student = self.tables.students.get(student_id)
        return await self._assemble(student) if student else None

    async def find_all(self) -> list[entities.Student]:
        return [await self._assemble(s) for s in self.tables.students.values()]

    async def update(self, student: entities.Student) -> None:
        if student.id not in self.tables.students:
            raise EntityNotFoundError("Student", student.id)
        await self.users.update(student.user)
        self.tables.students[student.id] = copy.deepcopy(student)

    async def delete(self, student_id: str) -> None:
        student = self.tables.students.pop(student_id, None)
        if student is not None:
            await self.users.delete(student.user.id)


class MemoryRepresentativeRepository:
    def __init__(self, tables: _Tables, users: UserRepository):
        self.tables = tables
        self.users = users

    async def _assemble(self, representative: entities.Representative) -> entities.Representative:
        result = copy.deepcopy(representative)
        result.user = await self.users.find_by_id(representative.user.id)
        return result

    async def add(self, representative: entities.Representative) -> None:
        if representative.company_id not in self.tables.companies:
            raise EntityNotFoundError("Company", representative.company_id)
        await self.users.add(representative.user)
        self.tables.representatives[representative.id] = copy.deepcopy(representative)

    async def find_by_id(self, representative_id: str) -> entities.Representative | None:
        representative = self.tables.representatives.get(representative_id)
        return await self._assemble(representative) if representative else None

    async def find_by_company(self, company_id: str) -> list[entities.Representative]:
        return [
            await self._assemble(r)
            for r in self.tables.representatives.values()
            if r.company_id == company_id
        ]


class MemoryCompanyRepository:
    def __init__(self, tables: _Tables, representatives: RepresentativeRepository):
        self.tables = tables
        self.representatives = representatives

    def _name_owner(self, name: str) -> str | None:
        name = entities.normalize_company_name(name)
        for company in self.tables.companies.values():
            if company.name == name:
                return company.id
        return None

    async def add(self, company: entities.Company) -> None:
        if self._name_owner(company.name) is not None:
            raise CompanyNameAlreadyUsedError(company.name)
        self.tables.companies[company.id] = entities.Company(
            id=company.id,
            name=entities.normalize_company_name(company.name),
            information=company.information,
            description=company.description,
        )
        self.tables.addresses[company.id] = copy.deepcopy(company.locations)
        for project in company.projects:
            self.tables.projects[project.id] = copy.deepcopy(project)
        for representative in company.representatives:
            await self.representatives.add(representative)

    async def _assemble(self, company: entities.Company) -> entities.Company:
        result = copy.deepcopy(company)
        result.locations = copy.deepcopy(self.tables.addresses.get(company.id, []))
        result.projects = [
            copy.deepcopy(p) for p in self.tables.projects.values()
            if p.company_id == company.id
        ]
        result.representatives = await self.representatives.find_by_company(company.id)
        return result

    async def find_by_id(self, company_id: str) -> entities.Company | None:
        company = self.tables.companies.get(company_id)
        return await self._assemble(company) if company else None

    async def find_by_name(self, name: str) -> entities.Company | None:
        owner = self._name_owner(name)
        return await self.find_by_id(owner) if owner else None

    async def find_all(self) -> list[entities.Company]:
        ordered = sorted(self.tables.companies.values(), key=lambda c: c.name)
        return [await self._assemble(c) for c in ordered]

    async def exists(self, company_id: str) -> bool:
        return company_id in self.tables.companies

    async def update(self, company: entities.Company) -> None:
        stored = self.tables.companies.get(company.id)
        if stored is None:
            raise EntityNotFoundError("Company", company.id)
        owner = self._name_owner(company.name)
        if owner is not None and owner != company.id:
            raise CompanyNameAlreadyUsedError(company.name)
        stored.name = entities.normalize_company_name(company.name)
        stored.information = company.information
        stored.description = company.description

        addresses = self.tables.addresses.setdefault(company.id, [])
        positions = {a.id: i for i, a in enumerate(addresses)}
        foreign = {
            a.id for owner, rows in self.tables.addresses.items()
            if owner != company.id for a in rows
        }
        for address in company.locations:
            if address.id in positions:
                addresses[positions[address.id]] = copy.deepcopy(address)
            elif address.id not in foreign:
                addresses.append(copy.deepcopy(address))

        for project in company.projects:
            existing = self.tables.projects.get(project.id)
            if existing is not None and existing.company_id != company.id:
                continue
            stored_project = copy.deepcopy(project)
            stored_project.company_id = company.id
            self.tables.projects[project.id] = stored_project


class MemoryProjectRepository:
    def __init__(self, tables: _Tables):
        self.tables = tables

    async def add(self, project: entities.Project) -> None:
        if project.company_id not in self.tables.companies:
            raise EntityNotFoundError("Company", project.company_id)
        self.tables.projects[project.id] = copy.deepcopy(project)

    async def find_by_id(self, project_id: str) -> entities.Project | None:
        project = self.tables.projects.get(project_id)
        return copy.deepcopy(project) if project else None

    async def find_all(self) -> list[entities.Project]:
        return [copy.deepcopy(p) for p in self.tables.projects.values()]

    async def delete(self, project_id: str) -> None:
        self.tables.projects.pop(project_id, None)


class MemoryInviteLinkRepository:
    def __init__(self, tables: _Tables):
        self.tables = tables

    async def add(self, link: entities.InviteLink) -> None:
        if link.created_by not in self.tables.representatives:
            raise EntityNotFoundError("Representative", link.created_by)
        self.tables.invite_links[link.id] = copy.deepcopy(link)

    async def find_by_id(self, invite_id: str) -> entities.InviteLink | None:
        link = self.tables.invite_links.get(invite_id)
        return copy.deepcopy(link) if link else None

    async def find_by_creator(self, representative_id: str) -> list[entities.InviteLink]:
        return [
            copy.deepcopy(link) for link in self.tables.invite_links.values()
            if link.created_by == representative_id
        ]

    async def mark_used(self, invite_id: str) -> bool:
        link = self.tables.invite_links.get(invite_id)
        if link is None or link.used:
            return False
        link.used = True
        return True


# ─── Unit of work ────────────────────────────────────────────────

class MemoryUnitOfWork:
    def __init__(self, store: MemoryStore):
        self._store = store

    def _begin(self) -> None:
        self._staged = copy.deepcopy(self._store.tables)
        self.users = MemoryUserRepository(self._staged)
        self.students = MemoryStudentRepository(self._staged, self.users)
        self.representatives = MemoryRepresentativeRepository(self._staged, self.users)
        self.companies = MemoryCompanyRepository(self._staged, self.representatives)
        self.projects = MemoryProjectRepository(self._staged)
        self.invite_links = MemoryInviteLinkRepository(self._staged)

    async def __aenter__(self) -> "MemoryUnitOfWork":
        await self._store.lock.acquire()
        self._begin()
        return self

    async def commit(self) -> None:
        self._store.tables = self._staged
        self._begin()

    async def rollback(self) -> None:
        self._begin()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._staged = None
        self._store.lock.release()


def memory_unit_of_work_factory(store: MemoryStore) -> UnitOfWorkFactory:
    return store.unit_of_work
