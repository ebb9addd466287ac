"""SQL Store: SQLAlchemy repositories and the transactional unit of work.

Invariants:
    - One SqlUnitOfWork = one AsyncSession = one database transaction
    - Repositories flush after each dependent insert so parent rows exist before children
    - IntegrityError on uq_users_email / uq_companies_name becomes
      EmailAlreadyUsedError / CompanyNameAlreadyUsedError; anything else is DatabaseError
    - Leaving the unit without commit() rolls back every write made through it
    - Datetimes read back from the database are always timezone-aware (UTC)

Design Decisions:
    - Explicit selects per table instead of ORM relationships: aggregate reads
      never trigger implicit lazy loads on an async session
    - mark_used is a conditional UPDATE (used = false) so concurrent
      redemptions of one link cannot both succeed
"""

import logging
from datetime import datetime, timezone
from functools import partial
from types import TracebackType

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coupler.core import entities
from coupler.core.domain_types import Role, StudentStatus
from coupler.core.errors import (
    CompanyNameAlreadyUsedError, CouplerError, DatabaseError,
    EmailAlreadyUsedError, EntityNotFoundError,
)
from coupler.core.repository_protocols import (
    RepresentativeRepository, UnitOfWorkFactory, UserRepository,
)
from coupler.infrastructure.database import DatabaseSessionManager
from coupler.models import (
    Address as AddressRow,
    Company as CompanyRow,
    InviteLink as InviteLinkRow,
    Project as ProjectRow,
    Representative as RepresentativeRow,
    Student as StudentRow,
    User as UserRow,
)

logger = logging.getLogger(__name__)


def translate_integrity_error(exc: IntegrityError) -> CouplerError:
    """Map a uniqueness violation to its named conflict."""
    detail = str(exc.orig).lower()
    if "uq_users_email" in detail or "users.email" in detail:
        return EmailAlreadyUsedError()
    if "uq_companies_name" in detail or "companies.name" in detail:
        return CompanyNameAlreadyUsedError()
    logger.error(f"DB integrity error: {exc}")
    return DatabaseError("Integrity constraint violated", "flush")


async def _flush(session: AsyncSession) -> None:
    try:
        await session.flush()
    except IntegrityError as e:
        raise translate_integrity_error(e) from e


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─── Row -> entity ───────────────────────────────────────────────

def _to_user(row: UserRow) -> entities.User:
    return entities.User(
        id=row.id,
        email=row.email,
        hashed_password=row.hashed_password,
        first_name=row.first_name,
        last_name=row.last_name,
        role=Role(row.role),
    )


def _to_student(row: StudentRow, user: UserRow) -> entities.Student:
    return entities.Student(
        id=row.id,
        university=row.university,
        user=_to_user(user),
        skills=list(row.skills or []),
        experience=list(row.experience or []),
        status=StudentStatus(row.status),
        resume=row.resume,
    )


def _to_representative(row: RepresentativeRow, user: UserRow) -> entities.Representative:
    return entities.Representative(
        id=row.id, job_title=row.job_title, user=_to_user(user), company_id=row.company_id,
    )


def _to_address(row: AddressRow) -> entities.Address:
    return entities.Address(
        id=row.id, street=row.street, zipcode=row.zipcode, city=row.city, number=row.number,
    )


def _to_project(row: ProjectRow) -> entities.Project:
    return entities.Project(
        id=row.id,
        description=row.description,
        compensation=row.compensation,
        duration=row.duration,
        company_id=row.company_id,
        recommendations=list(row.recommendations or []),
    )


def _to_invite_link(row: InviteLinkRow) -> entities.InviteLink:
    return entities.InviteLink(
        id=row.id,
        url=row.url,
        created_at=_aware(row.created_at),
        expiry_date=_aware(row.expiry_date),
        created_by=row.created_by,
        used=row.used,
    )


# ─── Repositories ────────────────────────────────────────────────

class SqlUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user: entities.User) -> None:
        self.session.add(UserRow(
            id=user.id,
            email=entities.normalize_email(user.email),
            hashed_password=user.hashed_password,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
        ))
        await _flush(self.session)

    async def find_by_id(self, user_id: str) -> entities.User | None:
        row = await self.session.get(UserRow, user_id)
        return _to_user(row) if row else None

    async def find_by_email(self, email: str) -> entities.User | None:
        result = await self.session.execute(
            select(UserRow).where(UserRow.email == entities.normalize_email(email)),
        )
        row = result.scalar_one_or_none()
        return _to_user(row) if row else None

    async def update(self, user: entities.User) -> None:
        row = await self.session.get(UserRow, user.id)
        if row is None:
            raise EntityNotFoundError("User", user.id)
        row.email = entities.normalize_email(user.email)
        row.hashed_password = user.hashed_password
        row.first_name = user.first_name
        row.last_name = user.last_name
        await _flush(self.session)

    async def delete(self, user_id: str) -> None:
        await self.session.execute(delete(UserRow).where(UserRow.id == user_id))

    async def find_role_id(self, user: entities.User) -> str | None:
        match user.role:
            case Role.STUDENT:
                query = select(StudentRow.id).where(StudentRow.user_id == user.id)
            case Role.REPRESENTATIVE:
                query = select(RepresentativeRow.id).where(
                    RepresentativeRow.user_id == user.id,
                )
        return (await self.session.execute(query)).scalar_one_or_none()


class SqlStudentRepository:
    def __init__(self, session: AsyncSession, users: UserRepository):
        self.session = session
        self.users = users

    async def add(self, student: entities.Student) -> None:
        await self.users.add(student.user)
        self.session.add(StudentRow(
            id=student.id,
            user_id=student.user.id,
            university=student.university,
            skills=list(student.skills),
            experience=list(student.experience),
            status=student.status.value,
            resume=student.resume,
        ))
        await _flush(self.session)

    def _select(self):
        return select(StudentRow, UserRow).join(UserRow, StudentRow.user_id == UserRow.id)

    async def find_by_id(self, student_id: str) -> entities.Student | None:
        result = await self.session.execute(
            self._select().where(StudentRow.id == student_id),
        )
        pair = result.one_or_none()
        return _to_student(*pair) if pair else None

    async def find_all(self) -> list[entities.Student]:
        result = await self.session.execute(self._select())
        return [_to_student(s, u) for s, u in result.all()]

    async def update(self, student: entities.Student) -> None:
        row = await self.session.get(StudentRow, student.id)
        if row is None:
            raise EntityNotFoundError("Student", student.id)
        row.university = student.university
        row.skills = list(student.skills)
        row.experience = list(student.experience)
        row.status = student.status.value
        row.resume = student.resume
        await self.users.update(student.user)
        await _flush(self.session)

    async def delete(self, student_id: str) -> None:
        row = await self.session.get(StudentRow, student_id)
        if row is None:
            return
        user_id = row.user_id
        await self.session.delete(row)
        await _flush(self.session)
        await self.users.delete(user_id)


class SqlRepresentativeRepository:
    def __init__(self, session: AsyncSession, users: UserRepository):
        self.session = session
        self.users = users

    async def add(self, representative: entities.Representative) -> None:
        await self.users.add(representative.user)
        self.session.add(RepresentativeRow(
            id=representative.id,
            user_id=representative.user.id,
            company_id=representative.company_id,
            job_title=representative.job_title,
        ))
        await _flush(self.session)

    def _select(self):
        return select(RepresentativeRow, UserRow).join(
            UserRow, RepresentativeRow.user_id == UserRow.id,
        )

    async def find_by_id(self, representative_id: str) -> entities.Representative | None:
        result = await self.session.execute(
            self._select().where(RepresentativeRow.id == representative_id),
        )
        pair = result.one_or_none()
        return _to_representative(*pair) if pair else None

    async def find_by_company(self, company_id: str) -> list[entities.Representative]:
        result = await self.session.execute(
            self._select().where(RepresentativeRow.company_id == company_id),
        )
        return [_to_representative(r, u) for r, u in result.all()]


class SqlCompanyRepository:
    def __init__(self, session: AsyncSession, representatives: RepresentativeRepository):
        self.session = session
        self.representatives = representatives

    async def add(self, company: entities.Company) -> None:
        self.session.add(CompanyRow(
            id=company.id,
            name=entities.normalize_company_name(company.name),
            information=company.information,
            description=company.description,
        ))
        await _flush(self.session)
        for position, address in enumerate(company.locations):
            self.session.add(self._address_row(company.id, address, position))
        for project in company.projects:
            self.session.add(self._project_row(project))
        await _flush(self.session)
        for representative in company.representatives:
            await self.representatives.add(representative)

    async def _assemble(self, row: CompanyRow) -> entities.Company:
        addresses = await self.session.execute(
            select(AddressRow)
            .where(AddressRow.company_id == row.id)
            .order_by(AddressRow.position),
        )
        projects = await self.session.execute(
            select(ProjectRow).where(ProjectRow.company_id == row.id),
        )
        return entities.Company(
            id=row.id,
            name=row.name,
            information=row.information,
            description=row.description,
            locations=[_to_address(a) for a in addresses.scalars().all()],
            representatives=await self.representatives.find_by_company(row.id),
            projects=[_to_project(p) for p in projects.scalars().all()],
        )

    async def find_by_id(self, company_id: str) -> entities.Company | None:
        row = await self.session.get(CompanyRow, company_id)
        return await self._assemble(row) if row else None

    async def find_by_name(self, name: str) -> entities.Company | None:
        result = await self.session.execute(
            select(CompanyRow).where(
                CompanyRow.name == entities.normalize_company_name(name),
            ),
        )
        row = result.scalar_one_or_none()
        return await self._assemble(row) if row else None

    async def find_all(self) -> list[entities.Company]:
        result = await self.session.execute(select(CompanyRow).order_by(CompanyRow.name))
        return [await self._assemble(row) for row in result.scalars().all()]

    async def exists(self, company_id: str) -> bool:
        result = await self.session.execute(
            select(CompanyRow.id).where(CompanyRow.id == company_id),
        )
        return result.scalar_one_or_none() is not None

    async def update(self, company: entities.Company) -> None:
        """Rewrite scalars, then upsert supplied addresses/projects by id.

        Rows missing from `company` are left alone (additive-only update);
        ids owned by another company are ignored.
        """
        row = await self.session.get(CompanyRow, company.id)
        if row is None:
            raise EntityNotFoundError("Company", company.id)
        row.name = entities.normalize_company_name(company.name)
        row.information = company.information
        row.description = company.description

        next_position = (await self.session.execute(
            select(func.coalesce(func.max(AddressRow.position), -1))
            .where(AddressRow.company_id == company.id),
        )).scalar_one() + 1
        for address in company.locations:
            existing = await self.session.get(AddressRow, address.id)
            if existing is None:
                self.session.add(self._address_row(company.id, address, next_position))
                next_position += 1
            elif existing.company_id == company.id:
                existing.street = address.street
                existing.zipcode = address.zipcode
                existing.city = address.city
                existing.number = address.number

        for project in company.projects:
            existing = await self.session.get(ProjectRow, project.id)
            if existing is None:
                project.company_id = company.id
                self.session.add(self._project_row(project))
            elif existing.company_id == company.id:
                existing.description = project.description
                existing.compensation = project.compensation
                existing.duration = project.duration
                existing.recommendations = list(project.recommendations)
        await _flush(self.session)

    @staticmethod
    def _address_row(company_id: str, address: entities.Address, position: int) -> AddressRow:
        return AddressRow(
            id=address.id,
            company_id=company_id,
            street=address.street,
            zipcode=address.zipcode,
            city=address.city,
            number=address.number,
            position=position,
        )

    @staticmethod
    def _project_row(project: entities.Project) -> ProjectRow:
        return ProjectRow(
            id=project.id,
            company_id=project.company_id,
            description=project.description,
            compensation=project.compensation,
            duration=project.duration,
            recommendations=list(project.recommendations),
        )


class SqlProjectRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, project: entities.Project) -> None:
        self.session.add(SqlCompanyRepository._project_row(project))
        await _flush(self.session)

    async def find_by_id(self, project_id: str) -> entities.Project | None:
        row = await self.session.get(ProjectRow, project_id)
        return _to_project(row) if row else None

    async def find_all(self) -> list[entities.Project]:
        result = await self.session.execute(select(ProjectRow))
        return [_to_project(row) for row in result.scalars().all()]

    async def delete(self, project_id: str) -> None:
        await self.session.execute(delete(ProjectRow).where(ProjectRow.id == project_id))


class SqlInviteLinkRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, link: entities.InviteLink) -> None:
        self.session.add(InviteLinkRow(
            id=link.id,
            url=link.url,
            created_at=link.created_at,
            expiry_date=link.expiry_date,
            used=link.used,
            created_by=link.created_by,
        ))
        await _flush(self.session)

    async def find_by_id(self, invite_id: str) -> entities.InviteLink | None:
        row = await self.session.get(InviteLinkRow, invite_id)
        return _to_invite_link(row) if row else None

    async def find_by_creator(self, representative_id: str) -> list[entities.InviteLink]:
        result = await self.session.execute(
            select(InviteLinkRow).where(InviteLinkRow.created_by == representative_id),
        )
        return [_to_invite_link(row) for row in result.scalars().all()]

    async def mark_used(self, invite_id: str) -> bool:
        result = await self.session.execute(
            update(InviteLinkRow)
            .where(InviteLinkRow.id == invite_id, InviteLinkRow.used.is_(False))
            .values(used=True)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1


# ─── Unit of work ────────────────────────────────────────────────

class SqlUnitOfWork:
    """All repositories over one AsyncSession; commit() or everything is rolled back."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def __aenter__(self) -> "SqlUnitOfWork":
        self.session = self._manager.new_session()
        self.users = SqlUserRepository(self.session)
        self.students = SqlStudentRepository(self.session, self.users)
        self.representatives = SqlRepresentativeRepository(self.session, self.users)
        self.companies = SqlCompanyRepository(self.session, self.representatives)
        self.projects = SqlProjectRepository(self.session)
        self.invite_links = SqlInviteLinkRepository(self.session)
        return self

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise translate_integrity_error(e) from e

    async def rollback(self) -> None:
        await self.session.rollback()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                await self.session.rollback()
        finally:
            # close() discards any transaction that was never committed
            await self.session.close()
        if isinstance(exc, SQLAlchemyError):
            logger.error(f"SQLAlchemy error in unit of work: {exc}")
            raise DatabaseError("Database operation failed", "execute") from exc


def sql_unit_of_work_factory(manager: DatabaseSessionManager) -> UnitOfWorkFactory:
    return partial(SqlUnitOfWork, manager)
