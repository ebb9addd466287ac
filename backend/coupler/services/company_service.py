"""Company Service: registration and maintenance of the company aggregate.

Invariants:
    - A company is registered with exactly one (main) representative, in one transaction
    - Company names are unique after lower-casing; representative emails are unique
    - Only a representative of the company may edit it
    - edit() is additive: addresses and projects missing from the payload are kept
"""

import logging

from coupler.core import entities
from coupler.core.errors import (
    AuthorizationError, CompanyNameAlreadyUsedError, EmailAlreadyUsedError,
    EntityNotFoundError, ValidationError,
)
from coupler.core.repository_protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class CompanyService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow = uow_factory

    async def register(self, company: entities.Company) -> entities.Company:
        if len(company.representatives) != 1:
            raise ValidationError(
                "representatives", "a company is registered with exactly one main representative",
            )
        main = company.representatives[0]
        main.company_id = company.id
        for project in company.projects:
            project.company_id = company.id

        async with self._uow() as uow:
            if await uow.companies.find_by_name(company.name) is not None:
                raise CompanyNameAlreadyUsedError(company.name)
            if await uow.users.find_by_email(main.user.email) is not None:
                raise EmailAlreadyUsedError(main.user.email)
            await uow.companies.add(company)
            await uow.commit()

        logger.info(
            f"Company registered: {company.name}",
            extra={"company_id": company.id, "representative_id": main.id},
        )
        return company

    async def find_by_id(self, company_id: str) -> entities.Company:
        async with self._uow() as uow:
            company = await uow.companies.find_by_id(company_id)
        if company is None:
            raise EntityNotFoundError("Company", company_id)
        return company

    async def find_all(self) -> list[entities.Company]:
        async with self._uow() as uow:
            return await uow.companies.find_all()

    async def exists(self, company_id: str) -> bool:
        async with self._uow() as uow:
            return await uow.companies.exists(company_id)

    async def name_already_used(self, name: str) -> bool:
        async with self._uow() as uow:
            return await uow.companies.find_by_name(name) is not None

    async def edit(
        self, company: entities.Company, editor_representative_id: str,
    ) -> entities.Company:
        async with self._uow() as uow:
            stored = await uow.companies.find_by_id(company.id)
            if stored is None:
                raise EntityNotFoundError("Company", company.id)
            if not stored.employs(editor_representative_id):
                logger.warning(
                    "Company edit rejected: editor is not a representative",
                    extra={"company_id": company.id, "representative_id": editor_representative_id},
                )
                raise AuthorizationError("only representatives of this company may edit it")
            owner = await uow.companies.find_by_name(company.name)
            if owner is not None and owner.id != company.id:
                raise CompanyNameAlreadyUsedError(company.name)
            await uow.companies.update(company)
            updated = await uow.companies.find_by_id(company.id)
            await uow.commit()

        logger.info("Company updated", extra={"company_id": company.id})
        return updated

    async def add_project(self, project: entities.Project) -> entities.Project:
        async with self._uow() as uow:
            if not await uow.companies.exists(project.company_id):
                raise EntityNotFoundError("Company", project.company_id)
            await uow.projects.add(project)
            await uow.commit()
        return project
