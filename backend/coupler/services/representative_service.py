"""Representative Service: company representatives and the projects they publish.

Invariants:
    - A representative always belongs to an existing company
    - Company existence is asked through CompanyLookup; this service never depends on CompanyService
"""

import logging
from typing import Iterable

from coupler.core import entities
from coupler.core.errors import EmailAlreadyUsedError, EntityNotFoundError
from coupler.core.repository_protocols import CompanyLookup, UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RepresentativeService:
    def __init__(self, uow_factory: UnitOfWorkFactory, companies: CompanyLookup):
        self._uow = uow_factory
        self._companies = companies

    async def register(self, representative: entities.Representative) -> entities.Representative:
        if not await self._companies.exists(representative.company_id):
            raise EntityNotFoundError("Company", representative.company_id)
        async with self._uow() as uow:
            if await uow.users.find_by_email(representative.user.email) is not None:
                raise EmailAlreadyUsedError(representative.user.email)
            await uow.representatives.add(representative)
            await uow.commit()
        logger.info(
            "Representative registered",
            extra={"representative_id": representative.id, "company_id": representative.company_id},
        )
        return representative

    async def find_by_id(self, representative_id: str) -> entities.Representative:
        async with self._uow() as uow:
            representative = await uow.representatives.find_by_id(representative_id)
        if representative is None:
            raise EntityNotFoundError("Representative", representative_id)
        return representative

    async def create_project(
        self,
        representative_id: str,
        description: str,
        compensation: str,
        duration: str,
        recommendations: Iterable[str] | None = None,
    ) -> entities.Project:
        """Publish a project on behalf of the representative's company."""
        async with self._uow() as uow:
            representative = await uow.representatives.find_by_id(representative_id)
            if representative is None:
                raise EntityNotFoundError("Representative", representative_id)
            project = entities.new_project(
                description=description,
                compensation=compensation,
                duration=duration,
                company_id=representative.company_id,
                recommendations=recommendations,
            )
            await uow.projects.add(project)
            await uow.commit()
        logger.info(
            "Project created",
            extra={"company_id": project.company_id, "representative_id": representative_id},
        )
        return project
