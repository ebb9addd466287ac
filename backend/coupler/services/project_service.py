"""Project Service: project listings and removal by the owning company."""

import logging

from coupler.core import entities
from coupler.core.errors import AuthorizationError, EntityNotFoundError
from coupler.core.repository_protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow = uow_factory

    async def find_all(self) -> list[entities.Project]:
        async with self._uow() as uow:
            return await uow.projects.find_all()

    async def find_by_id(self, project_id: str) -> entities.Project:
        async with self._uow() as uow:
            project = await uow.projects.find_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("Project", project_id)
        return project

    async def delete(self, project_id: str, representative_id: str) -> None:
        async with self._uow() as uow:
            project = await uow.projects.find_by_id(project_id)
            if project is None:
                raise EntityNotFoundError("Project", project_id)
            representative = await uow.representatives.find_by_id(representative_id)
            if representative is None or representative.company_id != project.company_id:
                raise AuthorizationError("only the owning company may delete this project")
            await uow.projects.delete(project_id)
            await uow.commit()
        logger.info(
            f"Project deleted: {project_id}",
            extra={"company_id": project.company_id, "representative_id": representative_id},
        )
