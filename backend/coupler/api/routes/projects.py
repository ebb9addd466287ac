"""Project Routes: listing for signed-in users, deletion by the owning company."""

from fastapi import APIRouter, Depends, Response, status

from coupler.api.dependencies import get_principal, get_representative, get_services
from coupler.core.access import Principal
from coupler.schemas.project import ProjectResponse
from coupler.services.container import Services

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    return [ProjectResponse.from_entity(p) for p in await services.projects.find_all()]


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_representative),
):
    await services.projects.delete(project_id, principal.profile_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
