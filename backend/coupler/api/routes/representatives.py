"""Representative Routes: profile lookup, invite links and project publishing.

Invariants:
    - Invite and project operations act as the signed-in representative (profile_id)
    - Static paths are declared before /{representative_id}
"""

from fastapi import APIRouter, Depends, status

from coupler.api.dependencies import get_principal, get_representative, get_services
from coupler.core.access import Principal
from coupler.schemas.invite_link import InviteLinkCreate, InviteLinkResponse
from coupler.schemas.project import ProjectPayload, ProjectResponse
from coupler.schemas.representative import RepresentativeResponse
from coupler.services.container import Services

router = APIRouter(prefix="/api/v1/representatives", tags=["representatives"])


@router.post(
    "/invitelinks", response_model=InviteLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite_link(
    body: InviteLinkCreate | None = None,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_representative),
):
    template = body.url_template if body else None
    link = await services.invite_links.create_representative_invite(
        principal.profile_id, url_template=template,
    )
    return InviteLinkResponse.from_entity(link, services.invite_links.now())


@router.get("/invitations", response_model=list[InviteLinkResponse])
async def list_invite_links(
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_representative),
):
    links = await services.invite_links.find_by_creator(principal.profile_id)
    now = services.invite_links.now()
    return [InviteLinkResponse.from_entity(link, now) for link in links]


@router.post(
    "/projects", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectPayload,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_representative),
):
    project = await services.representatives.create_project(
        principal.profile_id,
        body.description,
        body.compensation,
        body.duration,
        body.recommendations,
    )
    return ProjectResponse.from_entity(project)


@router.get("/{representative_id}", response_model=RepresentativeResponse)
async def get_representative_profile(
    representative_id: str,
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    representative = await services.representatives.find_by_id(representative_id)
    return RepresentativeResponse.from_entity(representative)
