"""Company Routes: listings, public name lookup, edit by the company's representatives.

Invariants:
    - GET /{id}/name is public (the invite signup page shows the company name)
    - PUT is additive: addresses and projects left out of the body are kept
"""

from fastapi import APIRouter, Depends

from coupler.api.dependencies import get_principal, get_representative, get_services
from coupler.core import entities
from coupler.core.access import Principal
from coupler.schemas.company import CompanyNameResponse, CompanyResponse, CompanyUpdate
from coupler.services.container import Services

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    return [CompanyResponse.from_entity(c) for c in await services.companies.find_all()]


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    return CompanyResponse.from_entity(await services.companies.find_by_id(company_id))


@router.get("/{company_id}/name", response_model=CompanyNameResponse)
async def get_company_name(
    company_id: str, services: Services = Depends(get_services),
):
    company = await services.companies.find_by_id(company_id)
    return CompanyNameResponse(id=company.id, name=company.name)


@router.put("/{company_id}", response_model=CompanyResponse)
async def edit_company(
    company_id: str,
    body: CompanyUpdate,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_representative),
):
    company = entities.new_company(
        body.name, body.information, body.description, company_id=company_id,
    )
    company.locations = [
        entities.new_address(a.street, a.zipcode, a.city, a.number, address_id=a.id)
        for a in body.locations
    ]
    company.projects = [
        entities.new_project(
            p.description, p.compensation, p.duration, company_id,
            recommendations=p.recommendations, project_id=p.id,
        )
        for p in body.projects
    ]
    updated = await services.companies.edit(company, principal.profile_id)
    return CompanyResponse.from_entity(updated)
