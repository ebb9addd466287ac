"""Signup Routes: public account creation for students, companies and invited representatives.

Invariants:
    - Payloads become entities through the validating constructors before any service call
    - Company signup creates the company and its main representative together
"""

from fastapi import APIRouter, Depends, status

from coupler.api.dependencies import get_services
from coupler.core import entities
from coupler.core.domain_types import Role
from coupler.schemas.company import CompanyResponse, CompanySignup
from coupler.schemas.representative import RepresentativeResponse, RepresentativeSignup
from coupler.schemas.student import StudentResponse, StudentSignup
from coupler.services.container import Services

router = APIRouter(prefix="/api/v1/signup", tags=["signup"])


@router.post(
    "/students", response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up_student(
    body: StudentSignup, services: Services = Depends(get_services),
):
    user = services.users.new_account(
        body.email, body.password, body.first_name, body.last_name, Role.STUDENT,
    )
    student = entities.new_student(
        university=body.university,
        skills=body.skills,
        experience=body.experience,
        user=user,
        status=body.status,
        resume=body.resume,
    )
    return StudentResponse.from_entity(await services.students.register(student))


@router.post(
    "/companies", response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up_company(
    body: CompanySignup, services: Services = Depends(get_services),
):
    company = entities.new_company(body.name, body.information, body.description)
    company.locations = [
        entities.new_address(a.street, a.zipcode, a.city, a.number)
        for a in body.locations
    ]
    rep = body.representative
    user = services.users.new_account(
        rep.email, rep.password, rep.first_name, rep.last_name, Role.REPRESENTATIVE,
    )
    company.representatives = [
        entities.new_representative(rep.job_title, company.id, user),
    ]
    return CompanyResponse.from_entity(await services.companies.register(company))


@router.post(
    "/representatives/invite/{company_id}/{invite_id}",
    response_model=RepresentativeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up_invited_representative(
    company_id: str,
    invite_id: str,
    body: RepresentativeSignup,
    services: Services = Depends(get_services),
):
    representative = await services.invite_links.redeem(
        company_id=company_id,
        invite_id=invite_id,
        job_title=body.job_title,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return RepresentativeResponse.from_entity(representative)
