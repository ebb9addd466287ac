"""Company Schemas: signup with main representative, additive update, responses.

Invariants:
    - CompanySignup carries exactly one representative (the main one)
    - CompanyUpdate entries without an id are new; entries with an id rewrite that row
"""

from pydantic import BaseModel, Field

from coupler.core.entities import Address, Company
from coupler.schemas.project import ProjectPayload, ProjectResponse
from coupler.schemas.representative import RepresentativeResponse, RepresentativeSignup


class AddressPayload(BaseModel):
    id: str | None = Field(None, max_length=36)
    street: str = Field(max_length=200)
    zipcode: str = Field(max_length=7)
    city: str = Field(max_length=100)
    number: str = Field(max_length=20)


class AddressResponse(BaseModel):
    id: str
    street: str
    zipcode: str
    city: str
    number: str

    @classmethod
    def from_entity(cls, address: Address) -> "AddressResponse":
        return cls(
            id=address.id,
            street=address.street,
            zipcode=address.zipcode,
            city=address.city,
            number=address.number,
        )


class CompanySignup(BaseModel):
    name: str = Field(max_length=200)
    information: str
    description: str
    locations: list[AddressPayload] = Field(default_factory=list)
    representative: RepresentativeSignup


class CompanyUpdate(BaseModel):
    name: str = Field(max_length=200)
    information: str
    description: str
    locations: list[AddressPayload] = Field(default_factory=list)
    projects: list[ProjectPayload] = Field(default_factory=list)


class CompanyResponse(BaseModel):
    id: str
    name: str
    information: str
    description: str
    locations: list[AddressResponse]
    representatives: list[RepresentativeResponse]
    projects: list[ProjectResponse]

    @classmethod
    def from_entity(cls, company: Company) -> "CompanyResponse":
        return cls(
            id=company.id,
            name=company.name,
            information=company.information,
            description=company.description,
            locations=[AddressResponse.from_entity(a) for a in company.locations],
            representatives=[
                RepresentativeResponse.from_entity(r) for r in company.representatives
            ],
            projects=[ProjectResponse.from_entity(p) for p in company.projects],
        )


class CompanyNameResponse(BaseModel):
    id: str
    name: str
