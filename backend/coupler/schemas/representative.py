"""Representative Schemas: invite signup and profile response."""

from pydantic import BaseModel, Field

from coupler.core.entities import Representative
from coupler.schemas.user import AccountFields, UserResponse


class RepresentativeSignup(AccountFields):
    job_title: str = Field(max_length=200)


class RepresentativeResponse(BaseModel):
    id: str
    job_title: str
    company_id: str
    user: UserResponse

    @classmethod
    def from_entity(cls, representative: Representative) -> "RepresentativeResponse":
        return cls(
            id=representative.id,
            job_title=representative.job_title,
            company_id=representative.company_id,
            user=UserResponse.from_entity(representative.user),
        )
