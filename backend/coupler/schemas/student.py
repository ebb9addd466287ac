"""Student Schemas: signup, profile update and response bodies.

Invariants:
    - Field content rules (required text, email shape) live in the entity
      constructors; these models only fix the JSON shape
"""

from pydantic import BaseModel, Field

from coupler.core.domain_types import StudentStatus
from coupler.core.entities import Student
from coupler.schemas.user import AccountFields, UserResponse


class StudentSignup(AccountFields):
    university: str = Field(max_length=200)
    skills: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list)
    status: StudentStatus = StudentStatus.AVAILABLE
    resume: str = ""


class StudentUpdate(BaseModel):
    """Full profile rewrite; password is only changed when supplied."""
    email: str = Field(max_length=320)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    university: str = Field(max_length=200)
    skills: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list)
    status: StudentStatus = StudentStatus.AVAILABLE
    resume: str = ""
    password: str | None = None


class StudentResponse(BaseModel):
    id: str
    university: str
    skills: list[str]
    experience: list[str]
    status: StudentStatus
    resume: str
    user: UserResponse

    @classmethod
    def from_entity(cls, student: Student) -> "StudentResponse":
        return cls(
            id=student.id,
            university=student.university,
            skills=student.skills,
            experience=student.experience,
            status=student.status,
            resume=student.resume,
            user=UserResponse.from_entity(student.user),
        )
