"""Domain Entities: dataclasses plus validating constructors.

Invariants:
    - new_* constructors are the only way raw input becomes an entity
    - Required text fields are non-empty after strip(); failures raise ValidationError
    - Email and company name are lower-cased (they are uniqueness keys)
    - Zipcodes match ZIPCODE_PATTERN ("1234 AB")
    - No IO: hashing happens before new_user is called

Design Decisions:
    - Plain dataclasses, not ORM models: repositories map between the two
    - Company carries its addresses, representatives and projects as lists
      so one value describes the whole aggregate
"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from coupler.core.domain_types import Role, StudentStatus, ZIPCODE_PATTERN
from coupler.core.errors import ValidationError

_ZIPCODE = re.compile(ZIPCODE_PATTERN, re.ASCII)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class User:
    id: str
    email: str
    hashed_password: str
    first_name: str
    last_name: str
    role: Role


@dataclass
class Address:
    id: str
    street: str
    zipcode: str
    city: str
    number: str


@dataclass
class Project:
    id: str
    description: str
    compensation: str
    duration: str
    company_id: str
    recommendations: list[str] = field(default_factory=list)


@dataclass
class Representative:
    id: str
    job_title: str
    user: User
    company_id: str


@dataclass
class Company:
    id: str
    name: str
    information: str
    description: str
    locations: list[Address] = field(default_factory=list)
    representatives: list[Representative] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)

    def employs(self, representative_id: str) -> bool:
        return any(r.id == representative_id for r in self.representatives)


@dataclass
class Student:
    id: str
    university: str
    user: User
    skills: list[str] = field(default_factory=list)
    experience: list[str] = field(default_factory=list)
    status: StudentStatus = StudentStatus.AVAILABLE
    resume: str = ""


@dataclass
class InviteLink:
    id: str
    url: str
    created_at: datetime
    expiry_date: datetime
    created_by: str
    used: bool = False


@dataclass(frozen=True)
class Message:
    sender: str
    receiver: str
    body: str
    project_id: str | None = None


# ─── Constructors ────────────────────────────────────────────────

def _required(field_name: str, value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(field_name, "can't be empty")
    return value


def _clean_list(values: Iterable[str] | None) -> list[str]:
    return [v.strip() for v in (values or []) if v and v.strip()]


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def normalize_company_name(name: str | None) -> str:
    return (name or "").strip().lower()


def new_user(
    email: str,
    hashed_password: str,
    first_name: str,
    last_name: str,
    role: Role,
    user_id: str | None = None,
) -> User:
    email = normalize_email(_required("email", email))
    if "@" not in email:
        raise ValidationError("email", "is not a valid email address")
    return User(
        id=user_id or new_id(),
        email=email,
        hashed_password=_required("password", hashed_password),
        first_name=_required("first_name", first_name),
        last_name=_required("last_name", last_name),
        role=Role(role),
    )


def new_address(
    street: str, zipcode: str, city: str, number: str,
    address_id: str | None = None,
) -> Address:
    street = _required("street", street)
    zipcode = (zipcode or "").strip()
    if not _ZIPCODE.fullmatch(zipcode):
        raise ValidationError(
            "zipcode",
            "should be of format 0000 XX, where 0 is a digit and X an uppercase letter",
        )
    return Address(
        id=address_id or new_id(),
        street=street,
        zipcode=zipcode,
        city=_required("city", city),
        number=_required("number", number),
    )


def new_company(
    name: str, information: str, description: str,
    company_id: str | None = None,
) -> Company:
    return Company(
        id=company_id or new_id(),
        name=normalize_company_name(_required("name", name)),
        information=_required("information", information),
        description=_required("description", description),
    )


def new_project(
    description: str,
    compensation: str,
    duration: str,
    company_id: str,
    recommendations: Iterable[str] | None = None,
    project_id: str | None = None,
) -> Project:
    return Project(
        id=project_id or new_id(),
        description=_required("description", description),
        compensation=_required("compensation", compensation),
        duration=_required("duration", duration),
        company_id=company_id,
        recommendations=_clean_list(recommendations),
    )


def new_representative(
    job_title: str, company_id: str, user: User,
    representative_id: str | None = None,
) -> Representative:
    if user.role is not Role.REPRESENTATIVE:
        raise ValidationError("role", "representative accounts need the representative role")
    return Representative(
        id=representative_id or new_id(),
        job_title=_required("job_title", job_title),
        user=user,
        company_id=_required("company_id", company_id),
    )


def new_student(
    university: str,
    skills: Iterable[str] | None,
    experience: Iterable[str] | None,
    user: User,
    status: StudentStatus = StudentStatus.AVAILABLE,
    resume: str = "",
    student_id: str | None = None,
) -> Student:
    if user.role is not Role.STUDENT:
        raise ValidationError("role", "student accounts need the student role")
    return Student(
        id=student_id or new_id(),
        university=_required("university", university),
        user=user,
        skills=_clean_list(skills),
        experience=_clean_list(experience),
        status=StudentStatus(status),
        resume=(resume or "").strip(),
    )


def new_message(
    sender: str, receiver: str, body: str, project_id: str | None = None,
) -> Message:
    sender = _required("sender", sender)
    receiver = _required("receiver", receiver)
    if sender == receiver:
        raise ValidationError("receiver", "can't send a message to yourself")
    return Message(
        sender=sender,
        receiver=receiver,
        body=_required("body", body),
        project_id=project_id,
    )
