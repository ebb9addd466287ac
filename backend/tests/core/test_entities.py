"""Entity constructor tests: required fields, normalisation, zipcode format.

Tests cover:
    - Empty / whitespace required fields raise ValidationError naming the field
    - Email and company name are lower-cased
    - Zipcode format NNNN XX
    - Role checks on representative and student constructors
    - Message sender/receiver rule
"""

import pytest

from coupler.core.domain_types import Role, StudentStatus
from coupler.core.entities import (
    new_address, new_company, new_message, new_project, new_representative,
    new_student, new_user,
)
from coupler.core.errors import ValidationError


def _user(role=Role.STUDENT, email="Ann@Example.com"):
    return new_user(email, "hashed", "Ann", "de Vries", role)


# --- User ---------------------------------------------------------------------

def test_user_email_is_lower_cased_and_stripped():
    user = new_user("  Ann@Example.COM ", "hashed", "Ann", "de Vries", Role.STUDENT)
    assert user.email == "ann@example.com"


def test_user_gets_uuid_id():
    assert len(_user().id) == 36


@pytest.mark.parametrize("field,kwargs", [
    ("email", {"email": "  "}),
    ("first_name", {"first_name": ""}),
    ("last_name", {"last_name": "   "}),
    ("password", {"hashed_password": ""}),
])
def test_user_required_fields(field, kwargs):
    args = {
        "email": "ann@example.com", "hashed_password": "hashed",
        "first_name": "Ann", "last_name": "de Vries", "role": Role.STUDENT,
    }
    args.update(kwargs)
    with pytest.raises(ValidationError) as exc:
        new_user(**args)
    assert exc.value.field == field


def test_user_email_needs_at_sign():
    with pytest.raises(ValidationError) as exc:
        new_user("not-an-email", "hashed", "Ann", "de Vries", Role.STUDENT)
    assert exc.value.field == "email"


# --- Address ------------------------------------------------------------------

def test_address_accepts_dutch_zipcode():
    address = new_address("Main street", "1234 AB", "Utrecht", "12")
    assert address.zipcode == "1234 AB"


@pytest.mark.parametrize("zipcode", ["1234AB", "123 AB", "1234 ab", "ABCD 12", ""])
def test_address_rejects_malformed_zipcode(zipcode):
    with pytest.raises(ValidationError) as exc:
        new_address("Main street", zipcode, "Utrecht", "12")
    assert exc.value.field == "zipcode"


@pytest.mark.parametrize("zipcode", ["\u0661\u0662\u0663\u0664 AB", "1234\u00a0AB"])
def test_address_zipcode_only_accepts_ascii_digits_and_space(zipcode):
    with pytest.raises(ValidationError) as exc:
        new_address("Main street", zipcode, "Utrecht", "12")
    assert exc.value.field == "zipcode"


def test_address_requires_street():
    with pytest.raises(ValidationError) as exc:
        new_address("", "1234 AB", "Utrecht", "12")
    assert exc.value.field == "street"


def test_address_keeps_supplied_id():
    assert new_address("Main", "1234 AB", "Utrecht", "1", address_id="a-1").id == "a-1"


# --- Company / Project --------------------------------------------------------

def test_company_name_is_case_normalised():
    assert new_company("  ACME Corp ", "info", "desc").name == "acme corp"


@pytest.mark.parametrize("field", ["name", "information", "description"])
def test_company_required_fields(field):
    args = {"name": "Acme", "information": "info", "description": "desc"}
    args[field] = " "
    with pytest.raises(ValidationError) as exc:
        new_company(**args)
    assert exc.value.field == field


def test_project_drops_blank_recommendations():
    project = new_project("Build API", "500", "3 months", "c-1", ["python", " ", ""])
    assert project.recommendations == ["python"]


def test_project_requires_compensation():
    with pytest.raises(ValidationError) as exc:
        new_project("Build API", "", "3 months", "c-1")
    assert exc.value.field == "compensation"


# --- Representative / Student -------------------------------------------------

def test_representative_requires_representative_role():
    with pytest.raises(ValidationError) as exc:
        new_representative("CEO", "c-1", _user(Role.STUDENT))
    assert exc.value.field == "role"


def test_representative_requires_job_title():
    with pytest.raises(ValidationError) as exc:
        new_representative("  ", "c-1", _user(Role.REPRESENTATIVE))
    assert exc.value.field == "job_title"


def test_student_defaults_to_available():
    student = new_student("UU", ["python"], [], _user())
    assert student.status is StudentStatus.AVAILABLE
    assert student.resume == ""


def test_student_requires_student_role():
    with pytest.raises(ValidationError):
        new_student("UU", [], [], _user(Role.REPRESENTATIVE))


def test_student_requires_university():
    with pytest.raises(ValidationError) as exc:
        new_student("", [], [], _user())
    assert exc.value.field == "university"


# --- Message ------------------------------------------------------------------

def test_message_to_self_rejected():
    with pytest.raises(ValidationError) as exc:
        new_message("u-1", "u-1", "hello")
    assert exc.value.field == "receiver"


def test_message_requires_body():
    with pytest.raises(ValidationError) as exc:
        new_message("u-1", "u-2", " ")
    assert exc.value.field == "body"


def test_message_carries_optional_project():
    message = new_message("u-1", "u-2", "interested?", project_id="p-1")
    assert message.project_id == "p-1"
