"""Student Routes: listing for signed-in users, self-service edit and delete."""

from fastapi import APIRouter, Depends, Response, status

from coupler.api.dependencies import get_principal, get_services, get_student
from coupler.core import entities
from coupler.core.access import Principal, require_self
from coupler.core.domain_types import Role
from coupler.schemas.student import StudentResponse, StudentUpdate
from coupler.services.container import Services

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.get("", response_model=list[StudentResponse])
async def list_students(
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    return [StudentResponse.from_entity(s) for s in await services.students.find_all()]


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student_profile(
    student_id: str,
    services: Services = Depends(get_services),
    _: Principal = Depends(get_principal),
):
    return StudentResponse.from_entity(await services.students.find_by_id(student_id))


@router.put("/{student_id}", response_model=StudentResponse)
async def edit_student(
    student_id: str,
    body: StudentUpdate,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_student),
):
    require_self(principal, student_id)
    current = await services.students.find_by_id(student_id)
    if body.password:
        user = services.users.new_account(
            body.email, body.password, body.first_name, body.last_name, Role.STUDENT,
        )
        user.id = current.user.id
    else:
        user = entities.new_user(
            body.email, current.user.hashed_password, body.first_name, body.last_name,
            Role.STUDENT, user_id=current.user.id,
        )
    student = entities.new_student(
        university=body.university,
        skills=body.skills,
        experience=body.experience,
        user=user,
        status=body.status,
        resume=body.resume,
        student_id=student_id,
    )
    return StudentResponse.from_entity(await services.students.edit(student))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    services: Services = Depends(get_services),
    principal: Principal = Depends(get_student),
):
    require_self(principal, student_id)
    await services.students.delete(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
