"""Student Service: the student aggregate (Student + owned User)."""

import logging

from coupler.core import entities
from coupler.core.errors import EmailAlreadyUsedError, EntityNotFoundError
from coupler.core.repository_protocols import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow = uow_factory

    async def register(self, student: entities.Student) -> entities.Student:
        async with self._uow() as uow:
            if await uow.users.find_by_email(student.user.email) is not None:
                raise EmailAlreadyUsedError(student.user.email)
            await uow.students.add(student)
            await uow.commit()
        logger.info("Student registered", extra={"user_id": student.user.id})
        return student

    async def find_by_id(self, student_id: str) -> entities.Student:
        async with self._uow() as uow:
            student = await uow.students.find_by_id(student_id)
        if student is None:
            raise EntityNotFoundError("Student", student_id)
        return student

    async def find_all(self) -> list[entities.Student]:
        async with self._uow() as uow:
            return await uow.students.find_all()

    async def edit(self, student: entities.Student) -> entities.Student:
        """Rewrite the profile and its owned user; the user id and role never change."""
        async with self._uow() as uow:
            stored = await uow.students.find_by_id(student.id)
            if stored is None:
                raise EntityNotFoundError("Student", student.id)
            student.user.id = stored.user.id
            student.user.role = stored.user.role
            owner = await uow.users.find_by_email(student.user.email)
            if owner is not None and owner.id != stored.user.id:
                raise EmailAlreadyUsedError(student.user.email)
            await uow.students.update(student)
            await uow.commit()
        return student

    async def delete(self, student_id: str) -> None:
        async with self._uow() as uow:
            if await uow.students.find_by_id(student_id) is None:
                raise EntityNotFoundError("Student", student_id)
            await uow.students.delete(student_id)
            await uow.commit()
        logger.info(f"Student deleted: {student_id}")
