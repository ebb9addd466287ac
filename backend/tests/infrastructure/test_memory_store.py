"""Memory store specifics: returned entities are copies, units are serialised."""

import asyncio

from coupler.infrastructure.memory_store import MemoryStore


async def test_mutating_a_loaded_entity_does_not_touch_the_store(make_student):
    store = MemoryStore()
    student = make_student()
    async with store.unit_of_work() as uow:
        await uow.students.add(student)
        await uow.commit()

    async with store.unit_of_work() as uow:
        loaded = await uow.students.find_by_id(student.id)
        loaded.university = "Changed"
        loaded.user.email = "changed@uni.nl"

    async with store.unit_of_work() as uow:
        again = await uow.students.find_by_id(student.id)
    assert again.university == "Utrecht University"
    assert again.user.email == "student@uni.nl"


async def test_units_of_work_are_serialised():
    store = MemoryStore()
    order = []

    async def unit(name):
        async with store.unit_of_work():
            order.append(f"{name}-start")
            await asyncio.sleep(0.01)
            order.append(f"{name}-end")

    await asyncio.gather(unit("a"), unit("b"))
    assert order in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )


async def test_rollback_discards_staged_writes(make_student):
    store = MemoryStore()
    student = make_student()
    async with store.unit_of_work() as uow:
        await uow.students.add(student)
        await uow.rollback()
        assert await uow.students.find_by_id(student.id) is None
        await uow.commit()
    assert store.tables.students == {}
