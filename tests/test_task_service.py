from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy import delete, event, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskflow.errors import InvalidArgumentError, NotFoundError, UnauthorizedError
from taskflow.models import Project, Task
from taskflow.services import ProjectService, TaskService

pytestmark = pytest.mark.asyncio


class RecordingGuard:
    """Ownership guard double that records calls and can be told to refuse."""

    def __init__(self, *, allow: bool = True) -> None:
        self.allow = allow
        self.calls: list[tuple[int, int]] = []

    async def validate_ownership(self, project_id: int, current_user_id: int) -> None:
        self.calls.append((project_id, current_user_id))
        if not self.allow:
            raise UnauthorizedError()


class DeletingGuard:
    """Approves ownership, then deletes the project as a concurrent request would."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def validate_ownership(self, project_id: int, current_user_id: int) -> None:
        await self.session.execute(
            delete(Project)
            .where(Project.id == project_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()


async def _project_for(session: AsyncSession, user_factory, title: str = "Project"):
    owner = await user_factory()
    project = await ProjectService(session).create_project(title=title, current_user_id=owner.id)
    return owner, project


LONG_AGO = datetime(2000, 1, 1)


async def _backdate_task(session: AsyncSession, task_id: int) -> None:
    await session.execute(update(Task).where(Task.id == task_id).values(updated_at=LONG_AGO))
    await session.commit()


async def _stored_task(session: AsyncSession, task_id: int) -> Task:
    result = await session.execute(
        select(Task).where(Task.id == task_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def test_create_task_consults_injected_guard(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    guard = RecordingGuard()
    service = TaskService(session, project_service=guard)

    task = await service.create_task(
        project.id,
        title="Write copy",
        description="Landing page",
        due_date=date(2020, 1, 31),
        current_user_id=owner.id,
    )

    assert guard.calls == [(project.id, owner.id)]
    assert task.project_id == project.id
    assert task.is_completed is False
    assert task.due_date == date(2020, 1, 31)
    assert task.description == "Landing page"


async def test_create_task_rejected_by_guard_persists_nothing(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session, project_service=RecordingGuard(allow=False))

    with pytest.raises(UnauthorizedError):
        await service.create_task(project.id, title="Nope", current_user_id=owner.id)

    assert await service.repository.count_for_project(project.id) == 0


async def test_create_task_on_foreign_project_is_unauthorized(session: AsyncSession, user_factory) -> None:
    _, project = await _project_for(session, user_factory)
    intruder = await user_factory()
    service = TaskService(session)

    with pytest.raises(UnauthorizedError):
        await service.create_task(project.id, title="Sneaky", current_user_id=intruder.id)
    with pytest.raises(UnauthorizedError):
        await service.list_tasks(project.id, intruder.id)


async def test_create_task_when_project_vanished_after_check(session: AsyncSession, user_factory) -> None:
    owner = await user_factory()
    service = TaskService(session, project_service=RecordingGuard())

    with pytest.raises(NotFoundError) as excinfo:
        await service.create_task(404, title="Late", current_user_id=owner.id)

    assert excinfo.value.message == "Project not found."
    assert await service.repository.count() == 0


async def test_list_tasks_returns_project_tasks(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    _, other_project = await _project_for(session, user_factory, title="Other")
    service = TaskService(session)
    created = [
        await service.create_task(project.id, title=title, current_user_id=owner.id)
        for title in ("One", "Two")
    ]
    await service.repository.save(Task(title="Elsewhere", project_id=other_project.id))
    await session.commit()

    tasks = await service.list_tasks(project.id, owner.id)

    assert sorted(task.id for task in tasks) == sorted(task.id for task in created)


async def test_toggle_twice_restores_original_state(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Flip", current_user_id=owner.id)

    first = await service.toggle_task_completion(task.id, owner.id)
    second = await service.toggle_task_completion(task.id, owner.id)

    assert first.is_completed is True
    assert second.is_completed is False


async def test_foreign_task_lookups_report_not_found(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    intruder = await user_factory()
    service = TaskService(session)
    task = await service.create_task(project.id, title="Mine", current_user_id=owner.id)

    with pytest.raises(NotFoundError) as toggle_error:
        await service.toggle_task_completion(task.id, intruder.id)
    with pytest.raises(NotFoundError) as update_error:
        await service.update_task(task.id, intruder.id, title="Stolen")
    await service.delete_task(task.id, intruder.id)

    assert toggle_error.value.message == "Task not found."
    assert update_error.value.message == "Task not found."
    stored = await _stored_task(session, task.id)
    assert stored.title == "Mine"
    assert stored.is_completed is False


async def test_delete_task_is_idempotent(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Bye", current_user_id=owner.id)

    await service.delete_task(task.id, owner.id)
    await service.delete_task(task.id, owner.id)

    assert await service.list_tasks(project.id, owner.id) == []


async def test_update_with_blank_title_changes_nothing(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(
        project.id,
        title="Original",
        description="Keep me",
        current_user_id=owner.id,
    )

    commits: list[object] = []

    def _record_commit(session_: object) -> None:
        commits.append(session_)

    event.listen(session.sync_session, "after_commit", _record_commit)
    try:
        with pytest.raises(InvalidArgumentError) as excinfo:
            await service.update_task(task.id, owner.id, title="   ", description="Changed")
    finally:
        event.remove(session.sync_session, "after_commit", _record_commit)

    assert excinfo.value.message == "Title, if provided, must not be blank."
    assert commits == []
    stored = await _stored_task(session, task.id)
    assert stored.title == "Original"
    assert stored.description == "Keep me"


async def test_update_title_is_trimmed(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Draft", current_user_id=owner.id)

    updated = await service.update_task(task.id, owner.id, title="  Final  ")

    assert updated.title == "Final"


async def test_update_description_only_leaves_title(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(
        project.id,
        title="Stable title",
        description="Before",
        current_user_id=owner.id,
    )

    updated = await service.update_task(task.id, owner.id, description="")

    assert updated.title == "Stable title"
    assert updated.description == ""


async def test_update_without_fields_returns_task_unchanged(session: AsyncSession, user_factory) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Same", description="Same", current_user_id=owner.id)

    unchanged = await service.update_task(task.id, owner.id)

    assert unchanged.title == "Same"
    assert unchanged.description == "Same"
    assert unchanged.updated_at == task.updated_at


async def test_create_task_rechecks_project_already_loaded_in_session(
    session: AsyncSession, user_factory
) -> None:
    owner, project = await _project_for(session, user_factory)
    assert await session.get(Project, project.id) is not None
    service = TaskService(session, project_service=DeletingGuard(session))

    with pytest.raises(NotFoundError) as excinfo:
        await service.create_task(project.id, title="Orphan", current_user_id=owner.id)

    assert excinfo.value.message == "Project not found."
    assert await service.repository.count() == 0


async def test_update_with_null_description_keeps_stored_description(
    session: AsyncSession, user_factory
) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(
        project.id,
        title="Old title",
        description="Keep me",
        current_user_id=owner.id,
    )

    updated = await service.update_task(task.id, owner.id, title="New title", description=None)

    assert updated.title == "New title"
    assert updated.description == "Keep me"
    stored = await _stored_task(session, task.id)
    assert stored.description == "Keep me"

    untouched = await service.update_task(task.id, owner.id, description=None)
    assert untouched.description == "Keep me"


async def test_toggle_refreshes_updated_at_and_keeps_created_at(
    session: AsyncSession, user_factory
) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Stamp", current_user_id=owner.id)
    await _backdate_task(session, task.id)

    toggled = await service.toggle_task_completion(task.id, owner.id)

    assert toggled.updated_at.replace(tzinfo=None) > LONG_AGO
    assert toggled.created_at.replace(tzinfo=None) == task.created_at.replace(tzinfo=None)


async def test_update_refreshes_updated_at_and_keeps_created_at(
    session: AsyncSession, user_factory
) -> None:
    owner, project = await _project_for(session, user_factory)
    service = TaskService(session)
    task = await service.create_task(project.id, title="Stamp", current_user_id=owner.id)
    await _backdate_task(session, task.id)

    updated = await service.update_task(task.id, owner.id, title="Restamped")

    assert updated.updated_at.replace(tzinfo=None) > LONG_AGO
    assert updated.created_at.replace(tzinfo=None) == task.created_at.replace(tzinfo=None)
    stored = await _stored_task(session, task.id)
    assert stored.updated_at.replace(tzinfo=None) > LONG_AGO
