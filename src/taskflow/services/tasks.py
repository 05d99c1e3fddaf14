"""Task lifecycle; ownership is inherited from the parent project."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Protocol

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import InvalidArgumentError, NotFoundError
from ..models import Task
from ..repositories import ProjectRepository, TaskRepository
from ..schemas import TaskRead
from .projects import PROJECT_NOT_FOUND, ProjectService

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found."
BLANK_TITLE = "Title, if provided, must not be blank."

# Distinguishes "field omitted" from an explicit ``None`` in partial updates.
UNSET: Any = object()


class ProjectOwnershipGuard(Protocol):
    async def validate_ownership(self, project_id: int, current_user_id: int) -> None:
        """Raise unless ``current_user_id`` owns ``project_id``."""


def _to_read(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


class TaskService:
    """Create, list, patch, toggle and delete tasks on behalf of a user.

    Project-level checks (create, list) go through ``project_service`` and
    fail as unauthorized; task-level lookups join through the project owner
    and fail as not found.
    """

    def __init__(
        self,
        session: AsyncSession,
        project_service: ProjectOwnershipGuard | None = None,
    ) -> None:
        self._session = session
        self._repository = TaskRepository(session)
        self._project_repository = ProjectRepository(session)
        self._project_service = project_service or ProjectService(session)

    @property
    def repository(self) -> TaskRepository:
        return self._repository

    async def _get_owned(self, task_id: int, current_user_id: int) -> Task:
        task = await self._repository.get_for_owner(task_id, current_user_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    async def create_task(
        self,
        project_id: int,
        *,
        title: str,
        current_user_id: int,
        description: str | None = None,
        due_date: date | None = None,
    ) -> TaskRead:
        await self._project_service.validate_ownership(project_id, current_user_id)
        # The project may have been deleted since the ownership check.
        if not await self._project_repository.exists(project_id):
            raise NotFoundError(PROJECT_NOT_FOUND)

        task = Task(
            title=title,
            description=description,
            due_date=due_date,
            is_completed=False,
            project_id=project_id,
        )
        await self._repository.save(task)
        await self._session.commit()
        await self._repository.refresh(task)
        logger.info("Task created", extra={"task_id": task.id, "project_id": project_id})
        return _to_read(task)

    async def list_tasks(self, project_id: int, current_user_id: int) -> list[TaskRead]:
        await self._project_service.validate_ownership(project_id, current_user_id)
        tasks = await self._repository.list_for_project(project_id)
        return [_to_read(task) for task in tasks]

    async def toggle_task_completion(self, task_id: int, current_user_id: int) -> TaskRead:
        task = await self._get_owned(task_id, current_user_id)
        task.is_completed = not task.is_completed
        task.touch()
        await self._repository.save(task)
        await self._session.commit()
        await self._repository.refresh(task)
        logger.info(
            "Task completion toggled",
            extra={"task_id": task_id, "is_completed": task.is_completed},
        )
        return _to_read(task)

    async def delete_task(self, task_id: int, current_user_id: int) -> None:
        task = await self._repository.get_for_owner(task_id, current_user_id)
        if task is None:
            return
        await self._repository.delete(task)
        await self._session.commit()
        logger.info("Task deleted", extra={"task_id": task_id})

    async def update_task(
        self,
        task_id: int,
        current_user_id: int,
        *,
        title: str | None = UNSET,
        description: str | None = UNSET,
    ) -> TaskRead:
        """Apply only the fields that were passed.

        ``title`` is stripped and must stay non-empty; ``title=None`` is
        ignored since a task always has a title. ``description=None`` is
        ignored the same way; ``""`` clears it.
        """
        task = await self._get_owned(task_id, current_user_id)

        new_title: str | None = None
        if title is not UNSET and title is not None:
            new_title = title.strip()
            if not new_title:
                raise InvalidArgumentError(BLANK_TITLE)

        if description is None:
            description = UNSET

        if new_title is None and description is UNSET:
            return _to_read(task)

        if new_title is not None:
            task.title = new_title
        if description is not UNSET:
            task.description = description
        task.touch()
        await self._repository.save(task)
        await self._session.commit()
        await self._repository.refresh(task)
        logger.info("Task updated", extra={"task_id": task_id})
        return _to_read(task)


__all__ = ["ProjectOwnershipGuard", "TaskService", "UNSET"]
