"""Project lifecycle and progress, scoped to the calling user."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import NotFoundError, UnauthorizedError
from ..models import Project
from ..repositories import ProjectRepository, TaskRepository, UserRepository
from ..schemas import ProjectProgress, ProjectRead
from .progress import calculate_progress_percentage

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found."
USER_NOT_FOUND = "User not found."
PROJECT_ACCESS_DENIED = "You don't have access to this project."


def _to_read(project: Project) -> ProjectRead:
    return ProjectRead.model_validate(project)


class ProjectService:
    """Every lookup filters on both project id and owner in a single query.

    A project owned by someone else is therefore reported exactly like a
    project that does not exist.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = ProjectRepository(session)
        self._task_repository = TaskRepository(session)
        self._user_repository = UserRepository(session)

    @property
    def repository(self) -> ProjectRepository:
        return self._repository

    async def _get_owned(self, project_id: int, current_user_id: int) -> Project:
        project = await self._repository.get_for_owner(project_id, current_user_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)
        return project

    async def create_project(
        self,
        *,
        title: str,
        current_user_id: int,
        description: str | None = None,
    ) -> ProjectRead:
        owner = await self._user_repository.get(current_user_id)
        if owner is None:
            raise NotFoundError(USER_NOT_FOUND)
        project = Project(title=title, description=description, owner_id=current_user_id)
        await self._repository.save(project)
        await self._session.commit()
        await self._repository.refresh(project)
        logger.info(
            "Project created",
            extra={"project_id": project.id, "owner_id": current_user_id},
        )
        return _to_read(project)

    async def list_projects(self, current_user_id: int) -> list[ProjectRead]:
        projects = await self._repository.list_for_owner(current_user_id)
        return [_to_read(project) for project in projects]

    async def get_project(self, project_id: int, current_user_id: int) -> ProjectRead:
        return _to_read(await self._get_owned(project_id, current_user_id))

    async def update_project(
        self,
        project_id: int,
        *,
        title: str,
        current_user_id: int,
        description: str | None = None,
    ) -> ProjectRead:
        """Replace title and description; ``description=None`` clears it."""
        project = await self._get_owned(project_id, current_user_id)
        project.title = title
        project.description = description
        project.touch()
        await self._repository.save(project)
        await self._session.commit()
        await self._repository.refresh(project)
        logger.info("Project updated", extra={"project_id": project_id})
        return _to_read(project)

    async def delete_project(self, project_id: int, current_user_id: int) -> None:
        """Delete the project and its tasks. Missing projects are not an error."""
        project = await self._repository.get_for_owner(project_id, current_user_id)
        if project is None:
            logger.debug("Project already absent", extra={"project_id": project_id})
            return
        await self._repository.delete(project)
        await self._session.commit()
        logger.info("Project deleted", extra={"project_id": project_id})

    async def get_project_progress(self, project_id: int, current_user_id: int) -> ProjectProgress:
        project = await self._get_owned(project_id, current_user_id)
        total = await self._task_repository.count_for_project(project_id)
        completed = await self._task_repository.count_completed_for_project(project_id)
        return ProjectProgress(
            project_id=project_id,
            project_title=project.title,
            total_tasks=total,
            completed_tasks=completed,
            progress_percentage=calculate_progress_percentage(completed, total),
        )

    async def validate_ownership(self, project_id: int, current_user_id: int) -> None:
        """Raise :class:`UnauthorizedError` unless the caller owns the project."""
        project = await self._repository.get_for_owner(project_id, current_user_id)
        if project is None:
            raise UnauthorizedError(PROJECT_ACCESS_DENIED)


__all__ = ["ProjectService"]
