"""Project routes, including the nested task collection."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...deps import CurrentUserIdDependency, ProjectServiceDependency, TaskServiceDependency
from ...schemas import (
    ErrorResponse,
    ProjectCreate,
    ProjectProgress,
    ProjectRead,
    ProjectUpdate,
    TaskCreate,
    TaskRead,
)

router = APIRouter(prefix="/projects", tags=["projects"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_FORBIDDEN = {status.HTTP_403_FORBIDDEN: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project owned by the caller",
)
async def create_project(
    payload: ProjectCreate,
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> ProjectRead:
    return await service.create_project(
        title=payload.title,
        description=payload.description,
        current_user_id=current_user_id,
    )


@router.get("", response_model=list[ProjectRead], summary="List the caller's projects")
async def list_projects(
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> list[ProjectRead]:
    return await service.list_projects(current_user_id)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Fetch one of the caller's projects",
    responses=_NOT_FOUND,
)
async def get_project(
    project_id: int,
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> ProjectRead:
    return await service.get_project(project_id, current_user_id)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Replace a project's title and description",
    responses=_NOT_FOUND,
)
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> ProjectRead:
    return await service.update_project(
        project_id,
        title=payload.title,
        description=payload.description,
        current_user_id=current_user_id,
    )


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project and all of its tasks",
)
async def delete_project(
    project_id: int,
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> Response:
    await service.delete_project(project_id, current_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{project_id}/progress",
    response_model=ProjectProgress,
    summary="Completion statistics for a project",
    responses=_NOT_FOUND,
)
async def get_project_progress(
    project_id: int,
    current_user_id: CurrentUserIdDependency,
    service: ProjectServiceDependency,
) -> ProjectProgress:
    return await service.get_project_progress(project_id, current_user_id)


@router.post(
    "/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a task to a project",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
async def create_task(
    project_id: int,
    payload: TaskCreate,
    current_user_id: CurrentUserIdDependency,
    service: TaskServiceDependency,
) -> TaskRead:
    return await service.create_task(
        project_id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        current_user_id=current_user_id,
    )


@router.get(
    "/{project_id}/tasks",
    response_model=list[TaskRead],
    summary="List the tasks of a project",
    responses=_FORBIDDEN,
)
async def list_tasks(
    project_id: int,
    current_user_id: CurrentUserIdDependency,
    service: TaskServiceDependency,
) -> list[TaskRead]:
    return await service.list_tasks(project_id, current_user_id)
