"""Routes addressing a single task by id."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...deps import CurrentUserIdDependency, TaskServiceDependency
from ...schemas import ErrorResponse, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.patch(
    "/{task_id}/complete",
    response_model=TaskRead,
    summary="Flip a task between complete and incomplete",
    responses=_NOT_FOUND,
)
async def toggle_task_completion(
    task_id: int,
    current_user_id: CurrentUserIdDependency,
    service: TaskServiceDependency,
) -> TaskRead:
    return await service.toggle_task_completion(task_id, current_user_id)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Partially update a task's title or description",
    responses={**_NOT_FOUND, status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    current_user_id: CurrentUserIdDependency,
    service: TaskServiceDependency,
) -> TaskRead:
    return await service.update_task(
        task_id,
        current_user_id,
        **payload.model_dump(exclude_unset=True),
    )


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: int,
    current_user_id: CurrentUserIdDependency,
    service: TaskServiceDependency,
) -> Response:
    await service.delete_task(task_id, current_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
