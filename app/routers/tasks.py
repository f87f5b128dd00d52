from fastapi import APIRouter, status

from app.core.errors import NotFoundError
from app.dependencies import CurrentUser, DBSession
from app.models import TaskCreate, TaskResponse, TaskUpdate
from app.schemas import (
    DeletedTaskData,
    DeleteTaskResponse,
    TaskData,
    TaskEnvelope,
    TaskListData,
    TaskListResponse,
)
from app.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

TASK_NOT_FOUND = "No task found with that ID"


@router.get("", response_model=TaskListResponse)
async def get_tasks(current_user: CurrentUser, db: DBSession):
    """List the caller's tasks, newest first"""
    tasks = await TaskService.list_tasks(current_user.id, db)
    return TaskListResponse(
        results=len(tasks),
        data=TaskListData(tasks=[TaskResponse.model_validate(t) for t in tasks]),
    )


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskCreate, current_user: CurrentUser, db: DBSession):
    """Create a new task"""
    task = await TaskService.create_task(current_user.id, task_data, db)
    return TaskEnvelope(data=TaskData(task=TaskResponse.model_validate(task)))


@router.patch("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: int, task_data: TaskUpdate, current_user: CurrentUser, db: DBSession
):
    if not await TaskService.get_owned_task(task_id, current_user.id, db):
        raise NotFoundError(TASK_NOT_FOUND)

    task = await TaskService.update_task(task_id, current_user.id, task_data, db)
    if not task:
        # removed between the check and the update
        raise NotFoundError(TASK_NOT_FOUND)
    return TaskEnvelope(data=TaskData(task=TaskResponse.model_validate(task)))


@router.delete("/{task_id}", response_model=DeleteTaskResponse)
async def delete_task(task_id: int, current_user: CurrentUser, db: DBSession):
    """Delete a task"""
    if not await TaskService.get_owned_task(task_id, current_user.id, db):
        raise NotFoundError(TASK_NOT_FOUND)

    if not await TaskService.delete_task(task_id, current_user.id, db):
        raise NotFoundError(TASK_NOT_FOUND)
    return DeleteTaskResponse(data=DeletedTaskData(deleted_task_id=task_id))
