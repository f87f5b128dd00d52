"""Response envelopes shared by the routers."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models import TaskResponse, UserPublic


class UserData(BaseModel):
    user: UserPublic


class AuthResponse(BaseModel):
    status: Literal["success"] = "success"
    token: str
    data: UserData


class TaskData(BaseModel):
    task: TaskResponse


class TaskEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: TaskData


class TaskListData(BaseModel):
    tasks: list[TaskResponse]


class TaskListResponse(BaseModel):
    status: Literal["success"] = "success"
    results: int
    data: TaskListData


class DeletedTaskData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    deleted_task_id: int = Field(alias="deletedTaskId")


class DeleteTaskResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str = "Task deleted successfully"
    data: DeletedTaskData
