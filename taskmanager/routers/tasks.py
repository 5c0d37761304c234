from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status

from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse
from ..services.task_service import TaskService
from .deps import get_task_service

# Range of a 64-bit integer primary key
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1

TaskId = Annotated[int, Path(ge=MIN_TASK_ID, le=MAX_TASK_ID, description="Task ID")]


def list_tasks(task_service: TaskService = Depends(get_task_service)):
    """Get all tasks"""
    return task_service.list_tasks()


def get_task(task_id: TaskId, task_service: TaskService = Depends(get_task_service)):
    """Get a specific task by ID"""
    return task_service.get_task(task_id)


def create_task(task_data: TaskCreate, task_service: TaskService = Depends(get_task_service)):
    """Create a new task"""
    return task_service.create_task(task_data)


def update_task(
    task_id: TaskId,
    task_update: TaskUpdate,
    task_service: TaskService = Depends(get_task_service)
):
    """Overwrite title, description and completed of a task"""
    return task_service.update_task(task_id, task_update)


def delete_task(task_id: TaskId, task_service: TaskService = Depends(get_task_service)) -> Response:
    """Delete a task"""
    task_service.delete_task(task_id)
    return Response(status_code=status.HTTP_200_OK)


# (method, path, handler, response model)
ROUTES = [
    ("GET", "", list_tasks, List[TaskResponse]),
    ("GET", "/{task_id}", get_task, TaskResponse),
    ("POST", "", create_task, TaskResponse),
    ("PUT", "/{task_id}", update_task, TaskResponse),
    ("DELETE", "/{task_id}", delete_task, None),
]


def build_router() -> APIRouter:
    router = APIRouter(prefix="/tasks", tags=["tasks"])
    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(path, endpoint, methods=[method], response_model=response_model)
    return router


router = build_router()
