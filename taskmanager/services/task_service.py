import logging
from typing import List

from ..core.events import EventPublisher, NullPublisher, TASK_CREATED, TASK_DELETED, TASK_UPDATED
from ..core.exceptions import NotFoundError
from ..models.task import Task
from ..repositories.tasks import TaskRepository
from ..schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """CRUD over tasks"""

    def __init__(self, tasks: TaskRepository, publisher: EventPublisher = None):
        self.tasks = tasks
        self.publisher = publisher or NullPublisher()

    def list_tasks(self) -> List[Task]:
        return self.tasks.find_all()

    def get_task(self, task_id: int) -> Task:
        task = self.tasks.find_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def create_task(self, task_data: TaskCreate) -> Task:
        task = self.tasks.save(Task(
            title=task_data.title,
            description=task_data.description,
            completed=task_data.completed,
        ))
        logger.info(f"Created task {task.id}")
        self._publish(TASK_CREATED, task.to_dict())
        return task

    def update_task(self, task_id: int, task_data: TaskUpdate) -> Task:
        task = self.get_task(task_id)
        task.title = task_data.title
        task.description = task_data.description
        task.completed = task_data.completed
        task = self.tasks.save(task)
        logger.info(f"Updated task {task_id}")
        self._publish(TASK_UPDATED, task.to_dict())
        return task

    def delete_task(self, task_id: int) -> None:
        if not self.tasks.exists_by_id(task_id):
            raise NotFoundError(f"Task {task_id} not found")
        self.tasks.delete_by_id(task_id)
        logger.info(f"Deleted task {task_id}")
        self._publish(TASK_DELETED, {"id": task_id})

    def _publish(self, event_type: str, data: dict) -> None:
        try:
            self.publisher.publish_event(event_type, data)
        except Exception as e:
            logger.warning(f"Failed to publish {event_type} event: {e}")
