import logging
from typing import List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.task import Task

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    def find_all(self) -> List[Task]: ...

    def find_by_id(self, task_id: int) -> Optional[Task]: ...

    def exists_by_id(self, task_id: int) -> bool: ...

    def save(self, task: Task) -> Task: ...

    def delete_by_id(self, task_id: int) -> None: ...


class SqlAlchemyTaskRepository:
    """Task access backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.id).all()

    def find_by_id(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def exists_by_id(self, task_id: int) -> bool:
        return self.db.query(Task.id).filter(Task.id == task_id).first() is not None

    def save(self, task: Task) -> Task:
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving task: {e}")
            raise
        return task

    def delete_by_id(self, task_id: int) -> None:
        try:
            self.db.query(Task).filter(Task.id == task_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting task {task_id}: {e}")
            raise
