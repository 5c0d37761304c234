"""
FastAPI dependencies.

Everything here reads the collaborators that create_app placed on
app.state, so each request gets its own session and services wired
around it.
"""
import logging
from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..core.exceptions import TaskManagerError
from ..repositories.tasks import SqlAlchemyTaskRepository
from ..repositories.users import SqlAlchemyUserRepository
from ..services.auth_service import AuthService
from ..services.task_service import TaskService

logger = logging.getLogger(__name__)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields:
        Session: Database session, closed after the request
    """
    db = request.app.state.session_factory()
    try:
        yield db
    except TaskManagerError:
        db.rollback()
        raise
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    state = request.app.state
    return AuthService(
        SqlAlchemyUserRepository(db),
        hasher=state.password_hasher,
        signer=state.token_signer,
        publisher=state.event_publisher,
    )


def get_task_service(request: Request, db: Session = Depends(get_db)) -> TaskService:
    return TaskService(SqlAlchemyTaskRepository(db), publisher=request.app.state.event_publisher)
