import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.user import User

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> Optional[User]: ...

    def exists_by_username(self, username: str) -> bool: ...

    def save(self, user: User) -> User: ...


class SqlAlchemyUserRepository:
    """User access backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def save(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving user '{user.username}': {e}")
            raise
        return user
