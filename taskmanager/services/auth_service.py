"""
Authentication service.
Registers users and issues signed bearer tokens on register and login.
"""
import logging

from sqlalchemy.exc import IntegrityError

from ..core.events import EventPublisher, NullPublisher, USER_REGISTERED
from ..core.exceptions import ConflictError, InvalidCredentialsError
from ..models.user import User
from ..repositories.users import UserRepository
from ..utils.security import PasswordHasher, TokenSigner

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuing."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
        publisher: EventPublisher = None,
    ):
        self.users = users
        self.hasher = hasher
        self.signer = signer
        self.publisher = publisher or NullPublisher()

    def register(self, username: str, password: str) -> str:
        """
        Create a user and return a token for it.

        Raises:
            ConflictError: If the username is already taken
        """
        if self.users.exists_by_username(username):
            logger.info(f"Registration rejected, username '{username}' exists")
            raise ConflictError("Username already exists")

        password_hash = self.hasher.hash(password)
        try:
            user = self.users.save(User(username=username, password_hash=password_hash))
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            logger.info(f"Registration rejected, username '{username}' was taken concurrently")
            raise ConflictError("Username already exists")
        logger.info(f"Registered user {user.id} ('{username}')")

        self._publish(USER_REGISTERED, {"user_id": user.id, "username": user.username})
        return self._issue_token(username)

    def login(self, username: str, password: str) -> str:
        """
        Check credentials and return a fresh token.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        user = self.users.find_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.warning(f"Failed login for '{username}'")
            raise InvalidCredentialsError("Invalid credentials")

        return self._issue_token(username)

    def _issue_token(self, username: str) -> str:
        return self.signer.sign({"sub": username})

    def _publish(self, event_type: str, data: dict) -> None:
        try:
            self.publisher.publish_event(event_type, data)
        except Exception as e:
            # Don't fail the request if event publishing fails
            logger.warning(f"Failed to publish {event_type} event: {e}")
