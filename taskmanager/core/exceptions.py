"""
Domain errors raised by the services and translated to HTTP responses in main.
"""


class TaskManagerError(Exception):
    """Base class for expected, per-request failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ConflictError(TaskManagerError):
    """Username already taken."""


class InvalidCredentialsError(TaskManagerError):
    """Unknown username or wrong password."""


class NotFoundError(TaskManagerError):
    """No record with the requested id."""
