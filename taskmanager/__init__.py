"""Task Manager - task CRUD and token authentication backend."""

__version__ = "1.0.0"
