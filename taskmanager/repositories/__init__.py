"""Data access for users and tasks."""
