"""Core modules: configuration, database, errors and events."""
