"""
exceptions.py
-------------
Domain error types shared by the repository and service layers.

PersistenceError wraps every failure talking to PostgreSQL.
NotFoundError is raised by services when a required row does not exist.
"""

from typing import Any, Optional


class ProjectsError(Exception):
    """Base class for all errors raised by the projects package."""


class PersistenceError(ProjectsError):
    """
    A database operation failed and its transaction was rolled back.

    Attributes:
        cause: The underlying exception (usually a psycopg2.Error).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is not None:
            return f"{base}: {self.cause}"
        return base


class NotFoundError(ProjectsError):
    """A row required by the requested operation does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with ID={entity_id} does not exist.")
        self.entity = entity
        self.entity_id = entity_id
