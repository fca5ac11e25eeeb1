"""
services/project_service.py
----------------------------
Business logic for managing projects.
Turns the repository's "no such row" outcomes (None / False) into NotFoundError
so callers never have to branch on affected-row counts.
PersistenceError from the repository is propagated unchanged.
"""

from typing import Optional

from exceptions import NotFoundError
from models.project import Project
from repositories.project_repo import ProjectRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ProjectService:
    """Handles all business logic related to projects."""

    def __init__(self, repo: Optional[ProjectRepository] = None):
        self.repo = repo or ProjectRepository()

    def add(self, project: Project) -> Project:
        """Persist a new project and return it with its ID populated."""
        return self.repo.insert(project)

    def list(self) -> list[Project]:
        """Return all projects ordered by name (no child collections)."""
        return self.repo.fetch_all()

    def get_by_id(self, project_id: int) -> Project:
        """
        Fetch a project with its categories, steps and materials.

        Raises:
            NotFoundError: If no project has this ID.
        """
        project = self.repo.fetch_by_id(project_id)
        if project is None:
            logger.warning(f"Project #{project_id} not found")
            raise NotFoundError("project", project_id)
        return project

    def update(self, project: Project) -> None:
        """
        Replace all mutable fields of an existing project.

        Raises:
            NotFoundError: If no project has ``project.project_id``.
        """
        if not self.repo.update(project):
            logger.warning(f"Project #{project.project_id} not found for update")
            raise NotFoundError("project", project.project_id)

    def delete_by_id(self, project_id: int) -> None:
        """
        Delete a project (its steps, materials and category links cascade).

        Raises:
            NotFoundError: If no project has this ID.
        """
        if not self.repo.delete_by_id(project_id):
            logger.warning(f"Project #{project_id} not found for delete")
            raise NotFoundError("project", project_id)
