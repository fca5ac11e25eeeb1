"""
repositories/project_repo.py
-----------------------------
Data access layer for projects.
All SQL queries related to the `project` table and its child tables
(`category` via `project_category`, `step`, `material`) live here.

Every public method runs inside its own transaction (see db.connection.transaction):
any failure rolls the whole operation back and surfaces as PersistenceError.
"""

from typing import Optional

from db.connection import transaction
from exceptions import PersistenceError
from models.project import Category, Material, Project, Step
from utils.logger import get_logger

logger = get_logger(__name__)

_PROJECT_COLUMNS = "project_id, project_name, estimated_hours, actual_hours, difficulty, notes"


class ProjectRepository:
    """Repository for CRUD operations on the project table."""

    # ── CREATE ────────────────────────────────────────────

    def insert(self, project: Project) -> Project:
        """
        Insert a new project.

        Args:
            project: The Project domain object to persist.

        Returns:
            The same Project with its `project_id` populated.

        Raises:
            PersistenceError: If the insert fails or no identity is returned.
        """
        sql = """
            INSERT INTO project (project_name, estimated_hours, actual_hours, difficulty, notes)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING project_id;
        """
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, self._project_params(project))
                    row = cur.fetchone()
                if row is None:
                    raise PersistenceError("Insert returned no project_id")
                project_id = row[0]
        except PersistenceError as e:
            logger.error(f"Failed to add project '{project.project_name}': {e}")
            raise

        project.project_id = project_id
        logger.info(f"Added project '{project.project_name}' #{project.project_id}")
        return project

    # ── READ ──────────────────────────────────────────────

    def fetch_all(self) -> list[Project]:
        """
        Fetch every project ordered by name.

        Returns:
            List of Project objects without child collections.
        """
        sql = f"SELECT {_PROJECT_COLUMNS} FROM project ORDER BY project_name;"
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql)
                    return [self._row_to_project(r) for r in cur.fetchall()]
        except PersistenceError as e:
            logger.error(f"Failed to list projects: {e}")
            raise

    def fetch_by_id(self, project_id: int) -> Optional[Project]:
        """
        Fetch a single project together with its categories, steps and materials.

        All four reads share one transaction, so the returned project never
        carries a partial set of children.

        Args:
            project_id: Primary key.

        Returns:
            A fully populated Project, or None if no such project exists.
        """
        sql = f"SELECT {_PROJECT_COLUMNS} FROM project WHERE project_id = %s;"
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (project_id,))
                    row = cur.fetchone()
                if row is None:
                    return None

                project = self._row_to_project(row)
                categories = self._fetch_categories(conn, project_id)
                steps = self._fetch_steps(conn, project_id)
                materials = self._fetch_materials(conn, project_id)
        except PersistenceError as e:
            logger.error(f"Failed to fetch project #{project_id}: {e}")
            raise

        project.categories = categories
        project.steps = steps
        project.materials = materials
        return project

    def _fetch_categories(self, conn, project_id: int) -> list[Category]:
        sql = """
            SELECT c.category_id, c.category_name
            FROM category c
            JOIN project_category pc USING (category_id)
            WHERE pc.project_id = %s
            ORDER BY c.category_name;
        """
        with conn.cursor() as cur:
            cur.execute(sql, (project_id,))
            return [self._row_to_category(r) for r in cur.fetchall()]

    def _fetch_steps(self, conn, project_id: int) -> list[Step]:
        sql = """
            SELECT step_id, project_id, step_text, step_order
            FROM step
            WHERE project_id = %s
            ORDER BY step_order;
        """
        with conn.cursor() as cur:
            cur.execute(sql, (project_id,))
            return [self._row_to_step(r) for r in cur.fetchall()]

    def _fetch_materials(self, conn, project_id: int) -> list[Material]:
        sql = """
            SELECT material_id, project_id, material_name, num_required, cost
            FROM material
            WHERE project_id = %s
            ORDER BY material_id;
        """
        with conn.cursor() as cur:
            cur.execute(sql, (project_id,))
            return [self._row_to_material(r) for r in cur.fetchall()]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, project: Project) -> bool:
        """
        Replace every mutable field of an existing project.

        Args:
            project: Project with updated fields (must have project_id set).

        Returns:
            True if the row was updated, False if no such project exists.
        """
        sql = """
            UPDATE project
            SET project_name = %s, estimated_hours = %s, actual_hours = %s,
                difficulty = %s, notes = %s
            WHERE project_id = %s;
        """
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, self._project_params(project) + (project.project_id,))
                    updated = self._single_row_affected(cur.rowcount)
        except PersistenceError as e:
            logger.error(f"Failed to update project #{project.project_id}: {e}")
            raise
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, project_id: int) -> bool:
        """
        Delete a project by ID. Steps, materials and category links
        are removed by the schema's ON DELETE CASCADE rules.

        Returns:
            True if the row was deleted, False otherwise.
        """
        sql = "DELETE FROM project WHERE project_id = %s;"
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (project_id,))
                    deleted = self._single_row_affected(cur.rowcount)
        except PersistenceError as e:
            logger.error(f"Failed to delete project #{project_id}: {e}")
            raise
        if deleted:
            logger.info(f"Deleted project #{project_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _single_row_affected(rowcount: int) -> bool:
        # project_id is unique; more than one row means the schema is broken.
        if rowcount > 1:
            raise PersistenceError(f"Expected at most one row affected, got {rowcount}")
        return rowcount == 1

    @staticmethod
    def _project_params(project: Project) -> tuple:
        """Bind the mutable Project fields in column order."""
        return (
            project.project_name,
            project.estimated_hours,
            project.actual_hours,
            project.difficulty,
            project.notes,
        )

    @staticmethod
    def _row_to_project(row: tuple) -> Project:
        """Convert a database row tuple to a Project domain object."""
        return Project(
            project_id=row[0],
            project_name=row[1],
            estimated_hours=row[2],
            actual_hours=row[3],
            difficulty=row[4],
            notes=row[5],
        )

    @staticmethod
    def _row_to_category(row: tuple) -> Category:
        return Category(category_id=row[0], category_name=row[1])

    @staticmethod
    def _row_to_step(row: tuple) -> Step:
        return Step(step_id=row[0], project_id=row[1], step_text=row[2], step_order=row[3])

    @staticmethod
    def _row_to_material(row: tuple) -> Material:
        return Material(
            material_id=row[0],
            project_id=row[1],
            material_name=row[2],
            num_required=row[3],
            cost=row[4],
        )
