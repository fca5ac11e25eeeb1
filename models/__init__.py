"""
models/ - Domain Models
=======================
Plain dataclasses mirroring the rows of the project tables.
"""

from models.project import Category, Material, Project, Step

__all__ = ["Category", "Material", "Project", "Step"]
