"""
models/project.py
-----------------
Domain models for projects and the categories, steps and materials attached to them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass
class Category:
    """A label shared between projects through the project_category join table."""

    category_name: str
    category_id: Optional[int] = None

    def __str__(self) -> str:
        return self.category_name


@dataclass
class Step:
    """
    One instruction in a project's build sequence.

    Attributes:
        step_id: Database primary key (None for new records).
        project_id: Owning project.
        step_text: What to do.
        step_order: Position of the step within its project.
    """

    project_id: int
    step_text: str
    step_order: int
    step_id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.step_order}. {self.step_text}"


@dataclass
class Material:
    """
    Something that must be acquired to complete a project.

    Attributes:
        material_id: Database primary key (None for new records).
        project_id: Owning project.
        material_name: Human-readable name.
        num_required: Quantity needed.
        cost: Unit cost, two decimal places.
    """

    project_id: int
    material_name: str
    num_required: Optional[int] = None
    cost: Optional[Decimal] = None
    material_id: Optional[int] = None

    def __str__(self) -> str:
        qty = f"{self.num_required} x " if self.num_required is not None else ""
        price = f" @ {self.cost}" if self.cost is not None else ""
        return f"{qty}{self.material_name}{price}"


@dataclass
class Project:
    """
    Represents a single tracked project.

    The child collections are only populated by a detail fetch
    (ProjectRepository.fetch_by_id); everywhere else they are empty.

    Attributes:
        project_id: Database primary key (None until inserted).
        project_name: Display name (required).
        estimated_hours: Planned effort, two decimal places.
        actual_hours: Effort spent so far, two decimal places.
        difficulty: 1 (easy) to 5 (hard).
        notes: Free-form text.
        categories: Categories linked to this project.
        steps: Steps ordered by step_order.
        materials: Materials needed for this project.
    """

    project_name: str
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None
    notes: Optional[str] = None
    project_id: Optional[int] = None
    categories: list[Category] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            f"ID={self.project_id}",
            f"   name={self.project_name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
        ]
        if self.materials:
            lines.append("   Materials:")
            lines.extend(f"      {m}" for m in self.materials)
        if self.steps:
            lines.append("   Steps:")
            lines.extend(f"      {s}" for s in self.steps)
        if self.categories:
            lines.append("   Categories:")
            lines.extend(f"      {c}" for c in self.categories)
        return "\n".join(lines)
