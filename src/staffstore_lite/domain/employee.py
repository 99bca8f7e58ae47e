"""Employee record and the caller-owned fields that describe it.

EmployeeFields is what callers hand to create/update. Employee is what
the repository stores: the same fields plus the repository-assigned ID.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from staffstore_lite.domain.types import EmployeeId


@dataclass(frozen=True, slots=True)
class EmployeeFields:
    name: str
    position: str
    salary: float


@dataclass(slots=True)
class Employee:
    """A stored employee.

    employee_id is assigned by the repository and never changes.
    Everything else is replaced wholesale by an update.
    """
    employee_id: EmployeeId
    name: str
    position: str
    salary: float

    @classmethod
    def create(cls, employee_id: EmployeeId, fields: EmployeeFields) -> Employee:
        return cls(
            employee_id=employee_id,
            name=fields.name,
            position=fields.position,
            salary=fields.salary,
        )

    def with_fields(self, fields: EmployeeFields) -> Employee:
        """New record with the same ID and the given caller-owned fields."""
        return replace(
            self,
            name=fields.name,
            position=fields.position,
            salary=fields.salary,
        )

    def copy(self) -> Employee:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "id": self.employee_id,
            "name": self.name,
            "position": self.position,
            "salary": self.salary,
        }
