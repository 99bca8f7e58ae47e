"""Abstract repository interface for employee records.

The HTTP controller, the stress harness and the tests all talk to this
interface, never to a concrete store, so a different backend can be
swapped in without touching callers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from staffstore_lite.domain.employee import Employee, EmployeeFields
from staffstore_lite.domain.types import EmployeeId


class EmployeeRepository(ABC):
    """The five operations every employee store implements."""

    @abstractmethod
    def create_employee(self, fields: EmployeeFields) -> Employee:
        """Store a new employee under a fresh ID and return it."""
        ...

    @abstractmethod
    def get_employee(self, employee_id: EmployeeId) -> Employee:
        """Return the employee. Raises RecordNotFound if absent."""
        ...

    @abstractmethod
    def update_employee(self, employee_id: EmployeeId, fields: EmployeeFields) -> Employee:
        """Replace the caller-owned fields. Raises RecordNotFound if absent."""
        ...

    @abstractmethod
    def delete_employee(self, employee_id: EmployeeId) -> None:
        """Remove the employee. Raises RecordNotFound if absent."""
        ...

    @abstractmethod
    def list_employees(self, page: int, limit: int) -> tuple[list[Employee], int]:
        """Return one page of employees in creation order, plus the total count."""
        ...
