"""Errors raised by the record store."""
from __future__ import annotations

from staffstore_lite.domain.types import EmployeeId


class RecordNotFound(LookupError):
    """No employee is stored under the given ID.

    Raised by get, update and delete. The ID either never existed or
    was deleted; IDs are never reused, so the second case is permanent.
    """

    def __init__(self, employee_id: EmployeeId, operation: str = "get") -> None:
        self.employee_id = employee_id
        self.operation = operation
        if operation == "get":
            message = f"employee with ID {employee_id} not found"
        else:
            message = f"employee with ID {employee_id} {operation} failed: record not found"
        super().__init__(message)
