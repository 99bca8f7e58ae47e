"""Domain model for staffstore-lite.

Re-exports all public types for convenient access:
    from staffstore_lite.domain import Employee, EmployeeFields, RecordNotFound
"""
from staffstore_lite.domain.employee import Employee, EmployeeFields
from staffstore_lite.domain.errors import RecordNotFound
from staffstore_lite.domain.types import EmployeeId, FIRST_EMPLOYEE_ID

__all__ = [
    "Employee",
    "EmployeeFields",
    "RecordNotFound",
    "EmployeeId",
    "FIRST_EMPLOYEE_ID",
]
