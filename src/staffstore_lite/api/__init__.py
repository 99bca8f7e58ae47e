"""HTTP-facing collaborators: request validation, controller, server."""
from staffstore_lite.api.controller import ApiResponse, EmployeeController
from staffstore_lite.api.requests import (
    CreateEmployeeRequest,
    EmployeeRequest,
    UpdateEmployeeRequest,
    ValidationError,
    parse_employee_id,
    parse_list_params,
)
from staffstore_lite.api.server import EmployeeServer

__all__ = [
    "ApiResponse",
    "EmployeeController",
    "CreateEmployeeRequest",
    "EmployeeRequest",
    "UpdateEmployeeRequest",
    "ValidationError",
    "parse_employee_id",
    "parse_list_params",
    "EmployeeServer",
]
