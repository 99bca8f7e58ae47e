"""Employee controller: repository operations in, (status, body) out.

No HTTP framework here. Each handler takes already-extracted strings
and decoded JSON, validates, calls the repository, and returns an
ApiResponse. Translating that into bytes on a socket is the server's
job, which keeps every branch testable without opening a port.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from staffstore_lite.api.requests import (
    DEFAULT_LIMIT,
    EmployeeRequest,
    ValidationError,
    parse_employee_id,
    parse_list_params,
)
from staffstore_lite.domain.errors import RecordNotFound
from staffstore_lite.repository.base import EmployeeRepository

log = logging.getLogger(__name__)

NOT_FOUND_BODY = {"error": "employee not found"}


@dataclass(slots=True)
class ApiResponse:
    status: HTTPStatus
    body: Any = None


def _invalid(exc: ValidationError) -> ApiResponse:
    # Single-field errors (bad id, bad page) read better flat.
    if len(exc.errors) == 1 and next(iter(exc.errors)) in ("id", "page", "limit", "body"):
        return ApiResponse(HTTPStatus.BAD_REQUEST, {"error": next(iter(exc.errors.values()))})
    return ApiResponse(HTTPStatus.BAD_REQUEST, {"error": exc.errors})


class EmployeeController:
    """Handlers for /api/v1/employees.

    Args:
        repo: any EmployeeRepository implementation.
        default_limit: page size when the client sends no limit.
    """

    def __init__(self, repo: EmployeeRepository, default_limit: int = DEFAULT_LIMIT) -> None:
        self._repo = repo
        self._default_limit = default_limit

    def create_employee(self, body: Any) -> ApiResponse:
        """POST /api/v1/employees"""
        try:
            request = EmployeeRequest.parse(body)
        except ValidationError as exc:
            return _invalid(exc)
        employee = self._repo.create_employee(request.to_fields())
        return ApiResponse(HTTPStatus.CREATED, employee.to_dict())

    def get_employee(self, raw_id: str) -> ApiResponse:
        """GET /api/v1/employees/{id}"""
        try:
            employee_id = parse_employee_id(raw_id)
        except ValidationError as exc:
            return _invalid(exc)
        try:
            employee = self._repo.get_employee(employee_id)
        except RecordNotFound:
            return ApiResponse(HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)
        return ApiResponse(HTTPStatus.OK, employee.to_dict())

    def update_employee(self, raw_id: str, body: Any) -> ApiResponse:
        """PUT /api/v1/employees/{id}"""
        try:
            employee_id = parse_employee_id(raw_id)
            request = EmployeeRequest.parse(body)
        except ValidationError as exc:
            return _invalid(exc)
        try:
            employee = self._repo.update_employee(employee_id, request.to_fields())
        except RecordNotFound:
            return ApiResponse(HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)
        return ApiResponse(HTTPStatus.OK, employee.to_dict())

    def delete_employee(self, raw_id: str) -> ApiResponse:
        """DELETE /api/v1/employees/{id}"""
        try:
            employee_id = parse_employee_id(raw_id)
        except ValidationError as exc:
            return _invalid(exc)
        try:
            self._repo.delete_employee(employee_id)
        except RecordNotFound:
            return ApiResponse(HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)
        return ApiResponse(HTTPStatus.NO_CONTENT)

    def list_employees(self, page: str | None, limit: str | None) -> ApiResponse:
        """GET /api/v1/employees?page=&limit="""
        try:
            page_num, limit_num = parse_list_params(page, limit, self._default_limit)
        except ValidationError as exc:
            return _invalid(exc)
        employees, total = self._repo.list_employees(page_num, limit_num)
        log.debug("listed page=%d limit=%d -> %d of %d", page_num, limit_num, len(employees), total)
        return ApiResponse(
            HTTPStatus.OK,
            {
                "page": page_num,
                "limit": limit_num,
                "total": total,
                "data": [e.to_dict() for e in employees],
            },
        )
