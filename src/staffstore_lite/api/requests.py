"""Validation for incoming employee payloads and list query parameters.

This runs before anything reaches the repository. The repository does
its own (looser) page/limit normalization for callers that skip HTTP;
the two are kept separate.

Rules:
  name, position: required strings, at least 3 characters after strip
  salary:         required finite number (bool is not a number), >= 0
  id, page, limit: ASCII digits with an optional sign, nothing else
  page:           default 1, must be > 0
  limit:          default 10; <= 0 becomes -1 (no limit)
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from staffstore_lite.config import DEFAULT_LIMIT, DEFAULT_PAGE
from staffstore_lite.domain.employee import EmployeeFields

MIN_TEXT_LENGTH = 3
NO_LIMIT = -1

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ValidationError(ValueError):
    """Request rejected before it reached the repository.

    errors maps field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{k}: {v}" for k, v in sorted(self.errors.items()))
        super().__init__(detail)


def _check_text(data: dict[str, Any], field: str, errors: dict[str, str]) -> str | None:
    value = data.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        errors[field] = "cannot be blank"
        return None
    if not isinstance(value, str):
        errors[field] = "must be a string"
        return None
    if len(value.strip()) < MIN_TEXT_LENGTH:
        errors[field] = f"the length must be no less than {MIN_TEXT_LENGTH}"
        return None
    return value


def _check_salary(data: dict[str, Any], errors: dict[str, str]) -> float | None:
    value = data.get("salary")
    if value is None:
        errors["salary"] = "cannot be blank"
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors["salary"] = "must be a number"
        return None
    try:
        salary = float(value)
    except OverflowError:  # int too large for a float
        salary = math.inf
    if not math.isfinite(salary):
        errors["salary"] = "must be a finite number"
        return None
    if salary < 0:
        errors["salary"] = "must be no less than 0"
        return None
    return salary


@dataclass(frozen=True, slots=True)
class EmployeeRequest:
    """Body of POST /employees and PUT /employees/{id}.

    Create and update accept exactly the same fields.
    """
    name: str
    position: str
    salary: float

    @classmethod
    def parse(cls, data: Any) -> EmployeeRequest:
        """Validate a decoded JSON body. Raises ValidationError listing every bad field."""
        if not isinstance(data, dict):
            raise ValidationError({"body": "must be a JSON object"})
        errors: dict[str, str] = {}
        name = _check_text(data, "name", errors)
        position = _check_text(data, "position", errors)
        salary = _check_salary(data, errors)
        if errors:
            raise ValidationError(errors)
        return cls(name=name, position=position, salary=salary)

    def to_fields(self) -> EmployeeFields:
        return EmployeeFields(name=self.name, position=self.position, salary=self.salary)


CreateEmployeeRequest = EmployeeRequest
UpdateEmployeeRequest = EmployeeRequest


def _parse_int(raw: str) -> int | None:
    """Strict decimal parse. int() alone would also take "1_0", " 7" and non-ASCII digits."""
    if not isinstance(raw, str) or not _INT_RE.fullmatch(raw):
        return None
    return int(raw)


def parse_employee_id(raw: str) -> int:
    """Path parameter -> int. Raises ValidationError on anything non-numeric."""
    employee_id = _parse_int(raw)
    if employee_id is None:
        raise ValidationError({"id": "invalid employee ID"})
    return employee_id


def parse_list_params(
    page: str | None,
    limit: str | None,
    default_limit: int = DEFAULT_LIMIT,
) -> tuple[int, int]:
    """Query string page/limit -> (page, limit) ready for list_employees().

    Missing values fall back to defaults. A non-positive limit is passed
    on as NO_LIMIT.
    """
    if page is None or page == "":
        page_num = DEFAULT_PAGE
    else:
        page_num = _parse_int(page)
        if page_num is None:
            raise ValidationError({"page": "invalid page number"})
        if page_num <= 0:
            raise ValidationError({"page": "page number should be greater than 0"})

    if limit is None or limit == "":
        limit_num = default_limit
    else:
        limit_num = _parse_int(limit)
        if limit_num is None:
            raise ValidationError({"limit": "invalid limit number"})
    if limit_num <= 0:
        limit_num = NO_LIMIT

    return page_num, limit_num
