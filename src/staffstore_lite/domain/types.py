"""Shared type aliases and constants used across the domain."""
from __future__ import annotations

from typing import TypeAlias

EmployeeId: TypeAlias = int

FIRST_EMPLOYEE_ID: EmployeeId = 1
