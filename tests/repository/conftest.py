"""Shared fixtures for repository tests."""
from __future__ import annotations

import pytest

from staffstore_lite.domain.employee import EmployeeFields
from staffstore_lite.repository.memory import InMemoryEmployeeRepository


def make_fields(
    name: str = "Ganesh Agrawal",
    position: str = "Software Engineer",
    salary: float = 1234.0,
) -> EmployeeFields:
    return EmployeeFields(name=name, position=position, salary=salary)


@pytest.fixture()
def repo() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@pytest.fixture()
def eleven(repo) -> InMemoryEmployeeRepository:
    """Repository pre-loaded with employees 1..11, named emp-01..emp-11."""
    for i in range(1, 12):
        repo.create_employee(make_fields(name=f"emp-{i:02d}"))
    return repo
