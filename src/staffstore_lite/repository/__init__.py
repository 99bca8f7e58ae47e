"""Employee repositories: the abstract interface and the in-memory store."""
from staffstore_lite.repository.base import EmployeeRepository
from staffstore_lite.repository.memory import InMemoryEmployeeRepository

__all__ = [
    "EmployeeRepository",
    "InMemoryEmployeeRepository",
]
