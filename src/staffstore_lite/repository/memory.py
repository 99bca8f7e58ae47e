"""Thread-safe in-memory employee repository.

State:
  - _records: OrderedMap[EmployeeId, Employee], creation order
  - _next_id: next identity to hand out, starts at 1
  - _lock: one ReadWriteLock guarding both

get/list take the read side, so any number of lookups run together.
create/update/delete take the write side for the whole operation,
which makes each of them atomic with respect to every other call.

IDs come from a plain counter bumped under the write lock. It only
ever goes up: deleting employee 3 does not make 3 available again.
Nothing is persisted, so a restart starts over at 1.

Records are copied on the way in and on the way out. A caller that
mutates the Employee it got back cannot reach into the map behind
the lock's back.
"""
from __future__ import annotations

import logging

from staffstore_lite.concurrency.rwlock import ReadWriteLock
from staffstore_lite.datatypes.ordered_map import OrderedMap
from staffstore_lite.domain.employee import Employee, EmployeeFields
from staffstore_lite.domain.errors import RecordNotFound
from staffstore_lite.domain.types import FIRST_EMPLOYEE_ID, EmployeeId
from staffstore_lite.repository.base import EmployeeRepository

log = logging.getLogger(__name__)


class InMemoryEmployeeRepository(EmployeeRepository):
    """Employee store backed by an OrderedMap and a read-write lock."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._records: OrderedMap[EmployeeId, Employee] = OrderedMap()
        self._next_id: EmployeeId = FIRST_EMPLOYEE_ID

    def create_employee(self, fields: EmployeeFields) -> Employee:
        with self._lock.write():
            employee = Employee.create(self._next_id, fields)
            self._records.set(employee.employee_id, employee)
            self._next_id += 1
        log.debug("created employee %d", employee.employee_id)
        return employee.copy()

    def get_employee(self, employee_id: EmployeeId) -> Employee:
        with self._lock.read():
            employee = self._records.get(employee_id)
            if employee is None:
                log.debug("employee %d not found", employee_id)
                raise RecordNotFound(employee_id)
            return employee.copy()

    def update_employee(self, employee_id: EmployeeId, fields: EmployeeFields) -> Employee:
        with self._lock.write():
            current = self._records.get(employee_id)
            if current is None:
                log.debug("update of employee %d: not found", employee_id)
                raise RecordNotFound(employee_id, operation="update")
            updated = current.with_fields(fields)
            # Key already present, so set() leaves its position alone.
            self._records.set(employee_id, updated)
        log.debug("updated employee %d", employee_id)
        return updated.copy()

    def delete_employee(self, employee_id: EmployeeId) -> None:
        with self._lock.write():
            if not self._records.delete(employee_id):
                log.debug("delete of employee %d: not found", employee_id)
                raise RecordNotFound(employee_id, operation="delete")
        log.debug("deleted employee %d", employee_id)

    def list_employees(self, page: int, limit: int) -> tuple[list[Employee], int]:
        """One page of employees in creation order, plus the overall total.

        page is 1-based; page <= 0 is treated as 1. limit <= 0 means
        "everything from the offset on". An offset past the end is not
        an error: it yields an empty page with the real total.
        """
        with self._lock.read():
            total = self._records.size()
            if page <= 0:
                page = 1
            if limit <= 0:
                limit = total
            offset = (page - 1) * limit
            if offset >= total:
                return [], total

            window = self._records.keys()[offset:offset + limit]
            employees = [self._records.get(eid).copy() for eid in window]
            return employees, total

    def count(self) -> int:
        with self._lock.read():
            return self._records.size()

    @property
    def next_id(self) -> EmployeeId:
        """The ID the next create will receive."""
        with self._lock.read():
            return self._next_id
