"""Concurrent workload against an EmployeeRepository, then invariant checks.

Each worker thread runs its own seeded RNG and performs a mix of:
  - 30% create
  - 35% get (random ID, may miss)
  - 15% update (random ID, may miss)
  - 10% delete (random ID, may miss)
  - 10% list (random page, limit in 0..20)

Misses are expected and counted; RecordNotFound is the only exception
the workload tolerates. Anything else propagates out of run_stress().

After the workers finish, verify() checks what must hold no matter how
the threads interleaved:
  - every created ID is unique and the IDs are exactly 1..creates
  - stored count == creates - successful deletes
  - a full listing returns IDs in strictly increasing order
    (creation order and ID order coincide)
  - list total always matches the listing length
"""
from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from staffstore_lite.domain.employee import EmployeeFields
from staffstore_lite.domain.errors import RecordNotFound
from staffstore_lite.repository.base import EmployeeRepository
from staffstore_lite.repository.memory import InMemoryEmployeeRepository

log = logging.getLogger(__name__)

_NAMES = ["Ada", "Grace", "Linus", "Barbara", "Ken", "Margaret", "Dennis", "Frances"]
_POSITIONS = ["Engineer", "Manager", "Analyst", "Designer", "Operator"]

_OPS = ("create", "get", "update", "delete", "list")
_WEIGHTS = (30, 35, 15, 10, 10)


@dataclass(slots=True)
class StressResult:
    threads: int
    operations: int
    elapsed_s: float
    counts: dict[str, int] = field(default_factory=dict)
    not_found: int = 0
    created_ids: list[int] = field(default_factory=list)
    deleted: int = 0
    violations: list[str] = field(default_factory=list)

    @property
    def ops_per_sec(self) -> float:
        return self.operations / self.elapsed_s if self.elapsed_s > 0 else 0.0

    @property
    def ok(self) -> bool:
        return not self.violations


def _random_fields(rng: random.Random) -> EmployeeFields:
    return EmployeeFields(
        name=f"{rng.choice(_NAMES)} {rng.randint(100, 999)}",
        position=rng.choice(_POSITIONS),
        salary=float(rng.randint(30_000, 200_000)),
    )


def run_stress(
    repo: EmployeeRepository | None = None,
    threads: int = 8,
    operations: int = 10_000,
    seed: int = 42,
) -> StressResult:
    """Run `operations` mixed calls spread over `threads` workers.

    Returns a StressResult with violations filled in by verify().
    """
    if threads <= 0:
        raise ValueError(f"threads must be positive, got {threads}")
    if operations < 0:
        raise ValueError(f"operations must be non-negative, got {operations}")
    repo = repo or InMemoryEmployeeRepository()
    per_thread = [operations // threads] * threads
    for i in range(operations % threads):
        per_thread[i] += 1

    lock = threading.Lock()
    counts = {op: 0 for op in _OPS}
    created_ids: list[int] = []
    totals = {"not_found": 0, "deleted": 0}
    max_id_hint = [1]

    def worker(worker_id: int, n_ops: int) -> None:
        rng = random.Random(seed + worker_id)
        local_counts = {op: 0 for op in _OPS}
        local_ids: list[int] = []
        local_missing = 0
        local_deleted = 0
        for _ in range(n_ops):
            op = rng.choices(_OPS, weights=_WEIGHTS)[0]
            local_counts[op] += 1
            target = rng.randint(1, max_id_hint[0])
            try:
                if op == "create":
                    employee = repo.create_employee(_random_fields(rng))
                    local_ids.append(employee.employee_id)
                    max_id_hint[0] = max(max_id_hint[0], employee.employee_id)
                elif op == "get":
                    repo.get_employee(target)
                elif op == "update":
                    repo.update_employee(target, _random_fields(rng))
                elif op == "delete":
                    repo.delete_employee(target)
                    local_deleted += 1
                else:
                    page_items, total = repo.list_employees(rng.randint(1, 5), rng.randint(0, 20))
                    if len(page_items) > total:
                        raise AssertionError("page longer than total")
            except RecordNotFound:
                local_missing += 1
        with lock:
            for op, n in local_counts.items():
                counts[op] += n
            created_ids.extend(local_ids)
            totals["not_found"] += local_missing
            totals["deleted"] += local_deleted

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(worker, i, n) for i, n in enumerate(per_thread)]
        for fut in futures:
            fut.result()  # re-raise anything unexpected
    elapsed = time.perf_counter() - start

    result = StressResult(
        threads=threads,
        operations=operations,
        elapsed_s=elapsed,
        counts=counts,
        not_found=totals["not_found"],
        created_ids=sorted(created_ids),
        deleted=totals["deleted"],
    )
    result.violations = verify(repo, result)
    log.info(
        "stress: %d ops on %d threads in %.3fs, %d violations",
        operations, threads, elapsed, len(result.violations),
    )
    return result


def verify(repo: EmployeeRepository, result: StressResult) -> list[str]:
    """Check post-run invariants. Returns human-readable violations (empty = OK)."""
    violations: list[str] = []
    ids = result.created_ids
    if len(set(ids)) != len(ids):
        violations.append("duplicate employee IDs were issued")
    if ids != list(range(1, len(ids) + 1)):
        violations.append("issued IDs are not exactly 1..N")

    everyone, total = repo.list_employees(1, 0)
    if total != len(everyone):
        violations.append(f"list total {total} != listed {len(everyone)}")
    expected = len(ids) - result.deleted
    if total != expected:
        violations.append(f"stored {total} records, expected {expected}")
    listed_ids = [e.employee_id for e in everyone]
    if any(a >= b for a, b in zip(listed_ids, listed_ids[1:])):
        violations.append("listing is not in creation order")
    return violations


def format_stress_report(result: StressResult) -> str:
    lines = [
        "=== staffstore-lite stress run ===",
        f"threads:      {result.threads}",
        f"operations:   {result.operations:,}",
        f"elapsed:      {result.elapsed_s:.3f}s ({result.ops_per_sec:,.0f} ops/s)",
    ]
    for op in _OPS:
        lines.append(f"  {op:<8} {result.counts.get(op, 0):>8,}")
    lines.append(f"not found:    {result.not_found:,}")
    lines.append(f"created:      {len(result.created_ids):,}")
    lines.append(f"deleted:      {result.deleted:,}")
    if result.ok:
        lines.append("invariants:   OK")
    else:
        lines.append("invariants:   FAILED")
        lines.extend(f"  - {v}" for v in result.violations)
    return "\n".join(lines)
