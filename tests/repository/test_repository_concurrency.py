"""Tests for InMemoryEmployeeRepository under concurrent access.

Covers: unique IDs from concurrent creates, readers alongside writers,
concurrent updates to the same record, and concurrent deletes of the
same record (exactly one wins).
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait

from staffstore_lite.datatypes.ordered_map import OrderedMap
from staffstore_lite.domain.errors import RecordNotFound

from tests.repository.conftest import make_fields


def test_concurrent_creates_issue_unique_ids(repo):
    """16 threads x 250 creates: IDs are exactly 1..4000."""
    n_threads = 16
    per_thread = 250

    def creator(tid):
        return [
            repo.create_employee(make_fields(name=f"t{tid}-{i}")).employee_id
            for i in range(per_thread)
        ]

    with ThreadPoolExecutor(max_workers=n_threads) as pool:
        futs = [pool.submit(creator, tid) for tid in range(n_threads)]
        wait(futs)

    ids = sorted(i for f in futs for i in f.result())
    assert ids == list(range(1, n_threads * per_thread + 1))
    assert repo.count() == n_threads * per_thread
    assert repo.next_id == n_threads * per_thread + 1


def test_listing_order_matches_ids_under_concurrency(repo):
    """Creation order == ID order even when creates race."""
    def creator(tid):
        for i in range(100):
            repo.create_employee(make_fields(name=f"t{tid}-{i}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        wait([pool.submit(creator, t) for t in range(8)])

    listed, total = repo.list_employees(1, 0)
    ids = [e.employee_id for e in listed]
    assert ids == sorted(ids)
    assert total == 800


def test_readers_and_writers_together(repo):
    """8 listers + 8 creators: every page is internally consistent."""
    for i in range(100):
        repo.create_employee(make_fields(name=f"seed-{i}"))

    errors: list[str] = []
    stop = threading.Event()

    def lister():
        while not stop.is_set():
            page, total = repo.list_employees(1, 0)
            if len(page) != total:
                errors.append(f"page {len(page)} != total {total}")
            ids = [e.employee_id for e in page]
            if ids != sorted(ids):
                errors.append("unordered page")

    def creator():
        for i in range(200):
            repo.create_employee(make_fields(name=f"new-{i}"))

    listers = [threading.Thread(target=lister) for _ in range(8)]
    creators = [threading.Thread(target=creator) for _ in range(8)]
    for t in listers + creators:
        t.start()
    for t in creators:
        t.join(timeout=10.0)
    stop.set()
    for t in listers:
        t.join(timeout=10.0)

    assert errors == []
    assert repo.count() == 100 + 8 * 200


def test_concurrent_updates_never_tear_records(repo):
    """Each writer writes a self-consistent triple; readers never see a mix."""
    repo.create_employee(make_fields(name="w0-name", position="w0-pos", salary=0.0))
    errors: list[str] = []
    stop = threading.Event()

    def writer(wid):
        for _ in range(300):
            repo.update_employee(
                1, make_fields(name=f"w{wid}-name", position=f"w{wid}-pos", salary=float(wid))
            )

    def reader():
        while not stop.is_set():
            emp = repo.get_employee(1)
            wid = emp.name.split("-")[0]
            if emp.position != f"{wid}-pos" or emp.salary != float(wid[1:]):
                errors.append(f"torn record: {emp}")

    readers = [threading.Thread(target=reader) for _ in range(4)]
    writers = [threading.Thread(target=writer, args=(w,)) for w in range(1, 5)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join(timeout=10.0)
    stop.set()
    for t in readers:
        t.join(timeout=10.0)

    assert errors == []
    assert repo.count() == 1


def test_concurrent_deletes_exactly_one_wins(repo):
    repo.create_employee(make_fields())
    barrier = threading.Barrier(10)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def deleter():
        barrier.wait(timeout=5.0)
        try:
            repo.delete_employee(1)
            result = "deleted"
        except RecordNotFound:
            result = "missing"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=deleter) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)

    assert outcomes.count("deleted") == 1
    assert outcomes.count("missing") == 9
    assert repo.count() == 0


class _GatedMap(OrderedMap):
    """OrderedMap whose keys() parks the caller until the gate opens.

    Only list_employees() calls keys(), so a lister blocks while still
    holding the repository's read lock.
    """

    __slots__ = ("entered", "gate")

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.gate = threading.Event()

    def keys(self):
        self.entered.set()
        self.gate.wait(timeout=5.0)
        return super().keys()


def test_reads_share_and_writes_exclude_at_repository_level(repo):
    repo.create_employee(make_fields(name="first"))
    gated = _GatedMap()
    for key, value in repo._records.items():
        gated.set(key, value)
    repo._records = gated

    listed: list = []
    got: list = []
    created = threading.Event()

    def lister():
        listed.append(repo.list_employees(1, 0))

    def getter():
        got.append(repo.get_employee(1))

    def creator():
        repo.create_employee(make_fields(name="second"))
        created.set()

    lt = threading.Thread(target=lister)
    lt.start()
    assert gated.entered.wait(timeout=5.0), "lister never reached the store"

    # A second reader gets in while the first still holds the read side.
    gt = threading.Thread(target=getter)
    gt.start()
    gt.join(timeout=5.0)
    assert not gt.is_alive(), "get_employee blocked behind a concurrent list"
    assert got[0].name == "first"

    # A writer must wait for the lister to leave.
    ct = threading.Thread(target=creator)
    ct.start()
    assert not created.wait(timeout=0.2), "create_employee ran during a read"

    gated.gate.set()
    lt.join(timeout=5.0)
    assert created.wait(timeout=5.0)
    ct.join(timeout=5.0)

    employees, total = listed[0]
    assert [e.name for e in employees] == ["first"]
    assert total == 1
    assert repo.count() == 2
