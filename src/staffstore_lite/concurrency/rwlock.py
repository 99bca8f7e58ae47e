"""Shared/exclusive access guard for the in-memory repository.

The standard library ships threading.Lock and RLock but no reader/writer
lock, so we build one on a Condition:

    guard = ReadWriteLock()

    with guard.read():
        record = records.get(employee_id)    # many threads at once

    with guard.write():
        records.set(employee_id, record)     # one thread, nobody reading

Writer preference: as soon as a writer queues up, new readers wait.
Under a list-heavy workload a steady trickle of readers would
otherwise keep creates and deletes waiting forever.

Not reentrant. A thread holding read() must not ask for write() (or
read() again while a writer is queued); it will deadlock on itself.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Many readers OR one writer, with writers served first."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._active_readers = 0
        self._waiting_writers = 0
        self._writing = False

    def acquire_read(self) -> None:
        with self._cond:
            while self._writing or self._waiting_writers:
                self._cond.wait()
            self._active_readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._active_readers <= 0:
                raise RuntimeError("release_read() without a matching acquire_read()")
            self._active_readers -= 1
            if self._active_readers == 0:
                # Only writers wait on an idle reader count.
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writing or self._active_readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writing = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writing:
                raise RuntimeError("release_write() without a matching acquire_write()")
            self._writing = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold shared access for the body of the with-block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold exclusive access for the body of the with-block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Threads currently holding shared access (diagnostics only)."""
        with self._cond:
            return self._active_readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writing
