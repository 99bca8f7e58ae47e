"""Synchronization primitives for the record store.

  - ReadWriteLock: multiple readers OR one writer, writer preference
"""
from staffstore_lite.concurrency.rwlock import ReadWriteLock

__all__ = ["ReadWriteLock"]
