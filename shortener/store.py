"""In-memory mapping store for URL shortener."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple


class ReadWriteLock:
    """Reader/writer lock built on a condition variable.

    Any number of readers may hold the lock at once; a writer holds it
    alone. Once a writer is waiting, new readers queue behind it.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class MappingStore:
    """Process-local table from short code to target URL.

    Reads (``exists``, ``get``) share the lock; ``put`` takes it
    exclusively. The store does not enforce key uniqueness: ``put`` on an
    existing code overwrites it, so callers check ``exists`` first.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def exists(self, code: str) -> bool:
        """Check if a short code is present.

        Args:
            code: The short code to check

        Returns:
            True if a mapping exists
        """
        with self._lock.read_locked():
            return code in self._data

    def get(self, code: str) -> Tuple[Optional[str], bool]:
        """Look up the URL stored for a short code.

        Args:
            code: The short code to look up

        Returns:
            ``(url, True)`` if found, ``(None, False)`` otherwise
        """
        with self._lock.read_locked():
            url = self._data.get(code)
        return url, url is not None

    def put(self, code: str, url: str) -> None:
        """Store a mapping, replacing any previous URL for the code.

        Args:
            code: The short code
            url: The target URL
        """
        with self._lock.write_locked():
            self._data[code] = url

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._data)
