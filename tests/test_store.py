"""Tests for the in-memory mapping store."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from shortener.store import MappingStore, ReadWriteLock


class TestMappingStore:
    """Test mapping store operations."""

    def test_put_then_get(self, store):
        store.put("abc123", "https://example.com")

        assert store.get("abc123") == ("https://example.com", True)
        assert store.exists("abc123")

    def test_missing_code(self, store):
        """A code never put is not found."""
        assert store.get("nothere") == (None, False)
        assert not store.exists("nothere")

    def test_put_overwrites(self, store):
        """The store keeps the URL last written for a code."""
        store.put("abc123", "https://example.com/one")
        store.put("abc123", "https://example.com/two")

        assert store.get("abc123") == ("https://example.com/two", True)
        assert len(store) == 1

    def test_codes_are_case_sensitive(self, store):
        store.put("abcDEF", "https://example.com/upper")

        assert not store.exists("abcdef")
        assert store.get("ABCDEF") == (None, False)

    def test_len(self, store):
        assert len(store) == 0
        store.put("aaaaaa", "https://example.com/a")
        store.put("bbbbbb", "https://example.com/b")
        assert len(store) == 2

    def test_stores_are_isolated(self):
        first = MappingStore()
        second = MappingStore()

        first.put("abc123", "https://example.com")

        assert not second.exists("abc123")

    def test_concurrent_puts(self, store):
        """Concurrent writes with different codes are all retrievable."""
        count = 500

        def write(i):
            store.put(f"code{i:04d}", f"https://example.com/{i}")

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(write, range(count)))

        assert len(store) == count
        for i in range(count):
            assert store.get(f"code{i:04d}") == (f"https://example.com/{i}", True)

    def test_concurrent_reads_and_writes(self, store):
        """Readers running alongside writers never see a torn mapping."""
        store.put("stable", "https://example.com/stable")
        errors = []

        def read():
            for _ in range(200):
                url, found = store.get("stable")
                if not found or url != "https://example.com/stable":
                    errors.append(url)

        def write(i):
            store.put(f"w{i:05d}", f"https://example.com/{i}")

        with ThreadPoolExecutor(max_workers=16) as pool:
            readers = [pool.submit(read) for _ in range(8)]
            writers = [pool.submit(write, i) for i in range(1000)]
            for future in readers + writers:
                future.result()

        assert errors == []
        assert len(store) == 1001


class TestReadWriteLock:
    """Test reader/writer lock semantics."""

    def test_readers_share_lock(self):
        """Two readers can hold the lock at the same time."""
        lock = ReadWriteLock()
        barrier = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read_locked():
                # Both threads must be inside the read section to pass
                barrier.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not barrier.broken

    def test_writer_waits_for_reader(self):
        """A writer cannot enter while a reader holds the lock."""
        lock = ReadWriteLock()
        writer_entered = threading.Event()

        def writer():
            with lock.write_locked():
                writer_entered.set()

        lock.acquire_read()
        thread = threading.Thread(target=writer)
        thread.start()

        assert not writer_entered.wait(timeout=0.2)

        lock.release_read()
        assert writer_entered.wait(timeout=5)
        thread.join(timeout=5)

    def test_reader_waits_for_writer(self):
        """A reader cannot enter while a writer holds the lock."""
        lock = ReadWriteLock()
        reader_entered = threading.Event()

        def reader():
            with lock.read_locked():
                reader_entered.set()

        lock.acquire_write()
        thread = threading.Thread(target=reader)
        thread.start()

        assert not reader_entered.wait(timeout=0.2)

        lock.release_write()
        assert reader_entered.wait(timeout=5)
        thread.join(timeout=5)

    def test_waiting_writer_blocks_new_readers(self):
        """Once a writer is queued, new readers wait behind it."""
        lock = ReadWriteLock()
        order = []
        writer_started = threading.Event()

        def writer():
            writer_started.set()
            with lock.write_locked():
                order.append("writer")

        def late_reader():
            with lock.read_locked():
                order.append("reader")

        lock.acquire_read()
        w = threading.Thread(target=writer)
        w.start()
        writer_started.wait(timeout=5)
        # Give the writer time to register as waiting
        for _ in range(100):
            if lock._writers_waiting:
                break
            time.sleep(0.01)

        r = threading.Thread(target=late_reader)
        r.start()
        time.sleep(0.1)
        assert order == []

        lock.release_read()
        w.join(timeout=5)
        r.join(timeout=5)

        assert order == ["writer", "reader"]

    def test_lock_released_on_error(self):
        lock = ReadWriteLock()

        with pytest.raises(RuntimeError):
            with lock.write_locked():
                raise RuntimeError("boom")

        # Lock is free again
        with lock.read_locked():
            pass
        with lock.write_locked():
            pass
