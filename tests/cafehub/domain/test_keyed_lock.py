"""Tests for KeyedLock — per-key mutual exclusion."""

import threading
import time

from cafehub.shared.locks import KeyedLock


class TestKeyedLock:
    def test_registry_empty_after_release(self):
        locks = KeyedLock()
        with locks.hold("cafe-1"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_same_key_is_exclusive(self):
        locks = KeyedLock()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("cafe-1"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(1)
                time.sleep(0.01)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []
        assert len(locks) == 0

    def test_read_modify_write_is_not_lost(self):
        locks = KeyedLock()
        counter = {"value": 0}

        def increment():
            for _ in range(50):
                with locks.hold("cafe-1"):
                    current = counter["value"]
                    time.sleep(0)
                    counter["value"] = current + 1

        threads = [threading.Thread(target=increment) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter["value"] == 200

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        entered = threading.Event()

        def other_key():
            with locks.hold("cafe-2"):
                entered.set()

        with locks.hold("cafe-1"):
            t = threading.Thread(target=other_key)
            t.start()
            assert entered.wait(timeout=1)
            t.join()

    def test_released_on_exception(self):
        locks = KeyedLock()
        try:
            with locks.hold("cafe-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0
