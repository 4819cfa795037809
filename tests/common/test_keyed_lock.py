import threading
import time

from school_attendance.common.locks import KeyedLock


def test_lock_is_dropped_when_idle():
    locks = KeyedLock()
    with locks.hold(("student", 1, "2026-03-02")):
        assert len(locks) == 1
    assert len(locks) == 0


def test_same_key_is_serialized():
    locks = KeyedLock()
    inside = []
    overlaps = []

    def work():
        with locks.hold("k"):
            if inside:
                overlaps.append(True)
            inside.append(1)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=work) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    assert len(locks) == 0


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    entered = threading.Event()

    def other():
        with locks.hold("b"):
            entered.set()

    with locks.hold("a"):
        t = threading.Thread(target=other)
        t.start()
        assert entered.wait(timeout=1)
        t.join()
