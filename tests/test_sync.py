import threading

import pytest

from turboxsl.sync import ConcurrentDictionary, SharedCounter


def test_counter_starts_at_one():
    counter = SharedCounter()
    assert counter.value == 1
    assert counter.wait(timeout=0.01) is False


def test_counter_released_at_zero():
    counter = SharedCounter()
    counter.decrease()
    assert counter.value == 0
    assert counter.wait(timeout=1) is True


def test_increase_then_decrease():
    counter = SharedCounter()
    counter.increase()
    counter.decrease()
    assert counter.wait(timeout=0.01) is False
    counter.decrease()
    assert counter.wait(timeout=1) is True


def test_decrease_below_zero_raises():
    counter = SharedCounter()
    counter.decrease()
    with pytest.raises(ValueError):
        counter.decrease()


def test_wait_wakes_on_other_threads():
    counter = SharedCounter()
    workers = 8
    for _ in range(workers):
        counter.increase()
    threads = [threading.Thread(target=counter.decrease) for _ in range(workers + 1)]
    for thread in threads:
        thread.start()
    assert counter.wait(timeout=5) is True
    for thread in threads:
        thread.join()
    assert counter.value == 0


def test_dictionary_find_missing():
    assert ConcurrentDictionary().find("nope") is None


def test_dictionary_add_and_find():
    table = ConcurrentDictionary()
    assert table.add("k", "v") is True
    assert table.find("k") == "v"
    assert "k" in table


def test_dictionary_add_existing_keeps_value():
    table = ConcurrentDictionary()
    table.add("k", "first")
    assert table.add("k", "second") is False
    assert table.find("k") == "first"
    assert len(table) == 1


def test_dictionary_concurrent_adds():
    table = ConcurrentDictionary()
    keys = [f"key{i}" for i in range(200)]

    def worker(chunk):
        for key in chunk:
            table.add(key, key.upper())

    threads = [threading.Thread(target=worker, args=(keys[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(table) == len(keys)
    assert all(table.find(key) == key.upper() for key in keys)