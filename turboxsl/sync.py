"""Thread-safe helpers: a counter to wait on and an insert-only dictionary."""

from __future__ import annotations

import threading
from typing import Any, Hashable, Optional


class SharedCounter:
    """A counter that starts at one; waiters wake when it drops to zero."""

    def __init__(self) -> None:
        self._value = 1
        self._condition = threading.Condition()

    @property
    def value(self) -> int:
        with self._condition:
            return self._value

    def increase(self) -> None:
        """Add one to the counter."""
        with self._condition:
            self._value += 1

    def decrease(self) -> None:
        """Subtract one, waking every waiter once zero is reached."""
        with self._condition:
            if self._value == 0:
                raise ValueError("counter is already zero")
            self._value -= 1
            if self._value == 0:
                self._condition.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the counter is zero; return False on timeout."""
        with self._condition:
            return self._condition.wait_for(lambda: self._value == 0, timeout)


class ConcurrentDictionary:
    """A dictionary with locked insertion and lock-free lookup.

    Adding a key that is already present fails and keeps the old value.
    """

    def __init__(self) -> None:
        self._data: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def find(self, key: Hashable) -> Any:
        """Return the value stored under ``key``, or ``None``."""
        return self._data.get(key)

    def add(self, key: Hashable, value: Any) -> bool:
        """Insert ``value`` under ``key``; return False if the key exists."""
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)