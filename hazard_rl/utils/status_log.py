"""Bounded log of human-readable status messages."""

from collections import deque
from typing import Iterator, Tuple


class StatusLog:
    """Most-recent-first message log with a fixed capacity."""

    def __init__(self, capacity: int = 4, initial_message: str = ""):
        if capacity <= 0:
            raise ValueError(f"Log capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._messages: deque = deque(maxlen=capacity)
        if initial_message:
            self.add(initial_message)

    def add(self, message: str) -> None:
        self._messages.appendleft(message)

    def clear(self, message: str = "") -> None:
        """Drop every message, optionally leaving a fresh one."""
        self._messages.clear()
        if message:
            self.add(message)

    @property
    def latest(self) -> str:
        return self._messages[0] if self._messages else ""

    def messages(self) -> Tuple[str, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
