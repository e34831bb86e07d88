"""Input commands and the queue that carries them into the game loop."""

from __future__ import annotations

from collections import deque
from enum import Enum
import logging
from typing import Deque, Iterator, Optional, Tuple


LOGGER = logging.getLogger(__name__)

PRESS = "down"
RELEASE = "up"


class Command(str, Enum):
    """Abstract player actions a host key can be bound to."""

    ROTATE = "rotate"
    LEFT = "left"
    RIGHT = "right"
    ACCELERATE = "accelerate"


def input_name(key: str, pressed: bool) -> str:
    """Return the ``<key>_down`` / ``<key>_up`` name for a key event."""

    return f"{key}_{PRESS if pressed else RELEASE}"


def parse_input_name(name: str) -> Optional[Tuple[str, str]]:
    """Split ``name`` into ``(key, edge)``.

    Returns ``None`` when ``name`` does not end in ``_down`` or ``_up``.  The
    split happens on the last underscore so key names may contain
    underscores themselves.
    """

    key, sep, edge = name.rpartition("_")
    if not sep or edge not in (PRESS, RELEASE):
        return None
    return key, edge


class InputQueue:
    """Bounded FIFO of input names drained once per frame.

    When the queue is full the oldest entry is discarded.
    """

    def __init__(self, maxlen: int = 32) -> None:
        self._items: Deque[str] = deque(maxlen=maxlen)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def maxlen(self) -> int:
        return self._items.maxlen or 0

    def push(self, name: str) -> None:
        if len(self._items) == self._items.maxlen:
            LOGGER.debug("Input queue full, dropping %r", self._items[0])
        self._items.append(name)

    def drain(self) -> Iterator[str]:
        """Yield queued names in arrival order, removing them as they go."""

        while self._items:
            yield self._items.popleft()

    def clear(self) -> None:
        self._items.clear()


__all__ = ["Command", "InputQueue", "PRESS", "RELEASE", "input_name", "parse_input_name"]
