"""Dijkstra frontier strategies: insert / pop-minimum priority queues.

``SortedListFrontier`` keeps a list ordered by binary insertion, which is
adequate for airway graphs of a few thousand nodes.  ``HeapFrontier`` is the
drop-in replacement for larger graphs.  Both pop equal-cost entries in
insertion order, so searches are deterministic whichever is used.
"""

from __future__ import annotations

import bisect
import heapq
from itertools import count
from typing import Callable, Protocol


class Frontier(Protocol):
    def push(self, cost: float, node: str) -> None: ...

    def pop(self) -> tuple[float, str]: ...

    def __len__(self) -> int: ...


FrontierFactory = Callable[[], Frontier]


class SortedListFrontier:
    """Cost-ordered list maintained with ``bisect.insort``."""

    def __init__(self) -> None:
        self._entries: list[tuple[float, int, str]] = []
        self._counter = count()

    def push(self, cost: float, node: str) -> None:
        bisect.insort(self._entries, (cost, next(self._counter), node))

    def pop(self) -> tuple[float, str]:
        cost, _, node = self._entries.pop(0)
        return cost, node

    def __len__(self) -> int:
        return len(self._entries)


class HeapFrontier:
    """Binary heap frontier (``heapq``)."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, str]] = []
        self._counter = count()

    def push(self, cost: float, node: str) -> None:
        heapq.heappush(self._heap, (cost, next(self._counter), node))

    def pop(self) -> tuple[float, str]:
        cost, _, node = heapq.heappop(self._heap)
        return cost, node

    def __len__(self) -> int:
        return len(self._heap)
