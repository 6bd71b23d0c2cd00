# priority_queue.py
from __future__ import annotations

import operator
from heapq import heappush, heappop
from itertools import count
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Before = Callable[[T, T], bool]


class _Entry(Generic[T]):
    """Heap slot: the value, its insertion number, and the ordering predicate."""
    __slots__ = ("value", "seq", "before")

    def __init__(self, value: T, seq: int, before: Before) -> None:
        self.value = value
        self.seq = seq
        self.before = before

    def __lt__(self, other: "_Entry[T]") -> bool:
        if self.before(self.value, other.value):
            return True
        if self.before(other.value, self.value):
            return False
        # equal priority: first in, first out
        return self.seq < other.seq


class PriorityQueue(Generic[T]):
    """
    Binary heap ordered by a caller-supplied predicate before(a, b).

    before(a, b) must be a strict ordering: True when a has to come out
    before b. The default (a < b) gives a min-heap; pass
    lambda a, b: a > b for a max-heap.

    Elements that are equal under before() pop in insertion order.
    """

    def __init__(self, before: Before = operator.lt) -> None:
        self._before = before
        self._heap: List[_Entry[T]] = []
        self._counter = count()

    def push(self, *values: T) -> int:
        for v in values:
            heappush(self._heap, _Entry(v, next(self._counter), self._before))
        return len(self._heap)

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        return heappop(self._heap).value

    def peek(self) -> T:
        if not self._heap:
            raise IndexError("peek into an empty priority queue")
        return self._heap[0].value

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
