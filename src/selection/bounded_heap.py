"""
Bounded top-K selection with a fixed-capacity binary min-heap.

`BoundedMinHeap(k, comparator)` consumes a stream and retains the k elements
that compare greatest. Its root is the smallest retained element, which is the
k-th largest of the stream once at least k elements have been inserted. Memory
stays O(k) and each insertion costs O(log k), so the whole result set never
needs to be sorted or held at once.

Usage:
    heap = BoundedMinHeap(3, compare_updated_at)
    for pet in pets:
        heap.insert(pet)
    if heap.is_full:
        third_most_recent = heap.peek()

Ties: when two elements compare equal, the one inserted later ranks lower and
is evicted first. The retained set therefore matches the first k elements of a
stable descending sort of the stream.

The heap is not thread-safe; feed it from a single task.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

from src.domain.models import Pet

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class BoundedMinHeap(Generic[T]):
    """
    Min-heap holding at most `capacity` elements.

    Parameters
    ----------
    capacity : int
        Number of greatest elements to retain (K). Must be >= 1.
    comparator : Callable[[T, T], int]
        Three-way comparison: negative if a < b, zero if equal, positive if a > b.
    """

    def __init__(self, capacity: int, comparator: Comparator) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._comparator = comparator
        # (insertion sequence, element); the sequence breaks comparator ties.
        self._heap: List[Tuple[int, T]] = []
        self._counter = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        """True once `capacity` elements are retained, i.e. peek() is the k-th largest."""
        return len(self._heap) >= self._capacity

    def __len__(self) -> int:
        return len(self._heap)

    def _less(self, i: int, j: int) -> bool:
        seq_i, item_i = self._heap[i]
        seq_j, item_j = self._heap[j]
        order = self._comparator(item_i, item_j)
        if order != 0:
            return order < 0
        return seq_i > seq_j

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(index, parent):
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest

    def _pop_root(self) -> T:
        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return root[1]

    def insert(self, item: T) -> None:
        """Add `item`; when over capacity, evict the current minimum."""
        self._heap.append((self._counter, item))
        self._counter += 1
        self._sift_up(len(self._heap) - 1)
        if len(self._heap) > self._capacity:
            self._pop_root()

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.insert(item)

    def peek(self) -> Optional[T]:
        """Smallest retained element, or None when empty."""
        return self._heap[0][1] if self._heap else None

    def items(self) -> List[T]:
        """Retained elements, greatest first."""
        drained: BoundedMinHeap[T] = BoundedMinHeap(self._capacity, self._comparator)
        drained._heap = list(self._heap)
        ascending: List[T] = []
        while drained._heap:
            ascending.append(drained._pop_root())
        return ascending[::-1]


def compare_updated_at(a: Pet, b: Pet) -> int:
    """Order pets by last update time."""
    if a.updated_at < b.updated_at:
        return -1
    if a.updated_at > b.updated_at:
        return 1
    return 0


def nth_largest(items: Iterable[T], n: int, comparator: Comparator) -> Optional[T]:
    """
    Return the n-th largest element of `items`, or None if fewer than n were seen.
    """
    heap: BoundedMinHeap[T] = BoundedMinHeap(n, comparator)
    heap.extend(items)
    return heap.peek() if heap.is_full else None


__all__ = ["BoundedMinHeap", "Comparator", "compare_updated_at", "nth_largest"]
