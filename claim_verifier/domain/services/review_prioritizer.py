"""Recency ordering of fact-check reviews."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")

# Undated reviews are treated as this old
UNDATED_REVIEW_DATE = datetime(2020, 1, 1, tzinfo=timezone.utc)


def days_since(review_date: Optional[datetime], now: datetime) -> int:
    """Whole days elapsed between a review date and ``now``.

    Naive datetimes are taken to be UTC.
    """
    review_date = review_date or UNDATED_REVIEW_DATE
    if review_date.tzinfo is None:
        review_date = review_date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - review_date).days


@dataclass
class PriorityNode(Generic[T]):
    """Heap node; lower priority values are extracted first."""

    payload: T
    priority: int


class ReviewPrioritizer(Generic[T]):
    """Binary min-heap stored in a list.

    The node at index ``i`` has its parent at ``(i - 1) // 2`` and its
    children at ``2i + 1`` and ``2i + 2``. Every node's priority is less than
    or equal to its children's.
    """

    def __init__(self):
        self._heap: List[PriorityNode[T]] = []

    def insert(self, payload: T, priority: int) -> None:
        """Add a payload with the given priority."""
        self._heap.append(PriorityNode(payload, priority))
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> Optional[T]:
        """Remove and return the payload with the lowest priority.

        Returns:
            The payload, or None if the heap is empty
        """
        if not self._heap:
            return None

        last = len(self._heap) - 1
        self._swap(0, last)
        node = self._heap.pop()
        if self._heap:
            self._sift_down(0)
        return node.payload

    def peek_priority(self) -> Optional[int]:
        """Priority of the next payload to be extracted."""
        return self._heap[0].priority if self._heap else None

    def drain(self) -> Iterator[T]:
        """Extract payloads in priority order until the heap is empty."""
        while self._heap:
            yield self.extract_min()

    def size(self) -> int:
        """Number of payloads held."""
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._heap[parent].priority <= self._heap[index].priority:
                break
            self._swap(parent, index)
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._heap)
        while True:
            left, right = 2 * index + 1, 2 * index + 2
            smallest = index
            if left < size and self._heap[left].priority < self._heap[smallest].priority:
                smallest = left
            if right < size and self._heap[right].priority < self._heap[smallest].priority:
                smallest = right
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest
