from __future__ import annotations

import heapq
import itertools

from dinf.models.dir_info import FileRecord


class BoundedTopK:
    """Keep the *k* largest records offered so far in O(k) memory.

    The heap root is the entry that would be evicted next: the smallest size
    and, among equal sizes, the most recently offered one. Equal sizes are
    therefore reported in first-seen order.
    """

    __slots__ = ("_k", "_heap", "_seq")

    def __init__(self, k: int) -> None:
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        self._k = k
        self._heap: list[tuple[int, int, FileRecord]] = []
        self._seq = itertools.count()

    @property
    def min_size(self) -> int:
        """Size of the k-th entry, or 0 while fewer than k are held."""
        if self._k == 0 or len(self._heap) < self._k:
            return 0
        return self._heap[0][0]

    def offer(self, record: FileRecord) -> bool:
        """Return True when *record* entered the top set."""
        if self._k == 0:
            return False
        item = (record.size, -next(self._seq), record)
        if len(self._heap) < self._k:
            heapq.heappush(self._heap, item)
            return True
        if record.size > self._heap[0][0]:
            heapq.heapreplace(self._heap, item)
            return True
        return False

    def items(self) -> list[FileRecord]:
        ordered = sorted(self._heap, key=lambda item: (-item[0], -item[1]))
        return [record for _, _, record in ordered]

    def __len__(self) -> int:
        return len(self._heap)
