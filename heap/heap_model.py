import logging
from typing import Any, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class HeapTrace(NamedTuple):
    """
    Result of a heap mutation. ``path`` lists the indices visited and
    ``swapped`` the index pairs exchanged, in order, for step playback.
    ``value`` is the removed root, or None for inserts and empty removes.
    """

    value: Optional[Any]
    path: List[int]
    swapped: List[Tuple[int, int]]

    @property
    def has_value(self) -> bool:
        return self.value is not None


class HeapModel:
    """Array-backed binary heap; parent of i is (i - 1) // 2, children 2i + 1 and 2i + 2."""

    kind = ""

    def __init__(self):
        self._data: List = []

    @property
    def length(self) -> int:
        return len(self._data)

    def __len__(self):
        return len(self._data)

    def clear(self):
        self._data = []

    def create_from_iterable(self, values):
        self.clear()
        for value in values:
            self.insert(value)

    def to_array(self) -> List:
        return list(self._data)

    def snapshot(self) -> List:
        return self.to_array()

    def peek(self) -> Optional[Any]:
        return self._data[0] if self._data else None

    def converted(self, kind: str) -> "HeapModel":
        """New heap of ``kind`` holding the current values, inserted in array order."""
        heap = create_heap(kind)
        for value in self._data:
            heap.insert(value)
        return heap

    def insert(self, value) -> HeapTrace:
        path: List[int] = []
        swaps: List[Tuple[int, int]] = []
        self._data.append(value)
        index = len(self._data) - 1
        path.append(index)

        while index > 0:
            parent = (index - 1) // 2
            path.append(parent)
            if not self._outranks(self._data[index], self._data[parent]):
                break
            self._swap(index, parent)
            swaps.append((index, parent))
            index = parent

        logger.debug("%s-heap insert %r: %d swaps", self.kind, value, len(swaps))
        return HeapTrace(None, path, swaps)

    def remove(self) -> HeapTrace:
        path: List[int] = []
        swaps: List[Tuple[int, int]] = []
        if not self._data:
            return HeapTrace(None, path, swaps)

        top = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            index = 0
            path.append(index)
            size = len(self._data)
            while True:
                best = index
                for child in (2 * index + 1, 2 * index + 2):
                    if child < size and self._outranks(self._data[child], self._data[best]):
                        best = child
                if best == index:
                    break
                path.append(best)
                self._swap(index, best)
                swaps.append((index, best))
                index = best

        logger.debug("%s-heap remove %r: %d swaps", self.kind, top, len(swaps))
        return HeapTrace(top, path, swaps)

    def _outranks(self, a, b) -> bool:
        """True when ``a`` belongs above ``b``."""
        raise NotImplementedError

    def _swap(self, i: int, j: int):
        self._data[i], self._data[j] = self._data[j], self._data[i]


class MinHeapModel(HeapModel):
    kind = "min"

    def _outranks(self, a, b) -> bool:
        return a < b


class MaxHeapModel(HeapModel):
    kind = "max"

    def _outranks(self, a, b) -> bool:
        return a > b


def create_heap(kind: str) -> HeapModel:
    if kind == "min":
        return MinHeapModel()
    if kind == "max":
        return MaxHeapModel()
    raise ValueError(f"unknown heap kind: {kind!r}")
