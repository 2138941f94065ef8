"""In-memory lists keyed by name, with push, pop, range and removal operations."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List as _List, Optional

from ..errors import NutsError

MIN_INT = -(1 << 63)
MAX_INT = (1 << 63) - 1


class ListError(NutsError):
    """Base class of list errors."""

    default_message = "list error"


class ListNotFoundError(ListError):
    """The list is not found, or holds no element to return."""

    default_message = "the list not found"


class IndexOutOfRangeError(ListError):
    """An index lies outside the list."""

    default_message = "index out of range"


class CountError(ListError):
    """A removal count is larger than the list."""

    default_message = "err count"


class MinIntError(ListError):
    """A removal count equals the smallest 64-bit integer."""

    default_message = "err MinInt"


def _as_bytes(value: Optional[bytes]) -> bytes:
    return b"" if value is None else bytes(value)


def _valid_indexes(size: int, indexes: Iterable[int]) -> Iterator[int]:
    """Indexes that take part in a removal: non-negative, not repeated, in range."""
    previous = -1
    for index in indexes:
        if index < 0 or index == previous:
            continue
        if index >= size:
            break
        yield index
        previous = index


class List:
    """Lists of byte strings stored under string keys."""

    def __init__(self) -> None:
        self.items: Dict[str, _List[bytes]] = {}

    def _get(self, key: str) -> _List[bytes]:
        try:
            return self.items[key]
        except KeyError:
            raise ListNotFoundError() from None

    def rpop(self, key: str) -> bytes:
        """Remove and return the last element of the list at ``key``."""
        item = self.rpeek(key)
        self.items[key] = self.items[key][:-1]
        return item

    def rpeek(self, key: str) -> bytes:
        """Return the last element of the list at ``key``."""
        items = self._get(key)
        if not items:
            raise ListNotFoundError()
        return items[-1]

    def rpush(self, key: str, *args: bytes) -> int:
        """Append values to the tail of the list; return the new size."""
        self.items[key] = self.items.get(key, []) + [bytes(v) for v in args]
        return len(self.items[key])

    def lpush(self, key: str, *args: bytes) -> int:
        """Insert values at the head of the list, last value first; return the new size."""
        head = [bytes(v) for v in reversed(args)]
        self.items[key] = head + self.items.get(key, [])
        return len(self.items[key])

    def lpop(self, key: str) -> bytes:
        """Remove and return the first element of the list at ``key``."""
        item = self.lpeek(key)
        self.items[key] = self.items[key][1:]
        return item

    def lpeek(self, key: str) -> bytes:
        """Return the first element of the list at ``key``."""
        items = self._get(key)
        if not items:
            raise ListNotFoundError()
        return items[0]

    def size(self, key: str) -> int:
        """Number of elements in the list at ``key``."""
        return len(self._get(key))

    def lrange(self, key: str, start: int, end: int) -> _List[bytes]:
        """Elements between ``start`` and ``end`` inclusive; negative indexes count from the end."""
        items = self._get(key)
        size = len(items)
        if size == 0:
            return []
        if start >= 0 and end < 0:
            end += size
        if start < 0 and end > 0:
            start += size
        if start < 0 and end < 0:
            start, end = start + size, end + size
        if end >= size:
            end = size - 1
        if start > end:
            raise ListError("start or end error")
        if start < 0:
            raise IndexOutOfRangeError()
        return items[start : end + 1]

    def lrem(self, key: str, count: int, value: bytes) -> int:
        """Remove up to ``count`` elements equal to ``value``.

        A positive count removes from head to tail, a negative one from tail
        to head, and zero removes every match. Returns the number removed.
        """
        items = self._get(key)
        value = _as_bytes(value)
        needed = self.lrem_num(key, count, value)
        if needed == 0:
            return 0
        if count == 0:
            count = needed
        limit = abs(count)
        ordered = items if count > 0 else list(reversed(items))
        kept: _List[bytes] = []
        removed = 0
        for item in ordered:
            if removed < limit and item == value:
                removed += 1
            else:
                kept.append(item)
        if count < 0:
            kept.reverse()
        self.items[key] = kept
        return removed

    def lrem_num(self, key: str, count: int, value: bytes) -> int:
        """Number of elements ``lrem`` would remove for these arguments."""
        items = self._get(key)
        value = _as_bytes(value)
        if count > len(items):
            raise CountError()
        if count < 0:
            if count <= MIN_INT:
                raise MinIntError()
            count = -count
        removed = 0
        for item in items:
            if count > 0 and removed == count:
                break
            if item == value:
                removed += 1
        return removed

    def lset(self, key: str, index: int, value: bytes) -> None:
        """Set the element at ``index`` to ``value``."""
        items = self._get(key)
        if index < 0 or index >= len(items):
            raise IndexOutOfRangeError()
        items[index] = bytes(value)

    def ltrim(self, key: str, start: int, end: int) -> None:
        """Keep only the elements between ``start`` and ``end`` inclusive."""
        self._get(key)
        self.items[key] = list(self.lrange(key, start, end))

    def lrem_by_index(self, key: str, indexes: Iterable[int]) -> int:
        """Remove the elements at the given ascending indexes; return how many went."""
        items = self._get(key)
        drop = set(_valid_indexes(len(items), indexes))
        if not drop:
            return 0
        self.items[key] = [item for i, item in enumerate(items) if i not in drop]
        return len(drop)

    def lrem_by_index_pre_check(self, key: str, indexes: Iterable[int]) -> int:
        """Count the indexes that ``lrem_by_index`` would act on."""
        items = self._get(key)
        return sum(1 for _ in _valid_indexes(len(items), indexes))

    def is_empty(self, key: str) -> bool:
        """True if the list at ``key`` exists and holds no element."""
        return self.size(key) == 0