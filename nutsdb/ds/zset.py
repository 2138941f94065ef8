"""A sorted set of keyed values ordered by score, backed by a skip list."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

SKIPLIST_MAX_LEVEL = 32
SKIPLIST_P = 0.25

_NO_LIMIT = (1 << 31) - 1


class _Level:
    __slots__ = ("forward", "span")

    def __init__(self) -> None:
        self.forward: Optional[SortedSetNode] = None
        self.span = 0


class SortedSetNode:
    """A member of a sorted set: a unique key, its score and a value."""

    __slots__ = ("key", "value", "score", "backward", "level")

    def __init__(self, level: int, score: float, key: str, value: Optional[bytes]) -> None:
        self.key = key
        self.value = value
        self.score = float(score)
        self.backward: Optional[SortedSetNode] = None
        self.level = [_Level() for _ in range(level)]

    def __repr__(self) -> str:
        return "SortedSetNode(key=%r, score=%r, value=%r)" % (self.key, self.score, self.value)


@dataclass
class GetByScoreRangeOptions:
    """Options of a score range query.

    ``limit`` caps the number of nodes returned (0 means no cap);
    ``exclude_start`` and ``exclude_end`` make the interval open at that side.
    """

    limit: int = 0
    exclude_start: bool = False
    exclude_end: bool = False


def _random_level() -> int:
    level = 1
    while random.random() < SKIPLIST_P and level < SKIPLIST_MAX_LEVEL:
        level += 1
    return level


def _precedes(node: SortedSetNode, score: float, key: str) -> bool:
    return node.score < score or (node.score == score and node.key < key)


class SortedSet:
    """Members ordered by score, then by key, with O(log N) rank queries."""

    def __init__(self) -> None:
        self._header = SortedSetNode(SKIPLIST_MAX_LEVEL, 0, "", None)
        self._tail: Optional[SortedSetNode] = None
        self._length = 0
        self._level = 1
        self.nodes: Dict[str, SortedSetNode] = {}

    def __len__(self) -> int:
        return self._length

    def __contains__(self, key: str) -> bool:
        return key in self.nodes

    def __iter__(self) -> Iterator[SortedSetNode]:
        x = self._header.level[0].forward
        while x is not None:
            yield x
            x = x.level[0].forward

    def _insert_node(self, score: float, key: str, value: Optional[bytes]) -> SortedSetNode:
        update: List[SortedSetNode] = [self._header] * SKIPLIST_MAX_LEVEL
        rank = [0] * SKIPLIST_MAX_LEVEL

        x = self._header
        for i in reversed(range(self._level)):
            rank[i] = 0 if i == self._level - 1 else rank[i + 1]
            while (fwd := x.level[i].forward) is not None and _precedes(fwd, score, key):
                rank[i] += x.level[i].span
                x = fwd
            update[i] = x

        level = _random_level()
        if level > self._level:
            for i in range(self._level, level):
                rank[i] = 0
                update[i] = self._header
                update[i].level[i].span = self._length
            self._level = level

        x = SortedSetNode(level, score, key, value)
        for i in range(level):
            x.level[i].forward = update[i].level[i].forward
            update[i].level[i].forward = x
            x.level[i].span = update[i].level[i].span - (rank[0] - rank[i])
            update[i].level[i].span = (rank[0] - rank[i]) + 1

        for i in range(level, self._level):
            update[i].level[i].span += 1

        x.backward = None if update[0] is self._header else update[0]
        if x.level[0].forward is not None:
            x.level[0].forward.backward = x
        else:
            self._tail = x

        self._length += 1
        return x

    def _delete_node(self, x: SortedSetNode, update: List[SortedSetNode]) -> None:
        for i in range(self._level):
            if update[i].level[i].forward is x:
                update[i].level[i].span += x.level[i].span - 1
                update[i].level[i].forward = x.level[i].forward
            else:
                update[i].level[i].span -= 1
        if x.level[0].forward is not None:
            x.level[0].forward.backward = x.backward
        else:
            self._tail = x.backward
        while self._level > 1 and self._header.level[self._level - 1].forward is None:
            self._level -= 1
        self._length -= 1
        self.nodes.pop(x.key, None)

    def _delete(self, score: float, key: str) -> bool:
        update: List[SortedSetNode] = [self._header] * SKIPLIST_MAX_LEVEL
        x = self._header
        for i in reversed(range(self._level)):
            while (fwd := x.level[i].forward) is not None and _precedes(fwd, score, key):
                x = fwd
            update[i] = x
        x = x.level[0].forward
        if x is not None and x.score == score and x.key == key:
            self._delete_node(x, update)
            return True
        return False

    def size(self) -> int:
        """Number of members."""
        return self._length

    def peek_min(self) -> Optional[SortedSetNode]:
        """Member with the lowest score, or None if the set is empty."""
        return self._header.level[0].forward

    def pop_min(self) -> Optional[SortedSetNode]:
        """Remove and return the member with the lowest score, or None."""
        x = self._header.level[0].forward
        if x is not None:
            self.remove(x.key)
        return x

    def peek_max(self) -> Optional[SortedSetNode]:
        """Member with the highest score, or None if the set is empty."""
        return self._tail

    def pop_max(self) -> Optional[SortedSetNode]:
        """Remove and return the member with the highest score, or None."""
        x = self._tail
        if x is not None:
            self.remove(x.key)
        return x

    def put(self, key: str, score: float, value: Optional[bytes]) -> None:
        """Insert ``key`` with ``score`` and ``value``, or update it if present."""
        score = float(score)
        existing = self.nodes.get(key)
        if existing is not None:
            if existing.score == score:
                existing.value = value
                return
            self._delete(existing.score, existing.key)
        self.nodes[key] = self._insert_node(score, key, value)

    def remove(self, key: str) -> Optional[SortedSetNode]:
        """Remove and return the member at ``key``, or None if absent."""
        found = self.nodes.get(key)
        if found is not None:
            self._delete(found.score, found.key)
        return found

    def get_by_score_range(
        self,
        start: float,
        end: float,
        options: Optional[GetByScoreRangeOptions] = None,
    ) -> List[SortedSetNode]:
        """Members whose score lies between ``start`` and ``end``.

        Without options the interval is closed and unlimited. If ``start`` is
        greater than ``end`` the members come in descending order.
        """
        limit = options.limit if options is not None and options.limit > 0 else _NO_LIMIT
        exclude_start = options is not None and options.exclude_start
        exclude_end = options is not None and options.exclude_end
        reverse = start > end
        if reverse:
            start, end = end, start
            exclude_start, exclude_end = exclude_end, exclude_start

        if self._length == 0:
            return []
        if reverse:
            return self._search_reverse(exclude_start, exclude_end, start, end, limit)
        return self._search_forward(exclude_start, exclude_end, start, end, limit)

    def _search_forward(
        self, exclude_start: bool, exclude_end: bool, start: float, end: float, limit: int
    ) -> List[SortedSetNode]:
        x = self._header
        for i in reversed(range(self._level)):
            while (fwd := x.level[i].forward) is not None and (
                fwd.score <= start if exclude_start else fwd.score < start
            ):
                x = fwd

        nodes: List[SortedSetNode] = []
        x = x.level[0].forward
        while x is not None and limit > 0:
            if (x.score >= end) if exclude_end else (x.score > end):
                break
            nodes.append(x)
            limit -= 1
            x = x.level[0].forward
        return nodes

    def _search_reverse(
        self, exclude_start: bool, exclude_end: bool, start: float, end: float, limit: int
    ) -> List[SortedSetNode]:
        x = self._header
        for i in reversed(range(self._level)):
            while (fwd := x.level[i].forward) is not None and (
                fwd.score < end if exclude_end else fwd.score <= end
            ):
                x = fwd

        nodes: List[SortedSetNode] = []
        node: Optional[SortedSetNode] = None if x is self._header else x
        while node is not None and limit > 0:
            if (node.score <= start) if exclude_start else (node.score < start):
                break
            nodes.append(node)
            limit -= 1
            node = node.backward
        return nodes

    def _sanitize_indexes(self, start: int, end: int) -> tuple:
        if start < 0:
            start = self._length + start + 1
        if end < 0:
            end = self._length + end + 1
        return max(start, 1), max(end, 1)

    def get_by_rank_range(self, start: int, end: int, remove: bool = False) -> List[SortedSetNode]:
        """Members with 1-based ranks from ``start`` to ``end`` inclusive.

        Negative ranks count from the end (-1 is the last member). If ``start``
        is greater than ``end`` the result is in reverse order. With ``remove``
        the returned members are taken out of the set.
        """
        update: List[SortedSetNode] = [self._header] * SKIPLIST_MAX_LEVEL
        start, end = self._sanitize_indexes(start, end)
        reverse = start > end
        if reverse:
            start, end = end, start

        traversed = 0
        x = self._header
        for i in reversed(range(self._level)):
            while (fwd := x.level[i].forward) is not None and traversed + x.level[i].span < start:
                traversed += x.level[i].span
                x = fwd
            if remove:
                update[i] = x
            elif traversed + 1 == start:
                break

        nodes: List[SortedSetNode] = []
        traversed += 1
        node = x.level[0].forward
        while node is not None and traversed <= end:
            following = node.level[0].forward
            nodes.append(node)
            if remove:
                self._delete_node(node, update)
            traversed += 1
            node = following

        if reverse:
            nodes.reverse()
        return nodes

    def get_by_rank(self, rank: int, remove: bool = False) -> Optional[SortedSetNode]:
        """Member at 1-based ``rank`` (negative counts from the end), or None."""
        nodes = self.get_by_rank_range(rank, rank, remove)
        return nodes[0] if len(nodes) == 1 else None

    def get_by_key(self, key: str) -> Optional[SortedSetNode]:
        """Member at ``key``, or None."""
        return self.nodes.get(key)

    def find_rank(self, key: str) -> int:
        """1-based rank of ``key`` in ascending order, or 0 if absent."""
        node = self.nodes.get(key)
        if node is None:
            return 0
        rank = 0
        x = self._header
        for i in reversed(range(self._level)):
            while (fwd := x.level[i].forward) is not None and (
                fwd.score < node.score or (fwd.score == node.score and fwd.key <= node.key)
            ):
                rank += x.level[i].span
                x = fwd
            if x is node:
                return rank
        return 0

    def find_rev_rank(self, key: str) -> int:
        """1-based rank of ``key`` in descending order, or 0 if absent."""
        if self._length == 0 or key not in self.nodes:
            return 0
        return self._length - self.find_rank(key) + 1