"""In-memory sets of byte strings keyed by name."""

from __future__ import annotations

from typing import Dict, List as _List, Optional, Set as _Set

from ..errors import NutsError


class SetError(NutsError):
    """Base class of set errors."""

    default_message = "set error"


class SetKeyNotFoundError(SetError):
    """The set is not found."""

    default_message = "key not found"


class SetKeyNotExistError(SetError):
    """The set does not exist."""

    default_message = "key not exist"


class ItemEmptyError(SetError):
    """No item was given."""

    default_message = "item empty"


class Set:
    """Unordered sets of byte strings stored under string keys."""

    def __init__(self) -> None:
        self.items: Dict[str, _Set[bytes]] = {}

    def _both(self, key1: str, key2: str) -> tuple:
        if key1 not in self.items:
            raise SetError("set1 is not exists")
        if key2 not in self.items:
            raise SetError("set2 is not exists")
        return self.items[key1], self.items[key2]

    def sadd(self, key: str, *args: bytes) -> None:
        """Add the given members to the set at ``key``, creating it if needed."""
        self.items.setdefault(key, set()).update(bytes(item) for item in args)

    def srem(self, key: str, *args: Optional[bytes]) -> None:
        """Remove the given members from the set at ``key``."""
        if key not in self.items:
            raise SetKeyNotFoundError()
        if not args or args[0] is None:
            raise ItemEmptyError()
        members = self.items[key]
        for item in args:
            if item is not None:
                members.discard(bytes(item))

    def shas_key(self, key: str) -> bool:
        """True if a set exists at ``key``."""
        return key in self.items

    def spop(self, key: str) -> Optional[bytes]:
        """Remove and return an arbitrary member, or None if there is none."""
        members = self.items.get(key)
        if not members:
            return None
        return members.pop()

    def scard(self, key: str) -> int:
        """Number of members of the set at ``key``, 0 if it does not exist."""
        return len(self.items.get(key, ()))

    def sdiff(self, key1: str, key2: str) -> _List[bytes]:
        """Members of the first set that are not in the second."""
        first, second = self._both(key1, key2)
        return [item for item in first if item not in second]

    def sinter(self, key1: str, key2: str) -> _List[bytes]:
        """Members present in both sets."""
        first, second = self._both(key1, key2)
        return [item for item in first if item in second]

    def sismember(self, key: str, item: bytes) -> bool:
        """True if ``item`` is a member of the set at ``key``."""
        return bytes(item) in self.items.get(key, ())

    def sare_members(self, key: str, *args: bytes) -> bool:
        """True if every given item is a member; raise if the set or an item is missing."""
        if key not in self.items:
            raise SetKeyNotExistError()
        members = self.items[key]
        for item in args:
            if bytes(item) not in members:
                raise SetError("item not exists")
        return True

    def smembers(self, key: str) -> _List[bytes]:
        """All members of the set at ``key``."""
        if key not in self.items:
            raise SetError("set not exists")
        return list(self.items[key])

    def smove(self, key1: str, key2: str, item: bytes) -> bool:
        """Move ``item`` from the set at ``key1`` to the set at ``key2``."""
        if key1 not in self.items:
            raise SetError("key1 is not exists")
        if key2 not in self.items:
            raise SetError("key2 is not exists")
        item = bytes(item)
        self.items[key2].add(item)
        self.items[key1].discard(item)
        return True

    def sunion(self, key1: str, key2: str) -> _List[bytes]:
        """Members present in either set."""
        first, second = self._both(key1, key2)
        return list(first) + [item for item in second if item not in first]