"""An LRU cache of open file handles."""

from __future__ import annotations

import errno
import math
import os
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List

DEFAULT_MAX_FILE_NUMS = 256


@dataclass
class FdInfo:
    """An open file held by the cache and how many users hold it."""

    fd: BinaryIO
    path: str
    using: int = 1


def _open(path: str) -> BinaryIO:
    return os.fdopen(os.open(path, os.O_CREAT | os.O_RDWR, 0o644), "r+b", buffering=0)


class FdManager:
    """Keeps recently used files open, closing idle ones when it grows."""

    def __init__(self, max_fd_nums: int = 0, clean_threshold: float = 0.0) -> None:
        self._lock = threading.RLock()
        # Least recently used first, most recently used last.
        self._cache: "OrderedDict[str, FdInfo]" = OrderedDict()
        self.max_fd_nums = DEFAULT_MAX_FILE_NUMS
        self.clean_threshold_nums = math.floor(0.5 * self.max_fd_nums)
        if max_fd_nums > 0:
            self.max_fd_nums = max_fd_nums
        if 0.0 < clean_threshold < 1.0:
            self.clean_threshold_nums = math.floor(clean_threshold * self.max_fd_nums)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, path: str) -> bool:
        return os.path.normpath(path) in self._cache

    def __getitem__(self, path: str) -> FdInfo:
        return self._cache[os.path.normpath(path)]

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def paths(self) -> List[str]:
        """Cached paths, most recently used first."""
        with self._lock:
            return list(reversed(self._cache))

    def _add(self, fd: BinaryIO, path: str) -> None:
        self._cache[path] = FdInfo(fd=fd, path=path)

    def get_fd(self, path: str) -> BinaryIO:
        """Return an open handle for ``path``, opening and caching it if needed."""
        with self._lock:
            clean_path = os.path.normpath(path)
            info = self._cache.get(clean_path)
            if info is not None:
                info.using += 1
                self._cache.move_to_end(clean_path)
                return info.fd

            try:
                fd = _open(clean_path)
            except OSError as err:
                if err.errno != errno.EMFILE:
                    raise
                try:
                    self.clean_useless_fd()
                except OSError:
                    raise err from None
                fd = _open(clean_path)
                self._add(fd, clean_path)
                return fd

            if len(self._cache) >= self.clean_threshold_nums:
                try:
                    self.clean_useless_fd()
                except OSError:
                    pass
            if len(self._cache) >= self.max_fd_nums:
                return fd
            self._add(fd, clean_path)
            return fd

    def reduce_using(self, path: str) -> None:
        """Record that one user of ``path`` has given its handle back."""
        with self._lock:
            clean_path = os.path.normpath(path)
            info = self._cache.get(clean_path)
            if info is None:
                raise KeyError("unexpected the node is not in cache: %s" % clean_path)
            info.using -= 1

    def clean_useless_fd(self) -> None:
        """Close up to the threshold number of unused handles, oldest first."""
        with self._lock:
            remaining = self.clean_threshold_nums
            for path, info in list(self._cache.items()):
                if remaining <= 0:
                    break
                if info.using == 0:
                    del self._cache[path]
                    info.fd.close()
                    remaining -= 1

    def close(self) -> None:
        """Close every cached handle and empty the cache."""
        with self._lock:
            for path, info in list(self._cache.items()):
                info.fd.close()
                del self._cache[path]

    def close_by_path(self, path: str) -> None:
        """Close and forget the handle for ``path`` if it is cached."""
        with self._lock:
            info = self._cache.pop(os.path.normpath(path), None)
            if info is not None:
                info.fd.close()