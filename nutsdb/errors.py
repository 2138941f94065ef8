"""Error types raised by the store and predicates to recognise them."""

from __future__ import annotations

from typing import Optional


class NutsError(Exception):
    """Base class of every error raised by the store."""

    default_message = "nutsdb error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class DBClosedError(NutsError):
    """The database has been closed."""

    default_message = "db is closed"


class KeyNotFoundError(NutsError):
    """The key is not found."""

    default_message = "key not found"


class BucketNotFoundError(NutsError):
    """The bucket does not exist."""

    default_message = "bucket not found"


class BucketEmptyError(NutsError):
    """The bucket is empty."""

    default_message = "bucket is empty"


class KeyEmptyError(NutsError):
    """The key is empty."""

    default_message = "key cannot be empty"


class PrefixScanError(NutsError):
    """A prefix scan found nothing."""

    default_message = "prefix scans not found"


class PrefixSearchScanError(NutsError):
    """A prefix and search scan found nothing."""

    default_message = "prefix and search scans not found"


def _caused_by(err: Optional[BaseException], kind: type) -> bool:
    """Return True if ``err`` or any error in its ``__cause__`` chain is a ``kind``."""
    seen = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, kind):
            return True
        seen.add(id(err))
        err = err.__cause__
    return False


def is_db_closed(err: Optional[BaseException]) -> bool:
    """True if the error indicates the db was closed."""
    return _caused_by(err, DBClosedError)


def is_key_not_found(err: Optional[BaseException]) -> bool:
    """True if the error indicates the key is not found."""
    return _caused_by(err, KeyNotFoundError)


def is_bucket_not_found(err: Optional[BaseException]) -> bool:
    """True if the error indicates the bucket does not exist."""
    return _caused_by(err, BucketNotFoundError)


def is_bucket_empty(err: Optional[BaseException]) -> bool:
    """True if the error indicates the bucket is empty."""
    return _caused_by(err, BucketEmptyError)


def is_key_empty(err: Optional[BaseException]) -> bool:
    """True if the error indicates the key is empty."""
    return _caused_by(err, KeyEmptyError)


def is_prefix_scan(err: Optional[BaseException]) -> bool:
    """True if a prefix scan found no result."""
    return _caused_by(err, PrefixScanError)


def is_prefix_search_scan(err: Optional[BaseException]) -> bool:
    """True if a prefix and search scan found no result."""
    return _caused_by(err, PrefixSearchScanError)