# nutsdb

This package holds the core pieces of a small embedded key/value store. It
is pure Python and has no third-party dependencies.

| Module | What it provides |
| --- | --- |
| `nutsdb.entry` | The record format: `MetaData`, `Entry` and `Hint`. |
| `nutsdb.fd_manager` | `FdManager`, an LRU cache of open file handles, and `FdInfo`. |
| `nutsdb.ds.lists` | `List`, lists of byte strings keyed by name. |
| `nutsdb.ds.sets` | `Set`, unordered sets of byte strings keyed by name. |
| `nutsdb.ds.zset` | `SortedSet`, a skip-list sorted set with rank and score queries. |
| `nutsdb.errors` | The exception hierarchy and the `is_*` helpers that classify errors. |

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Entries

An encoded entry has two parts. The first is a 42-byte little-endian header
with these fields, in order:

- CRC32
- timestamp
- key size
- value size
- flag
- TTL
- bucket size
- status
- data structure
- transaction id

The bucket, the key and the value follow the header. When encoding, each of
those three is cut or zero-padded to the size recorded in the metadata.

```python
from nutsdb.entry import Entry, MetaData

key, value, bucket = b"key_0001", b"val_0001", b"test_entry"
meta = MetaData(
    key_size=len(key),
    value_size=len(value),
    timestamp=1547707905,
    bucket=bucket,
    bucket_size=len(bucket),
    flag=1,
)
entry = Entry(key=key, value=value, meta=meta)
data = entry.encode()
assert len(data) == entry.size()

# Reading back: header first, then payload.
decoded = Entry()
decoded.parse_meta(data[:42])
decoded.parse_payload(data[42:])
assert decoded.key == key and decoded.meta.bucket == bucket
assert decoded.get_crc(data[:42]) == int.from_bytes(data[:4], "little")
```

Errors raised by these methods:

- `parse_meta` raises `ValueError` when it is given fewer than 42 bytes.
- `parse_payload` raises `ValueError` when the data is shorter than the sizes in the metadata.
- `check_payload_size(size)` raises `PayloadSizeMismatchError` when `size` differs from `MetaData.payload_size()`.

## Lists

```python
from nutsdb.ds.lists import List, ListNotFoundError

lst = List()
lst.rpush("myList", b"a", b"b", b"c")
lst.lpush("myList", b"z")
assert lst.lrange("myList", 0, -1) == [b"z", b"a", b"b", b"c"]
assert lst.lpop("myList") == b"z"
assert lst.lrem("myList", -1, b"b") == 1
assert lst.lrem_by_index("myList", [0]) == 1

try:
    lst.lpop("missing")
except ListNotFoundError:
    pass
```

`List` also has the following methods:

- `rpop`, `rpeek` and `lpeek`
- `size` and `is_empty`
- `lset`
- `ltrim`
- `lrem_num`
- `lrem_by_index_pre_check`

Every list error is a `ListError`. The subclasses are:

- `ListNotFoundError`
- `IndexOutOfRangeError`
- `CountError`
- `MinIntError`

## Sets

```python
from nutsdb.ds.sets import Set

s = Set()
s.sadd("s1", b"a", b"b", b"c")
s.sadd("s2", b"c", b"d")
assert sorted(s.sdiff("s1", "s2")) == [b"a", b"b"]
assert sorted(s.sunion("s1", "s2")) == [b"a", b"b", b"c", b"d"]
assert s.sismember("s1", b"a")
assert s.smove("s1", "s2", b"a")
```

`Set` also has these methods:

- `srem` and `spop`
- `scard`
- `shas_key`
- `sinter`
- `sare_members`
- `smembers`

Set errors are `SetError` and its subclasses `SetKeyNotFoundError`,
`SetKeyNotExistError` and `ItemEmptyError`.

## Sorted sets

Members are ordered by score, and then by key.

```python
from nutsdb.ds.zset import SortedSet, GetByScoreRangeOptions

zs = SortedSet()
zs.put("key1", 1, b"a")
zs.put("key2", 10, b"b")
zs.put("key3", 99.9, b"c")
assert zs.peek_min().key == "key1"
assert zs.find_rank("key3") == 3
assert zs.find_rev_rank("key3") == 1
nodes = zs.get_by_score_range(5, 100, GetByScoreRangeOptions(exclude_end=True))
assert [n.key for n in nodes] == ["key2", "key3"]
assert [n.key for n in zs.get_by_rank_range(-1, 1)] == ["key3", "key2", "key1"]
```

How ranks and ranges work:

- Ranks start at 1. Negative ranks count from the end.
- If the start of a rank range or a score range is greater than its end, the results come in descending order.
- `get_by_rank_range` and `get_by_rank` take a `remove` flag that also takes the returned members out of the set.
- Iterating over a `SortedSet` yields its nodes in ascending order.

## File-handle cache

`FdManager.get_fd(path)` returns the handle for a path. It behaves as follows:

- The file is opened for reading and writing, and is created if it is missing.
- The handle is an unbuffered binary file object.
- Each call counts one more user of the path.
- `reduce_using(path)` gives one use back.
- Once the cache reaches its clean threshold, idle handles (those with no users) are closed, oldest first.
- By default the cache holds at most 256 handles and cleans at half of that.

```python
import os
import tempfile

from nutsdb.fd_manager import FdManager

with tempfile.TemporaryDirectory() as tmp:
    path = os.path.join(tmp, "data-1")
    fdm = FdManager(max_fd_nums=20, clean_threshold=0.5)
    handle = fdm.get_fd(path)
    assert fdm.paths() == [os.path.normpath(path)]
    fdm.reduce_using(path)
    fdm.close()
```

## Classifying errors

Each `is_*` helper returns True for the error itself, or for any error whose
`__cause__` chain leads to it.

```python
from nutsdb.errors import KeyNotFoundError, is_key_not_found

try:
    try:
        raise KeyNotFoundError()
    except KeyNotFoundError as err:
        raise RuntimeError("lookup failed") from err
except RuntimeError as wrapped:
    assert is_key_not_found(wrapped)
```

## What this package does not do

There is no database to open in this package. It has none of the following:

- transactions
- buckets
- data files or segments
- memory mapping
- an index over stored entries

The errors in `nutsdb.errors` exist so that such a layer can raise and
recognise them. Nothing in this package raises `DBClosedError`,
`KeyNotFoundError`, `BucketNotFoundError`, `BucketEmptyError`,
`KeyEmptyError`, `PrefixScanError` or `PrefixSearchScanError` by itself.

## Running the tests

```
pytest
```