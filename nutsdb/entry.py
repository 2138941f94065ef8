"""On-disk data entries: metadata, encoding and parsing."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field

from .errors import NutsError

DATA_ENTRY_HEADER_SIZE = 42

# crc | timestamp | key size | value size | flag | ttl | bucket size | status | ds | tx id
_HEADER = struct.Struct("<IQIIHIIHHQ")
_HEADER_BODY = struct.Struct("<QIIHIIHHQ")


class PayloadSizeMismatchError(NutsError):
    """The payload size in the metadata differs from the size needed."""

    default_message = "the payload size in meta mismatch with the payload size needed"


@dataclass
class MetaData:
    """Meta information of a data item."""

    key_size: int = 0
    value_size: int = 0
    timestamp: int = 0
    ttl: int = 0
    flag: int = 0
    bucket: bytes = b""
    bucket_size: int = 0
    tx_id: int = 0
    status: int = 0
    ds: int = 0

    def payload_size(self) -> int:
        """Total size of bucket, key and value."""
        return self.bucket_size + self.key_size + self.value_size


def _fit(data: bytes, size: int) -> bytes:
    return bytes(data[:size]).ljust(size, b"\0")


@dataclass
class Entry:
    """A data item as stored in a data file."""

    key: bytes = b""
    value: bytes = b""
    meta: MetaData = field(default_factory=MetaData)
    crc: int = 0
    position: int = 0

    def size(self) -> int:
        """Encoded size of the entry in bytes."""
        return DATA_ENTRY_HEADER_SIZE + self.meta.payload_size()

    def _header_body(self) -> bytes:
        m = self.meta
        return _HEADER_BODY.pack(
            m.timestamp,
            m.key_size,
            m.value_size,
            m.flag,
            m.ttl,
            m.bucket_size,
            m.status,
            m.ds,
            m.tx_id,
        )

    def encode(self) -> bytes:
        """Encode the entry: header with CRC, then bucket, key and value."""
        m = self.meta
        body = b"".join(
            (
                self._header_body(),
                _fit(m.bucket, m.bucket_size),
                _fit(self.key, m.key_size),
                _fit(self.value, m.value_size),
            )
        )
        return struct.pack("<I", zlib.crc32(body)) + body

    def is_zero(self) -> bool:
        """True if the entry carries no data."""
        m = self.meta
        return self.crc == 0 and m.key_size == 0 and m.value_size == 0 and m.timestamp == 0

    def get_crc(self, buf: bytes) -> int:
        """CRC of the header in ``buf`` followed by bucket, key and value."""
        crc = zlib.crc32(bytes(buf[4:]))
        crc = zlib.crc32(self.meta.bucket, crc)
        crc = zlib.crc32(self.key, crc)
        return zlib.crc32(self.value, crc)

    def parse_payload(self, data: bytes) -> None:
        """Split ``data`` into bucket, key and value using the metadata sizes."""
        m = self.meta
        if len(data) < m.payload_size():
            raise ValueError("payload shorter than the sizes in the metadata")
        key_start = m.bucket_size
        value_start = key_start + m.key_size
        value_end = value_start + m.value_size
        m.bucket = bytes(data[:key_start])
        self.key = bytes(data[key_start:value_start])
        self.value = bytes(data[value_start:value_end])

    def check_payload_size(self, size: int) -> None:
        """Raise PayloadSizeMismatchError unless ``size`` matches the metadata."""
        if self.meta.payload_size() != size:
            raise PayloadSizeMismatchError()

    def parse_meta(self, buf: bytes) -> None:
        """Replace the metadata with the one read from header bytes ``buf``."""
        if len(buf) < DATA_ENTRY_HEADER_SIZE:
            raise ValueError("header shorter than %d bytes" % DATA_ENTRY_HEADER_SIZE)
        (
            _crc,
            timestamp,
            key_size,
            value_size,
            flag,
            ttl,
            bucket_size,
            status,
            ds,
            tx_id,
        ) = _HEADER.unpack(bytes(buf[:DATA_ENTRY_HEADER_SIZE]))
        self.meta = MetaData(
            key_size=key_size,
            value_size=value_size,
            timestamp=timestamp,
            ttl=ttl,
            flag=flag,
            bucket_size=bucket_size,
            tx_id=tx_id,
            status=status,
            ds=ds,
        )


@dataclass
class Hint:
    """Index of a key: where its entry lives."""

    key: bytes = b""
    file_id: int = 0
    meta: MetaData = field(default_factory=MetaData)
    data_pos: int = 0