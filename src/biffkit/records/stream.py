"""
Record Stream Reading and Writing
=================================

Every BIFF record is framed the same way:

    Offset  Size    Description
    ------  ----    -----------
    0       2       Record type (sid), little-endian
    2       2       Payload length, little-endian (0-65535)
    4       n       Payload bytes

RecordInputStream walks a buffer frame by frame and hands out the payload of
the current frame. write_records() is the write side: it sizes one output
buffer for a list of records and lets each record serialize itself into it.

Usage Examples
--------------
Reading frames:
    >>> stream = RecordInputStream(data)
    >>> while stream.has_next_record():
    ...     stream.next_record()
    ...     print(f"0x{stream.sid:04X}: {len(stream.read_remainder())} bytes")

Writing records:
    >>> data = write_records([CodepageRecord(1252), EOFRecord()])
"""

from typing import Iterable, TYPE_CHECKING
import logging
import struct

from biffkit.errors import RecordFormatError

if TYPE_CHECKING:
    from biffkit.records.base import BiffRecord

# Logger for this module
logger = logging.getLogger(__name__)

HEADER_SIZE = 4
MAX_PAYLOAD_SIZE = 0xFFFF

_HEADER = struct.Struct("<HH")


# =============================================================================
# Input Stream
# =============================================================================

class RecordInputStream:
    """
    Sequential reader over a buffer of record frames.

    The stream is positioned on one record at a time. next_record() moves to
    the following frame, skipping any unread payload of the current one.
    Payload reads never cross into the next frame.

    Attributes:
        sid: Type code of the current record (-1 before the first record)
        offset: Absolute offset of the current record's header
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._next_offset = 0
        self._payload_start = 0
        self._payload_end = 0
        self._position = 0
        self.sid = -1
        self.offset = -1

    @property
    def remaining(self) -> int:
        """Unread payload bytes of the current record."""
        return self._payload_end - self._position

    @property
    def payload_length(self) -> int:
        """Declared payload length of the current record."""
        return self._payload_end - self._payload_start

    def has_next_record(self) -> bool:
        """Return True if another record header follows the current record."""
        return self._next_offset < len(self._data)

    def next_record(self) -> int:
        """
        Advance to the next record frame.

        Returns:
            The sid of the new current record

        Raises:
            RecordFormatError: If there is no next record, the header is
                truncated, or the declared length runs past the data
        """
        offset = self._next_offset
        if offset >= len(self._data):
            raise RecordFormatError("no more records in stream", offset)
        if offset + HEADER_SIZE > len(self._data):
            raise RecordFormatError(
                f"truncated record header: {len(self._data) - offset} of "
                f"{HEADER_SIZE} bytes", offset
            )

        sid, length = _HEADER.unpack_from(self._data, offset)
        payload_start = offset + HEADER_SIZE
        payload_end = payload_start + length
        if payload_end > len(self._data):
            raise RecordFormatError(
                f"record 0x{sid:04X} declares {length} payload bytes, "
                f"only {len(self._data) - payload_start} available", offset
            )

        if self.remaining > 0:
            logger.debug(
                f"Skipping {self.remaining} unread bytes of record 0x{self.sid:04X}"
            )

        self.sid = sid
        self.offset = offset
        self._payload_start = payload_start
        self._payload_end = payload_end
        self._position = payload_start
        self._next_offset = payload_end
        return sid

    def reset_record(self) -> None:
        """Rewind to the start of the current record's payload."""
        self._position = self._payload_start

    def _take(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f"cannot read a negative byte count ({count})")
        if count > self.remaining:
            raise RecordFormatError(
                f"read of {count} bytes past end of record 0x{self.sid:04X} "
                f"({self.remaining} remaining)", self.offset
            )
        start = self._position
        self._position += count
        return self._data[start:self._position]

    def read_ushort(self) -> int:
        """Read an unsigned little-endian 16-bit value from the payload."""
        return struct.unpack("<H", self._take(2))[0]

    def read_bytes(self, count: int) -> bytes:
        """Read `count` payload bytes."""
        return self._take(count)

    def read_remainder(self) -> bytes:
        """Read all unread payload bytes of the current record, and no more."""
        return self._take(self.remaining)


# =============================================================================
# Writing
# =============================================================================

def write_records(records: Iterable["BiffRecord"]) -> bytes:
    """
    Serialize records into one contiguous buffer.

    The buffer is allocated once at the summed record size and each record
    writes itself at its own offset.

    Raises:
        RecordFormatError: If a record writes a different number of bytes
            than it reports in get_record_size()
    """
    records = list(records)
    total = sum(record.get_record_size() for record in records)
    data = bytearray(total)

    offset = 0
    for record in records:
        expected = record.get_record_size()
        written = record.serialize(offset, data)
        if written != expected:
            raise RecordFormatError(
                f"record 0x{record.sid:04X} wrote {written} bytes, "
                f"expected {expected}", offset
            )
        offset += written

    logger.debug(f"Wrote {len(records)} records ({offset} bytes)")
    return bytes(data)
