"""
Unknown (Opaque) Record
=======================

UnknownRecord holds a record whose payload biffkit does not interpret. It
keeps the sid and the raw payload bytes exactly as read, so a workbook can
be read, modified elsewhere and written back without losing records the
reader does not understand.

It also tells you the sid and, where the record catalog knows one, a name,
which helps find out which record types are still missing.

Usage Examples
--------------
Building a record directly:
    >>> record = UnknownRecord(0x0081, b"\\x01\\x02")
    >>> record.name
    'SHEETPR'
    >>> record.to_bytes().hex()
    '810002000102'

Reading from a stream:
    >>> stream.next_record()
    >>> record = UnknownRecord.from_stream(stream)
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
import struct

from biffkit.config import get_config
from biffkit.errors import FrameLengthOverflowError, UnsupportedReconstructionError
from biffkit.hexdump import to_hex
from biffkit.records.base import BiffRecord
from biffkit.records.catalog import (
    Classification,
    classification_of,
    classify,
    get_biff_name,
    is_subrecord_range,
)
from biffkit.records.stream import HEADER_SIZE, MAX_PAYLOAD_SIZE, RecordInputStream

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnknownRecord(BiffRecord):
    """
    Record stored and replayed verbatim.

    The sid is masked to its low 16 bits, so a wider integer may be passed.
    The payload is copied into immutable bytes: mutating the buffer it came
    from afterwards does not change the record.

    Attributes:
        sid: Record type code (0x0000-0xFFFF)
        raw_data: Payload bytes, without the 4-byte frame header
    """
    sid: int
    raw_data: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sid", self.sid & 0xFFFF)
        object.__setattr__(self, "raw_data", bytes(self.raw_data))

    @classmethod
    def from_stream(cls, stream: RecordInputStream) -> "UnknownRecord":
        """
        Capture the current record of a stream.

        Consumes all unread payload bytes of the current frame. Never fails
        on a stream positioned on a record.
        """
        record = cls(stream.sid, stream.read_remainder())

        if get_biff_name(record.sid) is None:
            logger.debug(
                f"Unknown record 0x{record.sid:04X} ({len(record.raw_data)} bytes)"
            )
            if get_config().verbose and is_subrecord_range(record.sid):
                logger.warning(
                    f"Unknown record 0x{record.sid:04X} is in a sub-record "
                    f"range, it may belong inside another record's payload"
                )
        return record

    # =========================================================================
    # Identification
    # =========================================================================

    @property
    def name(self) -> str:
        """Display name from the record catalog, UNKNOWNRECORD if unlisted."""
        return classify(self.sid)

    @property
    def biff_name(self) -> Optional[str]:
        """Catalog name, or None when the sid is in neither catalog tier."""
        return get_biff_name(self.sid)

    @property
    def classification(self) -> Classification:
        return classification_of(self.sid)

    # =========================================================================
    # Record Contract
    # =========================================================================

    def serialize(self, offset: int, data: bytearray) -> int:
        """
        Write the record AS IS: no interpretation or identification.

        Writes exactly get_record_size() bytes at `offset`. The destination
        must already be large enough; it is never grown.

        Raises:
            FrameLengthOverflowError: If the payload is longer than 65535
                bytes. Nothing is written in that case.
        """
        data_size = len(self.raw_data)
        if data_size > MAX_PAYLOAD_SIZE:
            raise FrameLengthOverflowError(self.sid, data_size)

        struct.pack_into("<HH", data, offset, self.sid, data_size)
        start = offset + HEADER_SIZE
        with memoryview(data) as view:
            view[start:start + data_size] = self.raw_data
        return HEADER_SIZE + data_size

    def get_record_size(self) -> int:
        return HEADER_SIZE + len(self.raw_data)

    def render(self) -> str:
        """
        Render as a tagged block:

            [SHEETPR] (0x81)
              rawData=01 02
            [/SHEETPR]
        """
        name = self.name
        lines = [f"[{name}] (0x{self.sid:X})"]
        if self.raw_data:
            lines.append(f"  rawData={to_hex(self.raw_data)}")
        lines.append(f"[/{name}]")
        return "\n".join(lines) + "\n"

    def reconstruct_from_template(self, stream: RecordInputStream) -> "UnknownRecord":
        """Always fails: an opaque record can only come from a byte capture."""
        raise UnsupportedReconstructionError(
            "Unknown record cannot be constructed via offset -- "
            "we need a copy of the data"
        )

    def with_data(self, raw_data: bytes) -> "UnknownRecord":
        """Get a new record with the same sid and a different payload."""
        return UnknownRecord(self.sid, raw_data)
