"""
Record Factory
==============

Turns a buffer of record frames into record objects. Each sid registered in
RECORD_CLASSES is parsed by its structured record class; every other sid is
captured as an UnknownRecord, so the whole stream can be written back
byte-for-byte.

Usage Examples
--------------
    >>> records = read_records(data)
    >>> write_records(records) == data
    True

With statistics:
    >>> factory = RecordFactory()
    >>> records = factory.read(data)
    >>> factory.stats.opaque
    3
"""

from collections import Counter
from dataclasses import dataclass, field
import logging

from biffkit.errors import RecordFormatError
from biffkit.records.base import BiffRecord, StandardRecord
from biffkit.records.catalog import Classification, classification_of
from biffkit.records.standard import CodepageRecord, EOFRecord
from biffkit.records.stream import RecordInputStream
from biffkit.records.unknown import UnknownRecord

# Logger for this module
logger = logging.getLogger(__name__)


RECORD_CLASSES: dict[int, type[StandardRecord]] = {
    cls.sid: cls for cls in (EOFRecord, CodepageRecord)
}


def create_record(stream: RecordInputStream) -> BiffRecord:
    """
    Create a record from the stream's current frame.

    A structured record that fails to parse, or leaves payload bytes unread,
    is captured as an UnknownRecord instead so no bytes are lost.
    """
    record_class = RECORD_CLASSES.get(stream.sid)
    if record_class is None:
        return UnknownRecord.from_stream(stream)

    try:
        record = record_class.from_stream(stream)
    except RecordFormatError as e:
        logger.warning(
            f"Could not parse {record_class.name} at offset {stream.offset}: "
            f"{e.message}; keeping raw bytes"
        )
    else:
        if stream.remaining == 0:
            logger.debug(f"Parsed {record_class.name} at offset {stream.offset}")
            return record
        logger.warning(
            f"{record_class.name} at offset {stream.offset} has "
            f"{stream.remaining} unexpected trailing bytes; keeping raw bytes"
        )

    stream.reset_record()
    return UnknownRecord.from_stream(stream)


def read_records(data: bytes) -> list[BiffRecord]:
    """Read every record frame in `data`."""
    return RecordFactory().read(data)


# =============================================================================
# Factory with Statistics
# =============================================================================

@dataclass
class ReadStats:
    """
    Counts collected while reading a stream.

    Attributes:
        structured: Records parsed by a structured record class
        opaque: Records kept as UnknownRecord
        tiers: Opaque record count per catalog tier
        sids: Opaque record count per sid
    """
    structured: int = 0
    opaque: int = 0
    tiers: Counter = field(default_factory=Counter)
    sids: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return self.structured + self.opaque

    def add(self, record: BiffRecord) -> None:
        if isinstance(record, UnknownRecord):
            self.opaque += 1
            self.tiers[classification_of(record.sid)] += 1
            self.sids[record.sid] += 1
        else:
            self.structured += 1

    def count_tier(self, tier: Classification) -> int:
        return self.tiers[tier]


class RecordFactory:
    """
    Reads record streams and keeps statistics about what was found.

    Attributes:
        stats: Counts for all streams read by this factory
        offsets: Frame offset of each record returned by the last read()
    """

    def __init__(self) -> None:
        self.stats = ReadStats()
        self.offsets: list[int] = []

    def read(self, data: bytes) -> list[BiffRecord]:
        """
        Read every record frame in `data`.

        Raises:
            RecordFormatError: If a frame header is truncated or a declared
                payload length runs past the end of the data
        """
        stream = RecordInputStream(data)
        records: list[BiffRecord] = []
        self.offsets = []

        while stream.has_next_record():
            stream.next_record()
            record = create_record(stream)
            records.append(record)
            self.offsets.append(stream.offset)
            self.stats.add(record)

        logger.debug(
            f"Read {len(records)} records "
            f"({self.stats.opaque} opaque, {self.stats.structured} structured so far)"
        )
        return records
