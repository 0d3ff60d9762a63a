"""
Record Base Classes
===================

All records share one contract, whether or not biffkit understands their
payload:

- serialize(offset, data): write the full frame (header + payload) into a
  caller-owned buffer and return the number of bytes written
- get_record_size(): the number of bytes serialize() writes
- render(): a diagnostic text block
- clone(): a copy safe to hand out (records are immutable, so this is self)

StandardRecord is the base for records with a structural model. Those can
also be rebuilt from a stream positioned on a matching frame
(reconstruct_from_template). Opaque records cannot, and say so by raising
UnsupportedReconstructionError.
"""

from typing import ClassVar, TYPE_CHECKING
import struct

from biffkit.errors import (
    FrameLengthOverflowError,
    RecordFormatError,
    UnsupportedReconstructionError,
)
from biffkit.records.stream import HEADER_SIZE, MAX_PAYLOAD_SIZE

if TYPE_CHECKING:
    from biffkit.records.stream import RecordInputStream


# =============================================================================
# Record Base Class
# =============================================================================

class BiffRecord:
    """
    Base class for BIFF records.

    Every record is written as:
        [sid 2 bytes LE] [payload length 2 bytes LE] [payload...]
    """
    sid: int

    def serialize(self, offset: int, data: bytearray) -> int:
        """Write this record at `offset` in `data` and return bytes written."""
        raise NotImplementedError("Subclasses must implement serialize()")

    def get_record_size(self) -> int:
        """Get the total size of this record in bytes, header included."""
        raise NotImplementedError("Subclasses must implement get_record_size()")

    def render(self) -> str:
        """Get a diagnostic text rendering of this record."""
        raise NotImplementedError("Subclasses must implement render()")

    def reconstruct_from_template(self, stream: "RecordInputStream") -> "BiffRecord":
        """Rebuild a record of this kind from the stream's current frame."""
        raise UnsupportedReconstructionError(
            f"{type(self).__name__} cannot be reconstructed from a stream"
        )

    def clone(self) -> "BiffRecord":
        """Records are immutable, so the record itself is its own clone."""
        return self

    def to_bytes(self) -> bytes:
        """Serialize the record into a new buffer of exactly its size."""
        data = bytearray(self.get_record_size())
        self.serialize(0, data)
        return bytes(data)

    def __str__(self) -> str:
        return self.render()


# =============================================================================
# Structured Records
# =============================================================================

class StandardRecord(BiffRecord):
    """
    Base class for records biffkit parses into fields.

    Subclasses set the `sid` and `name` class attributes and implement
    get_data_size(), serialize_body(), from_stream() and render_fields().
    """
    sid: ClassVar[int]
    name: ClassVar[str]

    def get_data_size(self) -> int:
        """Get the payload size in bytes."""
        raise NotImplementedError("Subclasses must implement get_data_size()")

    def serialize_body(self, offset: int, data: bytearray) -> int:
        """Write the payload at `offset` and return bytes written."""
        raise NotImplementedError("Subclasses must implement serialize_body()")

    def render_fields(self) -> list[tuple[str, str]]:
        """Get (label, value) pairs shown by render()."""
        return []

    @classmethod
    def from_stream(cls, stream: "RecordInputStream") -> "StandardRecord":
        """Parse a record from the stream's current frame."""
        raise NotImplementedError("Subclasses must implement from_stream()")

    def get_record_size(self) -> int:
        return HEADER_SIZE + self.get_data_size()

    def serialize(self, offset: int, data: bytearray) -> int:
        data_size = self.get_data_size()
        if data_size > MAX_PAYLOAD_SIZE:
            raise FrameLengthOverflowError(self.sid, data_size)

        struct.pack_into("<HH", data, offset, self.sid, data_size)
        written = self.serialize_body(offset + HEADER_SIZE, data)
        if written != data_size:
            raise RecordFormatError(
                f"{self.name} wrote {written} payload bytes, expected {data_size}",
                offset,
            )
        return HEADER_SIZE + data_size

    def reconstruct_from_template(self, stream: "RecordInputStream") -> "StandardRecord":
        if stream.sid != self.sid:
            raise RecordFormatError(
                f"cannot rebuild {self.name} (0x{self.sid:04X}) from record "
                f"0x{stream.sid:04X}", stream.offset
            )
        return type(self).from_stream(stream)

    def render(self) -> str:
        lines = [f"[{self.name}]"]
        for label, value in self.render_fields():
            lines.append(f"    .{label:<12}= {value}")
        lines.append(f"[/{self.name}]")
        return "\n".join(lines) + "\n"


def supports_reconstruction(record: BiffRecord) -> bool:
    """Check whether a record can be rebuilt with reconstruct_from_template()."""
    return isinstance(record, StandardRecord)
