"""
Structured Record Types
=======================

Records whose payload biffkit parses into fields. Each one is a frozen
dataclass, so like opaque records they are immutable snapshots.

Record Types
------------
- $000A: EOF - end of a substream, empty payload
- $0042: CODEPAGE - code page of byte strings in the workbook

When a record type is added here, remove its sid from the record catalog.
"""

from dataclasses import dataclass
from typing import ClassVar
import struct

from biffkit.records.base import StandardRecord
from biffkit.records.stream import RecordInputStream


# =============================================================================
# EOF Record
# =============================================================================

@dataclass(frozen=True)
class EOFRecord(StandardRecord):
    """
    End of substream (type $000A).

    Marks the end of a workbook globals or sheet substream. Has no payload.
    """
    sid: ClassVar[int] = 0x000A
    name: ClassVar[str] = "EOF"

    def get_data_size(self) -> int:
        return 0

    def serialize_body(self, offset: int, data: bytearray) -> int:
        return 0

    @classmethod
    def from_stream(cls, stream: RecordInputStream) -> "EOFRecord":
        return cls()


# =============================================================================
# Codepage Record
# =============================================================================

@dataclass(frozen=True)
class CodepageRecord(StandardRecord):
    """
    Code page (type $0042).

    Format: [codepage 2 bytes LE]

    Common values are 1200 (UTF-16) and 1252 (Windows Latin 1).
    """
    sid: ClassVar[int] = 0x0042
    name: ClassVar[str] = "CODEPAGE"

    codepage: int = 1200

    def __post_init__(self) -> None:
        if not 0 <= self.codepage <= 0xFFFF:
            raise ValueError(f"Codepage out of range: {self.codepage}")

    def get_data_size(self) -> int:
        return 2

    def serialize_body(self, offset: int, data: bytearray) -> int:
        struct.pack_into("<H", data, offset, self.codepage)
        return 2

    @classmethod
    def from_stream(cls, stream: RecordInputStream) -> "CodepageRecord":
        return cls(codepage=stream.read_ushort())

    def render_fields(self) -> list[tuple[str, str]]:
        return [("codepage", f"0x{self.codepage:04X} ({self.codepage})")]
