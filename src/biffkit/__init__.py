"""
biffkit - Opaque Record Handling for BIFF Record Streams
========================================================

Legacy spreadsheet files store a workbook as a stream of binary records,
each framed as a 16-bit type code (sid), a 16-bit payload length and the
payload. A reader rarely understands every record type it meets. biffkit
keeps the ones it does not understand as opaque, immutable byte captures
that are written back exactly as read, and names them for diagnostics
using a static record catalog.

Main Components
---------------
- **records**: stream reading/writing, UnknownRecord, the record catalog
  and a small set of structured records
- **hexdump**: hex formatting for diagnostic output
- **cli**: the biffdump inspection tool

Quick Start
-----------
    >>> from biffkit import UnknownRecord
    >>> record = UnknownRecord(0x0081, b"\\x01\\x02")
    >>> print(record.render())
    [SHEETPR] (0x81)
      rawData=01 02
    [/SHEETPR]

Or use the command-line tool:
    $ biffdump list workbook.bin
    $ biffdump classify 0x0867 0x1001
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from biffkit.errors import (
    BiffError,
    RecordError,
    RecordFormatError,
    UnsupportedReconstructionError,
    FrameLengthOverflowError,
)

from biffkit.records import (
    BiffRecord,
    StandardRecord,
    UnknownRecord,
    EOFRecord,
    CodepageRecord,
    RecordInputStream,
    RecordFactory,
    Classification,
    classify,
    lookup_documented_name,
    is_observed_undocumented,
    read_records,
    write_records,
)

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "BiffError",
    "RecordError",
    "RecordFormatError",
    "UnsupportedReconstructionError",
    "FrameLengthOverflowError",
    # Records
    "BiffRecord",
    "StandardRecord",
    "UnknownRecord",
    "EOFRecord",
    "CodepageRecord",
    "RecordInputStream",
    "RecordFactory",
    "Classification",
    "classify",
    "lookup_documented_name",
    "is_observed_undocumented",
    "read_records",
    "write_records",
]
