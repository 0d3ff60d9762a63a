"""
BIFF Record Handling
====================

This package reads and writes the record streams found inside legacy
spreadsheet (BIFF) files, keeping every record it does not understand as an
opaque byte capture.

Overview
--------
A BIFF stream is a sequence of frames:

    [sid 2 bytes LE] [length 2 bytes LE] [payload...]

This package provides:
- **RecordInputStream / write_records**: frame-level reading and writing
- **UnknownRecord**: immutable capture of a record that is not parsed
- **Record catalog**: names for sids that are documented or have been seen
- **Structured records**: EOFRecord, CodepageRecord
- **read_records / RecordFactory**: turn a stream into record objects

Quick Start
-----------
Reading and writing a stream:

    >>> from biffkit.records import read_records, write_records
    >>> records = read_records(data)
    >>> for record in records:
    ...     print(record.render())
    >>> assert write_records(records) == data

Identifying a sid:

    >>> from biffkit.records import classify
    >>> classify(0x0867)
    'SHEETPROTECTION'
"""

# =============================================================================
# Public API Exports
# =============================================================================

# Record catalog
from biffkit.records.catalog import (
    Classification,
    MilestoneSid,
    DOCUMENTED_NAMES,
    OBSERVED_UNDOCUMENTED,
    CHART_SUBRECORD_RANGE,
    OBJ_SUBRECORD_RANGE,
    GENERIC_NAME,
    lookup_documented_name,
    is_observed_undocumented,
    is_subrecord_range,
    classification_of,
    get_biff_name,
    classify,
)

# Stream reading and writing
from biffkit.records.stream import (
    HEADER_SIZE,
    MAX_PAYLOAD_SIZE,
    RecordInputStream,
    write_records,
)

# Record types
from biffkit.records.base import (
    BiffRecord,
    StandardRecord,
    supports_reconstruction,
)
from biffkit.records.standard import (
    EOFRecord,
    CodepageRecord,
)
from biffkit.records.unknown import UnknownRecord

# Factory
from biffkit.records.factory import (
    RECORD_CLASSES,
    RecordFactory,
    ReadStats,
    create_record,
    read_records,
)

__all__ = [
    # Catalog
    "Classification",
    "MilestoneSid",
    "DOCUMENTED_NAMES",
    "OBSERVED_UNDOCUMENTED",
    "CHART_SUBRECORD_RANGE",
    "OBJ_SUBRECORD_RANGE",
    "GENERIC_NAME",
    "lookup_documented_name",
    "is_observed_undocumented",
    "is_subrecord_range",
    "classification_of",
    "get_biff_name",
    "classify",
    # Stream
    "HEADER_SIZE",
    "MAX_PAYLOAD_SIZE",
    "RecordInputStream",
    "write_records",
    # Records
    "BiffRecord",
    "StandardRecord",
    "supports_reconstruction",
    "EOFRecord",
    "CodepageRecord",
    "UnknownRecord",
    # Factory
    "RECORD_CLASSES",
    "RecordFactory",
    "ReadStats",
    "create_record",
    "read_records",
]
