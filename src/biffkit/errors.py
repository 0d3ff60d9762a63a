"""
biffkit Error Hierarchy
=======================

This module defines the exception hierarchy for biffkit. All exceptions
inherit from BiffError, allowing callers to catch every library error
with a single except clause if desired.

Exception Hierarchy
-------------------
BiffError (base)
└── RecordError (record stream handling)
    ├── RecordFormatError - truncated or inconsistent record frame
    ├── UnsupportedReconstructionError - record cannot be rebuilt from a stream
    └── FrameLengthOverflowError - payload too long for the 16-bit length field

Design Philosophy
-----------------
Errors in this package are raised for precondition violations only. All
record operations are local and deterministic, so nothing here is retried
or recovered: an operation either succeeds or fails the same way every time.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class BiffError(Exception):
    """
    Base exception for all biffkit errors.

        try:
            records = read_records(data)
        except BiffError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordError(BiffError):
    """Base exception for record stream errors."""
    pass


class RecordFormatError(RecordError):
    """
    Invalid record frame.

    Raised when reading or writing a record stream that has:
    - A header truncated before its 4 bytes
    - A declared payload length running past the end of the data
    - A read past the end of the current record's payload
    - A serialized size that disagrees with the record's reported size
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)


class UnsupportedReconstructionError(RecordError):
    """
    Record cannot be rebuilt from a stream template.

    Opaque records are a one-way byte capture. There is no structural model
    to regenerate them from, so reconstruct_from_template() on such a record
    always raises this error.
    """
    pass


class FrameLengthOverflowError(RecordError):
    """
    Payload too long to be framed.

    The record header stores the payload length in an unsigned 16-bit field,
    so a payload longer than 65535 bytes cannot be serialized without
    truncation. Serialization fails instead of writing a corrupt stream.
    """

    def __init__(self, sid: int, length: int, message: str = ""):
        self.sid = sid
        self.length = length
        if not message:
            message = (
                f"record 0x{sid:04X} payload is {length} bytes, "
                f"maximum frame payload is 65535"
            )
        super().__init__(message)
