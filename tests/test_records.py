"""
Record Stream Tests
===================

Test Categories
---------------
1. Stream: frame-level reading with RecordInputStream
2. Structured records: EOFRecord and CodepageRecord
3. Factory: dispatch between structured and opaque records
4. Round-trip: read/write cycles over mixed streams
"""

import logging
import struct

import pytest

from biffkit.errors import (
    RecordFormatError,
    UnsupportedReconstructionError,
)
from biffkit.records import (
    BiffRecord,
    Classification,
    CodepageRecord,
    EOFRecord,
    RecordFactory,
    RecordInputStream,
    UnknownRecord,
    create_record,
    read_records,
    supports_reconstruction,
    write_records,
)


def frame(sid: int, payload: bytes) -> bytes:
    """Build one raw record frame."""
    return struct.pack("<HH", sid, len(payload)) + payload


# =============================================================================
# Stream Tests
# =============================================================================

class TestRecordInputStream:
    """Tests for frame-level reading."""

    def test_empty_stream(self):
        """An empty buffer has no records."""
        stream = RecordInputStream(b"")
        assert not stream.has_next_record()
        with pytest.raises(RecordFormatError):
            stream.next_record()

    def test_reads_header(self):
        """Test sid, offset and length of the current frame."""
        stream = RecordInputStream(frame(0x0081, b"\x01\x02"))
        assert stream.has_next_record()
        assert stream.next_record() == 0x0081
        assert stream.sid == 0x0081
        assert stream.offset == 0
        assert stream.payload_length == 2
        assert stream.remaining == 2

    def test_read_ushort(self):
        """Test little-endian 16-bit reads."""
        stream = RecordInputStream(frame(0x0042, b"\xe4\x04"))
        stream.next_record()
        assert stream.read_ushort() == 1252
        assert stream.remaining == 0

    def test_read_past_record(self):
        """Reads never cross into the next frame."""
        stream = RecordInputStream(frame(0x0042, b"\xe4") + frame(0x000A, b""))
        stream.next_record()
        with pytest.raises(RecordFormatError):
            stream.read_ushort()

    def test_negative_read(self):
        """Test that a negative byte count is rejected."""
        stream = RecordInputStream(frame(0x0081, b"\x01"))
        stream.next_record()
        with pytest.raises(ValueError):
            stream.read_bytes(-1)

    def test_skips_unread_payload(self):
        """Advancing skips whatever is left of the current frame."""
        stream = RecordInputStream(frame(0x0081, b"\x01\x02") + frame(0x0033, b""))
        stream.next_record()
        stream.read_bytes(1)
        assert stream.next_record() == 0x0033
        assert stream.offset == 6
        assert stream.remaining == 0

    def test_truncated_header(self):
        """A partial header is a format error."""
        stream = RecordInputStream(b"\x81\x00\x02")
        assert stream.has_next_record()
        with pytest.raises(RecordFormatError, match="truncated record header"):
            stream.next_record()

    def test_truncated_payload(self):
        """A declared length running past the data is a format error."""
        stream = RecordInputStream(b"\x81\x00\x05\x00\x01")
        with pytest.raises(RecordFormatError) as exc_info:
            stream.next_record()
        assert exc_info.value.offset == 0

    def test_reset_record(self):
        """Rewinding makes the whole payload readable again."""
        stream = RecordInputStream(frame(0x0081, b"\x01\x02"))
        stream.next_record()
        stream.read_remainder()
        stream.reset_record()
        assert stream.read_remainder() == b"\x01\x02"


# =============================================================================
# Structured Record Tests
# =============================================================================

class TestStructuredRecords:
    """Tests for EOFRecord and CodepageRecord."""

    def test_eof_bytes(self):
        """EOF is a header with no payload."""
        assert EOFRecord().to_bytes() == b"\x0a\x00\x00\x00"
        assert EOFRecord().get_record_size() == 4

    def test_codepage_bytes(self):
        """Codepage is a single little-endian word."""
        assert CodepageRecord(1252).to_bytes() == b"\x42\x00\x02\x00\xe4\x04"

    def test_codepage_range(self):
        """Test that out-of-range codepages are rejected."""
        with pytest.raises(ValueError):
            CodepageRecord(0x10000)

    def test_render(self):
        """Structured records render with matching tags and fields."""
        text = CodepageRecord(1252).render()
        lines = text.splitlines()
        assert lines[0] == "[CODEPAGE]"
        assert lines[-1] == "[/CODEPAGE]"
        assert "0x04E4 (1252)" in text
        assert EOFRecord().render() == "[EOF]\n[/EOF]\n"

    def test_reconstruct_from_template(self):
        """Structured records can be rebuilt from a matching frame."""
        stream = RecordInputStream(frame(0x0042, b"\xb5\x01"))
        stream.next_record()
        rebuilt = CodepageRecord().reconstruct_from_template(stream)
        assert rebuilt == CodepageRecord(437)

    def test_reconstruct_wrong_sid(self):
        """Rebuilding from a frame of another type is a format error."""
        stream = RecordInputStream(frame(0x000A, b""))
        stream.next_record()
        with pytest.raises(RecordFormatError):
            CodepageRecord().reconstruct_from_template(stream)

    def test_capability(self):
        """Structured records report the reconstruction capability."""
        assert supports_reconstruction(EOFRecord())
        assert supports_reconstruction(CodepageRecord())

    def test_clone_is_self(self):
        record = CodepageRecord(1252)
        assert record.clone() is record

    def test_base_record_cannot_reconstruct(self):
        """Records without a structural model refuse reconstruction."""
        with pytest.raises(UnsupportedReconstructionError):
            BiffRecord().reconstruct_from_template(RecordInputStream(b""))


# =============================================================================
# Factory Tests
# =============================================================================

class TestFactory:
    """Tests for record dispatch."""

    def test_dispatch(self, mixed_stream: bytes):
        """Registered sids are parsed, all others kept opaque."""
        records = read_records(mixed_stream)
        assert [type(r) for r in records] == [
            CodepageRecord, UnknownRecord, UnknownRecord, UnknownRecord, EOFRecord,
        ]
        assert records[0].codepage == 1252
        assert records[1].raw_data == b"\x01\x02"

    def test_create_record_unknown(self):
        """An unregistered sid becomes an UnknownRecord."""
        stream = RecordInputStream(frame(0x0867, b"\x67\x08"))
        stream.next_record()
        record = create_record(stream)
        assert record == UnknownRecord(0x0867, b"\x67\x08")

    def test_malformed_structured_kept_opaque(self, caplog):
        """A structured record that fails to parse keeps its raw bytes."""
        caplog.set_level(logging.WARNING, logger="biffkit.records.factory")
        data = frame(0x0042, b"\xe4")
        records = read_records(data)
        assert records == [UnknownRecord(0x0042, b"\xe4")]
        assert write_records(records) == data
        assert "keeping raw bytes" in caplog.text

    def test_trailing_bytes_kept_opaque(self):
        """A structured record with unexpected extra payload is kept opaque."""
        data = frame(0x0042, b"\xe4\x04\x00")
        records = read_records(data)
        assert records == [UnknownRecord(0x0042, b"\xe4\x04\x00")]
        assert write_records(records) == data

    def test_stats(self, mixed_stream: bytes):
        """Test the counts collected while reading."""
        factory = RecordFactory()
        factory.read(mixed_stream)
        stats = factory.stats
        assert stats.total == 5
        assert stats.structured == 2
        assert stats.opaque == 3
        assert stats.count_tier(Classification.DOCUMENTED) == 1
        assert stats.count_tier(Classification.OBSERVED) == 1
        assert stats.count_tier(Classification.UNKNOWN) == 1
        assert stats.sids[0x0081] == 1

    def test_offsets(self, mixed_stream: bytes):
        """Test that the frame offset of each record is recorded."""
        factory = RecordFactory()
        factory.read(mixed_stream)
        assert factory.offsets == [0, 6, 12, 16, 21]

    def test_truncated_stream(self, mixed_stream: bytes):
        """A truncated stream is a format error."""
        with pytest.raises(RecordFormatError):
            read_records(mixed_stream[:-1] + b"\x00\x00\x05")


# =============================================================================
# Round-trip Tests
# =============================================================================

class TestRoundTrip:
    """Tests for read/write cycles."""

    def test_mixed_stream(self, mixed_records: list, mixed_stream: bytes):
        """Reading and writing a mixed stream is byte-exact."""
        records = read_records(mixed_stream)
        assert records == mixed_records
        assert write_records(records) == mixed_stream

    def test_write_size(self, mixed_records: list):
        """The written stream is the sum of the record sizes."""
        data = write_records(mixed_records)
        assert len(data) == sum(r.get_record_size() for r in mixed_records) == 25

    def test_modified_record(self, mixed_stream: bytes):
        """Replacing one opaque record changes only its frame."""
        records = read_records(mixed_stream)
        records[1] = records[1].with_data(b"\x09\x08\x07")
        data = write_records(records)
        assert data[6:13] == b"\x81\x00\x03\x00\x09\x08\x07"
        assert data[:6] == mixed_stream[:6]
        assert data[13:] == mixed_stream[12:]

    def test_empty(self):
        """No records, no bytes."""
        assert write_records([]) == b""
        assert read_records(b"") == []
