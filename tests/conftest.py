"""
biffkit Test Configuration
==========================

Shared fixtures for the biffkit test suite.
"""

import pytest

from biffkit.config import DiagnosticsConfig, get_config, set_config
from biffkit.records import CodepageRecord, EOFRecord, UnknownRecord, write_records


@pytest.fixture(autouse=True)
def restore_diagnostics_config():
    """Keep each test from leaking diagnostics settings into the next."""
    previous = set_config(DiagnosticsConfig())
    yield get_config()
    set_config(previous)


@pytest.fixture
def mixed_records() -> list:
    """
    A stream mixing structured and opaque records:

        CODEPAGE (parsed), SHEETPR (documented), 0x0033 (observed),
        0xABCD (not in catalog), EOF (parsed)
    """
    return [
        CodepageRecord(1252),
        UnknownRecord(0x0081, b"\x01\x02"),
        UnknownRecord(0x0033, b""),
        UnknownRecord(0xABCD, b"\xff"),
        EOFRecord(),
    ]


@pytest.fixture
def mixed_stream(mixed_records: list) -> bytes:
    """Raw bytes of mixed_records."""
    return write_records(mixed_records)
