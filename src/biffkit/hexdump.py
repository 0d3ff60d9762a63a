"""
Hex Dump Formatting
===================

Helpers for showing raw record payloads in diagnostic output.

- to_hex(): one line of space-separated byte pairs, used in record rendering
- dump(): multi-line dump with offsets and a printable-ASCII gutter

Example:
    >>> to_hex(b"\\x01\\x02")
    '01 02'
    >>> print(dump(b"BIFF\\x00\\x01", width=8))
    00000000  42 49 46 46 00 01        |BIFF..|
"""


def to_hex(data: bytes) -> str:
    """Format bytes as uppercase hex pairs separated by single spaces."""
    return " ".join(f"{b:02X}" for b in data)


def _printable(b: int) -> str:
    return chr(b) if 0x20 <= b < 0x7F else "."


def dump(data: bytes, width: int = 16, indent: str = "") -> str:
    """
    Format bytes as a multi-line hex dump.

    Each line shows the 8-digit offset, `width` hex byte columns and the
    printable ASCII characters of those bytes. Short final lines are padded
    so the ASCII gutter stays aligned.

    Args:
        data: Bytes to dump
        width: Bytes per line (must be positive)
        indent: Prefix added to every line

    Returns:
        The dump, without a trailing newline. Empty data gives "".
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")

    lines = []
    for start in range(0, len(data), width):
        chunk = data[start:start + width]
        hex_part = " ".join(f"{b:02X}" for b in chunk).ljust(width * 3 - 1)
        ascii_part = "".join(_printable(b) for b in chunk)
        lines.append(f"{indent}{start:08X}  {hex_part}  |{ascii_part}|")
    return "\n".join(lines)
