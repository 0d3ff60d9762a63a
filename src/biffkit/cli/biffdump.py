"""
biffdump - BIFF Record Stream Inspector
=======================================

This module implements the command-line interface for inspecting raw BIFF
record streams: a file holding concatenated record frames, such as a
Workbook stream already extracted from its OLE2 container.

Commands
--------
- **list**: One line per record with offset, sid, name and size
- **show**: Full diagnostic rendering of every record
- **classify**: Look up sids in the record catalog
- **verify**: Check that the stream is written back byte-for-byte

Usage Examples
--------------
List records, only those kept as opaque bytes:
    $ biffdump list --unknown-only workbook.bin

Render all records with hex dumps of opaque payloads:
    $ biffdump show --dump workbook.bin

Classify sids:
    $ biffdump classify 0x0081 0x1001 43981

Check round-trip:
    $ biffdump verify workbook.bin
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional
import logging

import click

from biffkit import __version__
from biffkit.cli.errors import ExitCode, handle_cli_exception
from biffkit.config import get_config, set_config
from biffkit.errors import RecordFormatError
from biffkit.hexdump import dump
from biffkit.records import (
    Classification,
    RecordFactory,
    UnknownRecord,
    classification_of,
    classify,
    write_records,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Parameter Types
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores common options like verbosity.
    """

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


class SidType(click.ParamType):
    """
    Click parameter type for record sids.

    Accepts hex with a 0x prefix (0x0081) or decimal (129), 0-65535.
    """
    name = "sid"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert string to sid."""
        if isinstance(value, int):
            sid = value
        else:
            try:
                sid = int(value, 0)
            except ValueError:
                self.fail(f"Invalid sid '{value}'. Use hex (0x0081) or decimal (129)",
                          param, ctx)
        if not 0 <= sid <= 0xFFFF:
            self.fail(f"Sid out of range: '{value}' (must be 0x0000-0xFFFF)", param, ctx)
        return sid


SID = SidType()


def _read_stream(path: Path) -> tuple[RecordFactory, list, bytes]:
    data = path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from {path}")
    factory = RecordFactory()
    records = factory.read(data)
    return factory, records, data


def _kind(record) -> str:
    return "opaque" if isinstance(record, UnknownRecord) else "parsed"


def _display_name(record) -> str:
    return record.name if isinstance(record, UnknownRecord) else type(record).name


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="biffdump")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Debug logging and sub-record warnings",
)
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Inspect BIFF record streams.

    \b
    Commands:
      list      List records in a stream
      show      Render every record
      classify  Look up sids in the record catalog
      verify    Check byte-exact round-trip

    \b
    Examples:
      biffdump list workbook.bin
      biffdump show --dump workbook.bin
      biffdump classify 0x0081 0x1001
      biffdump verify workbook.bin
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    if verbose:
        set_config(replace(get_config(), verbose=True))


# =============================================================================
# List Command
# =============================================================================

@main.command("list")
@click.argument(
    "stream_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-u", "--unknown-only",
    is_flag=True,
    help="Only show records kept as opaque bytes",
)
@pass_context
def cmd_list(ctx: Context, stream_file: Path, unknown_only: bool) -> None:
    """
    List records in a BIFF record stream.

    \b
    Output format:
      Offset    Sid     Name              Size  Kind
      00000000  0x0042  CODEPAGE             6  parsed
      00000006  0x0081  SHEETPR              6  opaque
    """
    try:
        factory, records, _ = _read_stream(stream_file)

        click.echo(f"{'Offset':<9} {'Sid':<7} {'Name':<22} {'Size':>6}  Kind")
        click.echo("-" * 54)

        for offset, record in zip(factory.offsets, records):
            if unknown_only and not isinstance(record, UnknownRecord):
                continue
            click.echo(
                f"{offset:08X}  0x{record.sid:04X}  {_display_name(record):<22} "
                f"{record.get_record_size():>6}  {_kind(record)}"
            )

        stats = factory.stats
        click.echo("-" * 54)
        click.echo(
            f"{stats.total} records: {stats.structured} parsed, {stats.opaque} opaque "
            f"({stats.count_tier(Classification.DOCUMENTED)} documented, "
            f"{stats.count_tier(Classification.OBSERVED)} observed, "
            f"{stats.count_tier(Classification.UNKNOWN)} unknown)"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Show Command
# =============================================================================

@main.command("show")
@click.argument(
    "stream_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-d", "--dump", "show_dump",
    is_flag=True,
    help="Add a multi-line hex dump of opaque payloads",
)
@pass_context
def cmd_show(ctx: Context, stream_file: Path, show_dump: bool) -> None:
    """
    Render every record in a BIFF record stream.

    \b
    Example:
      biffdump show --dump workbook.bin
    """
    try:
        factory, records, _ = _read_stream(stream_file)
        width = get_config().hex_width

        for offset, record in zip(factory.offsets, records):
            click.echo(f"@{offset:08X}")
            click.echo(record.render(), nl=False)
            if show_dump and isinstance(record, UnknownRecord) and record.raw_data:
                click.echo(dump(record.raw_data, width=width, indent="    "))

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Classify Command
# =============================================================================

@main.command("classify")
@click.argument("sids", nargs=-1, type=SID, required=True)
def cmd_classify(sids: tuple[int, ...]) -> None:
    """
    Look up sids in the record catalog.

    SIDS are hex (0x0081) or decimal (129) record type codes.

    \b
    Example:
      $ biffdump classify 0x0081 0x0033 0xABCD
      0x0081  SHEETPR         documented, not yet implemented
      0x0033  UNKNOWN-33      observed in real files, undocumented
      0xABCD  UNKNOWNRECORD   not in catalog
    """
    for sid in sids:
        tier = classification_of(sid)
        click.echo(f"0x{sid:04X}  {classify(sid):<15} {tier.get_description()}")


# =============================================================================
# Verify Command
# =============================================================================

@main.command("verify")
@click.argument(
    "stream_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_verify(ctx: Context, stream_file: Path) -> None:
    """
    Check that a stream is written back byte-for-byte.

    Reads every record, writes them all out again and compares the result
    with the input. Exits with status 1 on any difference.
    """
    try:
        factory, records, data = _read_stream(stream_file)
        written = write_records(records)

        if written != data:
            mismatch = next(
                (i for i, (a, b) in enumerate(zip(written, data)) if a != b),
                min(len(written), len(data)),
            )
            raise RecordFormatError(
                f"round-trip mismatch: wrote {len(written)} bytes, "
                f"read {len(data)} bytes", mismatch
            )

        click.echo(
            f"OK: {len(records)} records, {len(data)} bytes "
            f"({factory.stats.opaque} opaque)"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


if __name__ == "__main__":
    main()
