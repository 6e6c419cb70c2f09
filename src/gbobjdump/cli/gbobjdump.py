"""
gbobjdump - Game Boy Disassembler Command-Line Interface
========================================================

This module implements the command-line interface for the LR35902
disassembler. By default it walks a cartridge image the way the original
objdump-style tool did: RST/interrupt vectors, the entry trampoline at
0x0100, then the code the trampoline jumps into. With --raw it lists a
plain address range instead.

Usage Examples
--------------
Walk a cartridge:
    $ gbobjdump tetris.gb

List a raw range:
    $ gbobjdump tetris.gb --raw --start 0x150 --end 0x200

Disassemble a code fragment that is not a cartridge:
    $ gbobjdump routine.bin --raw

Output to file:
    $ gbobjdump tetris.gb -o tetris.lst

Copyright (c) 2026 The gb-objdump Authors
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from gbobjdump import __version__
from gbobjdump.cli.errors import ExitCode, handle_cli_exception
from gbobjdump.config import get_default_config, parse_int
from gbobjdump.disassembler import InstructionStream, disassemble_range, disassemble_rom
from gbobjdump.errors import GBObjdumpError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _parse_address(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    """Click callback: accept 0x/$ hex or decimal addresses."""
    if value is None:
        return None
    try:
        address = parse_int(value)
    except ValueError:
        raise click.BadParameter(f"invalid address '{value}'")
    if address < 0:
        raise click.BadParameter(f"address must not be negative: '{value}'")
    return address


def write_listing(lines: List[str], output: Optional[Path], verbose: bool) -> None:
    """Write listing lines to the output file, or to stdout if none is given."""
    text = "\n".join(lines) + "\n"

    if output:
        try:
            output.write_text(text, encoding="utf-8")
            logger.debug(f"Output written to: {output}")
        except OSError as e:
            handle_cli_exception(e, verbose)
    else:
        click.echo(text, nl=False)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-s", "--start",
    type=str,
    default=None,
    callback=_parse_address,
    help="First address to list (hex with 0x prefix or decimal). Implies --raw",
)
@click.option(
    "-e", "--end",
    type=str,
    default=None,
    callback=_parse_address,
    help="Address to stop listing at (exclusive). Implies --raw",
)
@click.option(
    "-r", "--raw",
    is_flag=True,
    help="List an address range instead of walking the cartridge layout",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="gbobjdump")
def main(
    input_file: Path,
    output: Optional[Path],
    start: Optional[int],
    end: Optional[int],
    raw: bool,
    verbose: bool,
) -> None:
    """
    Disassemble Game Boy (LR35902) machine code.

    INPUT_FILE is the ROM image or binary to disassemble.

    Without options, lists the RST/interrupt vector table, follows the
    entry trampoline at 0x0100 and lists the code it jumps to.

    Examples:

        # Walk a cartridge
        gbobjdump game.gb

        # List 0x0150-0x01FF only
        gbobjdump game.gb --start 0x150 --end 0x200
    """
    setup_logging(verbose)
    config = get_default_config()

    try:
        data = input_file.read_bytes()
    except OSError as e:
        handle_cli_exception(e, verbose)

    if len(data) == 0:
        click.echo(f"Error: {input_file} is empty", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    logger.debug(f"Input file: {input_file} ({len(data)} bytes)")

    lines = []
    stream = InstructionStream(data)

    try:
        if raw or start is not None or end is not None:
            first = start if start is not None else 0
            last = end if end is not None else len(data)
            if first >= len(data):
                raise click.BadParameter(
                    f"start 0x{first:04x} is beyond the end of {input_file.name} "
                    f"({len(data)} bytes)"
                )
            logger.debug(f"Listing 0x{first:04x}-0x{last:04x}")
            stream.seek(first)
            result = disassemble_range(stream, first, last, lines.append, config)
        else:
            result = disassemble_rom(stream, lines.append, config)
    except GBObjdumpError as e:
        # Keep the sections listed before the walk failed
        if lines:
            write_listing(lines, output, verbose)
        handle_cli_exception(e, verbose, error_type="ROM")
    except click.BadParameter as e:
        handle_cli_exception(e, verbose)

    write_listing(lines, output, verbose)

    if result != 0:
        sys.exit(ExitCode.DECODE_ERROR)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
