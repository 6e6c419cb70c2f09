"""
Disassembly Listings
====================

Drives the decoder over address ranges and prints listing lines.

Two entry points are provided:

- disassemble_range(): list instructions from the stream's current position
  until an address ceiling, the end of the image, or a fatal decode error
- disassemble_rom(): walk a Game Boy cartridge the way a reader would look
  at it: the RST/interrupt vectors, the entry trampoline at 0x0100 (a run
  of nops ending in a jp), then the code the trampoline jumps to

Stop Policy
-----------
Illegal and unimplemented opcodes are listed and skipped over. Malformed
and unknown decode errors are listed and end the range, since the input is
truncated or unreadable past that point.

Copyright (c) 2026 The gb-objdump Authors
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple, Union, BinaryIO

import click

from gbobjdump.config import DisassemblerConfig, get_default_config
from gbobjdump.disassembler.instruction import DecodedInstruction, render
from gbobjdump.disassembler.lr35902 import decode_one
from gbobjdump.disassembler.stream import InstructionStream
from gbobjdump.errors import ROMError

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]

OPCODE_NOP = 0x00
OPCODE_JP_NN = 0xC3

SECTION_VECTORS = "RST and Interrupt table"
SECTION_TRAMPOLINE = "Code Entry Point (Trampoline)"
SECTION_CODE = "Code Start"


# =============================================================================
# Range Iteration
# =============================================================================

def iter_instructions(
    stream: InstructionStream,
    start: int,
    end: int,
) -> Iterator[DecodedInstruction]:
    """
    Decode instructions from the stream's current position.

    Stops at the end of the stream, at the first instruction whose address
    is at or beyond end, or right after yielding an instruction with a fatal
    decode error.

    Args:
        stream: Stream positioned at the first instruction
        start: Address of the first instruction
        end: Address ceiling (exclusive)

    Yields:
        DecodedInstruction objects in address order
    """
    instr, address = decode_one(stream, start)
    while instr is not None and instr.address < end:
        yield instr
        if instr.is_fatal:
            logger.warning(f"Stopping at 0x{instr.address:04x}: {instr.error.label}")
            return
        instr, address = decode_one(stream, address)


def disassemble_range(
    stream: InstructionStream,
    start: int,
    end: int,
    echo: Echo = click.echo,
    config: Optional[DisassemblerConfig] = None,
) -> int:
    """
    Print the listing of one address range.

    Args:
        stream: Stream positioned at the first instruction
        start: Address of the first instruction
        end: Address ceiling (exclusive)
        echo: Line sink (default: click.echo)
        config: Output layout (default: environment-derived configuration)

    Returns:
        0 if the range was listed completely, 1 if a fatal decode error
        stopped it
    """
    config = config or get_default_config()

    for instr in iter_instructions(stream, start, end):
        echo(render(instr, config.hex_width, config.mnemonic_width))
        if instr.is_fatal:
            return 1
    return 0


def disassemble(
    data: bytes,
    start_address: int = 0,
    count: Optional[int] = None,
) -> List[DecodedInstruction]:
    """
    Decode a whole buffer.

    Args:
        data: Machine code
        start_address: Address of the first byte
        count: Maximum number of instructions (None = all)

    Returns:
        List of DecodedInstruction objects, ending early on a fatal error
    """
    result = []
    stream = InstructionStream(data)
    end = start_address + len(data)

    for instr in iter_instructions(stream, start_address, end):
        if count is not None and len(result) >= count:
            break
        result.append(instr)

    return result


def disassemble_to_text(
    data: bytes,
    start_address: int = 0,
    count: Optional[int] = None,
) -> str:
    """Decode a buffer and return the listing as one string."""
    return "\n".join(str(instr) for instr in disassemble(data, start_address, count))


# =============================================================================
# ROM Walk
# =============================================================================

def section_header(title: str) -> str:
    return f"---------------- {title:<40} ----------------"


def seek_checked(stream: InstructionStream, address: int) -> None:
    """
    Position the stream at an image offset.

    Raises:
        ROMError: The address lies beyond the end of the image
    """
    if stream.size is not None and address > stream.size:
        raise ROMError(f"address beyond end of image ({stream.size} bytes)", address)
    stream.seek(address)


def walk_trampoline(
    stream: InstructionStream,
    entry_point: int,
) -> Tuple[List[DecodedInstruction], DecodedInstruction]:
    """
    Decode the entry trampoline: any number of nops and one more instruction.

    Args:
        stream: The ROM stream
        entry_point: Address of the trampoline

    Returns:
        (nops, exit) where exit is the first instruction that is not a nop

    Raises:
        ROMError: The image ends at the entry point or before a non-nop
            instruction
    """
    seek_checked(stream, entry_point)
    if stream.at_end():
        raise ROMError("image ends at the entry point", entry_point)

    nops = []
    instr, address = decode_one(stream, entry_point)
    while instr is not None and instr.opcode == OPCODE_NOP:
        nops.append(instr)
        instr, address = decode_one(stream, address)

    if instr is None:
        raise ROMError("image ends inside the entry trampoline", address)
    return nops, instr


def jump_target(instr: DecodedInstruction) -> Optional[int]:
    """Target of an unconditional jp nn, or None for any other instruction."""
    if instr.opcode != OPCODE_JP_NN or instr.error is not None:
        return None
    return int.from_bytes(instr.raw_bytes[1:3], "little")


def disassemble_rom(
    source: Union[bytes, BinaryIO, InstructionStream],
    echo: Echo = click.echo,
    config: Optional[DisassemblerConfig] = None,
) -> int:
    """
    List the vector table, entry trampoline and main code of a cartridge.

    Args:
        source: ROM image, open ROM file, or InstructionStream
        echo: Line sink (default: click.echo)
        config: Addresses and output layout (default: environment-derived)

    Returns:
        0 on success, 1 if a listing hit a fatal error or the trampoline
        does not end in jp nn

    Raises:
        ROMError: The image is too short for the walk
    """
    config = config or get_default_config()
    stream = source if isinstance(source, InstructionStream) else InstructionStream(source)

    logger.info(f"Listing {SECTION_VECTORS.lower()}")
    seek_checked(stream, config.vector_table_start)
    echo(section_header(SECTION_VECTORS))
    ret = disassemble_range(
        stream, config.vector_table_start, config.vector_table_end, echo, config
    )
    if ret != 0:
        echo("Oh noes!")
        return ret

    logger.info(f"Following entry trampoline at 0x{config.entry_point:04x}")
    echo("")
    echo(section_header(SECTION_TRAMPOLINE))
    nops, exit_instr = walk_trampoline(stream, config.entry_point)
    for instr in nops:
        echo(render(instr, config.hex_width, config.mnemonic_width))
    echo(render(exit_instr, config.hex_width, config.mnemonic_width))

    echo("")
    echo(section_header(SECTION_CODE))
    target = jump_target(exit_instr)
    if target is None:
        logger.warning(
            f"Trampoline ends at 0x{exit_instr.address:04x} without an absolute jump"
        )
        echo("Oh noes!")
        return 1

    logger.info(f"Listing code from 0x{target:04x} to 0x{config.code_end:04x}")
    seek_checked(stream, target)
    return disassemble_range(stream, target, config.code_end, echo, config)
