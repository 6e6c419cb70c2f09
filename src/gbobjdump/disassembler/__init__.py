"""
gb-objdump Disassembler Module
==============================

This module provides disassembly of LR35902 machine code, the Z80-derived
CPU of the Nintendo Game Boy.

The decoder reads one instruction at a time from an InstructionStream and
returns a DecodedInstruction carrying the raw bytes, the mnemonic tokens,
and, if the bytes do not form a valid instruction, the reason why.

Usage:
    from gbobjdump.disassembler import InstructionStream, decode_one

    stream = InstructionStream(rom_bytes)
    instr, next_address = decode_one(stream, 0x0000)
    print(instr)

    # Whole-cartridge listing
    from gbobjdump.disassembler import disassemble_rom
    disassemble_rom(rom_bytes)

Copyright (c) 2026 The gb-objdump Authors
"""

from .stream import InstructionStream
from .instruction import DecodedInstruction, render
from .lr35902 import decode_one
from .listing import (
    disassemble,
    disassemble_range,
    disassemble_rom,
    disassemble_to_text,
    iter_instructions,
)

__all__ = [
    "InstructionStream",
    "DecodedInstruction",
    "render",
    "decode_one",
    "disassemble",
    "disassemble_range",
    "disassemble_rom",
    "disassemble_to_text",
    "iter_instructions",
]
