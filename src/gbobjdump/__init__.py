"""
gb-objdump - Disassembler for the Nintendo Game Boy CPU
=======================================================

This package decodes machine code for the Sharp LR35902, the Z80-derived
8-bit CPU of the Game Boy, into an objdump-style listing.

The LR35902 implements a restricted Z80 opcode map: no index registers,
no ED-prefixed extensions, no absolute-port I/O or register exchanges,
plus a handful of Game Boy specific instructions (ldi/ldd, high-page
loads, swap, stop). Opcodes the Game Boy lacks are reported as illegal
rather than decoded.

Main Components
---------------
- **disassembler**: instruction stream, opcode decoder and listings
- **errors**: exception hierarchy and the decode error taxonomy
- **config**: listing layout and ROM walk settings
- **cli**: the gbobjdump command-line tool

Quick Start
-----------
Decode a single instruction:
    >>> from gbobjdump import InstructionStream, decode_one
    >>> instr, next_address = decode_one(InstructionStream(bytes([0x06, 0x2A])), 0)
    >>> instr.tokens
    ('ld', 'b', '0x2a')

Or use the command-line tool:
    $ gbobjdump game.gb
    $ gbobjdump game.gb --raw --start 0x150 --end 0x200

Reference Documentation
-----------------------
- Game Boy CPU opcode table: https://gbdev.io/gb-opcodes/optables/
- Z80 opcode decoding: http://www.z80.info/decoding.htm

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "The gb-objdump Authors"

# =============================================================================
# Public API Exports
# =============================================================================

from gbobjdump.errors import (
    GBObjdumpError,
    DecodeError,
    DecodeErrorKind,
    StreamError,
    EndOfStream,
    StreamReadError,
    ROMError,
)
from gbobjdump.config import DisassemblerConfig
from gbobjdump.disassembler import (
    InstructionStream,
    DecodedInstruction,
    decode_one,
    render,
    disassemble,
    disassemble_range,
    disassemble_rom,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Errors
    "GBObjdumpError",
    "DecodeError",
    "DecodeErrorKind",
    "StreamError",
    "EndOfStream",
    "StreamReadError",
    "ROMError",
    # Configuration
    "DisassemblerConfig",
    # Disassembler
    "InstructionStream",
    "DecodedInstruction",
    "decode_one",
    "render",
    "disassemble",
    "disassemble_range",
    "disassemble_rom",
]
