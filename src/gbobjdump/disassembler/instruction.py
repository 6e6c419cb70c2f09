"""
Decoded Instruction Record
==========================

The value produced by one decode call, and its fixed-width listing line.

Listing Format
--------------
    0x0150: 3e2a         ld     a, 0x2a
    0x0152: d3           Illegal Instruction

Address, raw bytes in lowercase hex padded to hex_width, then either the
mnemonic padded to mnemonic_width followed by comma-separated operands, or
the error label. The default widths (12 and 6) match the original tool
byte for byte, including the trailing space left after an operand-less
mnemonic.

Copyright (c) 2026 The gb-objdump Authors
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from gbobjdump.errors import DecodeErrorKind


DEFAULT_HEX_WIDTH = 12
DEFAULT_MNEMONIC_WIDTH = 6


@dataclass(frozen=True)
class DecodedInstruction:
    """
    Represents a single decoded LR35902 instruction.

    Attributes:
        address: Address of the first byte of the instruction
        raw_bytes: Every byte consumed, opcode first, in stream order
        tokens: Mnemonic followed by operands (destination before source)
        error: Why decoding failed, or None; tokens may be partial when set
    """
    address: int
    raw_bytes: bytes
    tokens: Tuple[str, ...] = ()
    error: Optional[DecodeErrorKind] = None

    @property
    def mnemonic(self) -> str:
        """The operation mnemonic, or "" if decoding stopped before it."""
        return self.tokens[0] if self.tokens else ""

    @property
    def operands(self) -> Tuple[str, ...]:
        return self.tokens[1:]

    @property
    def size(self) -> int:
        """Number of stream bytes this instruction consumed."""
        return len(self.raw_bytes)

    @property
    def opcode(self) -> Optional[int]:
        """The first opcode byte, or None if nothing could be read."""
        return self.raw_bytes[0] if self.raw_bytes else None

    @property
    def is_fatal(self) -> bool:
        """True if a listing should stop after this instruction."""
        return self.error is not None and self.error.is_fatal

    def __str__(self) -> str:
        return render(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"0x{self.address:04x}",
            "address_int": self.address,
            "bytes": self.raw_bytes.hex(),
            "mnemonic": self.mnemonic,
            "operands": list(self.operands),
            "size": self.size,
            "error": self.error.label if self.error is not None else None,
        }


def render(
    instruction: DecodedInstruction,
    hex_width: int = DEFAULT_HEX_WIDTH,
    mnemonic_width: int = DEFAULT_MNEMONIC_WIDTH,
) -> str:
    """
    Format an instruction as one listing line.

    Args:
        instruction: The decoded instruction
        hex_width: Width of the raw-byte column
        mnemonic_width: Width of the mnemonic (or error label) column

    Returns:
        The listing line, without a trailing newline
    """
    hex_bytes = instruction.raw_bytes.hex()
    prefix = f"0x{instruction.address:04x}: {hex_bytes:<{hex_width}}"

    if instruction.error is not None:
        return f"{prefix} {instruction.error.label:<{mnemonic_width}}"

    operands = ", ".join(instruction.operands)
    return f"{prefix} {instruction.mnemonic:<{mnemonic_width}} {operands}"
