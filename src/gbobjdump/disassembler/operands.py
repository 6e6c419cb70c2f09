"""
Instruction Builder and Operand Readers
=======================================

Each decode routine works on an InstructionBuilder: it emits its mnemonic
tokens and calls operand readers, which pull bytes from the stream, record
them as part of the instruction and hand back the display token.

Operand Kinds
-------------
    imm8         1 byte,  "0x2a"
    imm8_signed  1 byte,  "-3"      (relative jumps, SP offsets)
    imm16        2 bytes, "0x0150"  (little-endian in the stream, shown high byte first)
    imm16_addr   2 bytes, "[0x0150]"

Every byte a reader takes from the stream is recorded immediately, so a
word operand cut short by the end of the image still leaves its first byte
in raw_bytes. raw_bytes therefore always matches how far the cursor moved.

Copyright (c) 2026 The gb-objdump Authors
"""

from typing import List, Optional

from gbobjdump.disassembler.instruction import DecodedInstruction
from gbobjdump.disassembler.stream import InstructionStream
from gbobjdump.errors import (
    DecodeError,
    DecodeErrorKind,
    EndOfStream,
    StreamReadError,
)


class InstructionBuilder:
    """
    Accumulates the bytes and tokens of one instruction while it is decoded.

    Attributes:
        stream: The stream being decoded
        address: Address of the instruction's first byte
        raw: Bytes consumed so far
        tokens: Display tokens emitted so far
    """

    def __init__(self, stream: InstructionStream, address: int):
        self.stream = stream
        self.address = address
        self.raw = bytearray()
        self.tokens: List[str] = []

    @property
    def opcode(self) -> int:
        """The first opcode byte."""
        return self.raw[0]

    @property
    def cb_opcode(self) -> int:
        """The opcode byte following a 0xCB prefix."""
        return self.raw[1]

    def consume(self) -> int:
        """
        Read one byte from the stream and record it.

        Raises:
            DecodeError: MALFORMED_INSTRUCTION at end of stream,
                UNKNOWN for any other read failure
        """
        try:
            value = self.stream.read_byte()
        except EndOfStream as e:
            raise DecodeError(DecodeErrorKind.MALFORMED_INSTRUCTION) from e
        except StreamReadError as e:
            raise DecodeError(DecodeErrorKind.UNKNOWN) from e
        self.raw.append(value)
        return value

    def emit(self, *tokens: str) -> None:
        self.tokens.extend(tokens)

    def build(self, error: Optional[DecodeErrorKind] = None) -> DecodedInstruction:
        """Freeze the accumulated state into an instruction record."""
        return DecodedInstruction(
            address=self.address,
            raw_bytes=bytes(self.raw),
            tokens=tuple(self.tokens),
            error=error,
        )


# =============================================================================
# Operand Readers
# =============================================================================

def imm8(builder: InstructionBuilder) -> str:
    """Unsigned 8-bit immediate, as two hex digits."""
    value = builder.consume()
    return f"0x{value:02x}"


def imm8_signed(builder: InstructionBuilder) -> str:
    """Two's complement 8-bit immediate, in decimal."""
    value = builder.consume()
    if value >= 0x80:
        value -= 0x100
    return f"{value}"


def imm16(builder: InstructionBuilder) -> str:
    """Little-endian 16-bit immediate, shown high byte first."""
    low = builder.consume()
    high = builder.consume()
    return f"0x{high:02x}{low:02x}"


def imm16_addr(builder: InstructionBuilder) -> str:
    """Little-endian 16-bit address, shown as a memory reference."""
    return f"[{imm16(builder)}]"
