"""
gb-objdump Error Hierarchy
==========================

This module defines the exception hierarchy for the entire package.
All exceptions inherit from GBObjdumpError, allowing callers to catch all
disassembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
GBObjdumpError (base)
├── DecodeError - an instruction could not be decoded (carries a DecodeErrorKind)
├── StreamError (instruction stream failures, engine-internal)
│   ├── EndOfStream - no more bytes in the image
│   └── StreamReadError - the underlying reader failed
└── ROMError - the ROM layout does not match what the preamble walker expects

Decode Error Taxonomy
---------------------
Decode failures are a closed set of four kinds. They are not raised through
the decode boundary: the decoder attaches the kind to the instruction record
and the listing layer decides, per kind, whether to keep going.

    ILLEGAL_INSTRUCTION        opcode exists on a Z80 but not on this CPU   (continue)
    UNIMPLEMENTED_INSTRUCTION  opcode shape with no decode rule             (continue)
    MALFORMED_INSTRUCTION      ran out of bytes mid-instruction             (stop)
    UNKNOWN                    any other read failure                       (stop)

Copyright (c) 2026 The gb-objdump Authors
"""

from enum import IntEnum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class GBObjdumpError(Exception):
    """
    Base exception for all gb-objdump errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all disassembler-related errors with a single except clause:

        try:
            disassemble_rom(rom_bytes)
        except GBObjdumpError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Decode Errors
# =============================================================================

class DecodeErrorKind(IntEnum):
    """The four ways a single instruction decode can fail."""

    ILLEGAL_INSTRUCTION = 0
    UNIMPLEMENTED_INSTRUCTION = 1
    MALFORMED_INSTRUCTION = 2
    UNKNOWN = 3

    @property
    def label(self) -> str:
        """Human-readable label shown in place of the mnemonic."""
        return _DECODE_ERROR_LABELS[self]

    @property
    def is_fatal(self) -> bool:
        """
        Whether a listing should stop after an instruction with this error.

        Illegal and unimplemented opcodes are complete one-byte (or two-byte)
        encodings, so the next instruction boundary is known and listing can
        continue. Malformed and unknown errors mean the input itself is
        truncated or unreadable.
        """
        return self in (
            DecodeErrorKind.MALFORMED_INSTRUCTION,
            DecodeErrorKind.UNKNOWN,
        )

    def __str__(self) -> str:
        return self.label


_DECODE_ERROR_LABELS = {
    DecodeErrorKind.ILLEGAL_INSTRUCTION: "Illegal Instruction",
    DecodeErrorKind.UNIMPLEMENTED_INSTRUCTION: "Unimplemented Instruction",
    DecodeErrorKind.MALFORMED_INSTRUCTION: "Malformed Instruction",
    DecodeErrorKind.UNKNOWN: "Unknown",
}


class DecodeError(GBObjdumpError):
    """
    An instruction could not be decoded.

    Raised by operand readers and the opcode dispatchers, and caught by
    decode_one(), which records the kind on the returned instruction.

    Attributes:
        kind: Which of the four decode failures occurred
    """

    def __init__(self, kind: DecodeErrorKind):
        self.kind = kind
        super().__init__(kind.label)


# =============================================================================
# Instruction Stream Errors
# =============================================================================

class StreamError(GBObjdumpError):
    """Base exception for instruction stream failures."""
    pass


class EndOfStream(StreamError):
    """Raised when reading past the end of the image."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"end of stream at offset 0x{position:04x}")


class StreamReadError(StreamError):
    """
    Raised when the underlying reader fails for any reason other than
    running out of data.

    Attributes:
        position: Stream offset of the failed read
        cause: The original exception
    """

    def __init__(self, position: int, cause: Exception):
        self.position = position
        self.cause = cause
        super().__init__(f"read failed at offset 0x{position:04x}: {cause}")


# =============================================================================
# ROM Layout Errors
# =============================================================================

class ROMError(GBObjdumpError):
    """
    The ROM image does not have the layout the preamble walker expects.

    Attributes:
        message: The error description
        address: The offending address (optional)
    """

    def __init__(self, message: str, address: Optional[int] = None):
        self.message = message
        self.address = address
        if address is not None:
            super().__init__(f"0x{address:04x}: {message}")
        else:
            super().__init__(message)
