"""
LR35902 Lookup Tables
=====================

Static tables that turn the small indices packed into opcode bytes into
display names, plus the helpers that cut those indices out of an opcode.

Opcode Bit Layout
-----------------
Every primary opcode is read as three fields:

      7 6   5 4 3   2 1 0
    +-----+-------+-------+
    |  x  |   y   |   z   |
    +-----+-------+-------+
             p  q

    x (quadrant)  bits 7-6, kept in place (0x00, 0x40, 0x80, 0xC0)
    y (row)       bits 5-3: destination register, condition, ALU op, bit index
    z (column)    bits 2-0: source register, instruction group
    p (pair)      bits 5-4: 16-bit register pair
    q             bit 3, kept in place (0x00 or 0x08)

CB-prefixed opcodes use the same layout on their second byte.

Register Pair Tables
--------------------
The fourth register pair is named differently depending on the instruction
class: general 16-bit loads, inc/dec and add use SP, while push and pop use
AF. Both tables are kept so each decode routine names its own table.

Copyright (c) 2026 The gb-objdump Authors
"""

from typing import Tuple


# =============================================================================
# Register Names
# =============================================================================

# 8-bit registers; index 6 is the memory operand addressed by HL
R8 = ("b", "c", "d", "e", "h", "l", "[hl]", "a")

# 16-bit register pairs for ld/inc/dec/add
R16_SP = ("bc", "de", "hl", "sp")

# 16-bit register pairs for push/pop
R16_AF = ("bc", "de", "hl", "af")


# =============================================================================
# Conditions and Operations
# =============================================================================

CONDITIONS = ("NZ", "Z", "NC", "C", "PO", "PE", "P", "M")

ROTATE_SHIFT = ("rlc", "rrc", "rl", "rr", "sla", "sra", "swap", "srl")

# add, adc and sbc name the accumulator explicitly; the others imply it
ALU = (
    ("add", "a"),
    ("adc", "a"),
    ("sub",),
    ("sbc", "a"),
    ("and",),
    ("xor",),
    ("or",),
    ("cp",),
)

INTERRUPT_MODES = ("0", "0/1", "1", "2", "0", "0/1", "1", "2")

# Rows are y - 4 (ldi/ldd/ldir/lddr order), columns are z
BLOCK_INSTRUCTIONS = (
    ("ldi", "cpi", "ini", "outi"),
    ("ldd", "cpd", "ind", "outd"),
    ("ldir", "cpir", "inir", "otir"),
    ("lddr", "cpdr", "indr", "otdr"),
)


# =============================================================================
# Bitfield Extraction
# =============================================================================

def quadrant(opcode: int) -> int:
    """Bits 7-6, left in place."""
    return opcode & 0xC0


def row(opcode: int) -> int:
    """Bits 5-3 as an index 0-7."""
    return (opcode & 0x38) >> 3


def column(opcode: int) -> int:
    """Bits 2-0 as an index 0-7."""
    return opcode & 0x07


def pair(opcode: int) -> int:
    """Bits 5-4 as an index 0-3."""
    return (opcode & 0x30) >> 4


def q_bit(opcode: int) -> int:
    """Bit 3, left in place."""
    return opcode & 0x08


# =============================================================================
# Lookup Functions
# =============================================================================

def relative_condition(opcode: int) -> str:
    """
    Condition for the short relative jumps (0x20, 0x28, 0x30, 0x38).

    Those opcodes only reach rows 4-7, which map onto the first four
    entries of the condition table.
    """
    return CONDITIONS[row(opcode) - 4]


def alu_tokens(opcode: int) -> Tuple[str, ...]:
    """Mnemonic token(s) for the ALU operation in bits 5-3."""
    return ALU[row(opcode)]


def block_instruction(opcode: int) -> str:
    """
    Name of a Z80 block transfer/search/IO instruction (ED A0-BB).

    Args:
        opcode: The second byte of an ED-prefixed instruction
    """
    return BLOCK_INSTRUCTIONS[row(opcode) - 4][column(opcode)]


def interrupt_mode(opcode: int) -> str:
    """Interrupt mode operand of an ED-prefixed IM instruction."""
    return INTERRUPT_MODES[row(opcode)]
