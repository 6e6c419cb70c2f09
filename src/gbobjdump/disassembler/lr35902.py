"""
LR35902 Instruction Decoder
===========================

Decodes Game Boy machine code one instruction at a time.

The LR35902 is Sharp's Z80 derivative used in the Game Boy. Its opcode map
follows the Z80's x/y/z bitfield structure, but the index registers, the
ED-prefixed extensions, the absolute-port I/O instructions and the register
exchanges are gone. Their slots either decode as Game Boy specific
instructions (high-page loads, ldi/ldd, swap, stop, reti at 0xD9) or are
illegal.

Architecture:
    - 8-bit data bus, 16-bit address bus (wider with cartridge banking)
    - Registers: A, F, B, C, D, E, H, L (8-bit); AF, BC, DE, HL, SP, PC (16-bit)
    - Little-endian 16-bit operands
    - One prefix byte (0xCB) selecting rotate/shift and bit operations

Dispatch
--------
The first opcode byte is split into quadrant, row and column (see
tables.py). Each quadrant is handled by its own function, which picks a
decode routine from the column and, where the column is shared by several
instructions, from the row, the pair or the q bit. 0xCB hands over to the
prefixed dispatcher, which reads one more byte.

Illegal opcodes: D3 DB DD E3 E4 EB EC ED F4 FC FD.

Usage:
    stream = InstructionStream(rom_bytes)
    instr, address = decode_one(stream, 0x0000)
    while instr is not None:
        print(instr)
        instr, address = decode_one(stream, address)

Copyright (c) 2026 The gb-objdump Authors
"""

import logging
from typing import Optional, Tuple

from gbobjdump.disassembler.instruction import DecodedInstruction
from gbobjdump.disassembler.operands import (
    InstructionBuilder,
    imm8,
    imm8_signed,
    imm16,
    imm16_addr,
)
from gbobjdump.disassembler.stream import InstructionStream
from gbobjdump.disassembler.tables import (
    R8,
    R16_AF,
    R16_SP,
    CONDITIONS,
    ROTATE_SHIFT,
    alu_tokens,
    column,
    pair,
    q_bit,
    quadrant,
    relative_condition,
    row,
)
from gbobjdump.errors import (
    DecodeError,
    DecodeErrorKind,
    EndOfStream,
    StreamReadError,
)

logger = logging.getLogger(__name__)

# Addresses are unsigned 32-bit to leave room for banked addressing
ADDRESS_MASK = 0xFFFFFFFF

CB_PREFIX = 0xCB


# =============================================================================
# Fixed-Form Instructions
# =============================================================================
# Instructions whose tokens never vary, keyed by the field that selects them.

# Quadrant 0x00, column 0, rows 0 and 2
_MISC_CONTROL = {
    0: ("nop",),
    2: ("stop",),
}

# Quadrant 0x00, column 2, keyed by (q bit, pair)
_ACCUMULATOR_INDIRECT = {
    (0x00, 0): ("ld", "[bc]", "a"),
    (0x00, 1): ("ld", "[de]", "a"),
    (0x00, 2): ("ldi", "[hl]", "a"),
    (0x00, 3): ("ldd", "[hl]", "a"),
    (0x08, 0): ("ld", "a", "[bc]"),
    (0x08, 1): ("ld", "a", "[de]"),
    (0x08, 2): ("ldi", "a", "[hl]"),
    (0x08, 3): ("ldd", "a", "[hl]"),
}

# Quadrant 0x00, column 7, keyed by row
_ACCUMULATOR_FLAG_OPS = ("rlca", "rrca", "rla", "rra", "daa", "cpl", "scf", "ccf")

# Quadrant 0xC0, column 1 with q set, keyed by pair
_STACK_MISC = (
    ("ret",),
    ("reti",),
    ("jp", "[hl]"),
    ("ld", "sp", "hl"),
)

# Quadrant 0xC0, column 2, rows 4 and 6
_HIGH_PAGE_C = {
    4: ("ld", "[0xff00 + C]", "a"),
    6: ("ld", "a", "[0xff00 + C]"),
}

# Quadrant 0xC0, column 3, rows 6 and 7
_INTERRUPT_CONTROL = {
    6: ("di",),
    7: ("ei",),
}


def _illegal(builder: InstructionBuilder) -> None:
    raise DecodeError(DecodeErrorKind.ILLEGAL_INSTRUCTION)


# =============================================================================
# Decode Routines - Quadrant 0x00
# =============================================================================

def decode_ld_nn_sp(builder: InstructionBuilder) -> None:
    """ld [nn], sp"""
    builder.emit("ld")
    builder.emit(imm16_addr(builder), "sp")


def decode_jr(builder: InstructionBuilder) -> None:
    """jr e"""
    builder.emit("jr")
    builder.emit(imm8_signed(builder))


def decode_jr_cc(builder: InstructionBuilder) -> None:
    """jr cc, e"""
    builder.emit("jr", relative_condition(builder.opcode))
    builder.emit(imm8_signed(builder))


def decode_ld_r16_nn(builder: InstructionBuilder) -> None:
    """ld rr, nn"""
    builder.emit("ld", R16_SP[pair(builder.opcode)])
    builder.emit(imm16(builder))


def decode_add_hl_r16(builder: InstructionBuilder) -> None:
    """add hl, rr"""
    builder.emit("add", "hl", R16_SP[pair(builder.opcode)])


def decode_inc_r16(builder: InstructionBuilder) -> None:
    builder.emit("inc", R16_SP[pair(builder.opcode)])


def decode_dec_r16(builder: InstructionBuilder) -> None:
    builder.emit("dec", R16_SP[pair(builder.opcode)])


def decode_inc_r8(builder: InstructionBuilder) -> None:
    builder.emit("inc", R8[row(builder.opcode)])


def decode_dec_r8(builder: InstructionBuilder) -> None:
    builder.emit("dec", R8[row(builder.opcode)])


def decode_ld_r8_n(builder: InstructionBuilder) -> None:
    """ld r, n"""
    builder.emit("ld", R8[row(builder.opcode)])
    builder.emit(imm8(builder))


# =============================================================================
# Decode Routines - Quadrants 0x40 and 0x80
# =============================================================================

def decode_ld_r8_r8(builder: InstructionBuilder) -> None:
    """ld r, r'"""
    opcode = builder.opcode
    builder.emit("ld", R8[row(opcode)], R8[column(opcode)])


def decode_alu_r8(builder: InstructionBuilder) -> None:
    """add/adc/sub/sbc/and/xor/or/cp with a register operand"""
    opcode = builder.opcode
    builder.emit(*alu_tokens(opcode))
    builder.emit(R8[column(opcode)])


# =============================================================================
# Decode Routines - Quadrant 0xC0
# =============================================================================

def decode_ret_cc(builder: InstructionBuilder) -> None:
    builder.emit("ret", CONDITIONS[row(builder.opcode)])


def decode_ld_high_n_a(builder: InstructionBuilder) -> None:
    """ld [0xff00 + n], a"""
    builder.emit("ld")
    builder.emit(f"[0xff00 + {imm8(builder)}]", "a")


def decode_add_sp_e(builder: InstructionBuilder) -> None:
    """add sp, e"""
    builder.emit("add", "sp")
    builder.emit(imm8_signed(builder))


def decode_ld_a_high_n(builder: InstructionBuilder) -> None:
    """ld a, [0xff00 + n]"""
    builder.emit("ld", "a")
    builder.emit(f"[0xff00 + {imm8(builder)}]")


def decode_ldhl_sp_e(builder: InstructionBuilder) -> None:
    """ldhl sp, e"""
    builder.emit("ldhl")
    offset = imm8_signed(builder)
    builder.emit("sp", offset)


def decode_pop_r16(builder: InstructionBuilder) -> None:
    builder.emit("pop", R16_AF[pair(builder.opcode)])


def decode_push_r16(builder: InstructionBuilder) -> None:
    builder.emit("push", R16_AF[pair(builder.opcode)])


def decode_jp_cc_nn(builder: InstructionBuilder) -> None:
    """jp cc, nn"""
    builder.emit("jp", CONDITIONS[row(builder.opcode)])
    builder.emit(imm16(builder))


def decode_ld_nn_a(builder: InstructionBuilder) -> None:
    """ld [nn], a"""
    builder.emit("ld")
    builder.emit(imm16_addr(builder), "a")


def decode_ld_a_nn(builder: InstructionBuilder) -> None:
    """ld a, [nn]"""
    builder.emit("ld", "a")
    builder.emit(imm16_addr(builder))


def decode_jp_nn(builder: InstructionBuilder) -> None:
    builder.emit("jp")
    builder.emit(imm16(builder))


def decode_call_cc_nn(builder: InstructionBuilder) -> None:
    """call cc, nn"""
    builder.emit("call", CONDITIONS[row(builder.opcode)])
    builder.emit(imm16(builder))


def decode_call_nn(builder: InstructionBuilder) -> None:
    builder.emit("call")
    builder.emit(imm16(builder))


def decode_alu_n(builder: InstructionBuilder) -> None:
    """add/adc/sub/sbc/and/xor/or/cp with an immediate operand"""
    builder.emit(*alu_tokens(builder.opcode))
    builder.emit(imm8(builder))


def decode_rst(builder: InstructionBuilder) -> None:
    builder.emit("rst", f"0x{row(builder.opcode) * 8:02x}")


# =============================================================================
# Decode Routines - CB Prefix
# =============================================================================

def decode_rotate_shift_r8(builder: InstructionBuilder) -> None:
    opcode = builder.cb_opcode
    builder.emit(ROTATE_SHIFT[row(opcode)], R8[column(opcode)])


def _decode_bit_op(builder: InstructionBuilder, mnemonic: str) -> None:
    opcode = builder.cb_opcode
    builder.emit(mnemonic, f"{row(opcode)}", R8[column(opcode)])


def decode_bit_b_r8(builder: InstructionBuilder) -> None:
    _decode_bit_op(builder, "bit")


def decode_res_b_r8(builder: InstructionBuilder) -> None:
    _decode_bit_op(builder, "res")


def decode_set_b_r8(builder: InstructionBuilder) -> None:
    _decode_bit_op(builder, "set")


_CB_FAMILIES = {
    0x00: decode_rotate_shift_r8,
    0x40: decode_bit_b_r8,
    0x80: decode_res_b_r8,
    0xC0: decode_set_b_r8,
}


def decode_prefix_cb(builder: InstructionBuilder) -> None:
    """
    Decode a CB-prefixed instruction.

    The prefix is already in the builder. Reads the second opcode byte;
    its quadrant selects rotate/shift, bit, res or set, and its row and
    column carry the operation/bit index and the register. No operand
    bytes follow.
    """
    opcode = builder.consume()
    _CB_FAMILIES[quadrant(opcode)](builder)


# =============================================================================
# Primary Dispatcher
# =============================================================================

def _dispatch_quadrant_0(builder: InstructionBuilder) -> None:
    opcode = builder.opcode
    z = column(opcode)
    y = row(opcode)

    if z == 0:
        if y in _MISC_CONTROL:
            builder.emit(*_MISC_CONTROL[y])
        elif y == 1:
            decode_ld_nn_sp(builder)
        elif y == 3:
            decode_jr(builder)
        else:
            decode_jr_cc(builder)
    elif z == 1:
        if q_bit(opcode):
            decode_add_hl_r16(builder)
        else:
            decode_ld_r16_nn(builder)
    elif z == 2:
        builder.emit(*_ACCUMULATOR_INDIRECT[(q_bit(opcode), pair(opcode))])
    elif z == 3:
        if q_bit(opcode):
            decode_dec_r16(builder)
        else:
            decode_inc_r16(builder)
    elif z == 4:
        decode_inc_r8(builder)
    elif z == 5:
        decode_dec_r8(builder)
    elif z == 6:
        decode_ld_r8_n(builder)
    else:
        builder.emit(_ACCUMULATOR_FLAG_OPS[y])


def _dispatch_quadrant_1(builder: InstructionBuilder) -> None:
    opcode = builder.opcode
    # ld [hl], [hl] is not an instruction; its encoding is halt
    if column(opcode) == 6 and row(opcode) == 6:
        builder.emit("halt")
    else:
        decode_ld_r8_r8(builder)


def _dispatch_quadrant_2(builder: InstructionBuilder) -> None:
    decode_alu_r8(builder)


def _dispatch_quadrant_3(builder: InstructionBuilder) -> None:
    opcode = builder.opcode
    z = column(opcode)
    y = row(opcode)

    if z == 0:
        if y < 4:
            decode_ret_cc(builder)
        elif y == 4:
            decode_ld_high_n_a(builder)
        elif y == 5:
            decode_add_sp_e(builder)
        elif y == 6:
            decode_ld_a_high_n(builder)
        else:
            decode_ldhl_sp_e(builder)
    elif z == 1:
        if q_bit(opcode):
            builder.emit(*_STACK_MISC[pair(opcode)])
        else:
            decode_pop_r16(builder)
    elif z == 2:
        if y < 4:
            decode_jp_cc_nn(builder)
        elif y in _HIGH_PAGE_C:
            builder.emit(*_HIGH_PAGE_C[y])
        elif y == 5:
            decode_ld_nn_a(builder)
        else:
            decode_ld_a_nn(builder)
    elif z == 3:
        if y == 0:
            decode_jp_nn(builder)
        elif y == 1:
            decode_prefix_cb(builder)
        elif y in _INTERRUPT_CONTROL:
            builder.emit(*_INTERRUPT_CONTROL[y])
        else:
            # out [n], a / in a, [n] / ex [sp], hl / ex de, hl
            _illegal(builder)
    elif z == 4:
        if y < 4:
            decode_call_cc_nn(builder)
        else:
            _illegal(builder)
    elif z == 5:
        if not q_bit(opcode):
            decode_push_r16(builder)
        elif pair(opcode) == 0:
            decode_call_nn(builder)
        else:
            # DD, ED and FD prefixes
            _illegal(builder)
    elif z == 6:
        decode_alu_n(builder)
    else:
        decode_rst(builder)


_QUADRANTS = {
    0x00: _dispatch_quadrant_0,
    0x40: _dispatch_quadrant_1,
    0x80: _dispatch_quadrant_2,
    0xC0: _dispatch_quadrant_3,
}


def decode_opcode(builder: InstructionBuilder) -> None:
    """
    Decode the instruction whose first opcode byte is already in the builder.

    Raises:
        DecodeError: The opcode is illegal, or its operands could not be read
    """
    _QUADRANTS[quadrant(builder.opcode)](builder)


# =============================================================================
# Public Entry Point
# =============================================================================

def decode_one(
    stream: InstructionStream,
    address: int,
) -> Tuple[Optional[DecodedInstruction], int]:
    """
    Decode one instruction at the stream's current position.

    Never raises for bad input: decode failures are recorded on the
    returned instruction, which holds every byte consumed up to the point
    of failure.

    Args:
        stream: Stream positioned at the first byte of the instruction
        address: Address to assign to that byte

    Returns:
        (instruction, next_address). instruction is None only when the
        stream was already exhausted, in which case the address is returned
        unchanged.
    """
    builder = InstructionBuilder(stream, address)

    try:
        builder.raw.append(stream.read_byte())
    except EndOfStream:
        return None, address
    except StreamReadError as e:
        logger.warning(f"Read failure at 0x{address:04x}: {e}")
        return builder.build(DecodeErrorKind.UNKNOWN), address

    error = None
    try:
        decode_opcode(builder)
    except DecodeError as e:
        error = e.kind

    instruction = builder.build(error)
    if error is not None:
        logger.debug(
            f"0x{address:04x}: opcode 0x{builder.opcode:02x} failed to decode: {error.label}"
        )
    else:
        logger.debug(f"0x{address:04x}: {' '.join(instruction.tokens)}")

    return instruction, (address + instruction.size) & ADDRESS_MASK
