"""
Unit Tests for the Instruction Record and Listing Format
========================================================

Copyright (c) 2026 The gb-objdump Authors
"""

import dataclasses

import pytest

from gbobjdump.disassembler import DecodedInstruction, InstructionStream, decode_one, render
from gbobjdump.errors import DecodeErrorKind


def decode(data: bytes, address: int = 0) -> DecodedInstruction:
    instr, _ = decode_one(InstructionStream(data), address)
    return instr


class TestRender:
    """Tests for the fixed-width listing line."""

    def test_operands(self):
        """Test a line with operands."""
        line = render(decode(bytes([0x3E, 0x2A]), address=0x0150))

        assert line == "0x0150: 3e2a" + " " * 9 + "ld" + " " * 5 + "a, 0x2a"

    def test_no_operands_keeps_trailing_space(self):
        """Test that an operand-less line ends after the padded mnemonic and a space."""
        line = render(decode(bytes([0x00])))

        assert line == "0x0000: " + "00".ljust(12) + " " + "nop".ljust(6) + " "

    def test_three_byte_instruction(self):
        """Test raw bytes of a three byte instruction."""
        line = render(decode(bytes([0xC3, 0x50, 0x01]), address=0x0101))

        assert line.startswith("0x0101: c35001       jp     ")
        assert line.endswith("0x0150")

    def test_error_label(self):
        """Test that an error replaces mnemonic and operands."""
        line = render(decode(bytes([0xD3])))

        assert line == "0x0000: d3" + " " * 11 + "Illegal Instruction"

    def test_partial_tokens_hidden_on_error(self):
        """Test that partial tokens of a malformed instruction are not shown."""
        line = render(decode(bytes([0xC3, 0x00])))

        assert "jp" not in line
        assert line.endswith("Malformed Instruction")

    def test_custom_widths(self):
        """Test narrower columns."""
        line = render(decode(bytes([0x06, 0x2A])), hex_width=4, mnemonic_width=3)

        assert line == "0x0000: 062a ld  b, 0x2a"

    def test_wide_address(self):
        """Test that banked addresses above 0xFFFF are not truncated."""
        line = render(decode(bytes([0x00]), address=0x14000))

        assert line.startswith("0x14000: ")

    def test_str_uses_default_widths(self):
        """Test that str() matches render()."""
        instr = decode(bytes([0xCB, 0x7C]))

        assert str(instr) == render(instr)


class TestDecodedInstruction:
    """Tests for the record itself."""

    def test_immutable(self):
        """Test that records cannot be modified."""
        instr = decode(bytes([0x00]))

        with pytest.raises(dataclasses.FrozenInstanceError):
            instr.address = 5

    def test_properties(self):
        """Test derived properties."""
        instr = decode(bytes([0xCD, 0x00, 0x40]), address=0x0200)

        assert instr.mnemonic == "call"
        assert instr.operands == ("0x4000",)
        assert instr.size == 3
        assert instr.opcode == 0xCD
        assert not instr.is_fatal

    def test_empty_record(self):
        """Test a record with nothing decoded."""
        instr = DecodedInstruction(address=0, raw_bytes=b"", error=DecodeErrorKind.UNKNOWN)

        assert instr.mnemonic == ""
        assert instr.opcode is None
        assert instr.is_fatal

    def test_to_dict(self):
        """Test conversion to dictionary."""
        d = decode(bytes([0x06, 0x2A]), address=0x0150).to_dict()

        assert d["address"] == "0x0150"
        assert d["address_int"] == 0x0150
        assert d["bytes"] == "062a"
        assert d["mnemonic"] == "ld"
        assert d["operands"] == ["b", "0x2a"]
        assert d["size"] == 2
        assert d["error"] is None

    def test_to_dict_error(self):
        """Test conversion of a failed decode."""
        d = decode(bytes([0xED])).to_dict()

        assert d["error"] == "Illegal Instruction"
