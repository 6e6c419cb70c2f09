"""
Unit Tests for the Instruction Stream and Error Taxonomy
========================================================

Copyright (c) 2026 The gb-objdump Authors
"""

import io

import pytest

from gbobjdump.disassembler import InstructionStream
from gbobjdump.errors import (
    DecodeError,
    DecodeErrorKind,
    EndOfStream,
    GBObjdumpError,
    ROMError,
    StreamReadError,
)


class TestInstructionStream:
    """Tests for the byte cursor."""

    def test_reads_forward(self):
        """Test sequential reads from bytes."""
        stream = InstructionStream(bytes([0x01, 0x02]))

        assert stream.read_byte() == 0x01
        assert stream.read_byte() == 0x02
        assert stream.tell() == 2

    def test_end_of_stream(self):
        """Test that reading past the end raises EndOfStream."""
        stream = InstructionStream(bytes([0x01]))
        stream.read_byte()

        with pytest.raises(EndOfStream) as exc_info:
            stream.read_byte()
        assert exc_info.value.position == 1
        assert stream.tell() == 1

    def test_file_object(self):
        """Test wrapping a binary file object."""
        reader = io.BytesIO(bytes([0xAA, 0xBB, 0xCC]))
        reader.seek(1)
        stream = InstructionStream(reader)

        assert stream.size == 3
        assert stream.tell() == 1
        assert stream.read_byte() == 0xBB

    def test_pipe(self, pipe_reader):
        """Test that a non-seekable reader is tracked from offset zero."""
        stream = InstructionStream(pipe_reader(bytes([0x3E, 0x2A])))

        assert stream.size is None
        assert stream.tell() == 0
        assert stream.read_byte() == 0x3E
        assert stream.read_byte() == 0x2A
        assert stream.tell() == 2
        with pytest.raises(EndOfStream) as exc_info:
            stream.read_byte()
        assert exc_info.value.position == 2
        assert not stream.at_end()

    def test_seek(self):
        """Test repositioning."""
        stream = InstructionStream(bytes(range(16)))
        stream.seek(10)

        assert stream.read_byte() == 10

    def test_at_end(self):
        """Test end detection."""
        stream = InstructionStream(bytes([0x00]))

        assert not stream.at_end()
        stream.read_byte()
        assert stream.at_end()

    def test_read_failure(self, flaky_reader):
        """Test that reader failures become StreamReadError."""
        stream = InstructionStream(flaky_reader(bytes([0x00]), fail_at=0))

        with pytest.raises(StreamReadError) as exc_info:
            stream.read_byte()
        assert isinstance(exc_info.value.cause, OSError)


class TestDecodeErrorKind:
    """Tests for the closed decode error taxonomy."""

    def test_four_kinds(self):
        """Test that exactly four kinds exist."""
        assert len(DecodeErrorKind) == 4

    @pytest.mark.parametrize("kind, label", [
        (DecodeErrorKind.ILLEGAL_INSTRUCTION, "Illegal Instruction"),
        (DecodeErrorKind.UNIMPLEMENTED_INSTRUCTION, "Unimplemented Instruction"),
        (DecodeErrorKind.MALFORMED_INSTRUCTION, "Malformed Instruction"),
        (DecodeErrorKind.UNKNOWN, "Unknown"),
    ])
    def test_labels(self, kind, label):
        """Test display labels."""
        assert kind.label == label
        assert str(kind) == label

    def test_fatal_kinds(self):
        """Test which kinds stop a listing."""
        assert not DecodeErrorKind.ILLEGAL_INSTRUCTION.is_fatal
        assert not DecodeErrorKind.UNIMPLEMENTED_INSTRUCTION.is_fatal
        assert DecodeErrorKind.MALFORMED_INSTRUCTION.is_fatal
        assert DecodeErrorKind.UNKNOWN.is_fatal


class TestExceptionHierarchy:
    """Tests for the exception classes."""

    def test_all_derive_from_base(self):
        """Test that package exceptions share one base class."""
        assert issubclass(DecodeError, GBObjdumpError)
        assert issubclass(EndOfStream, GBObjdumpError)
        assert issubclass(StreamReadError, GBObjdumpError)
        assert issubclass(ROMError, GBObjdumpError)

    def test_decode_error_message(self):
        """Test that DecodeError carries its kind."""
        error = DecodeError(DecodeErrorKind.MALFORMED_INSTRUCTION)

        assert error.kind == DecodeErrorKind.MALFORMED_INSTRUCTION
        assert str(error) == "Malformed Instruction"

    def test_rom_error_address(self):
        """Test that ROMError includes the address when given."""
        error = ROMError("image too short", address=0x0100)

        assert str(error) == "0x0100: image too short"
        assert error.address == 0x0100
