"""
Instruction Stream
==================

A forward-reading byte cursor over a ROM image. The decoder borrows a
stream for the duration of one decode call and leaves it advanced by
exactly the number of bytes the instruction consumed.

Two failure modes are kept apart because the decoder reports them
differently:

- EndOfStream: the image has no more bytes (truncated instruction)
- StreamReadError: the underlying reader failed for some other reason

Copyright (c) 2026 The gb-objdump Authors
"""

import io
from typing import BinaryIO, Optional, Union

from gbobjdump.errors import EndOfStream, StreamReadError


class InstructionStream:
    """
    Byte cursor over an in-memory image or a readable binary file.

    Usage:
        stream = InstructionStream(rom_bytes)
        opcode = stream.read_byte()
        stream.tell()   # 1

    Args:
        source: bytes-like image, or an object with read()/tell()/seek()
    """

    def __init__(self, source: Union[bytes, bytearray, memoryview, BinaryIO]):
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._reader: BinaryIO = io.BytesIO(bytes(source))
            self._size: Optional[int] = len(source)
            self._position = 0
        else:
            self._reader = source
            self._size = _probe_size(source)
            self._position = _probe_position(source)

    @property
    def size(self) -> Optional[int]:
        """Length of the image in bytes, or None if the source can't tell."""
        return self._size

    def tell(self) -> int:
        """Current read position."""
        return self._position

    def seek(self, position: int) -> None:
        """Move the read position to an absolute offset."""
        self._reader.seek(position, io.SEEK_SET)
        self._position = position

    def read_byte(self) -> int:
        """
        Read one byte and advance the position by one.

        Returns:
            The byte value (0-255)

        Raises:
            EndOfStream: No bytes are left
            StreamReadError: The underlying reader raised OSError
        """
        try:
            chunk = self._reader.read(1)
        except OSError as e:
            raise StreamReadError(self._position, e) from e
        if not chunk:
            raise EndOfStream(self._position)
        self._position += 1
        return chunk[0]

    def at_end(self) -> bool:
        """True if no bytes remain (only meaningful when size is known)."""
        return self._size is not None and self._position >= self._size


def _probe_position(reader: BinaryIO) -> int:
    """Starting offset of a reader; pipes and sockets count from zero."""
    try:
        return reader.tell()
    except (AttributeError, OSError):
        return 0


def _probe_size(reader: BinaryIO) -> Optional[int]:
    """Find the length of a seekable reader without moving its position."""
    try:
        if not reader.seekable():
            return None
        here = reader.tell()
        end = reader.seek(0, io.SEEK_END)
        reader.seek(here, io.SEEK_SET)
        return end
    except (AttributeError, OSError):
        return None
