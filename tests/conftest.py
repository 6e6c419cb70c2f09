"""
gb-objdump Test Configuration
=============================

Shared fixtures for the test suite.

Copyright (c) 2026 The gb-objdump Authors
"""

import io
import os

import pytest

from gbobjdump.config import set_default_config


class FlakyReader(io.BytesIO):
    """A BytesIO whose reads fail with OSError once the position reaches fail_at."""

    def __init__(self, data: bytes, fail_at: int):
        super().__init__(data)
        self.fail_at = fail_at

    def read(self, size=-1):
        if self.tell() >= self.fail_at:
            raise OSError("device not ready")
        return super().read(size)


@pytest.fixture(autouse=True)
def fresh_default_config():
    """Make every test reload the default configuration from its own environment."""
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def cartridge() -> bytes:
    """
    A minimal cartridge image.

    0x0000-0x00FF: nops (vector table)
    0x0100: nop; jp 0x0150
    0x0150: ld a, 0x2a; jr -2
    then nops up to 0x0160
    """
    rom = bytearray(0x160)
    rom[0x100:0x104] = bytes([0x00, 0xC3, 0x50, 0x01])
    rom[0x150:0x154] = bytes([0x3E, 0x2A, 0x18, 0xFE])
    return bytes(rom)


@pytest.fixture
def flaky_reader():
    """Factory for readers that fail at a given offset."""
    return FlakyReader


@pytest.fixture
def pipe_reader():
    """Factory for non-seekable readers backed by an OS pipe holding data."""
    opened = []

    def make(data: bytes):
        read_fd, write_fd = os.pipe()
        with open(write_fd, "wb") as writer:
            writer.write(data)
        reader = open(read_fd, "rb")
        opened.append(reader)
        return reader

    yield make
    for reader in opened:
        reader.close()
