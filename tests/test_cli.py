"""
Tests for the gbobjdump Command-Line Tool
=========================================

Copyright (c) 2026 The gb-objdump Authors
"""

from pathlib import Path

from click.testing import CliRunner

from gbobjdump import __version__
from gbobjdump.cli.errors import ExitCode
from gbobjdump.cli.gbobjdump import main


class TestGBObjdumpCLI:
    """Tests for the gbobjdump command."""

    def setup_method(self):
        """Create a CLI runner for each test."""
        self.runner = CliRunner()

    def test_rom_walk(self, cartridge):
        """Should list all three sections of a cartridge."""
        with self.runner.isolated_filesystem():
            Path("game.gb").write_bytes(cartridge)

            result = self.runner.invoke(main, ["game.gb"])

            assert result.exit_code == 0, result.output
            assert "RST and Interrupt table" in result.output
            assert "Code Entry Point (Trampoline)" in result.output
            assert "Code Start" in result.output
            assert "0x0150: 3e2a" in result.output

    def test_raw_range(self, cartridge):
        """Should list only the requested range."""
        with self.runner.isolated_filesystem():
            Path("game.gb").write_bytes(cartridge)

            result = self.runner.invoke(main, ["game.gb", "--start", "0x150", "--end", "0x152"])

            assert result.exit_code == 0, result.output
            lines = result.output.splitlines()
            assert len(lines) == 1
            assert lines[0].startswith("0x0150: 3e2a")

    def test_raw_whole_file(self):
        """Should list a non-cartridge fragment from offset 0."""
        with self.runner.isolated_filesystem():
            Path("code.bin").write_bytes(bytes([0x06, 0x2A, 0xC9]))

            result = self.runner.invoke(main, ["code.bin", "--raw"])

            assert result.exit_code == 0, result.output
            assert result.output.splitlines()[1].startswith("0x0002: c9")

    def test_malformed_exit_code(self):
        """Should exit with a decode error on truncated input."""
        with self.runner.isolated_filesystem():
            Path("code.bin").write_bytes(bytes([0x00, 0xC3]))

            result = self.runner.invoke(main, ["code.bin", "--raw"])

            assert result.exit_code == ExitCode.DECODE_ERROR
            assert "Malformed Instruction" in result.output

    def test_short_rom(self):
        """Should report a ROM that ends before its entry point."""
        with self.runner.isolated_filesystem():
            Path("short.gb").write_bytes(bytes(0x80))

            result = self.runner.invoke(main, ["short.gb"])

            assert result.exit_code == ExitCode.DECODE_ERROR
            assert "ROM error" in result.output

    def test_jump_outside_image_keeps_listing(self, cartridge):
        """Should print the sections listed before a bad jump target."""
        rom = bytearray(cartridge)
        rom[0x102:0x104] = bytes([0x00, 0x90])
        with self.runner.isolated_filesystem():
            Path("game.gb").write_bytes(bytes(rom))

            result = self.runner.invoke(main, ["game.gb"])

            assert result.exit_code == ExitCode.DECODE_ERROR
            assert "RST and Interrupt table" in result.output
            assert "Code Entry Point (Trampoline)" in result.output
            assert "jp     0x9000" in result.output
            assert "ROM error: 0x9000: address beyond end of image" in result.output

    def test_jump_outside_image_keeps_output_file(self, cartridge):
        """Should write the partial listing to the output file."""
        rom = bytearray(cartridge)
        rom[0x102:0x104] = bytes([0x00, 0x90])
        with self.runner.isolated_filesystem():
            Path("game.gb").write_bytes(bytes(rom))

            result = self.runner.invoke(main, ["game.gb", "-o", "game.lst"])

            assert result.exit_code == ExitCode.DECODE_ERROR
            listing = Path("game.lst").read_text()
            assert "RST and Interrupt table" in listing
            assert "0x0101: c30090" in listing

    def test_output_file(self, cartridge):
        """Should write the listing to a file."""
        with self.runner.isolated_filesystem():
            Path("game.gb").write_bytes(cartridge)

            result = self.runner.invoke(main, ["game.gb", "-o", "game.lst"])

            assert result.exit_code == 0, result.output
            listing = Path("game.lst").read_text()
            assert "Code Start" in listing
            assert listing.endswith("\n")

    def test_invalid_address(self):
        """Should reject an unparseable address."""
        with self.runner.isolated_filesystem():
            Path("code.bin").write_bytes(bytes([0x00]))

            result = self.runner.invoke(main, ["code.bin", "--start", "zz"])

            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_start_beyond_file(self):
        """Should reject a start address past the end of the file."""
        with self.runner.isolated_filesystem():
            Path("code.bin").write_bytes(bytes([0x00]))

            result = self.runner.invoke(main, ["code.bin", "--start", "0x10"])

            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_empty_file(self):
        """Should reject an empty input file."""
        with self.runner.isolated_filesystem():
            Path("empty.bin").write_bytes(b"")

            result = self.runner.invoke(main, ["empty.bin"])

            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self):
        """Should reject a missing input file."""
        result = self.runner.invoke(main, ["does-not-exist.gb"])

        assert result.exit_code == 2

    def test_env_widths(self, monkeypatch):
        """Should honor column widths from the environment."""
        monkeypatch.setenv("GBOBJDUMP_HEX_WIDTH", "4")
        monkeypatch.setenv("GBOBJDUMP_MNEMONIC_WIDTH", "2")
        with self.runner.isolated_filesystem():
            Path("code.bin").write_bytes(bytes([0x06, 0x2A]))

            result = self.runner.invoke(main, ["code.bin", "--raw"])

            assert result.output.splitlines()[0] == "0x0000: 062a ld b, 0x2a"

    def test_version(self):
        """Should print the version."""
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
