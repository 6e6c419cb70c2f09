"""
gb-objdump - Configuration
==========================

Listing layout and ROM walk settings. Configuration can come from:
- Default values (defined here)
- Environment variables

The defaults reproduce the output of the original objdump-style tool:
a 12 character raw-byte column, a 6 character mnemonic column, and the
standard Game Boy cartridge layout (RST/interrupt vectors at 0x0000-0x0067,
entry trampoline at 0x0100, fixed ROM bank 0 and switchable bank ending at
0x8000).

Copyright (c) 2026 The gb-objdump Authors
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

logger = logging.getLogger(__name__)


def parse_int(value: str) -> int:
    """
    Parse an integer given as hex ("0x100", "$100") or decimal ("256").

    Raises:
        ValueError: If the string is not a valid number
    """
    text = value.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    if text.startswith("$"):
        return int(text[1:], 16)
    return int(text)


@dataclass
class DisassemblerConfig:
    """
    Configuration for listing output and the ROM preamble walk.

    Attributes:
        hex_width: Width of the raw-byte column (default: 12)
        mnemonic_width: Width of the mnemonic column (default: 6)
        vector_table_start: First address of the RST/interrupt table (default: 0x0000)
        vector_table_end: End (exclusive) of the RST/interrupt table (default: 0x0068)
        entry_point: Cartridge entry point (default: 0x0100)
        code_end: End (exclusive) of the code listing (default: 0x8000)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # OUTPUT LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    hex_width: int = 12
    mnemonic_width: int = 6

    # ═══════════════════════════════════════════════════════════════════════════
    # ROM LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    vector_table_start: int = 0x0000
    vector_table_end: int = 0x0068
    entry_point: int = 0x0100
    code_end: int = 0x8000

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "DisassemblerConfig":
        """
        Create DisassemblerConfig from environment variables.

        Environment variables (all optional):
            GBOBJDUMP_HEX_WIDTH: Raw-byte column width
            GBOBJDUMP_MNEMONIC_WIDTH: Mnemonic column width
            GBOBJDUMP_ENTRY_POINT: Entry point address (hex or decimal)
            GBOBJDUMP_CODE_END: End of code listing (hex or decimal)

        Values that do not parse are ignored and the default is kept.

        Returns:
            DisassemblerConfig with values from environment variables
        """
        config = cls()

        if (width := _env_int("GBOBJDUMP_HEX_WIDTH")) is not None:
            config.hex_width = width

        if (width := _env_int("GBOBJDUMP_MNEMONIC_WIDTH")) is not None:
            config.mnemonic_width = width

        if (entry := _env_int("GBOBJDUMP_ENTRY_POINT")) is not None:
            config.entry_point = entry

        if (end := _env_int("GBOBJDUMP_CODE_END")) is not None:
            config.code_end = end

        return config


def _env_int(name: str) -> Optional[int]:
    """Read an integer environment variable, or None if unset or invalid."""
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return parse_int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a valid integer")
        return None


# Global default configuration
_default_config: Optional[DisassemblerConfig] = None


def get_default_config() -> DisassemblerConfig:
    """
    Get the default configuration, loading it from the environment on first use.

    Returns:
        The global default DisassemblerConfig
    """
    global _default_config
    if _default_config is None:
        _default_config = DisassemblerConfig.from_env()
    return _default_config


def set_default_config(config: Optional[DisassemblerConfig]) -> None:
    """
    Set the default configuration.

    Passing None makes the next get_default_config() reload from the
    environment.

    Args:
        config: Configuration to use as default
    """
    global _default_config
    _default_config = config
