"""
gb-objdump Command-Line Interface
=================================

This package provides the command-line tool for gb-objdump:

- **gbobjdump**: Game Boy ROM / machine code disassembler

The tool is implemented as a Click-based CLI application with
help and error reporting.
"""

__all__ = ["gbobjdump"]
