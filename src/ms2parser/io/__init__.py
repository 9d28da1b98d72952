"""
I/O module for reading mass spectrometry text formats.

This module provides:

Readers:
- MS2Reader: Read MS2 files

Convenience functions:
- read_ms2(): Load an MS2 file into a Document

Base classes:
- DocumentReader: Abstract base class for all readers

Options:
- ParseOptions: Decoding, input caps and strict mode
"""

from .base import DocumentReader
from .readers import MS2Reader, ParseOptions, parse_lines, read_ms2

__all__ = [
    # Base
    "DocumentReader",
    # Readers
    "MS2Reader",
    # Convenience functions
    "read_ms2",
    "parse_lines",
    # Options
    "ParseOptions",
]
