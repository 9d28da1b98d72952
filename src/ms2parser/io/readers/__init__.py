"""
Spectrum file readers.

This module provides readers for text-based mass spectrometry formats:

- MS2Reader: MS2 files (McDonald et al., 2004)

Parser building blocks:
- classify_line(): Tag-based line classification
- HeaderBuilder / ScanBuilder: Per-line record builders
- parse_lines(): Single-pass driver over an iterable of lines

Convenience functions:
- read_ms2(): Load an MS2 file into a Document
"""

from .ms2 import (
    HeaderBuilder,
    LineKind,
    MS2Reader,
    ParseContext,
    ParseOptions,
    ParserState,
    ScanBuilder,
    classify_line,
    parse_lines,
    read_ms2,
)

__all__ = [
    # Readers
    "MS2Reader",
    # Convenience functions
    "read_ms2",
    "parse_lines",
    # Parser building blocks
    "classify_line",
    "LineKind",
    "ParserState",
    "ParseContext",
    "HeaderBuilder",
    "ScanBuilder",
    # Options
    "ParseOptions",
]
