"""
Core data structures for ms2parser.

This module provides the records produced by the MS2 parser:

- Document: A parsed MS2 file (header, scans, diagnostics)
- Header: Run-level metadata from `H` lines
- Scan: One MS/MS spectrum with precursor metadata and peaks
- ChargeState: One `Z` line (charge, mass)

Enums for categorical metadata:
- ActivationType: Fragmentation method
"""

from .header import Header
from .scan import ActivationType, ChargeState, Scan
from .document import Document

__all__ = [
    # Main classes
    "Document",
    "Header",
    "Scan",
    "ChargeState",
    # Enums
    "ActivationType",
]
