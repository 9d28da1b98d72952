"""
ms2parser: a parser for MS2 tandem mass spectrometry files.

    >>> import ms2parser
    >>> doc = ms2parser.parse("file.ms2")
    >>> doc.header.scan_type
    'MS2'
    >>> doc[0].precursor_mz, doc[0].charges
"""

from .core import ActivationType, ChargeState, Document, Header, Scan
from .exceptions import Diagnostic, FormatError, LimitExceededError, MS2Error, StructuralError
from .io import MS2Reader, ParseOptions, read_ms2

__version__ = "0.1.0"

parse = read_ms2

__all__ = [
    "parse",
    "read_ms2",
    "MS2Reader",
    "ParseOptions",
    "Document",
    "Header",
    "Scan",
    "ChargeState",
    "ActivationType",
    "Diagnostic",
    "MS2Error",
    "FormatError",
    "StructuralError",
    "LimitExceededError",
]
