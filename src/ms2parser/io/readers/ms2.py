"""
MS2 file reader.

MS2 (McDonald et al., Rapid Commun. Mass Spectrom. 18, 2162-2168, 2004) is a
line-oriented text format for MS/MS spectra. The first character of every
line is a tag that selects its grammar:

    H   key value...              run-level header
    S   first_scan second_scan precursor_mz
    I   key value...              scan attribute
    Z   charge mass               charge state (may repeat)
    0-9 mass intensity            peak

The parser makes a single forward pass. Each line is classified by its tag,
routed to the header or scan builder, and the scan under construction is
sealed when the next `S` line or the end of input is reached.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import ClassVar, Optional

from ..base import DocumentReader
from ...core import ChargeState, Document, Header, Scan
from ...exceptions import Diagnostic, FormatError, LimitExceededError, StructuralError


logger = logging.getLogger(__name__)

Reporter = Callable[[FormatError], None]


class LineKind(Enum):
    """Classification of an MS2 line by its leading tag."""
    HEADER = auto()
    SCAN_START = auto()
    SCAN_ATTRIBUTE = auto()
    PEAK = auto()
    IGNORED = auto()


class ParserState(Enum):
    """Position of the driver in the file."""
    AWAITING_HEADER = auto()
    IN_HEADER = auto()
    IN_SCAN = auto()


_TAG_KINDS: dict[str, LineKind] = {
    'H': LineKind.HEADER,
    'S': LineKind.SCAN_START,
    'I': LineKind.SCAN_ATTRIBUTE,
    'Z': LineKind.SCAN_ATTRIBUTE,
}


def classify_line(line: str) -> LineKind:
    """
    Classify a line (without terminator) by its first character.

    Empty lines, `D` lines, comments and lines starting with whitespace
    are IGNORED.
    """
    if not line:
        return LineKind.IGNORED
    tag = line[0]
    if tag in _TAG_KINDS:
        return _TAG_KINDS[tag]
    if '0' <= tag <= '9':
        return LineKind.PEAK
    return LineKind.IGNORED


@dataclass
class ParseOptions:
    """
    Options for parsing an MS2 file.

    With the default errors='replace', undecodable bytes become U+FFFD and
    every affected line is reported as a diagnostic. Use errors='strict' to
    fail with UnicodeDecodeError instead.
    """

    # Text decoding
    encoding: str = 'utf-8'
    errors: str = 'replace'

    # Input caps; None = unlimited
    max_lines: Optional[int] = None
    max_bytes: Optional[int] = None

    # Raise the first per-line error instead of collecting it
    strict: bool = False


# Plain decimal numbers only; int()/float() also accept "1_000", "nan", "inf"
_NUMBER_PATTERNS: dict[type, re.Pattern] = {
    int: re.compile(r'[+-]?\d+'),
    float: re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'),
}


def _coerce(value: str, type_: type, name: str, line_number: int, line: str, report: Reporter):
    """Convert value to type_, reporting a FormatError and returning None on failure."""
    pattern = _NUMBER_PATTERNS.get(type_)
    if pattern is None or pattern.fullmatch(value):
        try:
            return type_(value)
        except ValueError:
            pass
    report(FormatError(
        f"invalid {type_.__name__} for {name}: {value!r}", line_number, line
    ))
    return None


class HeaderBuilder:
    """Builds the Header from `H` lines."""

    def __init__(self, report: Reporter):
        self.header = Header()
        self._report = report
        self._seen: set[str] = set()

    def apply(self, line: str, line_number: int) -> None:
        parts = line[1:].split(None, 1)
        if len(parts) < 2:
            key = parts[0] if parts else ''
            self._report(FormatError(
                f"header line has no value for key {key!r}" if key else "empty header line",
                line_number, line,
            ))
            return

        key, value = parts[0], parts[1].strip()
        if key in self._seen:
            self._report(FormatError(
                f"repeated header key {key!r}, keeping last value", line_number, line
            ))
        self._seen.add(key)

        if key not in Header.KEYS:
            self.header.extras[key] = value
            return

        attr, type_ = Header.KEYS[key]
        coerced = _coerce(value, type_, key, line_number, line, self._report)
        if coerced is not None:
            setattr(self.header, attr, coerced)


class ScanBuilder:
    """
    Builds Scan records from `S`, `I`, `Z` and peak lines.

    `start` creates the record for an `S` line; `apply` mutates an open
    record. Sealing is left to the driver.
    """

    def __init__(self, report: Reporter):
        self._report = report

    def start(self, line: str, line_number: int) -> Scan:
        fields = line[1:].split()
        if len(fields) < 3:
            self._report(FormatError(
                f"scan line needs 3 fields (first scan, second scan, precursor m/z), got {len(fields)}",
                line_number, line,
            ))
        values = []
        for index, (name, type_) in enumerate(
            (('FirstScan', int), ('SecondScan', int), ('PrecursorMZ', float))
        ):
            if index < len(fields):
                values.append(_coerce(fields[index], type_, name, line_number, line, self._report))
            else:
                values.append(None)
        return Scan(first_scan=values[0], second_scan=values[1], precursor_mz=values[2])

    def apply(self, scan: Scan, line: str, line_number: int) -> None:
        tag = line[0]
        if tag == 'I':
            self._apply_info(scan, line, line_number)
        elif tag == 'Z':
            self._apply_charge(scan, line, line_number)
        else:
            self._apply_peak(scan, line, line_number)

    def _apply_info(self, scan: Scan, line: str, line_number: int) -> None:
        parts = line[1:].split(None, 1)
        if len(parts) < 2:
            key = parts[0] if parts else ''
            self._report(FormatError(
                f"scan attribute line has no value for key {key!r}" if key else "empty scan attribute line",
                line_number, line,
            ))
            return

        key, value = parts[0], parts[1].strip()
        if key not in Scan.KEYS:
            scan.extras[key] = value
            return

        attr, type_ = Scan.KEYS[key]
        coerced = _coerce(value, type_, key, line_number, line, self._report)
        if coerced is not None:
            setattr(scan, attr, coerced)

    def _apply_charge(self, scan: Scan, line: str, line_number: int) -> None:
        fields = line[1:].split()
        if len(fields) < 2:
            self._report(FormatError(
                f"charge line needs 2 fields (charge, mass), got {len(fields)}",
                line_number, line,
            ))
            if not fields:
                return
        charge = _coerce(fields[0], int, 'Charge', line_number, line, self._report)
        mass = None
        if len(fields) > 1:
            mass = _coerce(fields[1], float, 'Mass', line_number, line, self._report)
        scan.charge_states.append(ChargeState(charge=charge, mass=mass))

    def _apply_peak(self, scan: Scan, line: str, line_number: int) -> None:
        fields = line.split()
        if len(fields) < 2:
            self._report(FormatError("peak line needs mass and intensity", line_number, line))
            return
        mass = _coerce(fields[0], float, 'peak mass', line_number, line, self._report)
        intensity = _coerce(fields[1], float, 'peak intensity', line_number, line, self._report)
        if mass is None or intensity is None:
            return
        scan.data[mass] = intensity


@dataclass
class ParseContext:
    """
    Mutable state of one parse: the driver state and the open scan slot.

    `state` is IN_SCAN exactly when `current` holds an open scan. Every
    scan reaches `scans` through `seal`.
    """
    strict: bool = False
    state: ParserState = ParserState.AWAITING_HEADER
    current: Optional[Scan] = None
    scans: list[Scan] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    header_seen: bool = False

    def on_header(self) -> bool:
        """
        Register an `H` line.

        Returns True if a scan is open; the scan stays open and the state
        stays IN_SCAN.
        """
        self.header_seen = True
        if self.state is ParserState.IN_SCAN:
            return True
        self.state = ParserState.IN_HEADER
        return False

    def open_scan(self, scan: Scan) -> None:
        """Seal the open scan, if any, and make `scan` the open one."""
        self.seal()
        self.current = scan
        self.state = ParserState.IN_SCAN

    def report(self, error: FormatError) -> None:
        """Record a per-line error, or raise it in strict mode."""
        logger.debug(f"{error.error_code} at line {error.line_number}: {error.reason}")
        if self.strict:
            raise error
        self.diagnostics.append(Diagnostic.from_error(error))

    def seal(self) -> None:
        """Append the open scan to the output and clear the slot."""
        if self.state is not ParserState.IN_SCAN:
            return
        self.scans.append(self.current)
        self.current = None
        self.state = ParserState.IN_HEADER if self.header_seen else ParserState.AWAITING_HEADER


def parse_lines(
    lines: Iterable[str],
    options: Optional[ParseOptions] = None,
    source_file: Optional[Path] = None,
) -> Document:
    """
    Run the parser over an iterable of lines.

    Args:
        lines: Lines of an MS2 file; trailing line terminators are stripped.
        options: Parse options (defaults to ParseOptions()).
        source_file: Recorded on the returned Document.

    Returns:
        The assembled Document.

    Raises:
        LimitExceededError: If options.max_lines is exceeded.
        FormatError: On the first defective line when options.strict is set.
    """
    options = options or ParseOptions()
    context = ParseContext(strict=options.strict)
    header_builder = HeaderBuilder(context.report)
    scan_builder = ScanBuilder(context.report)

    for line_number, raw in enumerate(lines, start=1):
        if options.max_lines is not None and line_number > options.max_lines:
            raise LimitExceededError(f"input exceeds max_lines={options.max_lines}")

        line = raw.rstrip('\r\n')
        kind = classify_line(line)
        if kind is not LineKind.IGNORED and '\ufffd' in line:
            context.report(FormatError(
                "undecodable bytes replaced with U+FFFD", line_number, line
            ))

        if kind is LineKind.HEADER:
            if context.on_header():
                context.report(FormatError(
                    "header line after the first scan", line_number, line
                ))
            header_builder.apply(line, line_number)

        elif kind is LineKind.SCAN_START:
            context.open_scan(scan_builder.start(line, line_number))

        elif kind is LineKind.SCAN_ATTRIBUTE or kind is LineKind.PEAK:
            if context.state is not ParserState.IN_SCAN:
                context.report(StructuralError(
                    f"{kind.name.lower()} line before any scan", line_number, line
                ))
                continue
            scan_builder.apply(context.current, line, line_number)

    context.seal()

    return Document(
        header=header_builder.header,
        scans=context.scans,
        diagnostics=context.diagnostics,
        source_file=source_file,
    )


class MS2Reader(DocumentReader):
    """
    Reader for MS2 files.

    Example:
        >>> with MS2Reader("sample.ms2") as reader:
        ...     doc = reader.to_document()
        ...     print(doc.header.creation_date, len(doc))
    """

    file_format: ClassVar[str] = "MS2"
    supported_extensions: ClassVar[list[str]] = ['.ms2']

    def __init__(self, path: Path | str, options: Optional[ParseOptions] = None):
        """
        Initialize the MS2 reader.

        Args:
            path: Path to an MS2 file.
            options: Parse options.
        """
        super().__init__(path)
        self.options = options or ParseOptions()
        self._file = None

    def __enter__(self) -> 'MS2Reader':
        """Open the file for reading."""
        max_bytes = self.options.max_bytes
        if max_bytes is not None and self.path.stat().st_size > max_bytes:
            raise LimitExceededError(
                f"{self.path.name} is {self.path.stat().st_size} bytes, exceeds max_bytes={max_bytes}"
            )
        self._file = open(
            self.path, 'r', encoding=self.options.encoding, errors=self.options.errors
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def to_document(self) -> Document:
        """
        Parse the whole file into a Document.

        Returns:
            Document with header, scans in file order and diagnostics.
        """
        if self._file is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")

        logger.info(f"Parsing {self.path.name}...")
        document = parse_lines(self._file, self.options, source_file=self.path)
        logger.info(f"Parsed {len(document)} scans from {self.path.name}")
        if document.diagnostics:
            logger.warning(
                f"{len(document.diagnostics)} defective lines in {self.path.name}, "
                f"first at {document.diagnostics[0]}"
            )
        return document


def read_ms2(path: Path | str, options: Optional[ParseOptions] = None) -> Document:
    """
    Convenience function to read an MS2 file into a Document.

    Args:
        path: Path to an MS2 file.
        options: Parse options.

    Returns:
        Document containing the header and all scans.

    Raises:
        FileNotFoundError: If the path does not exist.
        OSError: If the file cannot be read.

    Example:
        >>> doc = read_ms2("sample.ms2")
        >>> print(f"Loaded {len(doc)} scans")
    """
    with MS2Reader(path, options) as reader:
        return reader.to_document()
