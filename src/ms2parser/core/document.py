"""
Document: the result of parsing one MS2 file.

A Document pairs the run-level Header with the sealed scans in the order they
appear in the file, plus the diagnostics collected for defective lines.
"""

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Optional, overload

from .header import Header
from .scan import Scan
from ..exceptions import Diagnostic


class Document(Sequence[Scan]):
    """
    A parsed MS2 file.

    The class implements the Sequence protocol over its scans, so indexing
    and iteration follow file order.

    Attributes:
        header: Run-level header.
        scans: Scans in order of appearance.
        diagnostics: Non-fatal problems found while parsing.
        source_file: Path of the parsed file, if known.

    Example:
        >>> doc = Document(Header(creation_date="4/13/2009"), [Scan(first_scan=6)])
        >>> len(doc)
        1
        >>> doc.get_by_scan(6).first_scan
        6
    """

    def __init__(
        self,
        header: Optional[Header] = None,
        scans: Optional[list[Scan]] = None,
        diagnostics: Optional[list[Diagnostic]] = None,
        source_file: Optional[Path] = None,
    ):
        self.header = header or Header()
        self.scans: list[Scan] = list(scans or [])
        self.diagnostics: list[Diagnostic] = list(diagnostics or [])
        self.source_file = source_file
        self._scan_index: dict[int, int] = {}
        for idx, scan in enumerate(self.scans):
            if scan.first_scan is not None:
                self._scan_index.setdefault(scan.first_scan, idx)

    # -------------------------------------------------------------------------
    # Sequence protocol implementation
    # -------------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Scan: ...

    @overload
    def __getitem__(self, index: slice) -> list[Scan]: ...

    def __getitem__(self, index: int | slice) -> Scan | list[Scan]:
        """Get scan by position (file order)."""
        return self.scans[index]

    def __len__(self) -> int:
        return len(self.scans)

    def __iter__(self) -> Iterator[Scan]:
        return iter(self.scans)

    def __contains__(self, item: object) -> bool:
        """Check if a scan or scan number is in the document."""
        if isinstance(item, int):
            return item in self._scan_index
        if isinstance(item, Scan):
            return any(item is scan for scan in self.scans)
        return False

    # -------------------------------------------------------------------------
    # Access methods
    # -------------------------------------------------------------------------

    def get_by_scan(self, scan_number: int) -> Scan:
        """
        Get the first scan whose first_scan equals scan_number.

        Raises:
            KeyError: If scan number not found.
        """
        if scan_number not in self._scan_index:
            raise KeyError(f"Scan number {scan_number} not found in document")
        return self.scans[self._scan_index[scan_number]]

    def iter_charge(self, charge: int) -> Iterator[Scan]:
        """Iterate over scans that report the given charge in any `Z` line."""
        for scan in self.scans:
            if charge in scan.charges:
                yield scan

    @property
    def scan_numbers(self) -> list[int]:
        """Scan numbers in file order (unparsable numbers are skipped)."""
        return [scan.first_scan for scan in self.scans if scan.first_scan is not None]

    @property
    def n_peaks(self) -> int:
        """Total number of peaks over all scans."""
        return sum(scan.n_peaks for scan in self.scans)

    @property
    def has_errors(self) -> bool:
        """True if any line was reported as defective."""
        return bool(self.diagnostics)

    def summary(self) -> dict:
        """
        Generate a summary of the document.

        Returns:
            Dictionary with scan and diagnostic statistics.
        """
        numbers = self.scan_numbers
        summary = {
            'n_scans': len(self),
            'n_peaks': self.n_peaks,
            'scan_range': (min(numbers), max(numbers)) if numbers else None,
            'n_diagnostics': len(self.diagnostics),
        }
        if self.source_file:
            summary['source_file'] = str(self.source_file)
        if self.header.instrument_type:
            summary['instrument'] = self.header.instrument_type
        return summary

    def __repr__(self) -> str:
        source = ""
        if self.source_file:
            source = f", source={Path(self.source_file).name}"
        return (
            f"Document({len(self)} scans, "
            f"{len(self.diagnostics)} diagnostics{source})"
        )
