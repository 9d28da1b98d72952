"""
Run-level header of an MS2 file.

The header is assembled from the `H` lines that precede the first scan.
Well-known keys are stored in typed attributes; any other key is kept
verbatim in `extras` so that extractor-specific metadata is not lost.
"""

from dataclasses import dataclass, field, fields
from typing import ClassVar, Optional


@dataclass(slots=True)
class Header:
    """
    Run-level metadata for an MS2 file.

    Attributes:
        acquisition_method: Acquisition method (e.g. "Data-Dependent").
        comments: Free text comments from the extractor.
        creation_date: Creation date string as written in the file.
        data_type: "Centroid" or "Profile".
        extractor: Name of the program that produced the file.
        extractor_options: Options passed to the extractor.
        extractor_version: Version of the extractor.
        first_scan: First scan number in the file.
        instrument_type: Instrument/analyzer type (e.g. "ITMS").
        isolation_window: Isolation window, when reported.
        last_scan: Last scan number in the file.
        scan_type: Scan type (normally "MS2").
        extras: Unrecognized header keys, stored as strings.
    """

    # MS2 key -> (attribute name, type)
    KEYS: ClassVar[dict[str, tuple[str, type]]] = {
        'AcquisitionMethod': ('acquisition_method', str),
        'Comments': ('comments', str),
        'CreationDate': ('creation_date', str),
        'DataType': ('data_type', str),
        'Extractor': ('extractor', str),
        'ExtractorOptions': ('extractor_options', str),
        'ExtractorVersion': ('extractor_version', str),
        'FirstScan': ('first_scan', int),
        'InstrumentType': ('instrument_type', str),
        'IsolationWindow': ('isolation_window', str),
        'LastScan': ('last_scan', int),
        'ScanType': ('scan_type', str),
    }

    acquisition_method: Optional[str] = None
    comments: Optional[str] = None
    creation_date: Optional[str] = None
    data_type: Optional[str] = None
    extractor: Optional[str] = None
    extractor_options: Optional[str] = None
    extractor_version: Optional[str] = None
    first_scan: Optional[int] = None
    instrument_type: Optional[str] = None
    isolation_window: Optional[str] = None
    last_scan: Optional[int] = None
    scan_type: Optional[str] = None
    extras: dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default=None):
        """Look up a value by its MS2 key (recognized or extra)."""
        if key in self.KEYS:
            value = getattr(self, self.KEYS[key][0])
            return default if value is None else value
        return self.extras.get(key, default)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def as_dict(self) -> dict:
        """Return the header keyed by MS2 names, skipping unset fields."""
        result = {
            key: getattr(self, attr)
            for key, (attr, _) in self.KEYS.items()
            if getattr(self, attr) is not None
        }
        result.update(self.extras)
        return result

    @property
    def is_empty(self) -> bool:
        """True if no header line set any value."""
        return not self.extras and all(
            getattr(self, f.name) is None for f in fields(self) if f.name != 'extras'
        )

    @property
    def scan_range(self) -> Optional[tuple[int, int]]:
        """(first_scan, last_scan) as declared in the header."""
        if self.first_scan is not None and self.last_scan is not None:
            return self.first_scan, self.last_scan
        return None
