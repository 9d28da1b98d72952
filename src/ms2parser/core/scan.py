"""
Scan record for MS2 files.

A Scan holds the precursor metadata from the `S`, `I` and `Z` lines of one
MS/MS spectrum together with its peaks. Peaks are stored as a mass ->
intensity mapping; NumPy views sorted by mass are provided for numerical work.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Optional

import numpy as np
from numpy.typing import NDArray


class ActivationType(Enum):
    """Fragmentation/activation method for MS2 scans."""
    CID = auto()      # Collision-Induced Dissociation
    HCD = auto()      # Higher-energy Collisional Dissociation
    ETD = auto()      # Electron Transfer Dissociation
    ECD = auto()      # Electron Capture Dissociation
    UVPD = auto()     # Ultraviolet Photodissociation
    IRMPD = auto()    # Infrared Multiphoton Dissociation
    PQD = auto()      # Pulsed Q Dissociation
    UNKNOWN = auto()


_ACTIVATION_MAP: dict[str, ActivationType] = {
    'cid': ActivationType.CID,
    'hcd': ActivationType.HCD,
    'etd': ActivationType.ETD,
    'ecd': ActivationType.ECD,
    'uvpd': ActivationType.UVPD,
    'irmpd': ActivationType.IRMPD,
    'pqd': ActivationType.PQD,
}


@dataclass(frozen=True, slots=True)
class ChargeState:
    """
    One `Z` line: a candidate precursor charge and its neutral (M+H)+ mass.

    Either value is None when the corresponding field could not be parsed.
    """
    charge: Optional[int]
    mass: Optional[float]


@dataclass(slots=True)
class Scan:
    """
    A single MS/MS scan from an MS2 file.

    Attributes:
        first_scan: Scan number (zero padded in the file, stored as int).
        second_scan: Second scan number (normally equal to first_scan).
        precursor_mz: Precursor m/z from the `S` line.
        charge_states: All `Z` lines of the scan, in file order.
        activation_type: Activation method string (e.g. "CID").
        precursor_int: Precursor intensity.
        precursor_scan: Scan number of the parent MS1 scan.
        precursor_file: Name of the MS1 file holding the parent scan.
        ret_time: Retention time as written in the file.
        ion_injection_time: Ion injection time.
        instrument_type: Instrument type, overriding the header value.
        extras: Unrecognized `I` keys, stored as strings.
        data: Peaks as mass -> intensity.

    Example:
        >>> scan = Scan(first_scan=6, second_scan=6, precursor_mz=405.58749)
        >>> scan.data[308.8282] = 15.6
        >>> scan.n_peaks
        1
    """

    # MS2 `I` key -> (attribute name, type)
    KEYS: ClassVar[dict[str, tuple[str, type]]] = {
        'ActivationType': ('activation_type', str),
        'PrecursorInt': ('precursor_int', float),
        'PrecursorScan': ('precursor_scan', int),
        'PrecursorFile': ('precursor_file', str),
        'RetTime': ('ret_time', float),
        'IonInjectionTime': ('ion_injection_time', float),
        'InstrumentType': ('instrument_type', str),
    }

    first_scan: Optional[int] = None
    second_scan: Optional[int] = None
    precursor_mz: Optional[float] = None
    charge_states: list[ChargeState] = field(default_factory=list)
    activation_type: Optional[str] = None
    precursor_int: Optional[float] = None
    precursor_scan: Optional[int] = None
    precursor_file: Optional[str] = None
    ret_time: Optional[float] = None
    ion_injection_time: Optional[float] = None
    instrument_type: Optional[str] = None
    extras: dict[str, str] = field(default_factory=dict)
    data: dict[float, float] = field(default_factory=dict)

    def get(self, key: str, default=None):
        """Look up an `I` value by its MS2 key (recognized or extra)."""
        if key in self.KEYS:
            value = getattr(self, self.KEYS[key][0])
            return default if value is None else value
        return self.extras.get(key, default)

    # -------------------------------------------------------------------------
    # Charge state views
    # -------------------------------------------------------------------------

    @property
    def charge(self) -> Optional[int]:
        """Charge of the last `Z` line, or None."""
        if not self.charge_states:
            return None
        return self.charge_states[-1].charge

    @property
    def mass(self) -> Optional[float]:
        """Mass of the last `Z` line, or None."""
        if not self.charge_states:
            return None
        return self.charge_states[-1].mass

    @property
    def charges(self) -> list[int]:
        """All parsed charges, in file order."""
        return [z.charge for z in self.charge_states if z.charge is not None]

    @property
    def activation(self) -> ActivationType:
        """Activation method as an ActivationType."""
        if self.activation_type is None:
            return ActivationType.UNKNOWN
        return _ACTIVATION_MAP.get(self.activation_type.strip().lower(), ActivationType.UNKNOWN)

    # -------------------------------------------------------------------------
    # Peak views
    # -------------------------------------------------------------------------

    @property
    def n_peaks(self) -> int:
        """Number of distinct peak masses."""
        return len(self.data)

    @property
    def is_empty(self) -> bool:
        """Check if the scan has no peaks."""
        return not self.data

    @property
    def mz(self) -> NDArray[np.float64]:
        """Peak masses sorted in ascending order."""
        return np.array(sorted(self.data), dtype=np.float64)

    @property
    def intensity(self) -> NDArray[np.float64]:
        """Peak intensities, aligned with `mz`."""
        return np.array([self.data[m] for m in sorted(self.data)], dtype=np.float64)

    @property
    def total_intensity(self) -> float:
        """Sum of all peak intensities."""
        return float(np.sum(self.intensity))

    @property
    def base_peak_mz(self) -> float:
        """Mass of the most intense peak."""
        if self.is_empty:
            raise ValueError("Cannot get base_peak_mz of empty scan")
        return max(self.data, key=self.data.__getitem__)

    @property
    def base_peak_intensity(self) -> float:
        """Intensity of the most intense peak."""
        if self.is_empty:
            raise ValueError("Cannot get base_peak_intensity of empty scan")
        return max(self.data.values())

    def __repr__(self) -> str:
        charges = ",".join(str(c) for c in self.charges) or "?"
        return (
            f"Scan({self.first_scan}, "
            f"precursor_mz={self.precursor_mz}, "
            f"z={charges}, "
            f"{self.n_peaks} peaks)"
        )
