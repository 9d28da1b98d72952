"""
Errors raised or recorded while parsing MS2 files.

Only I/O failures (the builtin OSError family) and LimitExceededError abort a
parse. FormatError and StructuralError describe a single defective line; by
default they are converted to Diagnostic records and attached to the
returned Document instead of being raised.
"""

from dataclasses import dataclass
from typing import Optional


class MS2Error(Exception):
    """Base class for all MS2 parsing errors."""

    _error_code = "MS2_ERROR"

    @property
    def error_code(self) -> str:
        return self._error_code


class FormatError(MS2Error):
    """A line does not match the field count or field types of its tag."""

    _error_code = "FORMAT_ERROR"

    def __init__(self, reason: str, line_number: Optional[int] = None, line: str = ""):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        super().__init__(reason)

    def __str__(self) -> str:
        if self.line_number is None:
            return f"{self._error_code}: {self.reason}"
        return f"{self._error_code} at line {self.line_number}: {self.reason}"


class StructuralError(FormatError):
    """A scan attribute or peak line appears before any scan was started."""

    _error_code = "STRUCTURAL_ERROR"


class LimitExceededError(MS2Error):
    """The input exceeded a configured line or byte cap."""

    _error_code = "LIMIT_EXCEEDED"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    A non-fatal, per-line problem found during a parse.

    Attributes:
        line_number: 1-based line number in the source file.
        reason: Human readable description of the problem.
        line: The offending line, without its terminator.
        kind: Error code of the originating error (e.g. "FORMAT_ERROR").
    """
    line_number: int
    reason: str
    line: str = ""
    kind: str = FormatError._error_code

    @classmethod
    def from_error(cls, error: FormatError) -> 'Diagnostic':
        return cls(
            line_number=error.line_number or 0,
            reason=error.reason,
            line=error.line,
            kind=error.error_code,
        )

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason}"
