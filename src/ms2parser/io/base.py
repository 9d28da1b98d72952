import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from ..core import Document

logger = logging.getLogger(__name__)


class DocumentReader(ABC):
    """
    Abstract base class for text spectrum file readers.

    A reader owns one input file. The file is opened in `__enter__` and
    closed in `__exit__`, so it is released on every exit path.
    """

    # Class-level attributes
    file_format: ClassVar[str]  # e.g., "MS2"
    supported_extensions: ClassVar[list[str]]  # e.g., [".ms2"]

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate the file exists; warn on an unexpected extension."""
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        if self.path.is_dir():
            raise IsADirectoryError(f"Expected a file, got directory: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.supported_extensions:
            logger.warning(
                f"Unexpected extension {suffix!r} for {self.file_format} reader "
                f"(expected: {self.supported_extensions}), parsing anyway"
            )

    @abstractmethod
    def __enter__(self) -> 'DocumentReader':
        ...

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    def to_document(self) -> Document:
        """Read the whole file into a Document."""
        ...
