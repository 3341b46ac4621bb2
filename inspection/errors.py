"""Error taxonomy for ingestion, query parsing and store access."""
from pathlib import Path
from typing import Optional


class InspectionError(Exception):
    """Base class for all errors raised by this package."""


class MissingSourceError(InspectionError):
    """An ingestion input file does not exist."""

    def __init__(self, path: str | Path, reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Missing file: {self.path}"
        if reason:
            message = f"Cannot read file {self.path}: {reason}"
        super().__init__(message)


class FormatError(InspectionError):
    """A line of an ingestion source could not be parsed."""

    def __init__(self, path: str | Path, line_number: int, line: str, reason: str = ""):
        self.path = Path(path)
        self.line_number = line_number
        self.line = line
        message = f"Invalid format in {self.path.name} at line {line_number}: {line!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class LineCountMismatch(InspectionError):
    """The three ingestion sources do not have the same number of lines."""

    def __init__(self, counts: dict[str, int]):
        self.counts = dict(counts)
        detail = ", ".join(f"{name}={count}" for name, count in self.counts.items())
        super().__init__(f"Mismatch in number of lines between files: {detail}")


class InvalidQueryError(InspectionError):
    """A crop query document is malformed or incomplete."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class StoreError(InspectionError):
    """Base class for region store failures."""


class StoreUnavailableError(StoreError):
    """The region store could not be reached."""


class StoreWriteError(StoreError):
    """An insert into the region store failed."""


class StoreReadError(StoreError):
    """A scan of the region store failed."""
