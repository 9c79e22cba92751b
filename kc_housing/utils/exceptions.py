"""Custom exceptions for the King County housing analysis."""

from typing import Iterable, Optional


class HousingAnalysisError(Exception):
    """Base exception for the kc_housing package.

    Carries the name of the pipeline stage that raised it, when known.
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        self.message = message
        self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class DataIOError(HousingAnalysisError, OSError):
    """Raised when the input file cannot be read."""
    pass


class FormatError(HousingAnalysisError):
    """Raised when the header or row shape of the input file is malformed."""
    pass


class SchemaError(HousingAnalysisError):
    """Raised when required columns are absent or fail validation."""

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        missing_columns: Iterable[str] = ()
    ):
        super().__init__(message, stage=stage)
        self.missing_columns = sorted(missing_columns)


class SpecificationError(HousingAnalysisError):
    """Raised when a model formula references a column that does not exist."""
    pass


class ConfigurationError(HousingAnalysisError):
    """Raised when settings or reference data are invalid."""
    pass
