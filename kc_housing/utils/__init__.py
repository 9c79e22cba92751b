"""Utility modules for the King County housing analysis."""

from .exceptions import (
    HousingAnalysisError,
    DataIOError,
    FormatError,
    SchemaError,
    SpecificationError,
    ConfigurationError
)
from .logging_config import setup_logging

__all__ = [
    "HousingAnalysisError",
    "DataIOError",
    "FormatError",
    "SchemaError",
    "SpecificationError",
    "ConfigurationError",
    "setup_logging"
]
