"""Configuration module for the King County housing analysis."""

from .constants import *
from .settings import Settings, get_default_settings
from .reference_data import (
    RecordCorrection,
    CorrectionTable,
    RegionTable,
    load_correction_table,
    load_region_table
)

__all__ = [
    "Settings",
    "get_default_settings",
    "RecordCorrection",
    "CorrectionTable",
    "RegionTable",
    "load_correction_table",
    "load_region_table"
]
