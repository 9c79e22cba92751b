"""Reference data tables: record corrections and zip-code regions.

Both tables are reviewable JSON files shipped in ``kc_housing/config/data``.
Alternate tables with the same layout can be loaded from any path, which is
how tests and other deployments substitute their own ground truth.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from . import constants
from ..utils.exceptions import ConfigurationError

DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class RecordCorrection:
    """Verified field values for one record; None leaves the field unchanged."""

    id: int
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None

    def overrides(self) -> Dict[str, Any]:
        """Fields this correction sets, by column name."""
        values = {"bedrooms": self.bedrooms, "bathrooms": self.bathrooms}
        return {col: value for col, value in values.items() if value is not None}


@dataclass(frozen=True)
class CorrectionTable:
    """Point corrections keyed by record id, plus ids to remove."""

    corrections: Tuple[RecordCorrection, ...] = ()
    removals: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        ids = [c.id for c in self.corrections]
        if len(ids) != len(set(ids)):
            raise ConfigurationError("Correction table lists the same id more than once")

    @property
    def corrected_ids(self) -> FrozenSet[int]:
        return frozenset(c.id for c in self.corrections)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CorrectionTable":
        """Build a table from the JSON layout used in corrections.json."""
        try:
            corrections = tuple(
                RecordCorrection(
                    id=int(entry["id"]),
                    bedrooms=entry.get("bedrooms"),
                    bathrooms=entry.get("bathrooms")
                )
                for entry in config.get("corrections", [])
            )
            removals = frozenset(int(i) for i in config.get("removals", []))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed correction table: {e}") from e
        return cls(corrections=corrections, removals=removals)


@dataclass(frozen=True)
class RegionTable:
    """Zip-code membership sets; zips in neither set are Rural."""

    city_zips: FrozenSet[int]
    suburb_zips: FrozenSet[int]

    def __post_init__(self):
        overlap = self.city_zips & self.suburb_zips
        if overlap:
            raise ConfigurationError(
                f"Zip codes listed as both City and Suburb: {sorted(overlap)}"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RegionTable":
        """Build a table from the JSON layout used in zip_regions.json."""
        try:
            city = frozenset(int(z) for z in config["city"])
            suburb = frozenset(int(z) for z in config["suburb"])
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed zip region table: {e}") from e
        return cls(city_zips=city, suburb_zips=suburb)


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Reference data file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def load_correction_table(path: Optional[Union[str, Path]] = None) -> CorrectionTable:
    """Load the correction table, defaulting to the packaged one."""
    path = Path(path) if path is not None else DATA_DIR / constants.CORRECTIONS_FILE
    return CorrectionTable.from_dict(_read_json(path))


def load_region_table(path: Optional[Union[str, Path]] = None) -> RegionTable:
    """Load the zip-code region table, defaulting to the packaged one."""
    path = Path(path) if path is not None else DATA_DIR / constants.ZIP_REGIONS_FILE
    return RegionTable.from_dict(_read_json(path))
