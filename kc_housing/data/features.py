"""Feature engineering for the house sales table."""

import logging
from enum import Enum
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .schemas import require_columns
from ..config import constants
from ..config.reference_data import RegionTable, load_region_table

logger = logging.getLogger(__name__)


class _Levels(str, Enum):
    """Categorical levels in declared order; the first member is the baseline."""

    @classmethod
    def levels(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def baseline(cls) -> str:
        return cls.levels()[0]

    @classmethod
    def dtype(cls) -> pd.CategoricalDtype:
        return pd.CategoricalDtype(cls.levels())


class Region(_Levels):
    CITY = "City"
    SUBURB = "Suburb"
    RURAL = "Rural"


class RenovationGroup(_Levels):
    NEVER = "Never Renovated"
    RECENT = "Recently Renovated"
    LONG_AGO = "Renovated Long Ago"


class QualityLabel(_Levels):
    NO = "no"
    YES = "yes"


WATERFRONT_DTYPE = pd.CategoricalDtype([0, 1])

FEATURE_INPUT_COLUMNS = [
    "date", "zipcode", "yr_renovated", "waterfront",
    "lat", "long", "condition", "grade"
]


def parse_sale_date(dates: pd.Series) -> pd.DataFrame:
    """Split ``YYYYMMDD...`` sale dates into integer year and month columns."""
    dates = dates.astype(str)
    return pd.DataFrame(
        {
            "year_sold": dates.str[constants.SALE_YEAR_SLICE].astype(int),
            "month_sold": dates.str[constants.SALE_MONTH_SLICE].astype(int),
        },
        index=dates.index
    )


def assign_region(zipcodes: pd.Series, regions: RegionTable) -> pd.Series:
    """Map zip codes to City, Suburb or Rural; unlisted zips are Rural."""
    zips = zipcodes.astype(int)
    labels = np.select(
        [zips.isin(regions.city_zips), zips.isin(regions.suburb_zips)],
        [Region.CITY.value, Region.SUBURB.value],
        default=Region.RURAL.value
    )
    return pd.Series(labels, index=zipcodes.index, name="region").astype(Region.dtype())


def assign_renovation_group(
    yr_renovated: pd.Series,
    recent_year: int = constants.RECENT_RENOVATION_YEAR
) -> pd.Series:
    """Group renovation years into never, recent (>= recent_year) and long ago."""
    labels = np.select(
        [yr_renovated == constants.NEVER_RENOVATED_YEAR, yr_renovated >= recent_year],
        [RenovationGroup.NEVER.value, RenovationGroup.RECENT.value],
        default=RenovationGroup.LONG_AGO.value
    )
    return pd.Series(
        labels, index=yr_renovated.index, name="renovation_group"
    ).astype(RenovationGroup.dtype())


def calculate_distance_to_downtown(lat: pd.Series, long: pd.Series) -> pd.Series:
    """
    Euclidean distance in degrees from downtown Seattle.

    Longitudes are expected as stored in the King County data (negative,
    west of Greenwich), so the offset ``long - DOWNTOWN_LONG`` is
    ``long + 122.3321``.
    """
    return np.sqrt(
        (lat - constants.DOWNTOWN_LAT) ** 2
        + (long - constants.DOWNTOWN_LONG) ** 2
    ).rename("distance_to_downtown")


def label_good_quality(condition: pd.Series, grade: pd.Series) -> pd.Series:
    """``yes`` when condition > 3 and grade > 7, ``no`` otherwise."""
    good = (condition > constants.GOOD_CONDITION_ABOVE) & (
        grade > constants.GOOD_GRADE_ABOVE
    )
    labels = np.where(good, QualityLabel.YES.value, QualityLabel.NO.value)
    return pd.Series(labels, index=condition.index, name="good_quality").astype(
        QualityLabel.dtype()
    )


def engineer_features(
    df: pd.DataFrame,
    regions: Optional[RegionTable] = None
) -> pd.DataFrame:
    """
    Add derived columns to the cleaned sales table.

    Adds ``year_sold``, ``month_sold``, ``region``, ``renovation_group``,
    ``distance_to_downtown`` and ``good_quality``, converts ``waterfront`` to a
    categorical, and drops the redundant area sub-components. Rows are neither
    dropped nor reordered.

    Parameters
    ----------
    df : pd.DataFrame
        Cleaned sales table
    regions : RegionTable, optional
        Zip-code membership table (packaged table when None)

    Returns
    -------
    pd.DataFrame
        Enriched table

    Raises
    ------
    SchemaError
        If a required input column is missing
    """
    require_columns(df, FEATURE_INPUT_COLUMNS, stage="feature_engineering")

    if regions is None:
        regions = load_region_table()

    df = df.copy()

    if (df["long"] > 0).any():
        logger.warning(
            f"{int((df['long'] > 0).sum()):,} records have positive longitude; "
            "distance to downtown assumes western (negative) longitudes"
        )

    sale_parts = parse_sale_date(df["date"])
    df["year_sold"] = sale_parts["year_sold"]
    df["month_sold"] = sale_parts["month_sold"]

    df["region"] = assign_region(df["zipcode"], regions)
    df["renovation_group"] = assign_renovation_group(df["yr_renovated"])
    df["waterfront"] = df["waterfront"].astype(int).astype(WATERFRONT_DTYPE)
    df["distance_to_downtown"] = calculate_distance_to_downtown(df["lat"], df["long"])

    df = df.drop(columns=[c for c in constants.REDUNDANT_AREA_COLUMNS if c in df.columns])

    df["good_quality"] = label_good_quality(df["condition"], df["grade"])

    logger.info("Feature engineering completed")
    return df


def feature_summary(df: pd.DataFrame) -> Dict[str, pd.Series]:
    """Counts of each region and renovation group over all declared levels."""
    return {
        "region": df["region"].value_counts(sort=False).reindex(
            Region.levels(), fill_value=0
        ),
        "renovation_group": df["renovation_group"].value_counts(sort=False).reindex(
            RenovationGroup.levels(), fill_value=0
        ),
    }
