"""Data validation schemas using Pandera for the housing analysis."""

from typing import Iterable, Optional

import pandas as pd
import pandera.pandas as pa

from ..utils.exceptions import SchemaError


# Raw sales schema. Dtypes of the count columns are left open because a single
# missing value turns an integer column into floats.
raw_sales_schema = pa.DataFrameSchema(
    {
        "id": pa.Column(
            int,
            nullable=False,
            description="Record identifier, the correction key"
        ),
        "date": pa.Column(
            nullable=False,
            checks=[
                pa.Check.str_matches(r"^\d{8}", error="Sale date must start with YYYYMMDD")
            ],
            description="Sale date as YYYYMMDDT000000"
        ),
        "price": pa.Column(
            float,
            coerce=True,
            nullable=False,
            checks=[pa.Check.greater_than(0)],
            description="Sale price"
        ),
        "bedrooms": pa.Column(
            nullable=True,
            checks=[pa.Check.greater_than_or_equal_to(0)],
            description="Number of bedrooms"
        ),
        "bathrooms": pa.Column(
            nullable=True,
            checks=[pa.Check.greater_than_or_equal_to(0)],
            description="Number of bathrooms in quarter increments"
        ),
        "sqft_living": pa.Column(
            nullable=False,
            checks=[pa.Check.greater_than(0)],
            description="Interior living area"
        ),
        "waterfront": pa.Column(
            nullable=False,
            checks=[pa.Check.isin([0, 1])],
            description="Waterfront indicator"
        ),
        "view": pa.Column(
            nullable=False,
            checks=[pa.Check.in_range(0, 4)],
            description="View quality"
        ),
        "condition": pa.Column(
            nullable=False,
            checks=[pa.Check.in_range(1, 5)],
            description="Condition rating"
        ),
        "grade": pa.Column(
            nullable=False,
            checks=[pa.Check.in_range(1, 13)],
            description="Construction grade"
        ),
        "yr_built": pa.Column(
            nullable=False,
            checks=[pa.Check.in_range(1800, 2100)],
            description="Year built"
        ),
        "yr_renovated": pa.Column(
            nullable=False,
            checks=[pa.Check.greater_than_or_equal_to(0)],
            description="Year renovated, 0 when never renovated"
        ),
        "zipcode": pa.Column(
            int,
            nullable=False,
            description="Five digit zip code"
        ),
        "lat": pa.Column(
            float,
            nullable=False,
            checks=[pa.Check.in_range(-90, 90)],
            description="Latitude"
        ),
        "long": pa.Column(
            float,
            nullable=False,
            checks=[pa.Check.in_range(-180, 180)],
            description="Longitude"
        ),
    },
    strict=False
)


# Enriched sales schema, checked after feature engineering
enriched_sales_schema = pa.DataFrameSchema(
    {
        "year_sold": pa.Column(int, checks=[pa.Check.in_range(1900, 2100)]),
        "month_sold": pa.Column(int, checks=[pa.Check.in_range(1, 12)]),
        "region": pa.Column(
            pd.CategoricalDtype(["City", "Suburb", "Rural"]),
            nullable=False
        ),
        "renovation_group": pa.Column(
            pd.CategoricalDtype(
                ["Never Renovated", "Recently Renovated", "Renovated Long Ago"]
            ),
            nullable=False
        ),
        "distance_to_downtown": pa.Column(
            float,
            nullable=False,
            checks=[pa.Check.greater_than_or_equal_to(0)]
        ),
        "good_quality": pa.Column(
            pd.CategoricalDtype(["no", "yes"]),
            nullable=False
        ),
    },
    strict=False
)


def require_columns(
    df: pd.DataFrame,
    columns: Iterable[str],
    stage: Optional[str] = None
) -> None:
    """
    Check that a table carries the columns a stage needs.

    Parameters
    ----------
    df : pd.DataFrame
        Table entering the stage
    columns : iterable of str
        Required column names
    stage : str, optional
        Stage name attached to the error

    Raises
    ------
    SchemaError
        If any column is absent
    """
    missing = set(columns) - set(df.columns)
    if missing:
        raise SchemaError(
            f"Missing required columns: {sorted(missing)}",
            stage=stage,
            missing_columns=missing
        )


def _validate(schema: pa.DataFrameSchema, df: pd.DataFrame, stage: str) -> pd.DataFrame:
    require_columns(df, schema.columns.keys(), stage=stage)
    try:
        return schema.validate(df, lazy=True)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        raise SchemaError(f"Schema validation failed: {e}", stage=stage) from e


def validate_sales(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate raw sales data against schema.

    Parameters
    ----------
    df : pd.DataFrame
        Raw sales data

    Returns
    -------
    pd.DataFrame
        Validated sales data

    Raises
    ------
    SchemaError
        If a required column is missing or validation fails
    """
    return _validate(raw_sales_schema, df, stage="load")


def validate_enriched_sales(df: pd.DataFrame) -> pd.DataFrame:
    """Validate the derived columns produced by feature engineering."""
    return _validate(enriched_sales_schema, df, stage="feature_engineering")
