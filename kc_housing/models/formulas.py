"""Fixed model formulas and the check that their columns exist."""

from typing import Iterable, List

import pandas as pd

from ..utils.exceptions import SpecificationError

LINEAR_RESPONSE = "price"
LINEAR_PREDICTORS = [
    "bedrooms", "sqft_living", "waterfront", "view", "grade",
    "yr_built", "region", "distance_to_downtown"
]

LOGISTIC_LABEL = "good_quality"
LOGISTIC_RESPONSE = "good_quality_flag"  # 0/1 indicator derived from the label
LOGISTIC_FULL_PREDICTORS = [
    "price", "sqft_living", "yr_built", "distance_to_downtown",
    "waterfront", "region", "renovation_group"
]
LOGISTIC_REDUCED_PREDICTORS = ["price", "sqft_living", "yr_built", "region"]


def build_formula(response: str, predictors: Iterable[str]) -> str:
    """Patsy formula ``response ~ p1 + p2 + ...``."""
    return f"{response} ~ " + " + ".join(predictors)


def check_specification(
    df: pd.DataFrame,
    columns: Iterable[str],
    formula: str,
    stage: str
) -> None:
    """Raise SpecificationError if ``formula`` needs a column ``df`` lacks."""
    missing: List[str] = sorted(set(columns) - set(df.columns))
    if missing:
        raise SpecificationError(
            f"Formula '{formula}' references missing columns: {missing}",
            stage=stage
        )
