"""Point corrections and removals of verified-bad sales records."""

import logging
from dataclasses import dataclass
from typing import List

import pandas as pd

from .schemas import require_columns
from ..config.reference_data import CorrectionTable

logger = logging.getLogger(__name__)


@dataclass
class CorrectionSummary:
    """What a correction pass changed."""

    n_corrected: int
    unmatched_ids: List[int]
    n_removed: int
    n_remaining: int


def apply_corrections(
    df: pd.DataFrame,
    corrections: CorrectionTable
) -> pd.DataFrame:
    """
    Apply point corrections by record id, then drop records marked for removal.

    Each correction overwrites only the fields it sets, on every row with the
    matching id. Corrections whose id matches no row are skipped with a
    warning. The input table is not modified.

    Parameters
    ----------
    df : pd.DataFrame
        Raw sales table with ``id``, ``bedrooms`` and ``bathrooms`` columns
    corrections : CorrectionTable
        Verified overrides and ids to remove

    Returns
    -------
    pd.DataFrame
        Cleaned table with the same columns

    Raises
    ------
    SchemaError
        If a required column is missing
    """
    require_columns(df, ["id", "bedrooms", "bathrooms"], stage="correction")

    df = df.copy()

    for correction in corrections.corrections:
        mask = df["id"] == correction.id
        if not mask.any():
            logger.warning(f"Correction for id {correction.id} matched no records")
            continue

        for column, value in correction.overrides().items():
            if pd.api.types.is_integer_dtype(df[column]) and float(value).is_integer():
                value = int(value)
            elif pd.api.types.is_integer_dtype(df[column]):
                df[column] = df[column].astype(float)
            df.loc[mask, column] = value

    removal_mask = df["id"].isin(corrections.removals)
    cleaned = df[~removal_mask]

    logger.info(
        f"Applied corrections to {len(corrections.corrections)} properties; "
        f"removed {int(removal_mask.sum()):,} unverifiable records; "
        f"{len(cleaned):,} records remain"
    )
    return cleaned


def summarize_corrections(
    before: pd.DataFrame,
    after: pd.DataFrame,
    corrections: CorrectionTable
) -> CorrectionSummary:
    """Describe the effect of ``apply_corrections`` on a table."""
    present = set(before["id"])
    unmatched = sorted(c.id for c in corrections.corrections if c.id not in present)
    return CorrectionSummary(
        n_corrected=len(corrections.corrections) - len(unmatched),
        unmatched_ids=unmatched,
        n_removed=len(before) - len(after),
        n_remaining=len(after)
    )
