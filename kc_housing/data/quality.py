"""Data quality checks run on the raw sales table before correction."""

import logging
from typing import Sequence

import pandas as pd

from .schemas import require_columns
from ..config import constants

logger = logging.getLogger(__name__)


def find_suspicious_records(
    df: pd.DataFrame,
    suspicious_bedrooms: Sequence[int] = constants.SUSPICIOUS_BEDROOMS,
    suspicious_bathrooms: Sequence[float] = constants.SUSPICIOUS_BATHROOMS
) -> pd.DataFrame:
    """
    Select records whose bedroom or bathroom counts look like entry errors.

    A record is suspicious when its bedroom count is in ``suspicious_bedrooms``
    or its bathroom count is in ``suspicious_bathrooms``, and neither value is
    missing. The input table is not modified.

    Parameters
    ----------
    df : pd.DataFrame
        Raw sales table
    suspicious_bedrooms : sequence of int
        Implausible bedroom counts (default 0 and 33)
    suspicious_bathrooms : sequence of float
        Implausible bathroom counts (default 0)

    Returns
    -------
    pd.DataFrame
        Matching rows restricted to the audit columns
    """
    require_columns(df, ["bedrooms", "bathrooms"], stage="quality_audit")

    both_present = df["bedrooms"].notna() & df["bathrooms"].notna()
    implausible = (
        df["bedrooms"].isin(suspicious_bedrooms)
        | df["bathrooms"].isin(suspicious_bathrooms)
    )

    columns = [col for col in constants.AUDIT_COLUMNS if col in df.columns]
    suspicious = df.loc[implausible & both_present, columns].copy()

    logger.info(
        f"Found {len(suspicious):,} properties with extreme bedroom/bathroom values"
    )
    return suspicious
