"""Ordinary least squares price model with standardized-residual outlier removal."""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

from .formulas import (
    LINEAR_PREDICTORS,
    LINEAR_RESPONSE,
    build_formula,
    check_specification
)
from ..config import constants

logger = logging.getLogger(__name__)

LINEAR_FORMULA = build_formula(LINEAR_RESPONSE, LINEAR_PREDICTORS)


@dataclass
class LinearModelResults:
    """Fitted price model and the training rows it was fitted on."""

    model: object  # statsmodels RegressionResultsWrapper
    formula: str
    training_data: pd.DataFrame
    n_outliers_removed: int = 0
    outlier_index: pd.Index = field(default_factory=lambda: pd.Index([]))
    initial_standardized_residuals: Optional[pd.Series] = None

    @property
    def r_squared(self) -> float:
        return float(self.model.rsquared)

    @property
    def n_observations(self) -> int:
        return int(self.model.nobs)

    def predict(self, df: pd.DataFrame) -> pd.Series:
        """Predicted prices for the rows of ``df``."""
        return pd.Series(np.asarray(self.model.predict(df)), index=df.index, name="predicted_price")

    def coefficient_table(self) -> pd.DataFrame:
        """Coefficients with standard errors, t statistics and p values."""
        return pd.DataFrame({
            'coefficient': self.model.params,
            'std_error': self.model.bse,
            't_stat': self.model.tvalues,
            'p_value': self.model.pvalues
        })


def standardized_residuals(fit) -> pd.Series:
    """
    Internally studentized residuals of an OLS fit.

    r_i = e_i / (s * sqrt(1 - h_ii)), the quantity R reports as ``rstandard``.
    """
    influence = fit.get_influence()
    return pd.Series(
        np.asarray(influence.resid_studentized_internal),
        index=fit.model.data.row_labels,
        name="standardized_residual"
    )


def build_linear_model(
    train: pd.DataFrame,
    remove_outliers: bool = True,
    outlier_threshold: float = constants.OUTLIER_THRESHOLD
) -> LinearModelResults:
    """
    Fit the price model, optionally refitting without outlying rows.

    With ``remove_outliers`` the model is fitted once, every row whose
    standardized residual exceeds ``outlier_threshold`` in magnitude is
    dropped, and the same formula is refitted on the remaining rows.

    Parameters
    ----------
    train : pd.DataFrame
        Enriched training table
    remove_outliers : bool, default True
        Whether to run the outlier removal pass
    outlier_threshold : float, default 2.0
        Cutoff on the absolute standardized residual

    Returns
    -------
    LinearModelResults
        Final fit and the rows it used

    Raises
    ------
    SpecificationError
        If the training table lacks a column the formula needs
    """
    check_specification(
        train, [LINEAR_RESPONSE] + LINEAR_PREDICTORS, LINEAR_FORMULA, stage="linear_model"
    )

    logger.info(f"Fitting linear model on {len(train):,} observations: {LINEAR_FORMULA}")
    fit = smf.ols(LINEAR_FORMULA, data=train).fit()

    if not remove_outliers:
        logger.info(f"Linear model built: R² = {fit.rsquared:.4f}")
        return LinearModelResults(model=fit, formula=LINEAR_FORMULA, training_data=train)

    std_res = standardized_residuals(fit)
    outlier_index = std_res.index[std_res.abs() > outlier_threshold]
    training_data = train.drop(index=outlier_index)

    if len(outlier_index) > 0:
        fit = smf.ols(LINEAR_FORMULA, data=training_data).fit()

    logger.info(f"Removed {len(outlier_index):,} outliers from training data")
    logger.info(f"Linear model built: R² = {fit.rsquared:.4f}")

    return LinearModelResults(
        model=fit,
        formula=LINEAR_FORMULA,
        training_data=training_data,
        n_outliers_removed=len(outlier_index),
        outlier_index=outlier_index,
        initial_standardized_residuals=std_res
    )
