"""Binomial (logit link) classifier for the good-quality label."""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf

from .formulas import (
    LOGISTIC_FULL_PREDICTORS,
    LOGISTIC_LABEL,
    LOGISTIC_REDUCED_PREDICTORS,
    LOGISTIC_RESPONSE,
    build_formula,
    check_specification
)
from ..data.features import QualityLabel

logger = logging.getLogger(__name__)

FULL_LOGISTIC_FORMULA = build_formula(LOGISTIC_RESPONSE, LOGISTIC_FULL_PREDICTORS)
REDUCED_LOGISTIC_FORMULA = build_formula(LOGISTIC_RESPONSE, LOGISTIC_REDUCED_PREDICTORS)


@dataclass
class LogisticModelResults:
    """Fitted good-quality classifier."""

    model: object  # statsmodels GLMResultsWrapper
    formula: str
    full_model: bool

    @property
    def predictors(self):
        return LOGISTIC_FULL_PREDICTORS if self.full_model else LOGISTIC_REDUCED_PREDICTORS

    @property
    def aic(self) -> float:
        return float(self.model.aic)

    def predict_proba(self, df: pd.DataFrame) -> pd.Series:
        """Probability that each row of ``df`` is good quality."""
        return pd.Series(
            np.asarray(self.model.predict(df)), index=df.index, name="good_quality_probability"
        )

    def coefficient_table(self) -> pd.DataFrame:
        """Log-odds coefficients with standard errors, z statistics, p values and odds ratios."""
        return pd.DataFrame({
            'coefficient': self.model.params,
            'std_error': self.model.bse,
            'z_stat': self.model.tvalues,
            'p_value': self.model.pvalues,
            'odds_ratio': np.exp(self.model.params)
        })


def quality_indicator(labels: pd.Series) -> pd.Series:
    """1 where the label is ``yes``, 0 otherwise."""
    return (labels.astype(str) == QualityLabel.YES.value).astype(int)


def build_logistic_model(
    train: pd.DataFrame,
    full_model: bool = True
) -> LogisticModelResults:
    """
    Fit a logistic regression of the good-quality label.

    Parameters
    ----------
    train : pd.DataFrame
        Enriched training table
    full_model : bool, default True
        Use the full predictor set (price, living area, year built, distance
        to downtown, waterfront, region, renovation group) instead of the
        reduced one (price, living area, year built, region)

    Returns
    -------
    LogisticModelResults
        Fitted classifier

    Raises
    ------
    SpecificationError
        If the training table lacks a column the formula needs
    """
    predictors = LOGISTIC_FULL_PREDICTORS if full_model else LOGISTIC_REDUCED_PREDICTORS
    formula = FULL_LOGISTIC_FORMULA if full_model else REDUCED_LOGISTIC_FORMULA

    check_specification(
        train, [LOGISTIC_LABEL] + predictors, formula, stage="logistic_model"
    )

    data = train.assign(**{LOGISTIC_RESPONSE: quality_indicator(train[LOGISTIC_LABEL])})

    logger.info(f"Fitting logistic model on {len(data):,} observations: {formula}")
    fit = smf.glm(formula, data=data, family=sm.families.Binomial()).fit()

    logger.info(f"Logistic model built: AIC = {fit.aic:.2f}")
    return LogisticModelResults(model=fit, formula=formula, full_model=full_model)
