"""Held-out evaluation of the price model."""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..data.schemas import require_columns
from ..models.formulas import LINEAR_PREDICTORS, LINEAR_RESPONSE
from ..models.linear import LinearModelResults

logger = logging.getLogger(__name__)


@dataclass
class RegressionMetrics:
    """Test-set error of the price model."""

    rmse: float
    r_squared: float
    predictions: pd.Series

    def to_dict(self) -> dict:
        return {"rmse": self.rmse, "r_squared": self.r_squared}


def root_mean_squared_error(actual: np.ndarray, predicted: np.ndarray) -> float:
    return float(np.sqrt(np.mean((predicted - actual) ** 2)))


def r_squared(actual: np.ndarray, predicted: np.ndarray) -> float:
    """
    1 - RSS/TSS with the mean of ``actual`` as the baseline predictor.

    Exact predictions score 1 even when ``actual`` is constant; otherwise a
    constant ``actual`` leaves R² undefined (nan).
    """
    rss = np.sum((predicted - actual) ** 2)
    tss = np.sum((actual - np.mean(actual)) ** 2)
    if rss == 0:
        return 1.0
    if tss == 0:
        return float("nan")
    return float(1 - rss / tss)


def evaluate_linear_model(
    model_results: LinearModelResults,
    test: pd.DataFrame
) -> RegressionMetrics:
    """
    Compute RMSE and R² of the price model on the test table.

    R² uses the test set's own mean price as the baseline, not the training mean.

    Parameters
    ----------
    model_results : LinearModelResults
        Fitted price model
    test : pd.DataFrame
        Enriched test table

    Returns
    -------
    RegressionMetrics
        RMSE, R² and per-row predictions

    Raises
    ------
    SchemaError
        If the test table lacks the response or a predictor column
    """
    require_columns(test, [LINEAR_RESPONSE] + LINEAR_PREDICTORS, stage="regression_evaluation")

    predictions = model_results.predict(test)
    actual = test[LINEAR_RESPONSE].to_numpy(dtype=float)
    predicted = predictions.to_numpy(dtype=float)

    metrics = RegressionMetrics(
        rmse=root_mean_squared_error(actual, predicted),
        r_squared=r_squared(actual, predicted),
        predictions=predictions
    )

    if np.isnan(metrics.r_squared):
        logger.warning("Test prices have zero variance; R² is undefined")

    logger.info(f"Linear model performance: RMSE = {metrics.rmse:,.2f}, R² = {metrics.r_squared:.3f}")
    return metrics
