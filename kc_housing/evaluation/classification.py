"""Held-out evaluation of the good-quality classifier."""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.metrics import auc, confusion_matrix, roc_curve

from ..config import constants
from ..data.features import QualityLabel
from ..data.schemas import require_columns
from ..models.formulas import LOGISTIC_LABEL
from ..models.logistic import LogisticModelResults, quality_indicator

logger = logging.getLogger(__name__)


@dataclass
class ClassificationMetrics:
    """Test-set performance of the classifier."""

    accuracy: float
    error_rate: float
    auc: float
    predictions: pd.Series
    confusion_matrix: pd.DataFrame
    roc_curve: pd.DataFrame

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "error_rate": self.error_rate,
            "auc": self.auc,
            "confusion_matrix": {
                actual: {predicted: int(n) for predicted, n in row.items()}
                for actual, row in self.confusion_matrix.iterrows()
            }
        }


def build_confusion_matrix(actual: np.ndarray, predicted: np.ndarray) -> pd.DataFrame:
    """2x2 counts; rows are actual labels, columns predicted labels."""
    levels = QualityLabel.levels()
    counts = confusion_matrix(actual, predicted, labels=[0, 1])
    return pd.DataFrame(
        counts,
        index=pd.Index(levels, name="actual"),
        columns=pd.Index(levels, name="predicted")
    )


def compute_roc(actual: np.ndarray, probabilities: np.ndarray) -> pd.DataFrame:
    """
    ROC points at every distinct predicted probability.

    Returns an empty frame when ``actual`` holds a single class.
    """
    if len(np.unique(actual)) < 2:
        return pd.DataFrame(columns=["fpr", "tpr", "threshold"], dtype=float)

    fpr, tpr, thresholds = roc_curve(actual, probabilities, drop_intermediate=False)
    return pd.DataFrame({"fpr": fpr, "tpr": tpr, "threshold": thresholds})


def evaluate_logistic_model(
    model_results: LogisticModelResults,
    test: pd.DataFrame,
    threshold: float = constants.DECISION_THRESHOLD
) -> ClassificationMetrics:
    """
    Score the classifier on the test table.

    A row is predicted good quality when its probability exceeds
    ``threshold``. AUC is the trapezoidal area under the ROC curve traced
    over all distinct predicted probabilities.

    Parameters
    ----------
    model_results : LogisticModelResults
        Fitted classifier
    test : pd.DataFrame
        Enriched test table
    threshold : float, default 0.5
        Decision threshold on the predicted probability

    Returns
    -------
    ClassificationMetrics
        Accuracy, error rate, AUC, probabilities, confusion matrix and ROC points

    Raises
    ------
    SchemaError
        If the test table lacks the label or a predictor column
    """
    require_columns(
        test, [LOGISTIC_LABEL] + list(model_results.predictors), stage="classification_evaluation"
    )

    probabilities = model_results.predict_proba(test)
    actual = quality_indicator(test[LOGISTIC_LABEL]).to_numpy()
    predicted = (probabilities.to_numpy() > threshold).astype(int)

    matrix = build_confusion_matrix(actual, predicted)
    accuracy = float(np.trace(matrix.to_numpy()) / matrix.to_numpy().sum())

    roc = compute_roc(actual, probabilities.to_numpy())
    if roc.empty:
        logger.warning("Test labels contain a single class; AUC is undefined")
        area = float("nan")
    else:
        area = float(auc(roc["fpr"], roc["tpr"]))

    metrics = ClassificationMetrics(
        accuracy=accuracy,
        error_rate=1 - accuracy,
        auc=area,
        predictions=probabilities,
        confusion_matrix=matrix,
        roc_curve=roc
    )

    logger.info(
        f"Logistic model performance: accuracy = {accuracy:.2%}, "
        f"error rate = {metrics.error_rate:.2%}, AUC = {area:.3f}"
    )
    return metrics
