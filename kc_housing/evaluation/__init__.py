"""Model evaluation on held-out data."""

from .regression import RegressionMetrics, evaluate_linear_model
from .classification import ClassificationMetrics, evaluate_logistic_model

__all__ = [
    "RegressionMetrics",
    "evaluate_linear_model",
    "ClassificationMetrics",
    "evaluate_logistic_model"
]
