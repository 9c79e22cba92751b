"""Regression models for the housing analysis."""

from .formulas import (
    LINEAR_PREDICTORS,
    LOGISTIC_FULL_PREDICTORS,
    LOGISTIC_REDUCED_PREDICTORS
)
from .linear import (
    LINEAR_FORMULA,
    LinearModelResults,
    build_linear_model,
    standardized_residuals
)
from .logistic import (
    FULL_LOGISTIC_FORMULA,
    REDUCED_LOGISTIC_FORMULA,
    LogisticModelResults,
    build_logistic_model
)

__all__ = [
    "LINEAR_PREDICTORS",
    "LOGISTIC_FULL_PREDICTORS",
    "LOGISTIC_REDUCED_PREDICTORS",
    "LINEAR_FORMULA",
    "LinearModelResults",
    "build_linear_model",
    "standardized_residuals",
    "FULL_LOGISTIC_FORMULA",
    "REDUCED_LOGISTIC_FORMULA",
    "LogisticModelResults",
    "build_logistic_model"
]
