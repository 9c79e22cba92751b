"""
kc_housing: King County house sales analysis

Cleans the King County house sales data, derives regional and quality
features, and fits a price regression and a good-quality classifier.
"""

__version__ = "0.1.0"
__author__ = "King County Housing Analysis Team"

from .config import constants
from .data import schemas
from .pipeline import AnalysisResults, HousingAnalysisPipeline

__all__ = [
    "constants",
    "schemas",
    "AnalysisResults",
    "HousingAnalysisPipeline"
]
