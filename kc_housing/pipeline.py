"""End-to-end housing analysis pipeline."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import pandas as pd

from .config.reference_data import (
    CorrectionTable,
    RegionTable,
    load_correction_table,
    load_region_table
)
from .config.settings import Settings
from .data.corrections import CorrectionSummary, apply_corrections, summarize_corrections
from .data.features import engineer_features, feature_summary
from .data.loaders import load_sales
from .data.quality import find_suspicious_records
from .data.schemas import validate_enriched_sales
from .data.splitting import split_train_test
from .evaluation.classification import ClassificationMetrics, evaluate_logistic_model
from .evaluation.regression import RegressionMetrics, evaluate_linear_model
from .models.linear import LinearModelResults, build_linear_model
from .models.logistic import LogisticModelResults, build_logistic_model
from .utils.exceptions import HousingAnalysisError

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResults:
    """Everything a pipeline run produces."""

    data: pd.DataFrame
    train: pd.DataFrame
    test: pd.DataFrame
    suspicious_records: pd.DataFrame
    correction_summary: CorrectionSummary
    feature_summary: Dict[str, pd.Series]
    linear_model: LinearModelResults
    logistic_model: LogisticModelResults
    linear_results: RegressionMetrics
    logistic_results: ClassificationMetrics
    metadata: Dict[str, Any]


class HousingAnalysisPipeline:
    """Load, clean, enrich, split, fit and evaluate in one run."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        corrections: Optional[CorrectionTable] = None,
        regions: Optional[RegionTable] = None
    ):
        """Initialize pipeline with configuration.

        Args:
            settings: Run settings (defaults when None)
            corrections: Correction table; loaded from settings or the
                packaged table when None
            regions: Zip-code region table; loaded from settings or the
                packaged table when None
        """
        self.settings = settings or Settings()
        self.settings.validate()
        self.corrections = corrections or load_correction_table(self.settings.corrections_path)
        self.regions = regions or load_region_table(self.settings.regions_path)

    def run(self, data_path: Optional[Union[str, Path]] = None) -> AnalysisResults:
        """Run every stage on the file at ``data_path``.

        Args:
            data_path: Input CSV, overriding ``settings.data_path``

        Returns:
            AnalysisResults with the enriched data, models and metrics
        """
        data_path = data_path or self.settings.data_path
        if data_path is None:
            raise ValueError("No input data path given")

        logger.info(f"Starting housing analysis on {data_path}")
        start_time = datetime.now()

        loaded = self._stage("load", load_sales, data_path)
        raw = loaded.data
        return self.run_on_frame(raw, start_time=start_time, source=str(data_path))

    def run_on_frame(
        self,
        raw: pd.DataFrame,
        start_time: Optional[datetime] = None,
        source: str = "<frame>"
    ) -> AnalysisResults:
        """Run every stage after loading on an already loaded raw table."""
        start_time = start_time or datetime.now()
        settings = self.settings

        suspicious = self._stage("quality_audit", find_suspicious_records, raw)
        cleaned = self._stage("correction", apply_corrections, raw, self.corrections)
        correction_summary = summarize_corrections(raw, cleaned, self.corrections)

        enriched = self._stage("feature_engineering", engineer_features, cleaned, self.regions)
        enriched = self._stage("feature_engineering", validate_enriched_sales, enriched)
        summary = feature_summary(enriched)
        for name, counts in summary.items():
            logger.info(f"{name} distribution: {counts.to_dict()}")

        split = self._stage(
            "split", split_train_test, enriched, settings.train_fraction, settings.seed
        )

        linear_model = self._stage(
            "linear_model", build_linear_model, split.train,
            settings.remove_outliers, settings.outlier_threshold
        )
        linear_results = self._stage(
            "regression_evaluation", evaluate_linear_model, linear_model, split.test
        )

        logistic_model = self._stage(
            "logistic_model", build_logistic_model, split.train, settings.full_logistic_model
        )
        logistic_results = self._stage(
            "classification_evaluation", evaluate_logistic_model,
            logistic_model, split.test, settings.decision_threshold
        )

        end_time = datetime.now()
        metadata = {
            "source": source,
            "n_raw_records": len(raw),
            "n_suspicious_records": len(suspicious),
            "n_records": len(enriched),
            "n_train": len(split.train),
            "n_test": len(split.test),
            "n_outliers_removed": linear_model.n_outliers_removed,
            "seed": settings.seed,
            "train_fraction": settings.train_fraction,
            "processing_time": (end_time - start_time).total_seconds(),
            "timestamp": end_time.isoformat()
        }

        logger.info(
            f"Pipeline completed in {metadata['processing_time']:.2f}s: "
            f"RMSE = {linear_results.rmse:,.2f}, AUC = {logistic_results.auc:.3f}"
        )

        return AnalysisResults(
            data=enriched,
            train=split.train,
            test=split.test,
            suspicious_records=suspicious,
            correction_summary=correction_summary,
            feature_summary=summary,
            linear_model=linear_model,
            logistic_model=logistic_model,
            linear_results=linear_results,
            logistic_results=logistic_results,
            metadata=metadata
        )

    @staticmethod
    def _stage(name: str, func: Callable, *args):
        """Run one stage, tagging package errors with the stage name."""
        logger.debug(f"Running stage {name}")
        try:
            return func(*args)
        except HousingAnalysisError as e:
            if e.stage is None:
                e.stage = name
            logger.error(f"Stage {name} failed: {e}")
            raise
        except OSError as e:
            logger.error(f"Stage {name} failed: {e}")
            raise
