"""Command line entry point for the King County housing analysis"""

import argparse
import json
import math
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import Settings
from .data.loaders import save_results
from .pipeline import AnalysisResults, HousingAnalysisPipeline
from .utils.exceptions import HousingAnalysisError
from .utils.logging_config import setup_logging


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Clean King County house sales, fit price and quality models, and evaluate them",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "data_path",
        help="Path to the house sales CSV (kc_house_data.csv layout)"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a settings JSON file"
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for enriched data, coefficient tables and metrics"
    )

    # Overrides for settings
    parser.add_argument(
        "--train-fraction",
        type=float,
        default=None,
        help="Share of rows used for training"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the train/test split"
    )
    parser.add_argument(
        "--no-outlier-removal",
        action="store_true",
        help="Fit the price model once, without dropping outlying rows"
    )
    parser.add_argument(
        "--reduced-logistic",
        action="store_true",
        help="Use the reduced predictor set for the quality classifier"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Settings from the config file with command line overrides applied"""
    settings = Settings.from_json(args.config) if args.config else Settings()
    settings.data_path = args.data_path

    if args.output_dir is not None:
        settings.output_path = args.output_dir
    if args.train_fraction is not None:
        settings.train_fraction = args.train_fraction
    if args.seed is not None:
        settings.seed = args.seed
    if args.no_outlier_removal:
        settings.remove_outliers = False
    if args.reduced_logistic:
        settings.full_logistic_model = False
    if args.log_level is not None:
        settings.log_level = args.log_level

    return settings


def write_outputs(results: AnalysisResults, output_dir: str) -> None:
    """Write result tables and metrics to ``output_dir``"""
    output_dir = Path(output_dir)
    save_results(results.data, output_dir / "enriched.csv", index=False)
    save_results(
        results.linear_model.coefficient_table(),
        output_dir / "linear_coefficients.csv",
        index_label="term"
    )
    save_results(
        results.logistic_model.coefficient_table(),
        output_dir / "logistic_coefficients.csv",
        index_label="term"
    )
    save_results(results.logistic_results.roc_curve, output_dir / "roc_curve.csv", index=False)

    metrics = {
        "linear": results.linear_results.to_dict(),
        "logistic": results.logistic_results.to_dict(),
        "metadata": results.metadata
    }
    with open(output_dir / "metrics.json", "w") as f:
        json.dump(_null_undefined(metrics), f, indent=2, allow_nan=False)


def _null_undefined(value):
    """Replace NaN metrics (undefined AUC or R²) with None so they serialize as null"""
    if isinstance(value, dict):
        return {key: _null_undefined(item) for key, item in value.items()}
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def format_report(results: AnalysisResults) -> str:
    """Plain-text summary of the run"""
    linear = results.linear_results
    logistic = results.logistic_results
    lines = [
        f"Records analysed: {results.metadata['n_records']:,} "
        f"({results.metadata['n_train']:,} train / {results.metadata['n_test']:,} test)",
        f"Outliers removed from training data: {results.linear_model.n_outliers_removed:,}",
        "",
        "Linear model performance:",
        f"  RMSE: {linear.rmse:,.2f}",
        f"  R-squared: {linear.r_squared:.3f}",
        "",
        "Logistic model performance:",
        f"  Accuracy: {logistic.accuracy * 100:.2f}%",
        f"  Error rate: {logistic.error_rate * 100:.2f}%",
        f"  AUC: {logistic.auc:.3f}",
        "",
        "Confusion matrix:",
        logistic.confusion_matrix.to_string(),
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function"""
    args = parse_arguments(argv)

    try:
        settings = build_settings(args)
        settings.validate()
        logger = setup_logging(level=settings.log_level, log_file=settings.log_file)

        pipeline = HousingAnalysisPipeline(settings)
        results = pipeline.run()
        print(format_report(results))

        if settings.output_path:
            write_outputs(results, settings.output_path)
            logger.info(f"Results written to {settings.output_path}")
    except (HousingAnalysisError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
