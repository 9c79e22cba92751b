"""Data processing module for the housing analysis."""

from .schemas import (
    raw_sales_schema,
    enriched_sales_schema,
    require_columns,
    validate_sales,
    validate_enriched_sales
)
from .loaders import (
    LoadResult,
    load_sales,
    save_results
)
from .quality import find_suspicious_records
from .corrections import (
    CorrectionSummary,
    apply_corrections,
    summarize_corrections
)
from .features import (
    Region,
    RenovationGroup,
    QualityLabel,
    engineer_features,
    feature_summary
)
from .splitting import SplitResult, split_train_test

__all__ = [
    "raw_sales_schema",
    "enriched_sales_schema",
    "require_columns",
    "validate_sales",
    "validate_enriched_sales",
    "LoadResult",
    "load_sales",
    "save_results",
    "find_suspicious_records",
    "CorrectionSummary",
    "apply_corrections",
    "summarize_corrections",
    "Region",
    "RenovationGroup",
    "QualityLabel",
    "engineer_features",
    "feature_summary",
    "SplitResult",
    "split_train_test"
]
