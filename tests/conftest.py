"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest

from fixtures.sample_data_generator import (
    generate_sales_data,
    generate_small_sales,
    write_sales_csv
)
from kc_housing.config.reference_data import (
    CorrectionTable,
    RecordCorrection,
    RegionTable,
    load_region_table
)
from kc_housing.data.features import engineer_features
from kc_housing.data.splitting import split_train_test


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def region_table() -> RegionTable:
    return load_region_table()


@pytest.fixture
def small_sales():
    """Ten hand-written sales with known entry errors."""
    return generate_small_sales()


@pytest.fixture
def sales_data():
    """Four hundred synthetic sales."""
    return generate_sales_data(n_records=400, seed=42)


@pytest.fixture
def sales_csv(temp_dir, sales_data):
    return write_sales_csv(sales_data, temp_dir / "kc_house_data.csv")


@pytest.fixture
def enriched_sales(sales_data, region_table):
    return engineer_features(sales_data, region_table)


@pytest.fixture
def split_sales(enriched_sales):
    return split_train_test(enriched_sales, train_fraction=0.8, seed=1)


@pytest.fixture
def small_correction_table():
    """Corrections addressed to ids in ``small_sales``."""
    return CorrectionTable(
        corrections=(
            RecordCorrection(id=7000000003, bedrooms=3),
            RecordCorrection(id=7000000009, bedrooms=3, bathrooms=1.75),
            RecordCorrection(id=7999999999, bedrooms=2),
        ),
        removals=frozenset({7000000006, 7999999998})
    )
