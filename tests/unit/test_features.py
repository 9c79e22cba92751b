"""Unit tests for feature engineering."""

import logging

import numpy as np
import pandas as pd
import pytest
from hypothesis import given, strategies as st

from kc_housing.config.reference_data import RegionTable, load_region_table
from kc_housing.data.features import (
    Region,
    RenovationGroup,
    QualityLabel,
    assign_region,
    assign_renovation_group,
    calculate_distance_to_downtown,
    engineer_features,
    feature_summary,
    label_good_quality,
    parse_sale_date
)
from kc_housing.utils.exceptions import SchemaError

REGIONS = load_region_table()


class TestDeclaredLevels:

    def test_region_levels(self):
        assert Region.levels() == ["City", "Suburb", "Rural"]
        assert Region.baseline() == "City"

    def test_renovation_levels(self):
        assert RenovationGroup.levels() == [
            "Never Renovated", "Recently Renovated", "Renovated Long Ago"
        ]
        assert RenovationGroup.baseline() == "Never Renovated"

    def test_quality_levels(self):
        assert QualityLabel.levels() == ["no", "yes"]
        assert QualityLabel.baseline() == "no"


class TestParseSaleDate:

    def test_year_and_month(self):
        parts = parse_sale_date(pd.Series(["20141013T000000", "20150225T000000"]))

        assert parts["year_sold"].tolist() == [2014, 2015]
        assert parts["month_sold"].tolist() == [10, 2]


class TestAssignRegion:

    def test_known_zips(self):
        zips = pd.Series([98101, 98004, 98001, 98103])
        regions = assign_region(zips, REGIONS)

        assert regions.tolist() == ["City", "Suburb", "Rural", "Rural"]
        assert list(regions.cat.categories) == Region.levels()

    def test_custom_table(self):
        table = RegionTable(city_zips=frozenset({1}), suburb_zips=frozenset({2}))
        regions = assign_region(pd.Series([1, 2, 3]), table)

        assert regions.tolist() == ["City", "Suburb", "Rural"]

    @given(st.lists(st.integers(min_value=98000, max_value=98299), min_size=1, max_size=50))
    def test_region_partition_is_total(self, zips):
        regions = assign_region(pd.Series(zips), REGIONS)

        assert regions.notna().all()
        for zipcode, region in zip(zips, regions):
            assert region in Region.levels()
            in_neither = zipcode not in REGIONS.city_zips and zipcode not in REGIONS.suburb_zips
            assert (region == "Rural") == in_neither


class TestAssignRenovationGroup:

    def test_groups(self):
        groups = assign_renovation_group(pd.Series([0, 1990, 2004, 2005, 2014]))

        assert groups.tolist() == [
            "Never Renovated",
            "Renovated Long Ago",
            "Renovated Long Ago",
            "Recently Renovated",
            "Recently Renovated",
        ]


class TestDistanceToDowntown:

    def test_downtown_is_zero(self):
        distance = calculate_distance_to_downtown(
            pd.Series([47.6062]), pd.Series([-122.3321])
        )
        assert distance.iloc[0] == pytest.approx(0.0)

    def test_euclidean_in_degrees(self):
        distance = calculate_distance_to_downtown(
            pd.Series([47.6062 + 0.3]), pd.Series([-122.3321 + 0.4])
        )
        assert distance.iloc[0] == pytest.approx(0.5)


class TestLabelGoodQuality:

    def test_strict_thresholds(self):
        labels = label_good_quality(pd.Series([4, 3, 4, 5]), pd.Series([8, 8, 7, 11]))
        assert labels.tolist() == ["yes", "no", "no", "yes"]

    @given(
        st.lists(
            st.tuples(st.integers(min_value=1, max_value=5), st.integers(min_value=1, max_value=13)),
            min_size=1,
            max_size=50
        )
    )
    def test_label_matches_rule(self, pairs):
        condition = pd.Series([c for c, _ in pairs])
        grade = pd.Series([g for _, g in pairs])

        labels = label_good_quality(condition, grade)

        for (c, g), label in zip(pairs, labels):
            assert (label == "yes") == (c > 3 and g > 7)


class TestEngineerFeatures:

    def test_adds_derived_columns(self, small_sales):
        enriched = engineer_features(small_sales, REGIONS)

        for col in ["year_sold", "month_sold", "region", "renovation_group",
                    "distance_to_downtown", "good_quality"]:
            assert col in enriched.columns

    def test_drops_redundant_area_columns(self, small_sales):
        enriched = engineer_features(small_sales, REGIONS)

        assert "sqft_above" not in enriched.columns
        assert "sqft_basement" not in enriched.columns
        assert "sqft_living" in enriched.columns

    def test_rows_preserved_in_order(self, sales_data):
        shuffled = sales_data.sample(frac=1, random_state=3)
        enriched = engineer_features(shuffled, REGIONS)

        assert enriched.index.equals(shuffled.index)
        assert enriched["id"].tolist() == shuffled["id"].tolist()

    def test_small_sales_values(self, small_sales):
        enriched = engineer_features(small_sales, REGIONS).set_index("id")

        assert enriched.loc[7000000002, "region"] == "City"  # 98125
        assert enriched.loc[7000000003, "region"] == "Suburb"  # 98028
        assert enriched.loc[7000000001, "region"] == "Rural"  # 98178
        assert enriched.loc[7000000002, "renovation_group"] == "Renovated Long Ago"
        assert enriched.loc[7000000009, "renovation_group"] == "Recently Renovated"
        assert enriched.loc[7000000010, "good_quality"] == "yes"
        assert enriched.loc[7000000004, "good_quality"] == "no"
        assert enriched.loc[7000000001, "year_sold"] == 2014
        assert enriched.loc[7000000001, "month_sold"] == 10

    def test_good_quality_recomputed(self, small_sales):
        df = small_sales.copy()
        df.loc[df["id"] == 7000000004, "grade"] = 9

        enriched = engineer_features(df, REGIONS).set_index("id")
        assert enriched.loc[7000000004, "good_quality"] == "yes"

    def test_categorical_dtypes(self, small_sales):
        enriched = engineer_features(small_sales, REGIONS)

        assert list(enriched["region"].cat.categories) == Region.levels()
        assert list(enriched["renovation_group"].cat.categories) == RenovationGroup.levels()
        assert list(enriched["good_quality"].cat.categories) == QualityLabel.levels()
        assert list(enriched["waterfront"].cat.categories) == [0, 1]

    def test_default_region_table(self, small_sales):
        pd.testing.assert_frame_equal(
            engineer_features(small_sales), engineer_features(small_sales, REGIONS)
        )

    def test_input_not_modified(self, small_sales):
        before = small_sales.copy()
        engineer_features(small_sales, REGIONS)
        pd.testing.assert_frame_equal(small_sales, before)

    def test_positive_longitude_warns(self, small_sales, caplog):
        df = small_sales.copy()
        df.loc[0, "long"] = 122.257

        with caplog.at_level(logging.WARNING, logger="kc_housing"):
            engineer_features(df, REGIONS)

        assert "positive longitude" in caplog.text

    def test_missing_column(self, small_sales):
        with pytest.raises(SchemaError) as exc_info:
            engineer_features(small_sales.drop(columns=["yr_renovated"]), REGIONS)

        assert exc_info.value.missing_columns == ["yr_renovated"]
        assert exc_info.value.stage == "feature_engineering"


class TestFeatureSummary:

    def test_counts_cover_all_levels(self, small_sales):
        summary = feature_summary(engineer_features(small_sales, REGIONS))

        assert list(summary["region"].index) == Region.levels()
        assert summary["region"].sum() == 10
        assert list(summary["renovation_group"].index) == RenovationGroup.levels()
        assert summary["renovation_group"]["Never Renovated"] == 8
