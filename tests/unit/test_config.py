"""Unit tests for configuration module."""

import json

import pytest

from kc_housing.config import (
    constants,
    Settings,
    get_default_settings,
    CorrectionTable,
    RecordCorrection,
    RegionTable,
    load_correction_table,
    load_region_table
)
from kc_housing.utils.exceptions import ConfigurationError


class TestConstants:
    """Test configuration constants."""

    def test_downtown_reference_point(self):
        assert constants.DOWNTOWN_LAT == 47.6062
        assert constants.DOWNTOWN_LONG == -122.3321

    def test_renovation_and_quality_thresholds(self):
        assert constants.RECENT_RENOVATION_YEAR == 2005
        assert constants.GOOD_CONDITION_ABOVE == 3
        assert constants.GOOD_GRADE_ABOVE == 7

    def test_split_defaults(self):
        assert constants.DEFAULT_TRAIN_FRACTION == 0.8
        assert constants.DEFAULT_SEED == 1

    def test_redundant_columns(self):
        assert set(constants.REDUNDANT_AREA_COLUMNS) == {"sqft_above", "sqft_basement"}


class TestSettings:
    """Test Settings configuration class."""

    def test_default_settings(self):
        settings = get_default_settings()

        assert settings.train_fraction == 0.8
        assert settings.seed == 1
        assert settings.remove_outliers is True
        assert settings.outlier_threshold == 2.0
        assert settings.full_logistic_model is True
        assert settings.decision_threshold == 0.5
        assert settings.corrections_path is None
        assert settings.regions_path is None
        assert settings.log_level == "INFO"

    def test_custom_settings(self):
        settings = Settings(train_fraction=0.7, seed=123, remove_outliers=False)

        assert settings.train_fraction == 0.7
        assert settings.seed == 123
        assert settings.remove_outliers is False

    def test_settings_validation_valid(self):
        Settings(train_fraction=0.5, outlier_threshold=3.0).validate()

    @pytest.mark.parametrize("kwargs", [
        {"train_fraction": 0.0},
        {"train_fraction": 1.0},
        {"outlier_threshold": 0},
        {"decision_threshold": 1.5},
        {"log_level": "VERBOSE"},
    ])
    def test_settings_validation_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            Settings(**kwargs).validate()

    def test_json_round_trip(self, temp_dir):
        settings = Settings(seed=7, train_fraction=0.75, data_path="kc_house_data.csv")
        json_path = temp_dir / "settings.json"

        settings.to_json(str(json_path))
        with open(json_path) as f:
            saved = json.load(f)

        # None values are not written
        assert "log_file" not in saved
        assert Settings.from_json(str(json_path)) == settings

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError):
            Settings.from_dict({"seed": 1, "not_a_setting": True})


class TestCorrectionTable:
    """Test the correction reference table."""

    def test_packaged_table(self):
        table = load_correction_table()

        assert len(table.corrections) == 13
        assert table.removals == frozenset({5702500050, 203100435, 3980300371})

    def test_packaged_partial_entries(self):
        table = load_correction_table()
        by_id = {c.id: c for c in table.corrections}

        assert by_id[6306400140].overrides() == {"bedrooms": 5, "bathrooms": 4.5}
        # Bathrooms were verified correct already for this record
        assert by_id[6896300380].overrides() == {"bedrooms": 3}
        assert by_id[7849202299].overrides() == {"bedrooms": 0}

    def test_from_dict(self):
        table = CorrectionTable.from_dict({
            "corrections": [{"id": 1, "bathrooms": 2.5}],
            "removals": [2, 3]
        })

        assert table.corrections == (RecordCorrection(id=1, bathrooms=2.5),)
        assert table.removals == frozenset({2, 3})
        assert table.corrected_ids == frozenset({1})

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError):
            CorrectionTable(corrections=(RecordCorrection(id=1), RecordCorrection(id=1)))

    def test_malformed_entry(self):
        with pytest.raises(ConfigurationError):
            CorrectionTable.from_dict({"corrections": [{"bedrooms": 3}]})

    def test_load_custom_file(self, temp_dir):
        path = temp_dir / "corrections.json"
        path.write_text(json.dumps({"corrections": [{"id": 5, "bedrooms": 2}], "removals": []}))

        table = load_correction_table(path)
        assert table.corrections[0].id == 5
        assert table.removals == frozenset()

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_correction_table(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_correction_table(path)


class TestRegionTable:
    """Test the zip-code region table."""

    def test_packaged_table(self):
        table = load_region_table()

        assert len(table.city_zips) == 22
        assert len(table.suburb_zips) == 22
        assert 98101 in table.city_zips
        assert 98004 in table.suburb_zips
        assert not table.city_zips & table.suburb_zips

    def test_overlap_rejected(self):
        with pytest.raises(ConfigurationError):
            RegionTable(city_zips=frozenset({98101, 98004}), suburb_zips=frozenset({98004}))

    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            RegionTable.from_dict({"city": [98101]})
