"""Tests for core utilities, configuration schemas and exceptions."""

import logging

import numpy as np
import pytest
import yaml
from pydantic import ValidationError

from eda_lab.core.exceptions import EDALabError, ImputationError, MissingColumnsError, SubmissionError
from eda_lab.core.utils import (
    ConfigManager,
    FeatureConfig,
    LoggerFactory,
    ModelingConfig,
    NobelConfig,
    PathManager,
    SeedManager,
    TitanicConfig,
    Timer,
)


class TestSeedManager:
    """Test seed management functionality."""

    def test_set_seed(self):
        """Same seed, same numpy stream."""
        SeedManager.set_seed(42)
        expected = np.random.random(5)

        SeedManager.set_seed(42)
        actual = np.random.random(5)

        np.testing.assert_array_equal(actual, expected)

    def test_get_seed(self):
        SeedManager.set_seed(123)
        assert SeedManager.get_seed() == 123


class TestPathManager:
    """Test path management."""

    def test_initialization(self, tmp_path):
        pm = PathManager(tmp_path)

        assert pm.project_root == tmp_path

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert PathManager().project_root == tmp_path

    def test_resolve(self, tmp_path):
        pm = PathManager(tmp_path)
        assert pm.resolve("data/raw/train.csv") == tmp_path / "data" / "raw" / "train.csv"
        absolute = tmp_path / "elsewhere.csv"
        assert pm.resolve(absolute) == absolute


class TestConfigManager:
    """Test configuration loading."""

    def test_bare_name_is_looked_up_in_config_dir(self, tmp_path):
        config_dir = tmp_path / "configs"
        config_dir.mkdir()
        with open(config_dir / "nobel.yaml", "w") as f:
            yaml.dump({"output_dir": "out"}, f)

        manager = ConfigManager(config_dir)

        assert manager.load_config("nobel") == {"output_dir": "out"}
        assert manager.load_config("nobel.yaml") == {"output_dir": "out"}

    def test_path_with_directory(self, tmp_path):
        path = tmp_path / "nested" / "titanic.yaml"
        path.parent.mkdir()
        path.write_text("cv: 3\n")

        assert ConfigManager(tmp_path / "configs").load_config(str(path)) == {"cv": 3}

    def test_empty_file_gives_empty_dict(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")
        assert ConfigManager(tmp_path).load_config("empty") == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            ConfigManager(tmp_path).load_config("absent")

    def test_validate_config(self, tmp_path):
        config = ConfigManager(tmp_path).validate_config({"cv_folds": 3}, ModelingConfig)
        assert isinstance(config, ModelingConfig)
        assert config.cv_folds == 3


class TestConfigSchemas:
    """Defaults and validation of the pydantic schemas."""

    def test_feature_defaults(self):
        config = FeatureConfig()
        assert config.fare_fill_value == 8.05
        assert config.embarked_fill_value == "C"
        assert config.small_family_sentinel == "small_family_unit"
        assert config.age_tree.min_samples_split == 20
        assert config.age_tree.complexity == 0.01
        assert config.age_tree.max_depth == 30

    def test_age_label_count_checked(self):
        with pytest.raises(ValidationError, match="age_bin_labels"):
            FeatureConfig(age_bin_labels=["a", "b"])

    def test_family_label_count_checked(self):
        with pytest.raises(ValidationError, match="family_size_bin_labels"):
            FeatureConfig(family_size_bin_labels=["only"])

    def test_collapsed_labels_must_exist(self):
        with pytest.raises(ValidationError, match="unknown labels"):
            FeatureConfig(age_bins_collapsed=["90+"])

    def test_age_tree_bounds(self):
        with pytest.raises(ValidationError):
            FeatureConfig(age_tree={"min_samples_split": 1})

    def test_titanic_nested_from_dict(self):
        config = TitanicConfig(**{
            "features": {"fare_fill_value": 9.0},
            "modeling": {"models": ["logistic"]},
        })
        assert config.features.fare_fill_value == 9.0
        assert config.modeling.models == ["logistic"]
        assert config.modeling.feature_columns == ["title_bins", "age", "pclass", "sib_sp"]
        assert config.submission_id_column == "PassengerId"

    def test_nobel_defaults(self):
        config = NobelConfig()
        assert config.individual_label == "Individual"
        assert config.plot_filename.endswith(".png")

    def test_shipped_configs_validate(self):
        from pathlib import Path

        config_dir = Path(__file__).resolve().parents[2] / "configs"
        manager = ConfigManager(config_dir)
        titanic = TitanicConfig(**manager.load_config("titanic"))
        nobel = NobelConfig(**manager.load_config("nobel"))
        assert titanic.features.model_dump() == FeatureConfig().model_dump()
        assert nobel.laureates_path.endswith(".csv")


class TestLoggingAndTimer:

    def test_logger_is_cached(self):
        assert LoggerFactory.get_logger("eda_lab.test") is LoggerFactory.get_logger("eda_lab.test")

    def test_set_level_applies_to_existing_loggers(self):
        logger = LoggerFactory.get_logger("eda_lab.test.level")
        try:
            LoggerFactory.set_level(logging.DEBUG)
            assert logger.level == logging.DEBUG
        finally:
            LoggerFactory.set_level(logging.INFO)
        assert logger.level == logging.INFO

    def test_timer_logs_completion(self, caplog):
        logger = LoggerFactory.get_logger("eda_lab.test.timer")
        logger.propagate = True
        with caplog.at_level(logging.INFO, logger="eda_lab.test.timer"):
            with Timer(logger, "unit work"):
                pass
        assert "Completed unit work" in caplog.text

    def test_timer_logs_failure_and_reraises(self, caplog):
        logger = LoggerFactory.get_logger("eda_lab.test.timer_fail")
        logger.propagate = True
        with caplog.at_level(logging.INFO, logger="eda_lab.test.timer_fail"):
            with pytest.raises(RuntimeError):
                with Timer(logger, "doomed work"):
                    raise RuntimeError("boom")
        assert "Failed doomed work" in caplog.text


class TestExceptions:

    def test_hierarchy(self):
        for exc in (MissingColumnsError, ImputationError, SubmissionError):
            assert issubclass(exc, EDALabError)

    def test_missing_columns_message(self):
        err = MissingColumnsError({"sib_sp", "age"}, "passenger table")
        assert err.missing == ["age", "sib_sp"]
        assert str(err) == "Missing required columns in passenger table: ['age', 'sib_sp']"
