"""Core utilities for logging, seeding, paths, and configuration management."""

from __future__ import annotations

import logging
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml
from pydantic import BaseModel, Field, model_validator


class LoggerFactory:
    """Factory for creating structured loggers with consistent formatting."""

    _loggers: Dict[str, logging.Logger] = {}
    _level: int = logging.INFO

    @classmethod
    def get_logger(cls, name: str, level: Optional[int] = None) -> logging.Logger:
        """Get or create a logger with standard formatting."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(level if level is not None else cls._level)

            # Don't add handlers if they already exist
            if not logger.handlers:
                handler = logging.StreamHandler(sys.stdout)
                formatter = logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                )
                handler.setFormatter(formatter)
                logger.addHandler(handler)

            cls._loggers[name] = logger

        return cls._loggers[name]

    @classmethod
    def set_level(cls, level: int) -> None:
        """Change the level of every logger handed out so far, and of future ones."""
        cls._level = level
        for logger in cls._loggers.values():
            logger.setLevel(level)


class SeedManager:
    """Manages global random seeds for reproducibility."""

    _current_seed: Optional[int] = None

    @classmethod
    def set_seed(cls, seed: int) -> None:
        """Set global random seed for python and numpy."""
        cls._current_seed = seed
        random.seed(seed)
        np.random.seed(seed)

    @classmethod
    def get_seed(cls) -> Optional[int]:
        """Get current seed."""
        return cls._current_seed


class PathManager:
    """Anchors relative paths at the project root."""

    def __init__(self, project_root: Optional[Path] = None):
        # defaults to the working directory
        self.project_root = Path(project_root) if project_root is not None else Path.cwd()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Return `path` unchanged if absolute, else anchored at the project root."""
        path = Path(path)
        return path if path.is_absolute() else self.project_root / path


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self._cache: Dict[str, Any] = {}

    def load_config(self, config_name: str, use_cache: bool = True) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if use_cache and config_name in self._cache:
            return self._cache[config_name]

        config_path = Path(config_name)
        # Bare names are looked up in the config directory
        if not config_path.is_absolute() and config_path.parent == Path("."):
            config_path = self.config_dir / config_path
        if config_path.suffix not in (".yaml", ".yml"):
            config_path = config_path.with_suffix(".yaml")
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_path.open("r") as f:
            config = yaml.safe_load(f) or {}

        if use_cache:
            self._cache[config_name] = config

        return config

    def validate_config(self, config: Dict[str, Any], schema: type) -> BaseModel:
        """Validate configuration against Pydantic schema."""
        return schema(**config)


class Timer:
    """Context manager for timing operations."""

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = datetime.now().timestamp()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = datetime.now().timestamp() - self.start_time
            if exc_type is None:
                self.logger.info(f"Completed {self.operation} in {duration:.2f}s")
            else:
                self.logger.error(f"Failed {self.operation} after {duration:.2f}s: {exc_val}")


# Configuration schemas using Pydantic
class AgeTreeConfig(BaseModel):
    """Regression tree used to impute missing ages."""
    features: List[str] = Field(
        default_factory=lambda: ["pclass", "sex", "sib_sp", "parch", "fare", "embarked"],
        description="Predictors of age",
    )
    categorical_features: List[str] = Field(
        default_factory=lambda: ["sex", "embarked"],
        description="Predictors that are one-hot encoded",
    )
    min_samples_split: int = Field(20, ge=2, description="Minimum node size to attempt a split")
    complexity: float = Field(0.01, ge=0.0, description="Minimum relative error reduction per split")
    max_depth: int = Field(30, ge=1, description="Maximum tree depth")
    random_state: int = Field(42, description="Seed for the tree's tie-breaking")


class FeatureConfig(BaseModel):
    """Fixed constants for the passenger feature-engineering pipeline."""
    title_bins: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "title_1": ["Capt", "Don", "Jonkheer", "Rev", "Mr"],
            "title_2": ["Col", "Dr", "Major", "Master"],
        }
    )
    default_title_bin: str = "title_3"

    age_bin_edges: List[float] = Field(default_factory=lambda: [0, 12, 18, 25, 80])
    age_bin_labels: List[str] = Field(default_factory=lambda: ["0-12", "12-18", "18-25", "25-80"])
    age_bins_collapsed: List[str] = Field(default_factory=lambda: ["12-18", "25-80"])
    age_other_label: str = "other"

    family_size_bin_edges: List[float] = Field(default_factory=lambda: [0, 1, 4, 11])
    family_size_bin_labels: List[str] = Field(default_factory=lambda: ["singleton", "1-4", "1-11"])
    small_family_max: int = 2
    small_family_sentinel: str = "small_family_unit"

    fare_fill_value: float = 8.05
    embarked_fill_value: str = "C"

    age_tree: AgeTreeConfig = Field(default_factory=AgeTreeConfig)

    @model_validator(mode="after")
    def _check_bins(self) -> "FeatureConfig":
        if len(self.age_bin_labels) != len(self.age_bin_edges) - 1:
            raise ValueError("age_bin_labels must have one label per age interval")
        if len(self.family_size_bin_labels) != len(self.family_size_bin_edges) - 1:
            raise ValueError("family_size_bin_labels must have one label per family-size interval")
        unknown = set(self.age_bins_collapsed) - set(self.age_bin_labels)
        if unknown:
            raise ValueError(f"age_bins_collapsed references unknown labels: {sorted(unknown)}")
        return self


class ModelingConfig(BaseModel):
    """Schema for the survival models."""
    model_config = {'protected_namespaces': ()}
    feature_columns: List[str] = Field(
        default_factory=lambda: ["title_bins", "age", "pclass", "sib_sp"],
        description="Columns handed to every model",
    )
    categorical_columns: List[str] = Field(default_factory=lambda: ["title_bins"])
    models: List[str] = Field(
        default_factory=lambda: ["logistic", "decision_tree", "random_forest", "conditional_forest"]
    )
    model_params: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    cv_folds: int = Field(5, description="Folds for the accuracy estimate; 0 disables it")
    seed: int = Field(42, description="Random seed for reproducibility")


class TitanicConfig(BaseModel):
    """Schema for the Titanic workflow."""
    train_path: str = "data/raw/train.csv"
    test_path: str = "data/raw/test.csv"
    output_dir: str = "artifacts/titanic"
    id_column: str = "passenger_id"
    target_column: str = "survived"
    submission_id_column: str = "PassengerId"
    submission_target_column: str = "Survived"
    features: FeatureConfig = Field(default_factory=FeatureConfig)
    modeling: ModelingConfig = Field(default_factory=ModelingConfig)


class NobelConfig(BaseModel):
    """Schema for the Nobel laureate workflow."""
    laureates_path: str = "data/raw/nobel_winners.csv"
    output_dir: str = "artifacts/nobel"
    year_column: str = "prize_year"
    birth_date_column: str = "birth_date"
    category_column: str = "category"
    laureate_type_column: str = "laureate_type"
    individual_label: str = "Individual"
    plot_filename: str = "nobel_age_ridges.png"
