"""Fits the survival models on the training partition of the derived passenger table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.model_selection import StratifiedKFold, cross_val_score

from eda_lab.core.exceptions import MissingColumnsError
from eda_lab.core.utils import LoggerFactory, ModelingConfig, SeedManager, Timer
from eda_lab.modeling.model_registry import BaseModel, ModelRegistry


@dataclass
class TrainingResult:
    """Fitted model plus what the trainer learned about it."""
    name: str
    model: BaseModel
    cv_scores: List[float] = field(default_factory=list)
    train_accuracy: Optional[float] = None

    @property
    def cv_mean(self) -> Optional[float]:
        return float(np.mean(self.cv_scores)) if self.cv_scores else None


class SurvivalTrainer:
    """Fits every configured model on the same feature columns and binary target."""

    def __init__(self, config: Optional[ModelingConfig] = None,
                 target_column: str = "survived",
                 partition_column: str = "is_train",
                 registry: Optional[ModelRegistry] = None):
        self.config = config or ModelingConfig()
        self.target_column = target_column
        self.partition_column = partition_column
        self.registry = registry or ModelRegistry()
        self.logger = LoggerFactory.get_logger(__name__)
        self.results: Dict[str, TrainingResult] = {}

    # ---- data preparation ----
    def split(self, table: pd.DataFrame) -> tuple:
        """Split the combined table into (train, test) by the partition flag."""
        if self.partition_column not in table.columns:
            raise MissingColumnsError([self.partition_column], "derived passenger table")
        is_train = table[self.partition_column].astype(bool)
        return table.loc[is_train], table.loc[~is_train]

    def feature_matrix(self, table: pd.DataFrame) -> pd.DataFrame:
        """Model inputs; refuses tables with absent or incomplete feature columns."""
        cols = list(self.config.feature_columns)
        missing = set(cols) - set(table.columns)
        if missing:
            raise MissingColumnsError(missing, "model feature matrix")

        X = table[cols].copy()
        incomplete = X.columns[X.isna().any()].tolist()
        if incomplete:
            raise ValueError(f"Feature columns contain missing values: {incomplete}")
        for col in self.config.categorical_columns:
            if col in X.columns:
                X[col] = X[col].astype(str)
        return X

    def target(self, train: pd.DataFrame) -> pd.Series:
        if self.target_column not in train.columns:
            raise MissingColumnsError([self.target_column], "training rows")
        y = train[self.target_column]
        if y.isna().any():
            raise ValueError(f"{int(y.isna().sum())} training rows have no '{self.target_column}'")
        return y.astype(int)

    # ---- training ----
    def fit_model(self, name: str, X: pd.DataFrame, y: pd.Series) -> TrainingResult:
        """Fit one registered model, with an optional stratified k-fold accuracy estimate."""
        params = self.config.model_params.get(name, {})
        model = self.registry.create_model(name, params, categorical_columns=self.config.categorical_columns)

        cv_scores: List[float] = []
        if self.config.cv_folds and self.config.cv_folds >= 2:
            n_splits = min(self.config.cv_folds, int(y.value_counts().min()))
            if n_splits >= 2:
                cv = StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=self.config.seed)
                cv_scores = cross_val_score(model.make_pipeline(X), X, y, cv=cv, scoring="accuracy").tolist()
            else:
                self.logger.warning(f"Skipping CV for {name}: smallest class has fewer than 2 rows")

        with Timer(self.logger, f"fitting {name}"):
            model.fit(X, y)

        train_acc = float((model.predict(X) == y.to_numpy()).mean())
        result = TrainingResult(name=name, model=model, cv_scores=cv_scores, train_accuracy=train_acc)
        if result.cv_mean is not None:
            self.logger.info(f"{name}: train accuracy={train_acc:.4f}, cv accuracy={result.cv_mean:.4f}")
        else:
            self.logger.info(f"{name}: train accuracy={train_acc:.4f}")
        return result

    def fit_all(self, table: pd.DataFrame, models: Optional[List[str]] = None) -> Dict[str, TrainingResult]:
        """Fit each model on the training partition of the derived table."""
        SeedManager.set_seed(self.config.seed)
        train, _ = self.split(table)
        X = self.feature_matrix(train)
        y = self.target(train)

        self.results = {}
        for name in models or self.config.models:
            self.results[name] = self.fit_model(name, X, y)
        return self.results

    def predict_all(self, table: pd.DataFrame) -> Dict[str, np.ndarray]:
        """Predicted labels for the test partition, one array per fitted model."""
        if not self.results:
            raise ValueError("No fitted models; call fit_all first")
        _, test = self.split(table)
        X_test = self.feature_matrix(test)
        return {name: res.model.predict(X_test).astype(int) for name, res in self.results.items()}
