"""Model registry for the survival classifiers."""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import joblib
import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import ExtraTreesClassifier, RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from sklearn.tree import DecisionTreeClassifier

from eda_lab.core.interfaces import IModel
from eda_lab.core.utils import LoggerFactory


class BaseModel(IModel):
    """Base model wrapper: one-hot encodes categorical columns, then fits the estimator."""

    def __init__(self, categorical_columns: Optional[List[str]] = None, **params):
        self.categorical_columns = list(categorical_columns or [])
        self.params = params
        self.model: Optional[BaseEstimator] = None
        self.pipeline: Optional[Pipeline] = None
        self.logger = LoggerFactory.get_logger(self.__class__.__name__)
        self.is_fitted = False

    @abstractmethod
    def _create_model(self, **params) -> BaseEstimator:
        """Create the actual sklearn model instance."""
        pass

    def build(self, config: Dict[str, Any]) -> BaseEstimator:
        """Build model from configuration."""
        model_params = dict(config.get("model_params", {}))
        model_params.update(self.params)

        self.model = self._create_model(**model_params)
        self.logger.info(f"Built {self.__class__.__name__} with params: {model_params}")

        return self.model

    def _build_pipeline(self, X: pd.DataFrame) -> Pipeline:
        categorical = [c for c in self.categorical_columns if c in X.columns]
        pre = ColumnTransformer(
            [("onehot", OneHotEncoder(handle_unknown="ignore"), categorical)],
            remainder="passthrough",
        )
        return Pipeline([("pre", pre), ("model", self.model)])

    def fit(self, X: pd.DataFrame, y: pd.Series) -> "BaseModel":
        """Fit the model to training data."""
        if self.model is None:
            self.model = self._create_model(**self.params)

        self.pipeline = self._build_pipeline(X)
        self.pipeline.fit(X, y)
        self.is_fitted = True
        self.logger.info(f"Fitted {self.__class__.__name__} on {len(X)} samples")

        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Make predictions."""
        if not self.is_fitted or self.pipeline is None:
            raise ValueError("Model must be fitted before prediction")

        return self.pipeline.predict(X)

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Make probability predictions."""
        if not self.is_fitted or self.pipeline is None:
            raise ValueError("Model must be fitted before prediction")

        return self.pipeline.predict_proba(X)

    def make_pipeline(self, X: pd.DataFrame) -> Pipeline:
        """Unfitted encoder+estimator pipeline, e.g. for cross-validation."""
        if self.model is None:
            self.model = self._create_model(**self.params)
        return self._build_pipeline(X)

    def save(self, path: Union[str, Path]) -> None:
        """Save model to disk."""
        if self.pipeline is None:
            raise ValueError("No model to save")

        joblib.dump(self, path)
        self.logger.info(f"Saved model to {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "BaseModel":
        """Load model from disk."""
        return joblib.load(path)


class LogisticRegressionModel(BaseModel):
    """Logistic regression model wrapper."""

    def _create_model(self, **params) -> BaseEstimator:
        default_params = {
            "max_iter": 1000,
            "C": 1.0
        }
        default_params.update(params)
        return LogisticRegression(**default_params)


class DecisionTreeModel(BaseModel):
    """Single classification tree."""

    def _create_model(self, **params) -> BaseEstimator:
        default_params = {
            "random_state": 42,
            "min_samples_split": 20,
            "max_depth": 30,
        }
        default_params.update(params)
        return DecisionTreeClassifier(**default_params)


class RandomForestModel(BaseModel):
    """Random forest model wrapper."""

    def _create_model(self, **params) -> BaseEstimator:
        default_params = {
            "n_estimators": 500,
            "random_state": 42,
            "max_depth": None,
            "min_samples_split": 2,
            "min_samples_leaf": 1
        }
        default_params.update(params)
        return RandomForestClassifier(**default_params)


class ConditionalForestModel(BaseModel):
    """
    Stand-in for a conditional inference forest.

    Uses extremely randomized trees: split points are drawn at random instead
    of searched exhaustively, which removes the preference of greedy forests
    for predictors with many candidate cut points.
    """

    def _create_model(self, **params) -> BaseEstimator:
        default_params = {
            "n_estimators": 500,
            "max_features": 0.5,
            "min_samples_leaf": 7,
            "random_state": 42,
        }
        default_params.update(params)
        return ExtraTreesClassifier(**default_params)


class ModelRegistry:
    """Registry for managing available models."""

    def __init__(self):
        self.logger = LoggerFactory.get_logger(__name__)
        self._models = self._register_models()

    def _register_models(self) -> Dict[str, type]:
        """Register all available models."""
        return {
            "logistic": LogisticRegressionModel,
            "decision_tree": DecisionTreeModel,
            "random_forest": RandomForestModel,
            "conditional_forest": ConditionalForestModel,
        }

    def get_available_models(self) -> List[str]:
        """Get list of available model names."""
        return list(self._models.keys())

    def create_model(self, model_name: str, params: Optional[Dict[str, Any]] = None,
                     categorical_columns: Optional[List[str]] = None) -> BaseModel:
        """Create model instance by name."""
        if model_name not in self._models:
            available = ", ".join(self.get_available_models())
            raise ValueError(f"Unknown model '{model_name}'. Available models: {available}")

        model_class = self._models[model_name]
        model_instance = model_class(categorical_columns=categorical_columns, **(params or {}))
        model_instance.build({})

        self.logger.info(f"Created {model_name} model")
        return model_instance

    def register_custom_model(self, name: str, model_class: type) -> None:
        """Register a custom model class."""
        if not issubclass(model_class, BaseModel):
            raise ValueError("Custom model must inherit from BaseModel")

        self._models[name] = model_class
        self.logger.info(f"Registered custom model: {name}")
