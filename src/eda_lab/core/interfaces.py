"""Core interfaces shared by the passenger and laureate workflows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator


class IDataLoader(ABC):
    """Interface for data loading components."""

    @abstractmethod
    def load(self, path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """Load data from source."""
        pass

    @abstractmethod
    def validate_schema(self, df: pd.DataFrame) -> bool:
        """Raise MissingColumnsError unless `df` has the expected columns."""
        pass


class ITransformer(ABC):
    """Interface for data transformation components."""

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "ITransformer":
        """Fit transformer to training data."""
        pass

    @abstractmethod
    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Transform input data."""
        pass

    @abstractmethod
    def fit_transform(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> pd.DataFrame:
        """Fit and transform in one step."""
        pass


class IModel(ABC):
    """Interface for ML models."""

    @abstractmethod
    def build(self, config: Dict[str, Any]) -> BaseEstimator:
        """Build model from configuration."""
        pass

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: pd.Series) -> "IModel":
        """Fit the model to training data."""
        pass

    @abstractmethod
    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Predict a label per row."""
        pass

    @abstractmethod
    def save(self, path: Union[str, Path]) -> None:
        """Save model to disk."""
        pass


class ISubmissionBuilder(ABC):
    """Interface for competition submission builders."""

    @abstractmethod
    def build_submission(self, ids: pd.Series, predictions: np.ndarray) -> pd.DataFrame:
        """Build a submission frame from ids and predicted labels."""
        pass

    @abstractmethod
    def validate_submission(self, submission: pd.DataFrame) -> bool:
        """Validate submission format."""
        pass


class IDataValidator(ABC):
    """Interface for data validation components."""

    @abstractmethod
    def validate(self, df: pd.DataFrame) -> bool:
        """Validate a table, raising on fatal problems."""
        pass
