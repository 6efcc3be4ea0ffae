from __future__ import annotations

from typing import Any, Iterable, List, Optional

import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from eda_lab.core.exceptions import MissingColumnsError
from eda_lab.core.interfaces import ITransformer
from eda_lab.core.utils import LoggerFactory


class BaseTransform(BaseEstimator, TransformerMixin, ITransformer):
    """
    Common base of the passenger derivation steps.

    Subclasses declare the columns they read (``required_columns`` or
    ``_columns_needed``) and the columns they add (``_set_new_cols`` in fit).
    A missing input column raises MissingColumnsError on both fit and
    transform, and ``transform`` works on a copy so the caller's frame is
    left as it was.
    """

    #: columns a subclass reads; checked on fit and transform
    required_columns: tuple = ()

    def __init__(self, *, name: Optional[str] = None):
        self.logger = LoggerFactory.get_logger(name or self.__class__.__name__)
        self.is_fitted: bool = False
        self._new_cols: List[str] = []

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "BaseTransform":
        self._validate_X(X)
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        self._require_fitted()
        self._validate_X(X)
        return X.copy()

    def fit_transform(self, X: pd.DataFrame, y: Optional[pd.Series] = None, **fit_params) -> pd.DataFrame:
        return self.fit(X, y).transform(X)

    def get_feature_names(self) -> List[str]:
        """Columns this step adds to the table."""
        return list(self._new_cols)

    # ---- helpers for subclasses ----
    def _require_fitted(self) -> None:
        if not self.is_fitted:
            raise ValueError(f"{self.__class__.__name__} must be fitted before transform")

    def _validate_X(self, X: Any) -> None:
        if not isinstance(X, pd.DataFrame):
            raise TypeError(f"{self.__class__.__name__} needs a DataFrame, not {type(X).__name__}")
        missing = set(self._columns_needed()) - set(X.columns)
        if missing:
            raise MissingColumnsError(missing, self.__class__.__name__)

    def _columns_needed(self) -> Iterable[str]:
        """Input column names; steps with configurable names override this."""
        return self.required_columns

    def _set_new_cols(self, cols: List[str]) -> None:
        self._new_cols = list(cols)
