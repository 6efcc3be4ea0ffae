from __future__ import annotations

from typing import Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class EmbarkedImputeTransform(BaseTransform):
    """Replaces missing or blank port codes with a fixed port ('C' by default)."""

    def __init__(self, embarked_col: str = "embarked", fill_value: str = "C"):
        super().__init__(name="EmbarkedImputeTransform")
        self.embarked_col = embarked_col
        self.fill_value = fill_value

    def _columns_needed(self):
        return [self.embarked_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "EmbarkedImputeTransform":
        self._validate_X(X)
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        ports = X[self.embarked_col].astype("string").str.strip()
        blank = ports.isna() | ports.eq("")
        X[self.embarked_col] = ports.mask(blank, self.fill_value).astype(str)

        n_blank = int(blank.sum())
        if n_blank:
            self.logger.info(f"Filled {n_blank} missing {self.embarked_col} values with '{self.fill_value}'")
        return X
