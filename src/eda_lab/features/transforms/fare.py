from __future__ import annotations

from typing import Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class FareImputeTransform(BaseTransform):
    """
    Replaces missing fare with a fixed value.

    The default 8.05 is the median third-class fare of the Kaggle data; it is
    a constant here and is not re-estimated from the table being transformed.
    """

    def __init__(self, fare_col: str = "fare", fill_value: float = 8.05):
        super().__init__(name="FareImputeTransform")
        self.fare_col = fare_col
        self.fill_value = fill_value

    def _columns_needed(self):
        return [self.fare_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "FareImputeTransform":
        self._validate_X(X)
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        fares = pd.to_numeric(X[self.fare_col], errors="coerce")
        n_missing = int(fares.isna().sum())
        X[self.fare_col] = fares.fillna(float(self.fill_value))

        if n_missing:
            self.logger.info(f"Filled {n_missing} missing {self.fare_col} values with {self.fill_value}")
        return X
