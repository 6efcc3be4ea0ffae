from __future__ import annotations

from typing import Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class SurnameTransform(BaseTransform):
    """
    Extract the surname: everything before the first comma of the name.

    'Braund, Mr. Owen Harris' -> 'Braund'. Names without a comma get a null surname.

    Output column: 'surname'
    """

    def __init__(self, name_col: str = "name", output_col: str = "surname"):
        super().__init__(name="SurnameTransform")
        self.name_col = name_col
        self.output_col = output_col

    def _columns_needed(self):
        return [self.name_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "SurnameTransform":
        self._validate_X(X)
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        surname = X[self.name_col].astype("string").str.extract(r"^([^,]*),", expand=False).str.strip()
        X[self.output_col] = surname.replace("", pd.NA)

        vc = X[self.output_col].value_counts(dropna=True)
        self.logger.info(f"SurnameTransform: unique={vc.size}, missing={int(X[self.output_col].isna().sum())}")
        return X
