from __future__ import annotations

from typing import Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class MotherTransform(BaseTransform):
    """
    Adds the boolean 'mother' column:
      female, parch != 0, age > 18 and title != 'Miss'.
    Requires columns: age (imputed), sex, parch, title. A null title counts as not 'Miss'.
    """

    required_columns = ("sex", "parch", "age", "title")

    def __init__(self, output_col: str = "mother", adult_age: float = 18, miss_title: str = "Miss"):
        super().__init__(name="MotherTransform")
        self.output_col = output_col
        self.adult_age = adult_age
        self.miss_title = miss_title

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "MotherTransform":
        self._validate_X(X)
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        age = pd.to_numeric(X["age"], errors="coerce")
        parch = pd.to_numeric(X["parch"], errors="coerce").fillna(0)
        is_female = X["sex"].astype("string").str.lower().eq("female").fillna(False)
        is_adult = age.gt(self.adult_age).fillna(False)
        not_miss = X["title"].astype("string").ne(self.miss_title).fillna(True)

        X[self.output_col] = (is_female & (parch != 0) & is_adult & not_miss).astype(bool)

        self.logger.info(f"MotherTransform: {int(X[self.output_col].sum())} mothers")
        return X
