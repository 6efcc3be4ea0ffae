from __future__ import annotations

from typing import Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class FamilyIdTransform(BaseTransform):
    """
    Group key for travelling families: '<surname>_<family_size>'.

    Families of `small_family_max` people or fewer share the sentinel
    'small_family_unit' regardless of surname. Requires surname and
    family_size, so it runs after SurnameTransform and FamilySizeTransform.
    """

    def __init__(
        self,
        surname_col: str = "surname",
        family_size_col: str = "family_size",
        output_col: str = "family_id",
        small_family_max: int = 2,
        sentinel: str = "small_family_unit",
    ):
        super().__init__(name="FamilyIdTransform")
        self.surname_col = surname_col
        self.family_size_col = family_size_col
        self.output_col = output_col
        self.small_family_max = small_family_max
        self.sentinel = sentinel

    def _columns_needed(self):
        return [self.surname_col, self.family_size_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "FamilyIdTransform":
        self._validate_X(X)
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        size = X[self.family_size_col].astype(int)
        family_id = X[self.surname_col].astype("string").fillna("") + "_" + size.astype(str)
        X[self.output_col] = family_id.where(size > self.small_family_max, self.sentinel).astype(str)

        n_groups = X.loc[size > self.small_family_max, self.output_col].nunique()
        self.logger.info(f"FamilyIdTransform: {n_groups} family groups larger than {self.small_family_max}")
        return X
