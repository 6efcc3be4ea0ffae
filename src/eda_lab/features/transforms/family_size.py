from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd

from eda_lab.features.transforms.base import BaseTransform


class FamilySizeTransform(BaseTransform):
    """Creates family_size and the grouped categorical family_size_bins.

    family_size = sib_sp + parch + 1
    family_size_bins (string), right-closed on `edges`:
      - singleton (size == 1)
      - 1-4       (2-4)
      - 1-11      (5-11; anything larger is kept in the last bucket)
    """

    def __init__(
        self,
        sibsp_col: str = "sib_sp",
        parch_col: str = "parch",
        output_col: str = "family_size",
        bins_col: str = "family_size_bins",
        edges: Optional[List[float]] = None,
        labels: Optional[List[str]] = None,
    ):
        super().__init__(name="FamilySizeTransform")
        self.sibsp_col = sibsp_col
        self.parch_col = parch_col
        self.output_col = output_col
        self.bins_col = bins_col
        self.edges = edges if edges is not None else [0, 1, 4, 11]
        self.labels = labels if labels is not None else ["singleton", "1-4", "1-11"]

    def _columns_needed(self):
        return [self.sibsp_col, self.parch_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "FamilySizeTransform":
        """Fit transform - no parameters to learn."""
        self._validate_X(X)
        if len(self.labels) != len(self.edges) - 1:
            raise ValueError(f"Need {len(self.edges) - 1} labels for edges {self.edges}, got {len(self.labels)}")
        self._set_new_cols([self.output_col, self.bins_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Transform data by adding family size features."""
        X = super().transform(X)

        sibsp = pd.to_numeric(X[self.sibsp_col], errors="coerce")
        parch = pd.to_numeric(X[self.parch_col], errors="coerce")
        if sibsp.isna().any() or parch.isna().any():
            raise ValueError(f"'{self.sibsp_col}' and '{self.parch_col}' must be complete to compute family size")
        X[self.output_col] = (sibsp + parch + 1).astype(int)

        # Open-ended last bucket
        edges = list(self.edges[:-1]) + [np.inf]
        grouped = pd.cut(X[self.output_col], bins=edges, labels=self.labels, right=True)
        X[self.bins_col] = grouped.astype(str)

        self.logger.info(
            f"FamilySize: range={int(X[self.output_col].min())}-{int(X[self.output_col].max())}, "
            f"grouped_dist={X[self.bins_col].value_counts().to_dict()}"
        )
        return X
